"""Admin API OAuth2 authentication."""

from __future__ import annotations

import httpx

from store_cart.models import TokenResponse


class AuthError(Exception):
    """Raised when authentication with the admin API fails."""


def token_url(base_url: str) -> str:
    """Return the OAuth2 token endpoint for an admin API base URL."""
    return base_url.rstrip("/") + "/oauth/token"


async def get_client_token(
    base_url: str,
    client_id: str,
    client_secret: str,
) -> TokenResponse:
    """Obtain an integration token via the client credentials grant."""
    async with httpx.AsyncClient() as client:
        response = await client.post(
            token_url(base_url),
            json={
                "grant_type": "client_credentials",
                "client_id": client_id,
                "client_secret": client_secret,
            },
        )
        if response.status_code != 200:
            raise AuthError(
                f"Failed to get client token: {response.status_code} {response.text}"
            )
        return TokenResponse.model_validate(response.json())

