"""CLI entry point for store-cart."""

from __future__ import annotations

import asyncio
import json
import logging
import sys

import httpx

from store_cart import config
from store_cart.auth import AuthError, get_client_token
from store_cart.cart import CONTEXT_TOKEN_HEADER, CartStoreService
from store_cart.config import ConfigError, Settings, load_settings, write_settings
from store_cart.transport import ApiError, HttpGateway

USAGE = """\
Usage: store-cart [--verbose] <command>

  init                          Configure API access
  new                           Create a cart, print its context token
  show <context-token>          Print a cart
  promo <context-token> <code>  Add a promotion code to a cart"""


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    args = list(sys.argv[1:] if argv is None else argv)
    verbose = "--verbose" in args
    args = [arg for arg in args if arg != "--verbose"]
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args:
        _usage()
    command, rest = args[0], args[1:]
    if command == "init" and not rest:
        _run_init()
    elif command == "new" and not rest:
        _run(_new_cart())
    elif command == "show" and len(rest) == 1:
        _run(_show_cart(rest[0]))
    elif command == "promo" and len(rest) == 2:
        _run(_add_promotion(rest[0], rest[1]))
    else:
        _usage()


def _usage() -> None:
    print(USAGE)
    sys.exit(1)


def _run_init() -> None:
    """Run the interactive initialization wizard."""
    print()
    print("  store-cart Setup")
    print("  ================")

    if config.ENV_PATH.exists():
        print()
        print("  .env already exists.")
        answer = input("  Overwrite? [y/N]: ").strip().lower()
        if answer != "y":
            print("  Aborted.")
            return

    print()
    print("  Create an integration in the administration under")
    print("  Settings > System > Integrations and note its access key and secret.")
    print()
    base_url = input("  Admin API URL (e.g. https://shop.example/api): ").strip()
    client_id = input("  Access key ID: ").strip()
    client_secret = input("  Secret access key: ").strip()
    if not base_url or not client_id or not client_secret:
        print("  Error: URL, access key ID and secret are all required.")
        sys.exit(1)

    print()
    print("  Verifying credentials...", end=" ", flush=True)
    try:
        asyncio.run(get_client_token(base_url, client_id, client_secret))
        print("OK!")
    except (AuthError, httpx.HTTPError) as e:
        print("FAILED")
        print(f"  {e}")
        sys.exit(1)

    sales_channel_id = input("  Sales channel ID: ").strip()

    write_settings(
        Settings(
            base_url=base_url,
            client_id=client_id,
            client_secret=client_secret,
            sales_channel_id=sales_channel_id,
        )
    )

    print()
    print("  Setup complete! Configuration saved to .env")
    print()


def _run(coro) -> None:
    try:
        asyncio.run(coro)
    except (ConfigError, AuthError, ApiError, httpx.HTTPError) as e:
        print(f"Error: {e}")
        sys.exit(1)


async def _service(settings: Settings) -> CartStoreService:
    """Build a cart service with a fresh access token."""
    token = await get_client_token(
        settings.base_url, settings.client_id, settings.client_secret
    )
    gateway = HttpGateway(
        settings.base_url,
        access_token=token.access_token,
        api_version=settings.api_version,
    )
    return CartStoreService(gateway, features=settings.feature_flags())


def _sales_channel(settings: Settings) -> str:
    if not settings.sales_channel_id:
        raise ConfigError("Missing configuration: SHOPWARE_SALES_CHANNEL_ID")
    return settings.sales_channel_id


async def _new_cart() -> None:
    settings = load_settings()
    service = await _service(settings)
    response = await service.create_cart(_sales_channel(settings))
    print(response.headers.get(CONTEXT_TOKEN_HEADER, ""))


async def _show_cart(context_token: str) -> None:
    settings = load_settings()
    service = await _service(settings)
    response = await service.get_cart(_sales_channel(settings), context_token)
    print(json.dumps(response.json(), indent=2))


async def _add_promotion(context_token: str, code: str) -> None:
    settings = load_settings()
    service = await _service(settings)
    await service.add_promotion_code(_sales_channel(settings), context_token, code)
    print(f"Added promotion code {code}")
