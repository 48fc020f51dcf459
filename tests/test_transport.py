"""Tests for the transport module."""

import json

import httpx
import pytest
import respx
from httpx import Response

from store_cart.transport import ApiError, HttpGateway


def test_basic_headers(gateway: HttpGateway, access_token: str):
    headers = gateway.basic_headers({"sw-language-id": "de"})
    assert headers == {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "Authorization": f"Bearer {access_token}",
        "sw-language-id": "de",
    }


def test_basic_headers_without_token(base_url: str):
    headers = HttpGateway(base_url).basic_headers()
    assert "Authorization" not in headers


def test_additional_headers_win(gateway: HttpGateway):
    headers = gateway.basic_headers({"Accept": "text/plain"})
    assert headers["Accept"] == "text/plain"


def test_api_version(base_url: str):
    assert HttpGateway(base_url).api_version == 3
    assert HttpGateway(base_url, api_version=2).api_version == 2


@respx.mock
async def test_get_uses_basic_headers(gateway: HttpGateway, base_url: str):
    route = respx.get(f"{base_url}/_info/version").mock(
        return_value=Response(200, json={"version": "6.3.0.0"})
    )
    response = await gateway.get("_info/version")
    assert response.json() == {"version": "6.3.0.0"}
    assert route.calls.last.request.headers["Accept"] == "application/json"


@respx.mock
async def test_delete_sends_body(gateway: HttpGateway, base_url: str):
    route = respx.delete(f"{base_url}/things").mock(return_value=Response(204))
    await gateway.delete("things", json={"ids": ["x"]})
    assert json.loads(route.calls.last.request.content) == {"ids": ["x"]}


@respx.mock
async def test_error_status_raises(gateway: HttpGateway, base_url: str):
    respx.patch(f"{base_url}/things").mock(
        return_value=Response(500, text="Internal Server Error")
    )
    with pytest.raises(ApiError) as excinfo:
        await gateway.patch("things", {})
    assert excinfo.value.status_code == 500
    assert excinfo.value.text == "Internal Server Error"
    assert "PATCH things failed: 500" in str(excinfo.value)


@respx.mock
async def test_network_error_propagates(gateway: HttpGateway, base_url: str):
    respx.post(f"{base_url}/things").mock(side_effect=httpx.ConnectError("refused"))
    with pytest.raises(httpx.ConnectError):
        await gateway.post("things", {})
