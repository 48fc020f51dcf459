"""Shared test fixtures."""

import pytest

from store_cart.cart import CartStoreService
from store_cart.features import FeatureFlags
from store_cart.transport import HttpGateway


@pytest.fixture()
def base_url() -> str:
    return "https://shop.example/api"


@pytest.fixture()
def client_id() -> str:
    return "SWIATEST1234"


@pytest.fixture()
def client_secret() -> str:
    return "test-client-secret"


@pytest.fixture()
def access_token() -> str:
    return "test-access-token"


@pytest.fixture()
def sales_channel_id() -> str:
    return "98432def39fc4624b33213a56b8c944d"


@pytest.fixture()
def context_token() -> str:
    return "test-context-token"


@pytest.fixture()
def gateway(base_url: str, access_token: str) -> HttpGateway:
    return HttpGateway(base_url, access_token=access_token)


@pytest.fixture()
def service(gateway: HttpGateway) -> CartStoreService:
    return CartStoreService(
        gateway, features=FeatureFlags(), id_factory=lambda: "generated-id"
    )


@pytest.fixture()
def cart_url(base_url: str, sales_channel_id: str) -> str:
    return f"{base_url}/_proxy/store-api/{sales_channel_id}/v3/checkout/cart"


@pytest.fixture()
def line_item_url(cart_url: str) -> str:
    return f"{cart_url}/line-item"
