"""Cart operations against the store-api, proxied through the admin API."""

from __future__ import annotations

import logging
import uuid
from types import MappingProxyType
from typing import Any, Callable, Iterable, Mapping

import httpx

from store_cart.features import AUTOMATIC_PROMOTIONS_FLAG, FeatureChecker, FeatureFlags
from store_cart.models import (
    LineItem,
    LineItemPayload,
    LineItemType,
    PriceType,
    ShippingCosts,
)
from store_cart.transport import HttpGateway

logger = logging.getLogger(__name__)

CONTEXT_TOKEN_HEADER = "sw-context-token"

MODIFY_SHIPPING_COSTS_ROUTE = "_proxy/modify-shipping-costs"
DISABLE_AUTOMATIC_PROMOTIONS_ROUTE = "_proxy/disable-automatic-promotions"
ENABLE_AUTOMATIC_PROMOTIONS_ROUTE = "_proxy/enable-automatic-promotions"

_PRICE_TYPE_BY_ITEM_TYPE: Mapping[str, PriceType] = MappingProxyType(
    {
        LineItemType.PRODUCT: PriceType.QUANTITY,
        LineItemType.CUSTOM: PriceType.QUANTITY,
        LineItemType.CREDIT: PriceType.ABSOLUTE,
    }
)


def create_id() -> str:
    """Generate a new entity id (uuid4 hex, no dashes)."""
    return uuid.uuid4().hex


def map_line_item_type_to_price_type(item_type: str) -> PriceType | None:
    """Return the price type for a line item type, or None if it has none."""
    return _PRICE_TYPE_BY_ITEM_TYPE.get(item_type)


def build_line_item_payload(
    item: LineItem,
    sales_channel_id: str,
    is_new_product_item: bool,
    id: str,
) -> dict[str, Any]:
    """Build the line-item request body for ``item``.

    The price definition is only sent when the item's unit price was changed
    locally, i.e. it no longer matches the price its definition records. New
    product items never carry one; the server calculates their price.
    """
    price_definition = None
    if not is_new_product_item and item.price.unit_price != item.price_definition.price:
        price_type = map_line_item_type_to_price_type(item.type)
        price_definition = item.price_definition.model_copy(
            update={
                "quantity": item.quantity,
                "type": price_type.value if price_type else None,
            },
            deep=True,
        )
        logger.debug(
            "Overriding price of line item %s: %s -> %s",
            id,
            item.price_definition.price,
            item.price.unit_price,
        )

    # Unset fields stay off the wire; a null clears the stored value.
    optional = {
        name: getattr(item, name)
        for name in ("label", "description")
        if name in item.model_fields_set
    }
    line_item = LineItemPayload(
        id=id,
        referenced_id=id,
        quantity=item.quantity,
        type=item.type,
        price_definition=price_definition,
        stackable=True,
        removable=True,
        sales_channel_id=sales_channel_id,
        **optional,
    )
    return {
        "items": [line_item.model_dump(by_alias=True, mode="json", exclude_unset=True)]
    }


class CartStoreService:
    """Gateway for the store-api cart endpoints."""

    def __init__(
        self,
        gateway: HttpGateway,
        features: FeatureChecker | None = None,
        id_factory: Callable[[], str] = create_id,
    ) -> None:
        self.gateway = gateway
        self.features = features if features is not None else FeatureFlags()
        self.id_factory = id_factory

    @staticmethod
    def get_line_item_types() -> type[LineItemType]:
        return LineItemType

    @staticmethod
    def get_line_item_price_types() -> type[PriceType]:
        return PriceType

    @staticmethod
    def map_line_item_type_to_price_type(item_type: str) -> PriceType | None:
        return map_line_item_type_to_price_type(item_type)

    def get_cart_route(self, sales_channel_id: str) -> str:
        return (
            f"_proxy/store-api/{sales_channel_id}"
            f"/v{self.gateway.api_version}/checkout/cart"
        )

    def get_route_for_item(self, id: str | None, sales_channel_id: str) -> str:
        # Every line item shares one route; the id travels in the body.
        return f"{self.get_cart_route(sales_channel_id)}/line-item"

    def _context_headers(
        self, context_token: str, headers: dict[str, str] | None
    ) -> dict[str, str]:
        return {
            **self.gateway.basic_headers(headers),
            CONTEXT_TOKEN_HEADER: context_token,
        }

    async def create_cart(
        self,
        sales_channel_id: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Open a new cart context; its token comes back in ``sw-context-token``."""
        return await self.gateway.get(
            self.get_cart_route(sales_channel_id),
            params=params,
            headers=self.gateway.basic_headers(headers),
        )

    async def get_cart(
        self,
        sales_channel_id: str,
        context_token: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        return await self.gateway.get(
            self.get_cart_route(sales_channel_id),
            params=params,
            headers=self._context_headers(context_token, headers),
        )

    async def cancel_cart(
        self,
        sales_channel_id: str,
        context_token: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        return await self.gateway.delete(
            self.get_cart_route(sales_channel_id),
            params=params,
            headers=self._context_headers(context_token, headers),
        )

    async def remove_line_items(
        self,
        sales_channel_id: str,
        context_token: str,
        line_item_keys: Iterable[str],
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        return await self.gateway.delete(
            self.get_route_for_item(None, sales_channel_id),
            json={"ids": list(line_item_keys)},
            params=params,
            headers=self._context_headers(context_token, headers),
        )

    async def save_line_item(
        self,
        sales_channel_id: str,
        context_token: str,
        item: LineItem,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Add ``item`` to the cart if it is new, otherwise update it in place."""
        is_new_product_item = item.is_new and item.type == LineItemType.PRODUCT
        id = item.identifier or item.id or self.id_factory()
        route = self.get_route_for_item(id, sales_channel_id)
        payload = build_line_item_payload(
            item, sales_channel_id, is_new_product_item, id
        )
        request_headers = self._context_headers(context_token, headers)

        if item.is_new:
            return await self.gateway.post(
                route, payload, params=params, headers=request_headers
            )
        return await self.gateway.patch(
            route, payload, params=params, headers=request_headers
        )

    async def add_promotion_code(
        self,
        sales_channel_id: str,
        context_token: str,
        code: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        payload = {
            "items": [
                {"type": LineItemType.PROMOTION.value, "referencedId": code},
            ]
        }
        return await self.gateway.post(
            self.get_route_for_item(None, sales_channel_id),
            payload,
            params=params,
            headers=self._context_headers(context_token, headers),
        )

    async def modify_shipping_costs(
        self,
        sales_channel_id: str,
        context_token: str,
        shipping_costs: ShippingCosts | dict[str, Any],
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        if isinstance(shipping_costs, ShippingCosts):
            shipping_costs = shipping_costs.model_dump(by_alias=True, mode="json")
        return await self.gateway.patch(
            MODIFY_SHIPPING_COSTS_ROUTE,
            {"salesChannelId": sales_channel_id, "shippingCosts": shipping_costs},
            params=params,
            headers=self._context_headers(context_token, headers),
        )

    async def disable_automatic_promotions(
        self,
        context_token: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        return await self._toggle_automatic_promotions(
            DISABLE_AUTOMATIC_PROMOTIONS_ROUTE, context_token, params, headers
        )

    async def enable_automatic_promotions(
        self,
        context_token: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        return await self._toggle_automatic_promotions(
            ENABLE_AUTOMATIC_PROMOTIONS_ROUTE, context_token, params, headers
        )

    async def _toggle_automatic_promotions(
        self,
        route: str,
        context_token: str,
        params: dict[str, Any] | None,
        headers: dict[str, str] | None,
    ) -> httpx.Response:
        params = params or {}
        data: dict[str, Any] = {}
        if self.features.is_active(AUTOMATIC_PROMOTIONS_FLAG):
            data["salesChannelId"] = params.get("salesChannelId")
        return await self.gateway.patch(
            route,
            data,
            params=params,
            headers=self._context_headers(context_token, headers),
        )
