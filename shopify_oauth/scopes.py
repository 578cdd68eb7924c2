from __future__ import annotations
from enum import Enum


class Scope(str, Enum):
    """OAuth access scopes that can be requested from a shop.

    Members compare equal to their wire value, so they can be mixed freely
    with plain strings in `ShopifyClient.set_scopes`.
    """
    READ_CONTENT = 'read_content'
    WRITE_CONTENT = 'write_content'
    READ_THEMES = 'read_themes'
    WRITE_THEMES = 'write_themes'
    READ_PRODUCTS = 'read_products'
    WRITE_PRODUCTS = 'write_products'
    READ_CUSTOMERS = 'read_customers'
    WRITE_CUSTOMERS = 'write_customers'
    READ_ORDERS = 'read_orders'
    WRITE_ORDERS = 'write_orders'
    READ_SCRIPT_TAGS = 'read_script_tags'
    WRITE_SCRIPT_TAGS = 'write_script_tags'
    READ_FULFILLMENTS = 'read_fulfillments'
    WRITE_FULFILLMENTS = 'write_fulfillments'
    READ_SHIPPING = 'read_shipping'
    WRITE_SHIPPING = 'write_shipping'

    def __str__(self) -> str:
        return self.value


def scope_value(scope: Scope | str) -> str:
    return scope.value if isinstance(scope, Scope) else str(scope)
