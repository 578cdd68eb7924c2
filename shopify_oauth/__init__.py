"""Client for the Shopify Admin REST API (OAuth install flow, HMAC checks, GET/POST calls).

Usage example:
    from shopify_oauth import ShopifyClient, Scope
    client = ShopifyClient.from_env()
    client.add_scope(Scope.READ_PRODUCTS)
    url = client.get_authorization_url('https://app.example.com/callback', nonce)
    products = client.get('/admin/products.json', {'limit': 50})
"""
from .exceptions import ShopifyClientError, ConfigurationError, RequestError, UnsupportedMethodError  # noqa: F401
from .scopes import Scope  # noqa: F401
from .shopify_client import ShopifyClient  # noqa: F401
