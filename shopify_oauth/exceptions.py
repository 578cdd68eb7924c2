class ShopifyClientError(Exception):
    """Base class for errors raised by the Shopify client."""

class ConfigurationError(ShopifyClientError):
    """Client is missing something it needs (shop name, credentials)."""

class RequestError(ShopifyClientError):
    """Shopify answered with an `errors` payload or an undecodable body."""

class UnsupportedMethodError(ShopifyClientError, ValueError):
    """HTTP method other than GET or POST passed to `call`."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Unsupported HTTP method: {method!r} (only GET and POST are implemented)")
