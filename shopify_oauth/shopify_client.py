from __future__ import annotations
import os
import re
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote_plus, urlencode
from .base_client import BaseClient
from .exceptions import ConfigurationError, RequestError, UnsupportedMethodError
from .scopes import Scope, scope_value
from .signing import verify_query

logger = logging.getLogger(__name__)

_PROTOCOL_RE = re.compile(r'https://', re.IGNORECASE)
_DOMAIN_RE = re.compile(r'\.myshopify\.com', re.IGNORECASE)

SUPPORTED_METHODS = ('GET', 'POST')

Body = Union[Mapping[str, Any], str, None]


class ShopifyClient(BaseClient):
    """Shopify Admin API client for public (OAuth) and private apps.

    Typical OAuth flow:
        client = ShopifyClient(api_key, api_secret).set_shop('example')
        client.add_scope(Scope.READ_PRODUCTS)
        redirect_to(client.get_authorization_url(callback_url, nonce))
        # on callback
        if client.is_valid(query):
            token = client.get_access_token(query['code'])

    Instances keep the access token in memory and are not thread-safe.
    Callers persist the token themselves.
    """

    def __init__(self, api_key: str, api_secret: str, timeout: int = 30):
        super().__init__(timeout=timeout)
        self.api_key = api_key
        # for private apps this is the generated password
        self.api_secret = api_secret
        self.shop: Optional[str] = None
        self.access_token: Optional[str] = None
        self.scopes: List[str] = []
        self.private = False

    @classmethod
    def from_env(cls) -> 'ShopifyClient':
        api_key = BaseClient.env('SHOPIFY_API_KEY')
        api_secret = BaseClient.env('SHOPIFY_API_SECRET')
        timeout = int(os.getenv('SHOPIFY_TIMEOUT', '30'))
        client = cls(api_key, api_secret, timeout=timeout)  # type: ignore[arg-type]

        shop = BaseClient.env('SHOPIFY_SHOP', required=False)
        if shop:
            client.set_shop(shop)
        token = BaseClient.env('SHOPIFY_ACCESS_TOKEN', required=False)
        if token:
            client.set_access_token(token)
        scopes = BaseClient.env('SHOPIFY_SCOPES', required=False) or ''
        client.set_scopes([s.strip() for s in scopes.split(',') if s.strip()])
        private = (BaseClient.env('SHOPIFY_PRIVATE_APP', required=False) or '').strip().lower()
        client.set_private(private in ('1', 'true', 'yes'))
        return client

    # -- configuration -------------------------------------------------

    def set_shop(self, shop: str) -> 'ShopifyClient':
        """Accepts `example`, `example.myshopify.com` or `https://example.myshopify.com`."""
        shop = _PROTOCOL_RE.sub('', shop)
        self.shop = _DOMAIN_RE.sub('', shop)
        return self

    def get_shop(self) -> Optional[str]:
        return self.shop

    def set_private(self, private: bool) -> 'ShopifyClient':
        self.private = bool(private)
        return self

    def set_scopes(self, scopes: Iterable[Scope | str]) -> 'ShopifyClient':
        """Replaces every previously set scope."""
        self.scopes = [scope_value(s) for s in scopes]
        return self

    def add_scope(self, scope: Scope | str) -> 'ShopifyClient':
        self.scopes.append(scope_value(scope))
        return self

    def get_scopes(self) -> List[str]:
        return list(self.scopes)

    def set_access_token(self, token: str) -> 'ShopifyClient':
        self.access_token = token
        return self

    # -- OAuth ---------------------------------------------------------

    def _shop_host(self) -> str:
        if not self.shop:
            raise ConfigurationError('Shop is not set; call set_shop() first')
        return f"{self.shop}.myshopify.com"

    def get_authorization_url(self, redirect_uri: str, nonce: Any) -> str:
        """URL the merchant is redirected to in order to grant the requested scopes."""
        return (
            f"https://{self._shop_host()}/admin/oauth/authorize"
            f"?client_id={self.api_key}"
            f"&scope={quote_plus(','.join(self.scopes))}"
            f"&redirect_uri={quote_plus(redirect_uri)}"
            f"&state={nonce}"
        )

    def get_access_token(self, code: Optional[str] = None) -> Union[str, None, bool]:
        """Returns the access token, exchanging `code` for one if none is cached yet.

        Without a code, or once a token is known, this only returns the cached
        value (possibly None) and makes no request. A failed exchange returns
        False and leaves the client unauthorized.
        """
        if self.access_token is not None or code is None:
            return self.access_token

        params = urlencode({
            'client_id': self.api_key,
            'client_secret': self.api_secret,
            'code': code,
        })
        url = f"https://{self._shop_host()}/admin/oauth/access_token?{params}"
        resp = self._send('POST', url, data='')
        data = self.decode(resp)
        if not isinstance(data, dict) or data.get('access_token') is None:
            logger.warning("Token exchange for shop %s failed (status %s)", self.shop, resp.status_code)
            return False

        self.access_token = data['access_token']
        logger.info("Obtained access token for shop %s", self.shop)
        return self.access_token

    def is_valid(self, query: Mapping[str, Any]) -> bool:
        """Checks the `hmac` parameter Shopify adds to redirects against the shared secret."""
        return verify_query(query, self.api_secret)

    # -- API calls -----------------------------------------------------

    def get_base_uri(self) -> str:
        host = self._shop_host()
        if self.private:
            return f"https://{self.api_key}:{self.api_secret}@{host}"
        return f"https://{host}"

    def _headers(self) -> Dict[str, str]:
        return {'X-Shopify-Access-Token': self.access_token or ''}

    def call(self, method: str, path: str, body: Body = None) -> Any:
        """Performs a GET or POST against the shop and returns the decoded JSON.

        Mapping bodies are form-encoded; for GET they become the query string.
        Raises RequestError when Shopify answers with an `errors` field.
        """
        method = method.upper()
        if method not in SUPPORTED_METHODS:
            raise UnsupportedMethodError(method)

        url = self.get_base_uri() + path
        headers = self._headers()
        payload = build_query(body) if isinstance(body, Mapping) else body

        if method == 'POST':
            headers['Content-Type'] = 'application/x-www-form-urlencoded'
            resp = self._send('POST', url, headers=headers, data=payload)
        else:
            if payload:
                url = f"{url}{'&' if '?' in url else '?'}{payload}"
            resp = self._send('GET', url, headers=headers)

        data = self.decode(resp)
        if data is None:
            raise RequestError(f"Invalid JSON response from {method} {path} (status {resp.status_code})")
        if isinstance(data, dict) and data.get('errors') is not None:
            raise RequestError(format_errors(data['errors']))
        return data

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.call('GET', path, params)

    def post(self, path: str, body: Body = None) -> Any:
        return self.call('POST', path, body)


def build_query(body: Mapping[str, Any]) -> str:
    """Form-encodes a mapping, nesting keys as `parent[child]` like Shopify's REST params."""
    return urlencode(list(_flatten(body)))


def _flatten(value: Any, prefix: str = '') -> Iterable[Tuple[str, Any]]:
    if isinstance(value, Mapping):
        items = value.items()
    elif isinstance(value, (list, tuple)):
        items = enumerate(value)
    else:
        yield prefix, _scalar(value)
        return
    for k, v in items:
        key = f"{prefix}[{k}]" if prefix else str(k)
        if v is None:
            continue
        yield from _flatten(v, key)


def _scalar(value: Any) -> Any:
    if isinstance(value, bool):
        return int(value)
    return value


def format_errors(errors: Any) -> str:
    """Flattens Shopify's `errors` field into one message, a line per field."""
    if isinstance(errors, Mapping):
        lines = []
        for field, messages in errors.items():
            if isinstance(messages, (list, tuple)):
                messages = messages[0] if messages else ''
            lines.append(f"{field}: {messages}")
        return '\n'.join(lines)
    if isinstance(errors, (list, tuple)):
        return '\n'.join(str(e) for e in errors)
    return str(errors)
