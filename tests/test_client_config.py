import pytest
from shopify_oauth import ShopifyClient, Scope, ConfigurationError


def _client(**kw):
    return ShopifyClient(kw.pop('key', 'KEY'), kw.pop('secret', 'hush'))


def test_new_client_defaults():
    client = _client()
    assert client.get_shop() is None
    assert client.get_scopes() == []
    assert client.get_access_token() is None
    assert client.private is False


@pytest.mark.parametrize('value', [
    'example',
    'example.myshopify.com',
    'https://example.myshopify.com',
    'HTTPS://Example.MyShopify.com',
])
def test_set_shop_normalizes(value):
    client = _client().set_shop(value)
    assert client.get_shop().lower() == 'example'


def test_set_shop_idempotent():
    client = _client().set_shop('https://example.myshopify.com')
    client.set_shop(client.get_shop())
    assert client.get_shop() == 'example'


def test_setters_are_chainable():
    client = _client()
    assert client.set_shop('example').set_private(False).add_scope('read_products').set_access_token('t') is client


def test_add_scope_keeps_insertion_order():
    client = _client().add_scope('read_products').add_scope('write_orders')
    assert client.get_scopes() == ['read_products', 'write_orders']


def test_get_scopes_returns_copy():
    client = _client().add_scope('read_products')
    client.get_scopes().append('write_orders')
    assert client.get_scopes() == ['read_products']


def test_set_scopes_replaces_and_accepts_enum():
    client = _client().add_scope('read_themes')
    client.set_scopes([Scope.READ_PRODUCTS, 'write_orders'])
    assert client.get_scopes() == ['read_products', 'write_orders']
    assert all(type(s) is str for s in client.get_scopes())


def test_set_private_coerces_to_bool():
    assert _client().set_private(1).private is True
    assert _client().set_private('').private is False


def test_authorization_url():
    client = _client().set_shop('example').set_scopes(['read_products', 'write_orders'])
    url = client.get_authorization_url('https://app.example.com/cb', 12345)
    assert url == (
        'https://example.myshopify.com/admin/oauth/authorize?client_id=KEY'
        '&scope=read_products%2Cwrite_orders'
        '&redirect_uri=https%3A%2F%2Fapp.example.com%2Fcb&state=12345'
    )


def test_authorization_url_requires_shop():
    with pytest.raises(ConfigurationError):
        _client().get_authorization_url('https://app.example.com/cb', 1)


def test_base_uri_public_and_private():
    client = ShopifyClient('K', 'S').set_shop('example')
    assert client.get_base_uri() == 'https://example.myshopify.com'
    client.set_private(True)
    assert client.get_base_uri() == 'https://K:S@example.myshopify.com'


def test_base_uri_requires_shop():
    with pytest.raises(ConfigurationError):
        _client().get_base_uri()


def test_from_env(monkeypatch):
    monkeypatch.setenv('SHOPIFY_API_KEY', 'K')
    monkeypatch.setenv('SHOPIFY_API_SECRET', 'S')
    monkeypatch.setenv('SHOPIFY_SHOP', 'example.myshopify.com')
    monkeypatch.setenv('SHOPIFY_SCOPES', 'read_products, write_orders')
    monkeypatch.setenv('SHOPIFY_PRIVATE_APP', 'true')
    monkeypatch.setenv('SHOPIFY_TIMEOUT', '5')
    monkeypatch.delenv('SHOPIFY_ACCESS_TOKEN', raising=False)
    client = ShopifyClient.from_env()
    assert client.get_shop() == 'example'
    assert client.get_scopes() == ['read_products', 'write_orders']
    assert client.private is True
    assert client.timeout == 5
    assert client.get_access_token() is None


def test_from_env_missing_secret(monkeypatch):
    monkeypatch.setenv('SHOPIFY_API_KEY', 'K')
    monkeypatch.delenv('SHOPIFY_API_SECRET', raising=False)
    with pytest.raises(ConfigurationError, match='SHOPIFY_API_SECRET'):
        ShopifyClient.from_env()
