from __future__ import annotations
import hashlib
import hmac
from typing import Any, Mapping

# Query parameter carrying the signature on Shopify redirects
HMAC_PARAM = 'hmac'


def build_message(query: Mapping[str, Any]) -> str:
    """Sorted `key=value` pairs joined with `&`, excluding the hmac itself.

    Values are used as-is (no percent-encoding), which is what Shopify signs.
    """
    parts = [f"{k}={v}" for k, v in sorted(query.items()) if k != HMAC_PARAM]
    return '&'.join(parts)


def sign_query(query: Mapping[str, Any], secret: str) -> str:
    message = build_message(query)
    return hmac.new(secret.encode('utf-8'), message.encode('utf-8'), hashlib.sha256).hexdigest()


def verify_query(query: Mapping[str, Any], secret: str) -> bool:
    supplied = query.get(HMAC_PARAM)
    if not supplied:
        return False
    digest = sign_query(query, secret)
    return hmac.compare_digest(digest.encode('utf-8'), str(supplied).encode('utf-8'))
