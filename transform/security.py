"""
URL signing for transformation requests.

When a shared secret is configured every request must carry a ``token``
parameter: the lower-case hex HMAC-SHA256 of the remaining query string,
serialized in received order with the form-urlencoded rules browsers use
for ``URLSearchParams``.
"""

import hashlib
import hmac
import logging
from typing import List, Optional, Tuple
from urllib.parse import quote_plus

from api.exceptions import SignatureError
from core.constants import SecurityConstants
from transform.params import QueryParams

logger = logging.getLogger(__name__)


def _as_pairs(params: QueryParams) -> List[Tuple[str, str]]:
    if hasattr(params, "items"):
        return list(params.items())
    return list(params)


def _form_encode(value: str) -> str:
    # URLSearchParams leaves "*" alone and escapes "~"; quote_plus does the opposite.
    return quote_plus(value, safe="*").replace("~", "%7E")


def canonical_query_string(params: QueryParams) -> str:
    """
    Build the string that gets signed.

    Every ``token`` pair is removed; the remaining pairs keep their order.

    Example:
        >>> canonical_query_string([("path", "a b.jpg"), ("w", "400"), ("token", "x")])
        'path=a+b.jpg&w=400'
    """
    return "&".join(
        f"{_form_encode(key)}={_form_encode(value)}"
        for key, value in _as_pairs(params)
        if key != SecurityConstants.TOKEN_PARAM
    )


def generate_signature(message: str, secret: str) -> str:
    """HMAC-SHA256 of message keyed by secret, lower-case hex."""
    return hmac.new(secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).hexdigest()


def verify_signature(params: QueryParams, secret: str) -> bool:
    """
    Check the ``token`` parameter against the canonical query string.

    A missing or empty token never verifies.
    """
    pairs = _as_pairs(params)
    token = next((v for k, v in pairs if k == SecurityConstants.TOKEN_PARAM), None)
    if not token:
        return False

    expected = generate_signature(canonical_query_string(pairs), secret)
    return hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8"))


def check_signature(params: QueryParams, signing_secret: Optional[str]) -> None:
    """
    Enforce request signing if a secret is configured.

    Raises:
        SignatureError: If signing is enabled and the token is missing or wrong
    """
    if not signing_secret:
        return

    if not verify_signature(params, signing_secret):
        logger.warning("Signature verification failed")
        raise SignatureError()


def sign_query_params(params: QueryParams, secret: str) -> List[Tuple[str, str]]:
    """
    Return the params with a valid ``token`` appended.

    Any token already present is dropped first.
    """
    pairs = [(k, v) for k, v in _as_pairs(params) if k != SecurityConstants.TOKEN_PARAM]
    token = generate_signature(canonical_query_string(pairs), secret)
    pairs.append((SecurityConstants.TOKEN_PARAM, token))
    return pairs
