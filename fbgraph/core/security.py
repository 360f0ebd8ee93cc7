"""Request signing and signed-request verification."""

import base64
import binascii
import hashlib
import hmac
import json

from fbgraph.core.errors import ValidationError


def appsecret_proof(app_secret: str, access_token: str) -> str:
    """Hex HMAC-SHA256 of the access token keyed by the app secret."""
    return hmac.new(
        app_secret.encode(),
        msg=access_token.encode(),
        digestmod=hashlib.sha256,
    ).hexdigest()


def _urlsafe_b64decode(value: str) -> bytes:
    return base64.urlsafe_b64decode(value + "=" * (-len(value) % 4))


def parse_signed_request(signed_request: str, app_secret: str) -> dict:
    """Return the payload of a ``<signature>.<payload>`` signed request.

    Facebook posts these to canvas and page-tab apps. Raises ValidationError
    when the value is malformed, uses an unknown algorithm or the signature
    does not match.
    """
    try:
        encoded_sig, payload = signed_request.split(".", 1)
        sig = _urlsafe_b64decode(encoded_sig)
        data = json.loads(_urlsafe_b64decode(payload))
    except (ValueError, binascii.Error) as e:
        raise ValidationError("'signed_request' malformed", cause=e) from e

    if not isinstance(data, dict) or str(data.get("algorithm", "")).upper() != "HMAC-SHA256":
        raise ValidationError("'signed_request' is using an unknown algorithm")

    expected_sig = hmac.new(app_secret.encode(), msg=payload.encode(), digestmod=hashlib.sha256).digest()
    if not hmac.compare_digest(sig, expected_sig):
        raise ValidationError("'signed_request' signature mismatch")

    return data
