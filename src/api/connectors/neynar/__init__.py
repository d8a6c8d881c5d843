"""Connector Neynar: assinatura de webhook e lookup de perfis em lote."""

from .http_client import NeynarHttpClient, create_neynar_http_client
from .signature import (
    SignatureResult,
    compute_signature,
    is_valid_signature,
    verify_neynar_signature,
)
from .webhook import (
    InvalidJsonError,
    InvalidSignatureError,
    WebhookRequestError,
    parse_webhook_request,
)

__all__ = [
    "InvalidJsonError",
    "InvalidSignatureError",
    "NeynarHttpClient",
    "SignatureResult",
    "WebhookRequestError",
    "compute_signature",
    "create_neynar_http_client",
    "is_valid_signature",
    "parse_webhook_request",
    "verify_neynar_signature",
]
