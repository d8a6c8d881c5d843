"""Testes do parse do webhook (assinatura antes do JSON)."""

from __future__ import annotations

import pytest

from api.connectors.neynar.signature import compute_signature
from api.connectors.neynar.webhook.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    parse_webhook_request,
)


def test_parse_returns_payload_and_signature_result() -> None:
    body = b'{"id":"e1","type":"follow.created","data":{}}'
    headers = {"X-Neynar-Signature": compute_signature(body, "secret")}

    payload, result = parse_webhook_request(body, headers, "secret")

    assert payload["id"] == "e1"
    assert result.valid is True
    assert result.skipped is False


def test_signature_checked_before_json() -> None:
    """Corpo inválido com assinatura errada → erro de assinatura, não de JSON."""
    with pytest.raises(InvalidSignatureError):
        parse_webhook_request(b"not json", {"X-Neynar-Signature": "00"}, "secret")


def test_invalid_json_raises() -> None:
    with pytest.raises(InvalidJsonError):
        parse_webhook_request(b"{broken", {}, None)


def test_json_array_is_rejected() -> None:
    with pytest.raises(InvalidJsonError, match="payload_not_object"):
        parse_webhook_request(b"[1, 2]", {}, None)


def test_empty_body_is_empty_payload() -> None:
    payload, result = parse_webhook_request(b"", {}, None)
    assert payload == {}
    assert result.skipped is True
