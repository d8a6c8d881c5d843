"""Testes da verificação HMAC-SHA512 do webhook Neynar."""

from __future__ import annotations

import hashlib
import hmac

from api.connectors.neynar.signature import (
    SignatureResult,
    compute_signature,
    is_valid_signature,
    verify_neynar_signature,
)

BODY = b'{"id":"e1","type":"follow.created"}'
SECRET = "s3cret"


def _sign(body: bytes, secret: str = SECRET) -> str:
    return hmac.new(secret.encode(), body, hashlib.sha512).hexdigest()


class TestIsValidSignature:
    def test_accepts_matching_digest(self) -> None:
        assert is_valid_signature(BODY, _sign(BODY), SECRET) is True

    def test_rejects_digest_of_other_body(self) -> None:
        assert is_valid_signature(BODY + b" ", _sign(BODY), SECRET) is False

    def test_rejects_body_with_one_byte_changed(self) -> None:
        tampered = BODY.replace(b"e1", b"e2")
        assert len(tampered) == len(BODY)
        assert is_valid_signature(tampered, _sign(BODY), SECRET) is False

    def test_non_ascii_header_is_invalid_not_an_error(self) -> None:
        assert is_valid_signature(BODY, "abc\u00e9", SECRET) is False
        assert is_valid_signature(BODY, _sign(BODY)[:-1] + "\u00e9", SECRET) is False

    def test_uppercase_digest_is_accepted(self) -> None:
        assert is_valid_signature(BODY, _sign(BODY).upper(), SECRET) is True

    def test_rejects_digest_with_other_secret(self) -> None:
        assert is_valid_signature(BODY, _sign(BODY, "other"), SECRET) is False

    def test_without_secret_everything_passes(self) -> None:
        """Modo permissivo: sem secret nada é verificado."""
        assert is_valid_signature(BODY, None, None) is True
        assert is_valid_signature(BODY, "garbage", "") is True

    def test_missing_signature_with_secret_is_invalid(self) -> None:
        assert is_valid_signature(BODY, None, SECRET) is False
        assert is_valid_signature(BODY, "", SECRET) is False

    def test_compute_signature_is_sha512_hex(self) -> None:
        digest = compute_signature(BODY, SECRET)
        assert len(digest) == 128
        assert digest == _sign(BODY)


class TestVerifyNeynarSignature:
    def test_header_lookup_is_case_insensitive(self) -> None:
        result = verify_neynar_signature(BODY, {"x-neynar-signature": _sign(BODY)}, SECRET)
        assert result == SignatureResult(valid=True, skipped=False)

    def test_skipped_without_secret(self) -> None:
        result = verify_neynar_signature(BODY, {}, None)
        assert result.valid is True
        assert result.skipped is True

    def test_missing_header(self) -> None:
        result = verify_neynar_signature(BODY, {"content-type": "application/json"}, SECRET)
        assert result.valid is False
        assert result.error == "missing_signature"

    def test_mismatch(self) -> None:
        result = verify_neynar_signature(BODY, {"X-Neynar-Signature": "ab" * 64}, SECRET)
        assert result.valid is False
        assert result.error == "signature_mismatch"
