"""Normalizers por provedor — conversão de payloads externos para modelos internos.

Estrutura:
- neynar/: webhooks Farcaster entregues pelo Neynar

Cada provedor tem suas regras de extração e normalizer, mantendo SRP.
"""

from .neynar import NeynarEventNormalizer, normalize_event

__all__ = [
    "NeynarEventNormalizer",
    "normalize_event",
]
