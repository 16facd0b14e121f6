"""
Token engine package.

Issues compact signed tokens (``header.payload.signature``) and checks them
on the way back in. Pieces, leaves first:

- algorithms / signer: closed algorithm set and key resolution
- builder: immutable claim/header accumulation
- encoder / parser: compact serialisation
- validation / verifier: claim windows and signatures
- crypto: per-claim encryption
- engine: facade wiring the above to one signer configuration
"""

from .algorithms import AlgorithmFamily, HashVariant, SigningAlgorithm
from .builder import TokenBuilder
from .crypto import PayloadCrypt, base64_decode
from .encoder import encode
from .engine import TokenEngine
from .parser import parse
from .signer import ResolvedSigner, resolve_signer
from .token import Token
from .validation import ValidationData, validate
from .verifier import verify

__all__ = [
    "AlgorithmFamily",
    "HashVariant",
    "SigningAlgorithm",
    "TokenBuilder",
    "PayloadCrypt",
    "base64_decode",
    "encode",
    "TokenEngine",
    "parse",
    "ResolvedSigner",
    "resolve_signer",
    "Token",
    "ValidationData",
    "validate",
    "verify",
]
