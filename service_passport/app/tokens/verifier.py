"""
Signature verification against the public (or shared) key.
"""

from jwt.exceptions import InvalidKeyError

from shared.errors import ConfigError, SignatureError
from shared.logging import get_logger

from .signer import SignerConfig, resolve_signer
from .token import Token

logger = get_logger("passport.tokens.verifier")


def verify(token: Token, signer_config: SignerConfig) -> bool:
    """Return whether ``token`` carries a valid signature.

    A wrong signature is a ``False`` result. :class:`SignatureError` is raised
    only when verification cannot run: the key cannot be resolved or prepared,
    or the token declares a different algorithm than the configured one.
    """
    try:
        resolved = resolve_signer(signer_config, is_private=False)
    except ConfigError as e:
        logger.error("Verification key could not be resolved", error=e.message, details=e.details)
        raise SignatureError() from None

    if token.algorithm != resolved.name:
        logger.warning("Token algorithm mismatch", token_alg=token.algorithm, expected_alg=resolved.name)
        raise SignatureError(
            "Token algorithm does not match the configured signer",
            details={"expected": resolved.name},
        )

    try:
        key = resolved.signer.prepare_key(resolved.key)
        valid = resolved.signer.verify(token.signing_input.encode("ascii"), key, token.signature)
    except (InvalidKeyError, TypeError, ValueError) as e:
        logger.error("Signature verification failed to run", alg=resolved.name, error=str(e))
        raise SignatureError() from None

    if not valid:
        logger.info("Token signature mismatch", alg=resolved.name, jti=token.get_claim("jti"))
    return bool(valid)
