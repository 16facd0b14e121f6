"""
Unit tests for signer resolution.
"""

import pytest
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa

from shared.config import SignerSettings
from shared.errors import ConfigError
from service_passport.app.tokens import AlgorithmFamily, HashVariant, SigningAlgorithm, resolve_signer


class TestSigningAlgorithm:
    """Test cases for the closed algorithm set."""

    @pytest.mark.parametrize("family, sha, name", [
        ("hmac", "Sha256", "HS256"),
        ("hmac", "sha384", "HS384"),
        ("HMAC", "512", "HS512"),
        ("rsa", "SHA-256", "RS256"),
        ("rsa", "Sha512", "RS512"),
        ("ecdsa", "Sha256", "ES256"),
        ("ecdsa", "Sha384", "ES384"),
        ("eddsa", "", "EdDSA"),
        ("eddsa", "Sha256", "EdDSA"),
    ])
    def test_names(self, family, sha, name):
        assert SigningAlgorithm.from_names(family, sha).name == name

    def test_eddsa_has_no_variant(self):
        algorithm = SigningAlgorithm.from_names("eddsa", "Sha512")

        assert algorithm.family == AlgorithmFamily.EDDSA
        assert algorithm.variant is None

    def test_hmac_is_symmetric(self):
        assert SigningAlgorithm(AlgorithmFamily.HMAC, HashVariant.SHA256).is_symmetric
        assert not SigningAlgorithm(AlgorithmFamily.RSA, HashVariant.SHA256).is_symmetric

    @pytest.mark.parametrize("family, sha", [
        ("", "Sha256"),
        (None, "Sha256"),
        ("dsa", "Sha256"),
        ("hmac", ""),
        ("hmac", "Sha1"),
        ("rsa", "md5"),
    ])
    def test_unsupported_combinations_are_config_errors(self, family, sha):
        with pytest.raises(ConfigError):
            SigningAlgorithm.from_names(family, sha)


class TestResolveSigner:
    """Test cases for resolve_signer."""

    def test_hmac_uses_plaintext_secret_for_both_branches(self, hmac_config):
        private = resolve_signer(hmac_config, is_private=True)
        public = resolve_signer(hmac_config, is_private=False)

        assert private.name == "HS256"
        assert private.key == "s3cr3t"
        assert public.key == "s3cr3t"

    def test_accepts_settings_model(self, hmac_config):
        settings = SignerSettings.model_validate(hmac_config)

        assert resolve_signer(settings).key == "s3cr3t"

    def test_rsa_private_key_with_passphrase(self, signer_configs):
        resolved = resolve_signer(signer_configs["rsa"], is_private=True)

        assert resolved.name == "RS256"
        assert resolved.is_private is True
        assert isinstance(resolved.key, rsa.RSAPrivateKey)

    def test_rsa_public_key(self, signer_configs):
        resolved = resolve_signer(signer_configs["rsa"], is_private=False)

        assert isinstance(resolved.key, rsa.RSAPublicKey)

    def test_ecdsa_keys(self, signer_configs):
        assert isinstance(resolve_signer(signer_configs["ecdsa"], True).key, ec.EllipticCurvePrivateKey)
        assert isinstance(resolve_signer(signer_configs["ecdsa"], False).key, ec.EllipticCurvePublicKey)

    def test_eddsa_keys(self, signer_configs):
        assert isinstance(resolve_signer(signer_configs["eddsa"], True).key, ed25519.Ed25519PrivateKey)
        assert isinstance(resolve_signer(signer_configs["eddsa"], False).key, ed25519.Ed25519PublicKey)

    def test_missing_algorithm_is_config_error(self):
        with pytest.raises(ConfigError):
            resolve_signer({"algorithm": {"type": ""}})

    def test_missing_key_file_does_not_leak_path(self, tmp_path):
        missing = str(tmp_path / "nowhere" / "private.pem")
        config = {
            "algorithm": {"type": "rsa", "sha": "Sha256"},
            "rsa": {"private_key": missing},
        }

        with pytest.raises(ConfigError) as exc_info:
            resolve_signer(config, is_private=True)

        assert missing not in str(exc_info.value)
        assert missing not in str(exc_info.value.to_response().model_dump())

    def test_unconfigured_public_key(self):
        config = {"algorithm": {"type": "ecdsa", "sha": "Sha256"}, "ecdsa": {"private_key": "x"}}

        with pytest.raises(ConfigError):
            resolve_signer(config, is_private=False)

    def test_wrong_passphrase_is_config_error(self, rsa_keys):
        config = {
            "algorithm": {"type": "rsa", "sha": "Sha256"},
            "rsa": {**rsa_keys, "passphrase": "d3Jvbmc="},
        }

        with pytest.raises(ConfigError):
            resolve_signer(config, is_private=True)

    def test_passphrase_must_be_base64(self, rsa_keys):
        config = {
            "algorithm": {"type": "rsa", "sha": "Sha256"},
            "rsa": {**rsa_keys, "passphrase": "not base64!"},
        }

        with pytest.raises(ConfigError):
            resolve_signer(config, is_private=True)

    def test_invalid_config_shape(self):
        with pytest.raises(ConfigError):
            resolve_signer({"algorithm": "hmac"})
