"""
Shared fixtures for Passport tests.
"""

import base64
from pathlib import Path
from typing import Dict, Any, Optional

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa

NOW = 1_700_000_000
RSA_PASSWORD = b"rsa-key-password"


class FakeClock:
    """Settable clock for time-window and TTL tests."""

    def __init__(self, now: float = NOW):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _write_key_pair(directory: Path, name: str, private_key, password: Optional[bytes] = None) -> Dict[str, str]:
    encryption = (
        serialization.BestAvailableEncryption(password)
        if password
        else serialization.NoEncryption()
    )
    private_path = directory / f"{name}-private.pem"
    public_path = directory / f"{name}-public.pem"
    private_path.write_bytes(
        private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=encryption,
        )
    )
    public_path.write_bytes(
        private_key.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
    )
    return {"private_key": str(private_path), "public_key": str(public_path)}


@pytest.fixture(scope="session")
def key_dir(tmp_path_factory) -> Path:
    return tmp_path_factory.mktemp("keys")


@pytest.fixture(scope="session")
def rsa_keys(key_dir) -> Dict[str, str]:
    """Passphrase-protected RSA key pair."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    paths = _write_key_pair(key_dir, "rsa", key, password=RSA_PASSWORD)
    paths["passphrase"] = base64.b64encode(RSA_PASSWORD).decode("ascii")
    return paths


@pytest.fixture(scope="session")
def ec_keys(key_dir) -> Dict[str, str]:
    return _write_key_pair(key_dir, "ec", ec.generate_private_key(ec.SECP256R1()))


@pytest.fixture(scope="session")
def ed_keys(key_dir) -> Dict[str, str]:
    return _write_key_pair(key_dir, "ed25519", ed25519.Ed25519PrivateKey.generate())


@pytest.fixture(scope="session")
def other_ed_keys(key_dir) -> Dict[str, str]:
    return _write_key_pair(key_dir, "ed25519-other", ed25519.Ed25519PrivateKey.generate())


@pytest.fixture(scope="session")
def signer_configs(rsa_keys, ec_keys, ed_keys) -> Dict[str, Dict[str, Any]]:
    """One working signer configuration per algorithm family."""
    return {
        "hmac": {
            "algorithm": {"type": "hmac", "sha": "Sha256"},
            "hmac": {"secrect": "s3cr3t"},
        },
        "rsa": {
            "algorithm": {"type": "rsa", "sha": "Sha256"},
            "rsa": dict(rsa_keys),
        },
        "ecdsa": {
            "algorithm": {"type": "ecdsa", "sha": "Sha256"},
            "ecdsa": dict(ec_keys),
        },
        "eddsa": {
            "algorithm": {"type": "eddsa"},
            "eddsa": dict(ed_keys),
        },
    }


@pytest.fixture(params=["hmac", "rsa", "ecdsa", "eddsa"])
def signer_config(request, signer_configs) -> Dict[str, Any]:
    """Parametrized over every algorithm family."""
    return signer_configs[request.param]


@pytest.fixture
def hmac_config(signer_configs) -> Dict[str, Any]:
    return signer_configs["hmac"]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def passphrase() -> str:
    return base64.b64encode(b"payload-passphrase-for-tests").decode("ascii")
