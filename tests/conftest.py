import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import dsa, ed25519, rsa

from x509verify.config import reset_config
from x509verify.verify.registry import reset_default_registry


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    for env in ("X509VERIFY_FAMILIES", "X509VERIFY_HASHES", "X509VERIFY_CURVES", "X509VERIFY_LOG_LEVEL"):
        monkeypatch.delenv(env, raising=False)
    monkeypatch.setenv("X509VERIFY_CONFIG", str(tmp_path / "missing.yml"))
    reset_config()
    reset_default_registry()
    yield
    reset_config()
    reset_default_registry()


@pytest.fixture(scope="session")
def rsa_sk():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def dsa_sk():
    return dsa.generate_private_key(key_size=2048)


@pytest.fixture(scope="session")
def ed25519_sk():
    return ed25519.Ed25519PrivateKey.from_private_bytes(bytes(range(1, 33)))


def spki_der(private_key) -> bytes:
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.DER,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def spki_pem(private_key) -> bytes:
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def flip_bit(data: bytes, bit: int) -> bytes:
    buf = bytearray(data)
    buf[bit // 8] ^= 1 << (bit % 8)
    return bytes(buf)


def sample_bits(data: bytes, count: int = 24):
    """Spread ``count`` bit positions across ``data`` including both ends."""
    total = len(data) * 8
    step = max(1, total // count)
    return sorted(set(list(range(0, total, step)) + [total - 1]))
