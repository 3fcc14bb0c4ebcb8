import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding

from x509verify import oids
from x509verify.config import VerifierConfig
from x509verify.errors import UnknownOid
from x509verify.signature import VerifyInfo
from x509verify.verify import ed25519, rsa
from x509verify.verify.key import VerifyingKey
from x509verify.verify.registry import (
    FamilyRegistry,
    RegistryError,
    build_registry,
    default_registry,
    reset_default_registry,
)

from conftest import spki_der


def test_default_registry_has_all_families():
    registry = default_registry()
    assert registry.families() == ["dsa", "rsa", "ecdsa", "ed25519"]
    assert oids.RSA_ENCRYPTION in registry
    assert default_registry() is registry


def test_duplicate_root_identifier_rejected():
    registry = FamilyRegistry()
    registry.register("rsa", oids.RSA_ENCRYPTION, lambda info: None)
    with pytest.raises(RegistryError):
        registry.register("rsa-clone", oids.RSA_ENCRYPTION, lambda info: None)
    assert len(registry) == 1


def test_unknown_family_name_rejected():
    with pytest.raises(RegistryError):
        build_registry(VerifierConfig(families=["rsa", "gost"]))


def test_unknown_hash_capability_rejected():
    with pytest.raises(RegistryError):
        build_registry(VerifierConfig(hashes=["sha2", "sha3"]))


def test_unknown_curve_rejected():
    with pytest.raises(RegistryError):
        build_registry(VerifierConfig(curves=["p256", "brainpool"]))


def test_disabled_family_is_unknown_oid(ed25519_sk):
    registry = build_registry(VerifierConfig(families=["rsa"]))
    with pytest.raises(UnknownOid) as ei:
        VerifyingKey.from_der(spki_der(ed25519_sk), registry)
    assert ei.value.oid == ed25519.OID


def test_disabled_hash_is_unknown_oid(rsa_sk):
    registry = build_registry(VerifierConfig(hashes=["sha2"]))
    key = VerifyingKey.from_der(spki_der(rsa_sk), registry)
    sig1 = rsa_sk.sign(b"m", padding.PKCS1v15(), hashes.SHA1())
    with pytest.raises(UnknownOid):
        key.verify(VerifyInfo.new(b"m", oids.SHA1_WITH_RSA_ENCRYPTION, sig1))
    sig256 = rsa_sk.sign(b"m", padding.PKCS1v15(), hashes.SHA256())
    key.verify(VerifyInfo.new(b"m", oids.SHA256_WITH_RSA_ENCRYPTION, sig256))


def test_scheme_tables_are_read_only(rsa_sk):
    key = VerifyingKey.from_der(spki_der(rsa_sk))
    with pytest.raises(TypeError):
        key.verifier.schemes[oids.ID_DSA] = rsa.SCHEMES[oids.SHA1_WITH_RSA_ENCRYPTION]


def test_default_registry_follows_environment(monkeypatch, ed25519_sk):
    from x509verify.config import reset_config

    monkeypatch.setenv("X509VERIFY_FAMILIES", "rsa,dsa")
    reset_config()
    reset_default_registry()
    assert default_registry().families() == ["rsa", "dsa"]
    with pytest.raises(UnknownOid):
        VerifyingKey.from_der(spki_der(ed25519_sk))
