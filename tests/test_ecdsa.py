import pytest
from asn1crypto import core, keys
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec

from x509verify import oids
from x509verify.errors import InvalidKey, InvalidSignature, UnknownOid, VerificationFailed
from x509verify.signature import VerifyInfo
from x509verify.verify.key import VerifyingKey
from x509verify.verify.registry import build_registry
from x509verify.config import VerifierConfig

from conftest import flip_bit, sample_bits, spki_der

CURVES = [
    ("p192", ec.SECP192R1()),
    ("p224", ec.SECP224R1()),
    ("p256", ec.SECP256R1()),
    ("p384", ec.SECP384R1()),
    ("p521", ec.SECP521R1()),
    ("k256", ec.SECP256K1()),
]

SCHEMES = [
    (oids.ECDSA_WITH_SHA1, hashes.SHA1()),
    (oids.ECDSA_WITH_SHA224, hashes.SHA224()),
    (oids.ECDSA_WITH_SHA256, hashes.SHA256()),
    (oids.ECDSA_WITH_SHA384, hashes.SHA384()),
    (oids.ECDSA_WITH_SHA512, hashes.SHA512()),
]


def _generate(curve):
    try:
        return ec.generate_private_key(curve)
    except UnsupportedAlgorithm:
        pytest.skip(f"{curve.name} not supported by this OpenSSL build")


@pytest.fixture(scope="module")
def p256_sk():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture(scope="module")
def key(p256_sk):
    return VerifyingKey.from_der(spki_der(p256_sk))


@pytest.mark.parametrize("name,curve", CURVES, ids=[c[0] for c in CURVES])
def test_ecdsa_curves_verify(name, curve):
    sk = _generate(curve)
    key = VerifyingKey.from_der(spki_der(sk))
    assert key.family == "ecdsa"
    msg = f"ecdsa on {name}".encode()
    sig = sk.sign(msg, ec.ECDSA(hashes.SHA256()))
    key.verify(VerifyInfo.new(msg, oids.ECDSA_WITH_SHA256, sig))


@pytest.mark.parametrize("oid,algorithm", SCHEMES, ids=["sha1", "sha224", "sha256", "sha384", "sha512"])
def test_ecdsa_schemes_verify(p256_sk, key, oid, algorithm):
    msg = b"ecdsa scheme"
    sig = p256_sk.sign(msg, ec.ECDSA(algorithm))
    key.verify(VerifyInfo.new(msg, oid, sig))


def test_ecdsa_key_records_curve(key):
    assert key.verifier.curve == oids.SECP256R1


def test_ecdsa_disabled_curve_is_unknown_oid():
    registry = build_registry(VerifierConfig(curves=["p384"]))
    sk = ec.generate_private_key(ec.SECP256R1())
    with pytest.raises(UnknownOid) as ei:
        VerifyingKey.from_der(spki_der(sk), registry)
    assert ei.value.oid == oids.SECP256R1


def test_ecdsa_unknown_scheme(p256_sk, key):
    sig = p256_sk.sign(b"test", ec.ECDSA(hashes.SHA256()))
    with pytest.raises(UnknownOid) as ei:
        key.verify(VerifyInfo.new(b"test", oids.DSA_WITH_SHA256, sig))
    assert ei.value.oid == oids.DSA_WITH_SHA256


def test_ecdsa_garbage_signature_is_invalid_signature(key):
    with pytest.raises(InvalidSignature):
        key.verify(VerifyInfo.new(b"test", oids.ECDSA_WITH_SHA256, b"\x01\x02\x03"))


def test_ecdsa_signature_bit_flips_never_verify(p256_sk, key):
    msg = b"bit flip target"
    sig = p256_sk.sign(msg, ec.ECDSA(hashes.SHA384()))
    for bit in sample_bits(sig, count=64):
        with pytest.raises((InvalidSignature, VerificationFailed)):
            key.verify(VerifyInfo.new(msg, oids.ECDSA_WITH_SHA384, flip_bit(sig, bit)))


def test_ecdsa_message_change_fails_verification(p256_sk, key):
    sig = p256_sk.sign(b"amount=10", ec.ECDSA(hashes.SHA256()))
    with pytest.raises(VerificationFailed):
        key.verify(VerifyInfo.new(b"amount=99", oids.ECDSA_WITH_SHA256, sig))


def test_ecdsa_non_named_curve_is_invalid_key(p256_sk):
    info = keys.PublicKeyInfo.load(spki_der(p256_sk))
    implicit = keys.PublicKeyInfo({
        "algorithm": keys.PublicKeyAlgorithm({
            "algorithm": "ec",
            "parameters": keys.ECDomainParameters(name="implicit_ca", value=core.Null()),
        }),
        "public_key": info["public_key"],
    })
    with pytest.raises(InvalidKey):
        VerifyingKey.from_der(implicit.dump())
