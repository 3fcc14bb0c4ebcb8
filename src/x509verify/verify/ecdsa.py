"""ECDSA verifier (prehash).

The curve comes from the key's SPKI parameters and must be one of the enabled
named curves; the signature identifier only selects the hash.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Tuple, Type

from asn1crypto import keys
from cryptography.exceptions import InvalidSignature as _Rejected
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed
from cryptography.x509 import ObjectIdentifier

from .. import oids
from ..config import VerifierConfig
from ..errors import DecodeError, InvalidKey, UnknownOid, VerificationFailed
from ..hashes import Scheme, digest, hash_algorithm, select_schemes
from ..signature import Signature
from .common import canonical_rs, load_public_key, resolve_scheme

OID = oids.ID_EC_PUBLIC_KEY
NAME = "ecdsa"

SCHEMES: Mapping[ObjectIdentifier, Scheme] = {
    oids.ECDSA_WITH_SHA1: Scheme("ecdsa-with-SHA1", "sha1"),
    oids.ECDSA_WITH_SHA224: Scheme("ecdsa-with-SHA224", "sha224"),
    oids.ECDSA_WITH_SHA256: Scheme("ecdsa-with-SHA256", "sha256"),
    oids.ECDSA_WITH_SHA384: Scheme("ecdsa-with-SHA384", "sha384"),
    oids.ECDSA_WITH_SHA512: Scheme("ecdsa-with-SHA512", "sha512"),
}

CURVES: Dict[str, Tuple[ObjectIdentifier, Type[ec.EllipticCurve]]] = {
    "p192": (oids.SECP192R1, ec.SECP192R1),
    "p224": (oids.SECP224R1, ec.SECP224R1),
    "p256": (oids.SECP256R1, ec.SECP256R1),
    "p384": (oids.SECP384R1, ec.SECP384R1),
    "p521": (oids.SECP521R1, ec.SECP521R1),
    "k256": (oids.SECP256K1, ec.SECP256K1),
}


def select_curves(enabled) -> Mapping[ObjectIdentifier, Type[ec.EllipticCurve]]:
    unknown = set(enabled) - set(CURVES)
    if unknown:
        raise ValueError(f"unknown curves: {sorted(unknown)}")
    return {CURVES[name][0]: CURVES[name][1] for name in enabled}


def named_curve_oid(info: keys.PublicKeyInfo) -> ObjectIdentifier:
    try:
        params = info["algorithm"]["parameters"]
        if params.name != "named":
            raise InvalidKey(f"only named curves are supported, got {params.name} parameters")
        return oids.as_oid(params.chosen)
    except (ValueError, TypeError, AttributeError) as e:
        raise DecodeError("malformed EC domain parameters") from e


@dataclass(frozen=True)
class EcdsaVerifyingKey:
    key: ec.EllipticCurvePublicKey
    curve: ObjectIdentifier
    schemes: Mapping[ObjectIdentifier, Scheme]

    @classmethod
    def from_spki(
        cls,
        info: keys.PublicKeyInfo,
        schemes: Mapping[ObjectIdentifier, Scheme],
        curves: Mapping[ObjectIdentifier, Type[ec.EllipticCurve]],
    ) -> "EcdsaVerifyingKey":
        curve_oid = named_curve_oid(info)
        curve_type = curves.get(curve_oid)
        if curve_type is None:
            raise UnknownOid(curve_oid)
        key = load_public_key(info, ec.EllipticCurvePublicKey, NAME)
        if not isinstance(key.curve, curve_type):
            raise InvalidKey(f"key curve {key.curve.name} does not match {curve_oid.dotted_string}")
        return cls(key, curve_oid, schemes)

    def verify(self, msg: bytes, signature: Signature) -> None:
        scheme = resolve_scheme(self.schemes, signature.oid)
        sig = canonical_rs(signature.as_bytes())
        algorithm = hash_algorithm(scheme.hash_name)
        try:
            self.key.verify(sig, digest(scheme.hash_name, msg), ec.ECDSA(Prehashed(algorithm)))
        except _Rejected as e:
            raise VerificationFailed(f"{scheme.name} signature rejected") from e


def make_factory(cfg: VerifierConfig) -> Callable[[keys.PublicKeyInfo], EcdsaVerifyingKey]:
    schemes = select_schemes(SCHEMES, cfg.hashes)
    curves = select_curves(cfg.curves)

    def factory(info: keys.PublicKeyInfo) -> EcdsaVerifyingKey:
        return EcdsaVerifyingKey.from_spki(info, schemes, curves)

    return factory
