"""DSA verifier (prehash)."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping

from asn1crypto import keys
from cryptography.exceptions import InvalidSignature as _Rejected
from cryptography.hazmat.primitives.asymmetric import dsa
from cryptography.hazmat.primitives.asymmetric.utils import Prehashed
from cryptography.x509 import ObjectIdentifier

from .. import oids
from ..config import VerifierConfig
from ..errors import VerificationFailed
from ..hashes import Scheme, digest, hash_algorithm, select_schemes
from ..signature import Signature
from .common import canonical_rs, load_public_key, resolve_scheme

OID = oids.ID_DSA
NAME = "dsa"

SCHEMES: Mapping[ObjectIdentifier, Scheme] = {
    oids.DSA_WITH_SHA1: Scheme("dsa-with-sha1", "sha1"),
    oids.DSA_WITH_SHA224: Scheme("dsa-with-sha224", "sha224"),
    oids.DSA_WITH_SHA256: Scheme("dsa-with-sha256", "sha256"),
}


@dataclass(frozen=True)
class DsaVerifyingKey:
    key: dsa.DSAPublicKey
    schemes: Mapping[ObjectIdentifier, Scheme]

    @classmethod
    def from_spki(cls, info: keys.PublicKeyInfo, schemes: Mapping[ObjectIdentifier, Scheme]) -> "DsaVerifyingKey":
        return cls(load_public_key(info, dsa.DSAPublicKey, NAME), schemes)

    def verify(self, msg: bytes, signature: Signature) -> None:
        scheme = resolve_scheme(self.schemes, signature.oid)
        sig = canonical_rs(signature.as_bytes())
        algorithm = hash_algorithm(scheme.hash_name)
        try:
            self.key.verify(sig, digest(scheme.hash_name, msg), Prehashed(algorithm))
        except _Rejected as e:
            raise VerificationFailed(f"{scheme.name} signature rejected") from e


def make_factory(cfg: VerifierConfig) -> Callable[[keys.PublicKeyInfo], DsaVerifyingKey]:
    schemes = select_schemes(SCHEMES, cfg.hashes)

    def factory(info: keys.PublicKeyInfo) -> DsaVerifyingKey:
        return DsaVerifyingKey.from_spki(info, schemes)

    return factory
