"""Ed25519 verifier. PureEdDSA has no hash negotiation."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from asn1crypto import keys
from cryptography.exceptions import InvalidSignature as _Rejected
from cryptography.hazmat.primitives.asymmetric import ed25519

from .. import oids
from ..config import VerifierConfig
from ..errors import InvalidSignature, UnknownOid, VerificationFailed
from ..signature import Signature
from .common import load_public_key

OID = oids.ID_ED25519
NAME = "ed25519"
SIGNATURE_LEN = 64


@dataclass(frozen=True)
class Ed25519VerifyingKey:
    key: ed25519.Ed25519PublicKey

    @classmethod
    def from_spki(cls, info: keys.PublicKeyInfo) -> "Ed25519VerifyingKey":
        return cls(load_public_key(info, ed25519.Ed25519PublicKey, NAME))

    def verify(self, msg: bytes, signature: Signature) -> None:
        if signature.oid != oids.ID_ED25519:
            raise UnknownOid(signature.oid)
        sig = signature.as_bytes()
        if len(sig) != SIGNATURE_LEN:
            raise InvalidSignature(f"Ed25519 signature must be {SIGNATURE_LEN} bytes, got {len(sig)}")
        try:
            self.key.verify(sig, msg)
        except _Rejected as e:
            raise VerificationFailed("Ed25519 signature rejected") from e


def make_factory(cfg: VerifierConfig) -> Callable[[keys.PublicKeyInfo], Ed25519VerifyingKey]:
    return Ed25519VerifyingKey.from_spki
