"""Generic X.509 VerifyingKey.

A VerifyingKey is built once from a SubjectPublicKeyInfo and then used for
any number of verify calls::

    key = VerifyingKey.from_pem(pem_bytes)
    key.verify(VerifyInfo.new(msg, "1.2.840.113549.1.1.11", sig))

``verify`` raises one of the errors from :mod:`x509verify.errors`;
``try_verify`` reports the same outcome as a :class:`VerifyResult`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from asn1crypto import keys, x509
from pydantic import BaseModel

from ..certificate import load_certificate
from ..errors import Error
from ..obs.prom import observe_key, observe_verify
from ..signature import VerifyInfo
from ..spki import algorithm_oid, load_public_key_info
from ..utils.logging import get_logger
from .dsa import DsaVerifyingKey
from .ecdsa import EcdsaVerifyingKey
from .ed25519 import Ed25519VerifyingKey
from .registry import FamilyRegistry, default_registry
from .rsa import RsaVerifyingKey

FamilyVerifier = Union[DsaVerifyingKey, RsaVerifyingKey, EcdsaVerifyingKey, Ed25519VerifyingKey]

log = get_logger()


class VerifyResult(BaseModel):
    verified: bool
    family: str
    sig_alg: Optional[str] = None
    failure_reason: Optional[str] = None
    detail: Optional[str] = None


@dataclass(frozen=True)
class VerifyingKey:
    family: str
    verifier: FamilyVerifier

    @classmethod
    def new(cls, key_info: keys.PublicKeyInfo, registry: FamilyRegistry | None = None) -> "VerifyingKey":
        if registry is None:
            registry = default_registry()
        oid = algorithm_oid(key_info)
        try:
            entry = registry.lookup(oid)
        except Error as e:
            observe_key(family="unknown", result=e.kind.value)
            log.debug("no key family for %s", oid.dotted_string)
            raise
        try:
            verifier = entry.factory(key_info)
        except Error as e:
            observe_key(family=entry.name, result=e.kind.value)
            log.debug("%s key rejected: %s (%s)", entry.name, e.kind.value, e)
            raise
        observe_key(family=entry.name, result="ok")
        return cls(entry.name, verifier)

    @classmethod
    def from_der(cls, der: bytes, registry: FamilyRegistry | None = None) -> "VerifyingKey":
        return cls.new(load_public_key_info(der), registry)

    @classmethod
    def from_pem(cls, data: Union[bytes, str], registry: FamilyRegistry | None = None) -> "VerifyingKey":
        return cls.new(load_public_key_info(data), registry)

    @classmethod
    def from_certificate(
        cls, cert: Union[bytes, x509.Certificate], registry: FamilyRegistry | None = None
    ) -> "VerifyingKey":
        cert = load_certificate(cert)
        return cls.new(load_public_key_info(cert["tbs_certificate"]["subject_public_key_info"]), registry)

    def verify(self, info: VerifyInfo) -> None:
        if not isinstance(info, VerifyInfo):
            raise TypeError(f"expected VerifyInfo, got {type(info).__name__}")
        try:
            self.verifier.verify(info.message_bytes, info.signature)
        except Error as e:
            observe_verify(family=self.family, verified=False, failure_reason=e.kind.value)
            log.debug(
                "%s verify failed for %s: %s",
                self.family, info.signature.oid.dotted_string, e.kind.value,
            )
            raise
        observe_verify(family=self.family, verified=True, failure_reason=None)

    def try_verify(self, info: VerifyInfo) -> VerifyResult:
        if not isinstance(info, VerifyInfo):
            raise TypeError(f"expected VerifyInfo, got {type(info).__name__}")
        sig_alg = info.signature.oid.dotted_string
        try:
            self.verify(info)
        except Error as e:
            return VerifyResult(
                verified=False,
                family=self.family,
                sig_alg=sig_alg,
                failure_reason=e.kind.value,
                detail=str(e),
            )
        return VerifyResult(verified=True, family=self.family, sig_alg=sig_alg)


__all__ = ["VerifyingKey", "VerifyResult", "FamilyVerifier"]
