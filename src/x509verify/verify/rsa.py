"""RSA PKCS#1 v1.5 verifier."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping

from asn1crypto import keys
from cryptography.exceptions import InvalidSignature as _Rejected
from cryptography.hazmat.primitives.asymmetric import padding, rsa
from cryptography.x509 import ObjectIdentifier

from .. import oids
from ..config import VerifierConfig
from ..errors import InvalidSignature, VerificationFailed
from ..hashes import Scheme, digest, hash_algorithm, select_schemes
from ..signature import Signature
from ..utils.ct import ct_eq
from .common import load_public_key, resolve_scheme

OID = oids.RSA_ENCRYPTION
NAME = "rsa"

SCHEMES: Mapping[ObjectIdentifier, Scheme] = {
    oids.MD2_WITH_RSA_ENCRYPTION: Scheme("md2WithRSAEncryption", "md2"),
    oids.MD5_WITH_RSA_ENCRYPTION: Scheme("md5WithRSAEncryption", "md5"),
    oids.SHA1_WITH_RSA_ENCRYPTION: Scheme("sha1WithRSAEncryption", "sha1"),
    oids.SHA224_WITH_RSA_ENCRYPTION: Scheme("sha224WithRSAEncryption", "sha224"),
    oids.SHA256_WITH_RSA_ENCRYPTION: Scheme("sha256WithRSAEncryption", "sha256"),
    oids.SHA384_WITH_RSA_ENCRYPTION: Scheme("sha384WithRSAEncryption", "sha384"),
    oids.SHA512_WITH_RSA_ENCRYPTION: Scheme("sha512WithRSAEncryption", "sha512"),
}

# DER DigestInfo prefix for MD2 (RFC 8017, section 9.2, note 1)
MD2_DIGEST_INFO_PREFIX = bytes.fromhex("3020300c06082a864886f70d020205000410")


@dataclass(frozen=True)
class RsaVerifyingKey:
    key: rsa.RSAPublicKey
    schemes: Mapping[ObjectIdentifier, Scheme]

    @classmethod
    def from_spki(cls, info: keys.PublicKeyInfo, schemes: Mapping[ObjectIdentifier, Scheme]) -> "RsaVerifyingKey":
        return cls(load_public_key(info, rsa.RSAPublicKey, NAME), schemes)

    @property
    def modulus_len(self) -> int:
        return (self.key.key_size + 7) // 8

    def verify(self, msg: bytes, signature: Signature) -> None:
        scheme = resolve_scheme(self.schemes, signature.oid)
        sig = signature.as_bytes()
        if len(sig) != self.modulus_len:
            raise InvalidSignature(
                f"{scheme.name}: signature is {len(sig)} bytes, modulus is {self.modulus_len}"
            )
        if scheme.hash_name == "md2":
            self._verify_md2(msg, sig)
            return
        try:
            self.key.verify(sig, msg, padding.PKCS1v15(), hash_algorithm(scheme.hash_name))
        except _Rejected as e:
            raise VerificationFailed(f"{scheme.name} signature rejected") from e

    def _verify_md2(self, msg: bytes, sig: bytes) -> None:
        # OpenSSL has no MD2; recover the DigestInfo and compare it ourselves
        try:
            recovered = self.key.recover_data_from_signature(sig, padding.PKCS1v15(), None)
        except _Rejected as e:
            raise VerificationFailed("md2WithRSAEncryption signature rejected") from e
        if not ct_eq(recovered, MD2_DIGEST_INFO_PREFIX + digest("md2", msg)):
            raise VerificationFailed("md2WithRSAEncryption signature rejected")


def make_factory(cfg: VerifierConfig) -> Callable[[keys.PublicKeyInfo], RsaVerifyingKey]:
    schemes = select_schemes(SCHEMES, cfg.hashes)

    def factory(info: keys.PublicKeyInfo) -> RsaVerifyingKey:
        return RsaVerifyingKey.from_spki(info, schemes)

    return factory
