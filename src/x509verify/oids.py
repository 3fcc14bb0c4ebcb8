"""Algorithm identifiers used by the verifiers.

Identifiers are ``cryptography.x509.ObjectIdentifier`` values and compare by
their dotted string.
"""
from __future__ import annotations

from typing import Any

from asn1crypto import core
from cryptography.x509 import ObjectIdentifier

from .errors import DecodeError

# Key families (SubjectPublicKeyInfo.algorithm)
RSA_ENCRYPTION = ObjectIdentifier("1.2.840.113549.1.1.1")
ID_DSA = ObjectIdentifier("1.2.840.10040.4.1")
ID_EC_PUBLIC_KEY = ObjectIdentifier("1.2.840.10045.2.1")
ID_ED25519 = ObjectIdentifier("1.3.101.112")

# RSA PKCS#1 v1.5
MD2_WITH_RSA_ENCRYPTION = ObjectIdentifier("1.2.840.113549.1.1.2")
MD5_WITH_RSA_ENCRYPTION = ObjectIdentifier("1.2.840.113549.1.1.4")
SHA1_WITH_RSA_ENCRYPTION = ObjectIdentifier("1.2.840.113549.1.1.5")
SHA224_WITH_RSA_ENCRYPTION = ObjectIdentifier("1.2.840.113549.1.1.14")
SHA256_WITH_RSA_ENCRYPTION = ObjectIdentifier("1.2.840.113549.1.1.11")
SHA384_WITH_RSA_ENCRYPTION = ObjectIdentifier("1.2.840.113549.1.1.12")
SHA512_WITH_RSA_ENCRYPTION = ObjectIdentifier("1.2.840.113549.1.1.13")

# DSA
DSA_WITH_SHA1 = ObjectIdentifier("1.2.840.10040.4.3")
DSA_WITH_SHA224 = ObjectIdentifier("2.16.840.1.101.3.4.3.1")
DSA_WITH_SHA256 = ObjectIdentifier("2.16.840.1.101.3.4.3.2")

# ECDSA
ECDSA_WITH_SHA1 = ObjectIdentifier("1.2.840.10045.4.1")
ECDSA_WITH_SHA224 = ObjectIdentifier("1.2.840.10045.4.3.1")
ECDSA_WITH_SHA256 = ObjectIdentifier("1.2.840.10045.4.3.2")
ECDSA_WITH_SHA384 = ObjectIdentifier("1.2.840.10045.4.3.3")
ECDSA_WITH_SHA512 = ObjectIdentifier("1.2.840.10045.4.3.4")

# Named curves
SECP192R1 = ObjectIdentifier("1.2.840.10045.3.1.1")
SECP224R1 = ObjectIdentifier("1.3.132.0.33")
SECP256R1 = ObjectIdentifier("1.2.840.10045.3.1.7")
SECP384R1 = ObjectIdentifier("1.3.132.0.34")
SECP521R1 = ObjectIdentifier("1.3.132.0.35")
SECP256K1 = ObjectIdentifier("1.3.132.0.10")


def as_oid(value: Any) -> ObjectIdentifier:
    """Coerce a dotted string or an asn1crypto OID into an ObjectIdentifier."""
    if isinstance(value, ObjectIdentifier):
        return value
    if isinstance(value, core.ObjectIdentifier):
        value = value.dotted
    if not isinstance(value, str):
        raise TypeError(f"expected an object identifier, got {type(value).__name__}")
    try:
        return ObjectIdentifier(value)
    except ValueError as e:
        raise DecodeError(f"malformed object identifier {value!r}") from e
