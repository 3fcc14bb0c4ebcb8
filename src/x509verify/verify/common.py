"""Helpers shared by the family verifiers."""
from __future__ import annotations

from typing import Mapping, Tuple, Type, TypeVar

from asn1crypto import algos, keys
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.utils import encode_dss_signature
from cryptography.x509 import ObjectIdentifier

from ..errors import DecodeError, InvalidKey, InvalidSignature, UnknownOid
from ..hashes import Scheme
from ..spki import reencode

K = TypeVar("K")


def load_public_key(info: keys.PublicKeyInfo, key_type: Type[K], family: str) -> K:
    der = reencode(info)
    try:
        key = serialization.load_der_public_key(der)
    except (ValueError, UnsupportedAlgorithm) as e:
        raise DecodeError(f"{family} public key could not be decoded") from e
    if not isinstance(key, key_type):
        raise InvalidKey(f"expected a {family} public key, got {type(key).__name__}")
    return key


def resolve_scheme(schemes: Mapping[ObjectIdentifier, Scheme], oid: ObjectIdentifier) -> Scheme:
    scheme = schemes.get(oid)
    if scheme is None:
        raise UnknownOid(oid)
    return scheme


def decode_rs(data: bytes) -> Tuple[int, int]:
    """Decode a DER ``SEQUENCE { r INTEGER, s INTEGER }``."""
    try:
        sig = algos.DSASignature.load(data, strict=True)
        r = sig["r"].native
        s = sig["s"].native
    except (ValueError, TypeError) as e:
        raise InvalidSignature("malformed (r, s) signature encoding") from e
    if r is None or s is None or r <= 0 or s <= 0:
        raise InvalidSignature("(r, s) values must be positive integers")
    return r, s


def canonical_rs(data: bytes) -> bytes:
    """Decode then re-encode so only canonical DER reaches the primitive."""
    r, s = decode_rs(data)
    return encode_dss_signature(r, s)
