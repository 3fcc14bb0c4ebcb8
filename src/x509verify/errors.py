"""Verification errors.

Every failure is raised as a subclass of :class:`Error`. The ``kind``
attribute lets callers branch on the outcome without string matching, e.g.
treat ``unknown_oid`` as "try another key" and everything else as a reject.
"""
from __future__ import annotations

from enum import Enum

from cryptography.x509 import ObjectIdentifier


class ErrorKind(str, Enum):
    UNKNOWN_OID = "unknown_oid"
    DECODE = "decode"
    ENCODE = "encode"
    INVALID_KEY = "invalid_key"
    INVALID_SIGNATURE = "invalid_signature"
    VERIFICATION = "verification"


class Error(Exception):
    kind: ErrorKind


class UnknownOid(Error):
    """The key family, signature scheme or curve identifier is not enabled."""

    kind = ErrorKind.UNKNOWN_OID

    def __init__(self, oid: ObjectIdentifier):
        super().__init__(f"unknown OID {oid.dotted_string}")
        self.oid = oid


class DecodeError(Error):
    kind = ErrorKind.DECODE


class EncodeError(Error):
    kind = ErrorKind.ENCODE


class InvalidKey(Error):
    kind = ErrorKind.INVALID_KEY


class InvalidSignature(Error):
    """Signature bytes are not a valid encoding for the resolved scheme."""

    kind = ErrorKind.INVALID_SIGNATURE


class VerificationFailed(Error):
    """The primitive ran and rejected the signature."""

    kind = ErrorKind.VERIFICATION


__all__ = [
    "ErrorKind",
    "Error",
    "UnknownOid",
    "DecodeError",
    "EncodeError",
    "InvalidKey",
    "InvalidSignature",
    "VerificationFailed",
]
