"""Message, signature and verify-request containers.

The containers keep a reference to the caller's buffer (bytes, bytearray or
memoryview) instead of copying it; the caller keeps that buffer unchanged for
the duration of the verify call.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from cryptography.x509 import ObjectIdentifier

from .oids import as_oid

BytesLike = Union[bytes, bytearray, memoryview]


def _check_bytes_like(value: Any, what: str) -> None:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{what} must be bytes-like, got {type(value).__name__}")


@dataclass(frozen=True)
class Signature:
    oid: ObjectIdentifier
    data: BytesLike

    def __post_init__(self):
        _check_bytes_like(self.data, "signature data")

    @classmethod
    def new(cls, oid: Any, data: BytesLike) -> "Signature":
        return cls(as_oid(oid), data)

    def as_bytes(self) -> bytes:
        return bytes(self.data)


@dataclass(frozen=True)
class Message:
    data: BytesLike

    def __post_init__(self):
        _check_bytes_like(self.data, "message")

    def as_bytes(self) -> bytes:
        return bytes(self.data)


@dataclass(frozen=True)
class VerifyInfo:
    """One message/signature pair, built right before a verify call."""

    message: Message
    signature: Signature

    @classmethod
    def new(cls, message: BytesLike, oid: Any, signature: BytesLike) -> "VerifyInfo":
        return cls(Message(message), Signature.new(oid, signature))

    @property
    def message_bytes(self) -> bytes:
        return self.message.as_bytes()


__all__ = ["Signature", "Message", "VerifyInfo", "BytesLike"]
