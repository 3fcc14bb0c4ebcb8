"""SubjectPublicKeyInfo helpers on top of asn1crypto."""
from __future__ import annotations

from typing import Union

from asn1crypto import keys, pem
from cryptography.x509 import ObjectIdentifier

from .errors import DecodeError, EncodeError
from .oids import as_oid

SpkiInput = Union[bytes, bytearray, memoryview, str, keys.PublicKeyInfo]


def load_public_key_info(data: SpkiInput) -> keys.PublicKeyInfo:
    """Accept DER, PEM ("PUBLIC KEY") or an already decoded PublicKeyInfo."""
    if isinstance(data, keys.PublicKeyInfo):
        info = data
    else:
        try:
            if isinstance(data, str):
                data = data.encode("ascii")
            raw = bytes(data)
            if pem.detect(raw):
                type_name, _, raw = pem.unarmor(raw)
                if type_name != "PUBLIC KEY":
                    raise DecodeError(f"expected a PUBLIC KEY PEM block, got {type_name}")
            info = keys.PublicKeyInfo.load(raw, strict=True)
        except (ValueError, TypeError) as e:
            raise DecodeError("malformed SubjectPublicKeyInfo") from e
    # force parsing of the algorithm identifier so later lookups cannot fail lazily
    algorithm_oid(info)
    return info


def algorithm_oid(info: keys.PublicKeyInfo) -> ObjectIdentifier:
    try:
        return as_oid(info["algorithm"]["algorithm"])
    except (ValueError, TypeError) as e:
        raise DecodeError("malformed SubjectPublicKeyInfo algorithm") from e


def reencode(info: keys.PublicKeyInfo) -> bytes:
    """DER encoding of ``info`` as handed to the key loader."""
    try:
        return info.dump()
    except (ValueError, TypeError, KeyError) as e:
        raise EncodeError("SubjectPublicKeyInfo could not be re-encoded") from e


__all__ = ["SpkiInput", "load_public_key_info", "algorithm_oid", "reencode"]
