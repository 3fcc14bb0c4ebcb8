"""Hash selection for signature schemes.

Each family keeps a table of signature identifier -> :class:`Scheme`. A scheme
names its hash function; the hash's capability (md2, md5, sha1, sha2) decides
whether the scheme survives :func:`select_schemes` for a given configuration.

MD2 is not available in OpenSSL 3, so it is computed with pycryptodome and
never handed to ``cryptography`` as a HashAlgorithm.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping, NamedTuple

from cryptography.hazmat.primitives import hashes
from cryptography.x509 import ObjectIdentifier


class Scheme(NamedTuple):
    name: str
    hash_name: str


_HASHES = {
    "md5": hashes.MD5,
    "sha1": hashes.SHA1,
    "sha224": hashes.SHA224,
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
}

CAPABILITY = {
    "md2": "md2",
    "md5": "md5",
    "sha1": "sha1",
    "sha224": "sha2",
    "sha256": "sha2",
    "sha384": "sha2",
    "sha512": "sha2",
}

KNOWN_CAPABILITIES = frozenset(CAPABILITY.values())


def hash_algorithm(hash_name: str) -> hashes.HashAlgorithm:
    try:
        return _HASHES[hash_name]()
    except KeyError:
        raise ValueError(f"no cryptography HashAlgorithm for {hash_name}") from None


def digest(hash_name: str, data: bytes) -> bytes:
    if hash_name == "md2":
        from Crypto.Hash import MD2

        return MD2.new(data).digest()
    h = hashes.Hash(hash_algorithm(hash_name))
    h.update(data)
    return h.finalize()


def select_schemes(
    table: Mapping[ObjectIdentifier, Scheme], enabled: Iterable[str]
) -> Mapping[ObjectIdentifier, Scheme]:
    """Return a read-only view of ``table`` limited to enabled hash capabilities."""
    caps = set(enabled)
    unknown = caps - KNOWN_CAPABILITIES
    if unknown:
        raise ValueError(f"unknown hash capabilities: {sorted(unknown)}")
    return MappingProxyType(
        {oid: s for oid, s in table.items() if CAPABILITY[s.hash_name] in caps}
    )


__all__ = ["Scheme", "CAPABILITY", "KNOWN_CAPABILITIES", "hash_algorithm", "digest", "select_schemes"]
