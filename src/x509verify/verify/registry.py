"""Key family registry.

Maps a SubjectPublicKeyInfo algorithm identifier to a verifier factory. The
registry is built once from :class:`~x509verify.config.VerifierConfig`; only
the enabled families, hashes and curves are reachable through it.
"""
from __future__ import annotations

import threading
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping

from asn1crypto import keys
from cryptography.x509 import ObjectIdentifier

from ..config import VerifierConfig, load_config
from ..errors import UnknownOid
from ..utils.logging import get_logger
from . import dsa, ecdsa, ed25519, rsa

Factory = Callable[[keys.PublicKeyInfo], Any]

# name -> module exposing OID, NAME and make_factory(cfg)
FAMILIES: Mapping[str, Any] = MappingProxyType({
    dsa.NAME: dsa,
    rsa.NAME: rsa,
    ecdsa.NAME: ecdsa,
    ed25519.NAME: ed25519,
})


class RegistryError(ValueError):
    """Raised when the enabled families cannot form a consistent registry."""


@dataclass(frozen=True)
class FamilyEntry:
    name: str
    oid: ObjectIdentifier
    factory: Factory


class FamilyRegistry:
    def __init__(self) -> None:
        self._entries: Dict[ObjectIdentifier, FamilyEntry] = {}

    def register(self, name: str, oid: ObjectIdentifier, factory: Factory) -> None:
        existing = self._entries.get(oid)
        if existing is not None:
            raise RegistryError(
                f"{name} and {existing.name} both claim {oid.dotted_string}"
            )
        self._entries[oid] = FamilyEntry(name, oid, factory)

    def lookup(self, oid: ObjectIdentifier) -> FamilyEntry:
        entry = self._entries.get(oid)
        if entry is None:
            raise UnknownOid(oid)
        return entry

    def families(self) -> List[str]:
        return [e.name for e in self._entries.values()]

    def __contains__(self, oid: object) -> bool:
        return oid in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def build_registry(cfg: VerifierConfig | None = None) -> FamilyRegistry:
    cfg = cfg or load_config()
    registry = FamilyRegistry()
    for name in cfg.families:
        module = FAMILIES.get(name)
        if module is None:
            raise RegistryError(f"unknown key family {name!r}; known: {sorted(FAMILIES)}")
        try:
            factory = module.make_factory(cfg)
        except ValueError as e:
            raise RegistryError(f"{name}: {e}") from e
        registry.register(module.NAME, module.OID, factory)
    try:
        logger = get_logger(cfg.log_level)
    except ValueError as e:
        raise RegistryError(f"log_level: {e}") from e
    logger.info(
        "x509verify registry: families=%s hashes=%s curves=%s",
        ",".join(registry.families()), ",".join(cfg.hashes), ",".join(cfg.curves),
    )
    return registry


_DEFAULT: FamilyRegistry | None = None
_LOCK = threading.Lock()


def default_registry() -> FamilyRegistry:
    global _DEFAULT
    with _LOCK:
        if _DEFAULT is None:
            _DEFAULT = build_registry()
        return _DEFAULT


def reset_default_registry() -> None:
    global _DEFAULT
    with _LOCK:
        _DEFAULT = None
