"""Verifier configuration loader.

Loads defaults, then optional config/x509verify.yml (or the file named by
X509VERIFY_CONFIG), then environment overrides. The enabled capability lists
decide which key families, hash functions and ECDSA curves the registry
exposes.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, List

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

try:
    import yaml  # type: ignore
except Exception:  # pragma: no cover
    yaml = None

load_dotenv()

_DEFAULT: Dict[str, Any] = {
    "families": ["dsa", "rsa", "ecdsa", "ed25519"],
    "hashes": ["md2", "md5", "sha1", "sha2"],
    "curves": ["p192", "p224", "p256", "p384", "p521", "k256"],
    "log_level": "INFO",
}

_ENV_MAP = {
    "families": "X509VERIFY_FAMILIES",
    "hashes": "X509VERIFY_HASHES",
    "curves": "X509VERIFY_CURVES",
    "log_level": "X509VERIFY_LOG_LEVEL",
}


def _split_csv(value: str) -> List[str]:
    return [p.strip() for p in value.split(",") if p.strip()]


class VerifierConfig(BaseModel):
    families: List[str] = list(_DEFAULT["families"])
    hashes: List[str] = list(_DEFAULT["hashes"])
    curves: List[str] = list(_DEFAULT["curves"])
    log_level: str = _DEFAULT["log_level"]

    @field_validator("families", "hashes", "curves", mode="before")
    @classmethod
    def _normalize_list(cls, v: Any) -> List[str]:
        if isinstance(v, str):
            v = _split_csv(v)
        return [str(item).strip().lower() for item in v]

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, v: Any) -> str:
        level = str(v).strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {level!r}")
        return level


_CONFIG: VerifierConfig | None = None


def config_path() -> str:
    return os.getenv("X509VERIFY_CONFIG", os.path.join(os.getcwd(), "config", "x509verify.yml"))


def load_config() -> VerifierConfig:
    global _CONFIG
    if _CONFIG is not None:
        return _CONFIG
    data: Dict[str, Any] = {}
    # File first
    path = config_path()
    if os.path.exists(path):
        if yaml is None:  # pragma: no cover
            raise RuntimeError(f"PyYAML is required to read {path}")
        with open(path, "r", encoding="utf-8") as f:
            file_cfg = yaml.safe_load(f) or {}
        if not isinstance(file_cfg, dict):
            raise ValueError(f"{path}: expected a mapping at top level")
        data.update({k: v for k, v in file_cfg.items() if k in _DEFAULT})
    # Env overrides
    for k, env in _ENV_MAP.items():
        if env in os.environ:
            data[k] = os.environ[env]
    _CONFIG = VerifierConfig(**data)
    return _CONFIG


def reset_config() -> None:
    global _CONFIG
    _CONFIG = None
