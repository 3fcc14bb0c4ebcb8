"""Prometheus instrumentation for key construction and verification.

Labels stay low-cardinality: family, result and the error kind only.
"""
from __future__ import annotations

from prometheus_client import (
    CollectorRegistry,
    Counter,
    generate_latest,
    CONTENT_TYPE_LATEST,
)

# Registry must be created before metric objects reference it.
REGISTRY = CollectorRegistry()

KEY_COUNTER = Counter(
    "x509verify_keys_total",
    "VerifyingKey constructions by family and outcome.",
    ["family", "result"],
    registry=REGISTRY,
)
VERIFY_COUNTER = Counter(
    "x509verify_verifications_total",
    "Verify calls by family, outcome and failure kind.",
    ["family", "result", "reason"],
    registry=REGISTRY,
)


def observe_key(*, family: str, result: str) -> None:
    KEY_COUNTER.labels(family=family, result=result).inc()


def observe_verify(*, family: str, verified: bool, failure_reason: str | None) -> None:
    result = "ok" if verified else "fail"
    VERIFY_COUNTER.labels(family=family, result=result, reason=failure_reason or "").inc()


def prometheus_latest() -> tuple[bytes, str]:
    return generate_latest(REGISTRY), CONTENT_TYPE_LATEST
