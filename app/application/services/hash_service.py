"""Hash service for flow integrity (canonical JSON + algorithm)."""

from __future__ import annotations

import hashlib
import json
import re
import secrets
import string
import time
from abc import ABC, abstractmethod
from typing import Any

from app.domain.entities.flow import Flow
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

FINGERPRINT_LENGTH = 32
FALLBACK_PREFIX = "fallback_"

_BASE36 = string.digits + string.ascii_lowercase
_FINGERPRINT_FORMAT = re.compile(rf"[0-9a-f]{{{FINGERPRINT_LENGTH}}}")


def _to_base36(n: int) -> str:
    if n == 0:
        return "0"
    out = []
    while n:
        n, rem = divmod(n, 36)
        out.append(_BASE36[rem])
    return "".join(reversed(out))


def fallback_fingerprint() -> str:
    """Sentinel fingerprint: fallback_<base36 epoch ms>_<9 random base36 chars>."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"{FALLBACK_PREFIX}{_to_base36(time.time_ns() // 1_000_000)}_{suffix}"


class HashAlgorithm(ABC):
    """Abstract hash algorithm (OCP)."""

    @abstractmethod
    def hash(self, data: str) -> str:
        """Compute hash of input string."""
        ...


class SHA256Algorithm(HashAlgorithm):
    """SHA-256 implementation."""

    def hash(self, data: str) -> str:
        return hashlib.sha256(data.encode()).hexdigest()


class FlowHashService:
    """Single source of truth for flow fingerprints (drift detection, not tamper-proofing)."""

    def __init__(self, algorithm: HashAlgorithm | None = None) -> None:
        self.algorithm = algorithm or SHA256Algorithm()

    @staticmethod
    def canonical_json(data: dict[str, Any]) -> str:
        """Canonical JSON for deterministic hashing."""
        return json.dumps(data, sort_keys=True, separators=(",", ":"), ensure_ascii=False)

    @staticmethod
    def is_current_format(stored: str) -> bool:
        """True for fingerprints this service produces (32 lowercase hex chars).

        Hashes written by older tooling and fallback sentinels never match a
        fresh fingerprint, so the validation pass rewrites them.
        """
        return _FINGERPRINT_FORMAT.fullmatch(stored) is not None

    def fingerprint(self, flow: Flow) -> str:
        """Return a 32-char fingerprint of the flow's semantic content.

        Never raises: on any serialization or hashing failure a fallback
        sentinel is returned so validation can proceed.
        """
        try:
            digest = self.algorithm.hash(self.canonical_json(flow.semantic_content()))
            return digest[:FINGERPRINT_LENGTH]
        except Exception:
            logger.warning("Fingerprint failed for flow %s; using fallback", flow.id, exc_info=True)
            return fallback_fingerprint()
