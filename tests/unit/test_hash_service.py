"""Tests for FlowHashService (canonical JSON and flow fingerprints)."""

import re
from dataclasses import replace
from datetime import UTC, datetime

import pytest

from app.application.services.hash_service import (
    FINGERPRINT_LENGTH,
    FlowHashService,
    HashAlgorithm,
    SHA256Algorithm,
    fallback_fingerprint,
)
from app.domain.entities.flow import NextStep
from app.domain.enums import ValidationStatus

FALLBACK_PATTERN = re.compile(r"^fallback_[0-9a-z]+_[0-9a-z]{9}$")


class TestHashAlgorithm:
    """SHA256 produces deterministic hex hashes."""

    def test_sha256_deterministic(self) -> None:
        a = SHA256Algorithm()
        assert a.hash("hello") == a.hash("hello")
        assert a.hash("hello") == "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"


class TestCanonicalJson:
    """Canonical JSON is deterministic (key order normalized, compact, unicode kept)."""

    def test_sort_keys(self) -> None:
        assert FlowHashService.canonical_json({"b": 1, "a": 2}) == '{"a":2,"b":1}'

    def test_nested_keys_sorted(self) -> None:
        out = FlowHashService.canonical_json({"z": {"y": 1, "x": 2}})
        assert out == '{"z":{"x":2,"y":1}}'

    def test_unicode_not_escaped(self) -> None:
        assert FlowHashService.canonical_json({"t": "Marka Seçimi"}) == '{"t":"Marka Seçimi"}'


class TestFingerprint:
    """Fingerprint covers name, start step, steps and version only."""

    def test_length_and_hex(self, make_flow) -> None:
        fp = FlowHashService().fingerprint(make_flow())
        assert len(fp) == FINGERPRINT_LENGTH
        assert re.fullmatch(r"[0-9a-f]{32}", fp)

    def test_idempotent(self, make_flow) -> None:
        svc = FlowHashService()
        flow = make_flow()
        assert svc.fingerprint(flow) == svc.fingerprint(flow)

    def test_matches_sha256_prefix_of_canonical_content(self, make_flow) -> None:
        flow = make_flow()
        expected = SHA256Algorithm().hash(FlowHashService.canonical_json(flow.semantic_content()))
        assert FlowHashService().fingerprint(flow) == expected[:32]

    def test_step_insertion_order_does_not_matter(self, make_flow) -> None:
        flow = make_flow()
        reordered = replace(flow, steps=dict(reversed(list(flow.steps.items()))))
        svc = FlowHashService()
        assert svc.fingerprint(flow) == svc.fingerprint(reordered)

    @pytest.mark.parametrize(
        "changes",
        [
            {"updated_at": datetime(2030, 1, 1, tzinfo=UTC)},
            {"usage_count": 999},
            {"completion_rate": 87.5},
            {"is_active": True},
            {"description": "changed"},
            {"validation_status": ValidationStatus.ERROR},
            {"validation_errors": ["x"]},
            {"flow_hash": "abc"},
        ],
    )
    def test_volatile_fields_do_not_change_fingerprint(self, make_flow, changes) -> None:
        svc = FlowHashService()
        flow = make_flow()
        assert svc.fingerprint(replace(flow, **changes)) == svc.fingerprint(flow)

    @pytest.mark.parametrize(
        "changes",
        [
            {"name": "Men Shoes"},
            {"start_step_id": "list_footwear"},
            {"version": "1.0.1"},
        ],
    )
    def test_semantic_fields_change_fingerprint(self, make_flow, changes) -> None:
        svc = FlowHashService()
        flow = make_flow()
        assert svc.fingerprint(replace(flow, **changes)) != svc.fingerprint(flow)

    def test_step_change_changes_fingerprint(self, make_flow) -> None:
        svc = FlowHashService()
        flow = make_flow()
        before = svc.fingerprint(flow)
        flow.steps["list_brand"].next_steps.append(
            NextStep(step_id="preview", conditions={"category": ["Women"]})
        )
        assert svc.fingerprint(flow) != before


class _BrokenAlgorithm(HashAlgorithm):
    def hash(self, data: str) -> str:
        raise RuntimeError("digest unavailable")


class TestFallback:
    """Hashing failures degrade to a sentinel instead of raising."""

    def test_fallback_format(self) -> None:
        assert FALLBACK_PATTERN.match(fallback_fingerprint())

    def test_fingerprint_never_raises(self, make_flow) -> None:
        fp = FlowHashService(_BrokenAlgorithm()).fingerprint(make_flow())
        assert FALLBACK_PATTERN.match(fp)

    def test_fallbacks_are_not_stable(self, make_flow) -> None:
        svc = FlowHashService(_BrokenAlgorithm())
        flow = make_flow()
        assert svc.fingerprint(flow) != svc.fingerprint(flow)


@pytest.mark.parametrize(
    "stored, expected",
    [
        ("ab" * 16, True),
        ("AB" * 16, False),
        ("ab" * 15, False),
        ("fallback_lx2k9a_abc123xyz", False),
        ("Wm9vYmFyMTIzNDU2Nzg5MA==", False),
    ],
)
def test_is_current_format(stored, expected) -> None:
    assert FlowHashService.is_current_format(stored) is expected
