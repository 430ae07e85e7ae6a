"""Tests for the validation pass (drift warnings, staged status updates, batch commit)."""

import pytest

from app.application.services.hash_service import FlowHashService
from app.application.use_cases.flows import ValidateAllFlowsUseCase
from app.domain.enums import ValidationStatus
from tests.conftest import FIXED_NOW, InMemoryFlowRepository


def _settled(make_flow, **overrides):
    """Flow whose stored status and hash already match a fresh validation."""
    flow = make_flow(**overrides)
    flow.validation_status = ValidationStatus.VALID
    flow.validation_errors = []
    flow.flow_hash = FlowHashService().fingerprint(flow)
    return flow


def _use_case(repo: InMemoryFlowRepository) -> ValidateAllFlowsUseCase:
    return ValidateAllFlowsUseCase(repo, FlowHashService(), clock=lambda: FIXED_NOW)


async def test_settled_flows_produce_no_writes_and_no_warnings(make_flow) -> None:
    repo = InMemoryFlowRepository([
        _settled(make_flow),
        _settled(make_flow, flow_id="jewelry", name="Jewelry", chain=("list_jewelry_type",)),
    ])
    report = await _use_case(repo).execute()
    assert report.flows_checked == 2
    assert report.warnings == []
    assert report.updated_flow_ids == []
    assert repo.commits == []


async def test_drift_produces_one_warning_per_flow(make_flow) -> None:
    flow = _settled(make_flow)
    flow.flow_hash = "0" * 32
    repo = InMemoryFlowRepository([flow])
    report = await _use_case(repo).execute()
    assert report.warnings == ['Flow "Women Shoes" has been unexpectedly modified!']
    assert report.updated_flow_ids == []


async def test_missing_stored_hash_is_not_drift(make_flow) -> None:
    flow = _settled(make_flow)
    flow.flow_hash = None
    report = await _use_case(InMemoryFlowRepository([flow])).execute()
    assert report.warnings == []


async def test_validity_change_is_staged_and_committed_once(make_flow) -> None:
    broken = _settled(make_flow, flow_id="broken", name="Broken")
    broken.steps["list_color"].next_steps[0].step_id = "list_hats"
    ok = _settled(make_flow, flow_id="ok", name="Ok")
    repo = InMemoryFlowRepository([broken, ok])

    report = await _use_case(repo).execute()

    assert report.updated_flow_ids == ["broken"]
    assert len(repo.commits) == 1
    update = repo.commits[0][0]
    assert update.validation_status == ValidationStatus.ERROR
    assert update.validation_errors == [
        "Step list_color references non-existent next step: list_hats"
    ]
    assert update.validated_at == FIXED_NOW
    assert update.flow_hash == FlowHashService().fingerprint(broken)
    stored = repo.flows["broken"]
    assert stored.validation_status == ValidationStatus.ERROR
    assert stored.last_validated == FIXED_NOW


async def test_drift_and_validity_change_both_reported(make_flow) -> None:
    flow = _settled(make_flow)
    flow.steps["list_color"].step_type = "list_hats"
    repo = InMemoryFlowRepository([flow])
    report = await _use_case(repo).execute()
    assert report.warnings == ['Flow "Women Shoes" has been unexpectedly modified!']
    assert report.updated_flow_ids == ["women_shoes"]


async def test_changed_error_list_is_staged_even_if_still_invalid(make_flow) -> None:
    flow = make_flow(name="")
    flow.validation_status = ValidationStatus.ERROR
    flow.validation_errors = ["Start step ID is required"]
    repo = InMemoryFlowRepository([flow])
    report = await _use_case(repo).execute()
    assert report.updated_flow_ids == ["women_shoes"]
    assert repo.flows["women_shoes"].validation_errors == ["Flow name is required"]


async def test_never_validated_flow_is_staged(make_flow) -> None:
    repo = InMemoryFlowRepository([make_flow()])
    report = await _use_case(repo).execute()
    assert report.updated_flow_ids == ["women_shoes"]
    assert repo.flows["women_shoes"].validation_status == ValidationStatus.VALID
    assert repo.flows["women_shoes"].flow_hash


async def test_second_pass_is_a_no_op(make_flow) -> None:
    repo = InMemoryFlowRepository([make_flow(), make_flow(flow_id="x", name="")])
    await _use_case(repo).execute()
    report = await _use_case(repo).execute()
    assert report.updated_flow_ids == []
    assert report.warnings == []
    assert len(repo.commits) == 1


async def test_uses_given_snapshot(make_flow) -> None:
    repo = InMemoryFlowRepository([make_flow()])
    report = await _use_case(repo).execute(flows=[])
    assert report.flows_checked == 0
    assert repo.commits == []


async def test_commit_failure_propagates(make_flow) -> None:
    repo = InMemoryFlowRepository([make_flow()])
    repo.fail_commit = RuntimeError("commit failed")
    with pytest.raises(RuntimeError, match="commit failed"):
        await _use_case(repo).execute()
    assert repo.flows["women_shoes"].validation_status is None


async def test_custom_screen_registry(make_flow) -> None:
    repo = InMemoryFlowRepository([make_flow(chain=("photo", "price"))])
    use_case = ValidateAllFlowsUseCase(
        repo, FlowHashService(), screen_ids={"photo", "price"}, clock=lambda: FIXED_NOW
    )
    await use_case.execute()
    assert repo.flows["women_shoes"].validation_status == ValidationStatus.VALID


@pytest.mark.parametrize("stored_hash", ["Wm9vYmFyMTIzNDU2Nzg5MA==", "fallback_lx2k9a_abc123xyz"])
async def test_legacy_hash_is_rewritten_once(make_flow, stored_hash) -> None:
    """Hashes in an older format warn once, then get re-fingerprinted."""
    flow = _settled(make_flow)
    flow.flow_hash = stored_hash
    repo = InMemoryFlowRepository([flow])

    report = await _use_case(repo).execute()
    assert report.warnings == ['Flow "Women Shoes" has been unexpectedly modified!']
    assert report.updated_flow_ids == ["women_shoes"]
    assert repo.flows["women_shoes"].flow_hash == FlowHashService().fingerprint(flow)
    assert repo.flows["women_shoes"].validation_status == ValidationStatus.VALID

    report = await _use_case(repo).execute()
    assert report.warnings == []
    assert report.updated_flow_ids == []
