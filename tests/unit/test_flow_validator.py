"""Tests for structural flow validation (required fields, references, cycles)."""

import copy

from app.application.services.flow_validator import find_cycles, validate_flow
from app.domain.entities.flow import Flow, FlowStep, NextStep


def _step(step_id: str, *targets: str, step_type: str | None = None, title: str = "T") -> FlowStep:
    return FlowStep(
        id=step_id,
        step_type=step_type if step_type is not None else step_id,
        title=title,
        next_steps=[NextStep(step_id=t) for t in targets],
    )


def _flow(start: str, *steps: FlowStep, name: str = "Test") -> Flow:
    return Flow(id="f1", name=name, start_step_id=start, steps={s.id: s for s in steps})


GRAPH_SCREENS = {"A", "B", "C", "D", "photo", "price"}


class TestValidFlows:
    """Well-formed flows produce no errors."""

    def test_linear_registry_flow_is_valid(self, make_flow) -> None:
        result = validate_flow(make_flow())
        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []

    def test_photo_price_example(self) -> None:
        flow = _flow(
            "A",
            _step("A", "B", step_type="photo"),
            _step("B", "preview", step_type="price"),
        )
        result = validate_flow(flow, screen_ids={"photo", "price"})
        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []

    def test_linear_chain_to_preview(self) -> None:
        flow = _flow("A", _step("A", "B"), _step("B", "C"), _step("C", "preview"))
        result = validate_flow(flow, screen_ids=GRAPH_SCREENS)
        assert result.is_valid

    def test_diamond_is_not_a_cycle(self) -> None:
        flow = _flow(
            "A",
            _step("A", "B", "C"),
            _step("B", "D"),
            _step("C", "D"),
            _step("D", "preview"),
        )
        result = validate_flow(flow, screen_ids=GRAPH_SCREENS)
        assert result.is_valid

    def test_preview_step_type_is_accepted(self) -> None:
        flow = _flow("A", _step("A", "preview", step_type="preview"))
        assert validate_flow(flow, screen_ids=set()).is_valid

    def test_step_without_next_steps_is_valid(self) -> None:
        flow = _flow("A", _step("A"))
        assert validate_flow(flow, screen_ids=GRAPH_SCREENS).is_valid


class TestRequiredFields:
    """Missing top-level and step fields are reported in order."""

    def test_empty_flow(self) -> None:
        result = validate_flow(Flow(id="x", name="", start_step_id="", steps={}))
        assert not result.is_valid
        assert result.errors == [
            "Flow name is required",
            "Start step ID is required",
            "Flow must have at least one step",
        ]

    def test_empty_steps_reports_at_least_one_step(self) -> None:
        result = validate_flow(Flow(id="x", name="Shoes", start_step_id="preview", steps={}))
        assert not result.is_valid
        assert any("must have at least one step" in e for e in result.errors)

    def test_whitespace_name_is_missing(self, make_flow) -> None:
        result = validate_flow(make_flow(name="   "))
        assert result.errors == ["Flow name is required"]

    def test_step_missing_id(self) -> None:
        step = _step("", "preview", step_type="A")
        flow = Flow(id="f", name="n", start_step_id="A", steps={"A": step})
        result = validate_flow(flow, screen_ids=GRAPH_SCREENS)
        assert result.errors == ["Step A missing id"]

    def test_step_id_must_match_key(self) -> None:
        step = _step("B", "preview", step_type="A")
        flow = Flow(id="f", name="n", start_step_id="A", steps={"A": step})
        result = validate_flow(flow, screen_ids=GRAPH_SCREENS)
        assert result.errors == ["Step A id does not match its key: B"]

    def test_missing_title_is_only_a_warning(self) -> None:
        flow = _flow("A", _step("A", "preview", title=""))
        result = validate_flow(flow, screen_ids=GRAPH_SCREENS)
        assert result.is_valid
        assert result.warnings == ["Step A missing title"]

    def test_missing_step_type_reports_one_error(self) -> None:
        flow = _flow("A", _step("A", "preview", step_type=""))
        result = validate_flow(flow, screen_ids=GRAPH_SCREENS)
        assert result.errors == ["Step A missing stepType"]

    def test_unknown_screen_type(self) -> None:
        flow = _flow("A", _step("A", "preview", step_type="list_hats"))
        result = validate_flow(flow, screen_ids=GRAPH_SCREENS)
        assert result.errors == ["Step A references unknown screen type: list_hats"]

    def test_registry_is_default_screen_set(self, make_flow) -> None:
        flow = make_flow(chain=("list_brand", "photo"))
        result = validate_flow(flow)
        assert result.errors == ["Step photo references unknown screen type: photo"]

    def test_next_step_missing_step_id(self) -> None:
        flow = _flow("A", _step("A", "preview", ""))
        result = validate_flow(flow, screen_ids=GRAPH_SCREENS)
        assert result.errors == ["Step A nextStep[1] missing stepId"]


class TestReferences:
    """Dangling references and the start step."""

    def test_non_existent_next_step(self) -> None:
        flow = _flow(
            "A",
            _step("A", "B", step_type="photo"),
            _step("B", "C", step_type="price"),
        )
        result = validate_flow(flow, screen_ids={"photo", "price"})
        assert not result.is_valid
        assert any("non-existent next step: C" in e for e in result.errors)
        assert result.errors == ["Step B references non-existent next step: C"]

    def test_start_step_not_in_steps(self) -> None:
        flow = _flow("Z", _step("A", "preview"))
        result = validate_flow(flow, screen_ids=GRAPH_SCREENS)
        assert result.errors == ["Start step Z does not exist in steps"]

    def test_start_step_preview_is_allowed(self) -> None:
        flow = _flow("preview", _step("A", "preview"))
        assert validate_flow(flow, screen_ids=GRAPH_SCREENS).is_valid


class TestCycles:
    """Cycle detection over the graph reachable from the start step."""

    def test_two_step_cycle(self) -> None:
        flow = _flow("A", _step("A", "B"), _step("B", "A"))
        result = validate_flow(flow, screen_ids=GRAPH_SCREENS)
        assert not result.is_valid
        assert result.errors == ["Circular reference detected: A -> B -> A"]

    def test_self_loop(self) -> None:
        flow = _flow("A", _step("A", "A"))
        assert find_cycles(flow) == ["Circular reference detected: A -> A"]

    def test_cycle_not_through_start(self) -> None:
        flow = _flow("A", _step("A", "B"), _step("B", "C"), _step("C", "B", "preview"))
        assert find_cycles(flow) == ["Circular reference detected: B -> C -> B"]

    def test_walk_continues_after_cycle(self) -> None:
        flow = _flow(
            "A",
            _step("A", "B", "C"),
            _step("B", "A"),
            _step("C", "D"),
            _step("D", "C"),
        )
        assert find_cycles(flow) == [
            "Circular reference detected: A -> B -> A",
            "Circular reference detected: C -> D -> C",
        ]

    def test_unreachable_cycle_is_not_reported(self) -> None:
        flow = _flow("A", _step("A", "preview"), _step("B", "C"), _step("C", "B"))
        assert find_cycles(flow) == []

    def test_preview_start_skips_walk(self) -> None:
        flow = _flow("preview", _step("A", "B"), _step("B", "A"))
        assert find_cycles(flow) == []

    def test_long_chain_does_not_exhaust_stack(self) -> None:
        n = 5000
        steps = [_step(f"S{i}", f"S{i + 1}" if i + 1 < n else "preview") for i in range(n)]
        flow = _flow("S0", *steps)
        assert find_cycles(flow) == []


def test_validation_does_not_mutate_flow(make_flow) -> None:
    flow = make_flow()
    before = copy.deepcopy(flow)
    validate_flow(flow)
    assert flow == before
