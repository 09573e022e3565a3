from __future__ import annotations

from dataclasses import dataclass, replace

from relcycle.core.result import Err, Ok, Result
from relcycle.release.fsm import StepOutcome, UnknownStep, advance, finish, run_state_machine


@dataclass(frozen=True, slots=True)
class _State:
    step: str
    counter: int


def test_run_state_machine_advances_until_finish() -> None:
    def step_a(s: _State) -> Result[StepOutcome[_State], str]:
        return Ok(advance(replace(s, step="b", counter=s.counter + 1)))

    def step_b(s: _State) -> Result[StepOutcome[_State], str]:
        return Ok(finish(replace(s, counter=s.counter + 10)))

    result = run_state_machine(
        initial_state=_State(step="a", counter=0),
        get_step=lambda s: s.step,
        handlers={"a": step_a, "b": step_b},
    )

    assert result == Ok(_State(step="b", counter=11))


def test_run_state_machine_unknown_step_fails() -> None:
    result = run_state_machine(
        initial_state=_State(step="missing", counter=0),
        get_step=lambda s: s.step,
        handlers={},
    )

    assert result == Err(UnknownStep(step="missing"))


def test_run_state_machine_stops_at_first_error() -> None:
    calls: list[str] = []

    def bad_step(_: _State) -> Result[StepOutcome[_State], str]:
        calls.append("a")
        return Err("boom")

    def never(_: _State) -> Result[StepOutcome[_State], str]:
        calls.append("b")
        return Ok(finish(_))

    result = run_state_machine(
        initial_state=_State(step="a", counter=0),
        get_step=lambda s: s.step,
        handlers={"a": bad_step, "b": never},
    )

    assert result == Err("boom")
    assert calls == ["a"]
