"""Step-table driver for forward-only state machines.

Each handler receives the current state and either advances to a new state
(whose ``get_step`` names the next handler), finishes, or returns an error
that stops the machine.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from relcycle.core.result import Err, Ok, Result


@dataclass(frozen=True, slots=True)
class StepAdvance[S]:
    state: S


@dataclass(frozen=True, slots=True)
class StepFinish[S]:
    state: S


@dataclass(frozen=True, slots=True)
class UnknownStep:
    step: str


type StepOutcome[S] = StepAdvance[S] | StepFinish[S]
type StepHandler[S, E] = Callable[[S], Result[StepOutcome[S], E]]


def advance[S](state: S) -> StepAdvance[S]:
    return StepAdvance(state=state)


def finish[S](state: S) -> StepFinish[S]:
    return StepFinish(state=state)


def run_state_machine[S, E](
    *,
    initial_state: S,
    get_step: Callable[[S], str],
    handlers: Mapping[str, StepHandler[S, E]],
) -> Result[S, E | UnknownStep]:
    """Run handlers until one finishes or fails; return the final state."""
    current = initial_state

    while True:
        step = get_step(current)
        handler = handlers.get(step)
        if handler is None:
            return Err(UnknownStep(step=step))

        outcome = handler(current)
        if isinstance(outcome, Err):
            return outcome

        if isinstance(outcome.value, StepFinish):
            return Ok(outcome.value.state)

        current = outcome.value.state
