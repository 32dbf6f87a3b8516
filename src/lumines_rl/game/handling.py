"""DAS/ARR handling state machine.

Every state is an immutable value; :func:`apply_handling` returns the next
state together with the actions to apply this tick.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import AbstractSet, List, Optional, Union

from .rules import HandlingRules


class Key:
    """Logical input identifiers. Anything else in a key set is ignored."""

    LEFT = "left"
    RIGHT = "right"
    DOWN = "down"
    ROTATE_CCW = "rotate_ccw"
    ROTATE_CW = "rotate_cw"

    ALL = (LEFT, RIGHT, DOWN, ROTATE_CCW, ROTATE_CW)


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Started:
    direction: int
    ticks_held: int = 1


@dataclass(frozen=True)
class AutoRepeat:
    direction: int
    ticks_since_last_move: int = 0


@dataclass(frozen=True)
class Dropping:
    pass


@dataclass(frozen=True)
class DroppingDasBuffer:
    direction: int
    ticks_held: int = 1


HandlingState = Union[Idle, Started, AutoRepeat, Dropping, DroppingDasBuffer]


@dataclass(frozen=True)
class Move:
    direction: int


@dataclass(frozen=True)
class Rotate:
    direction: int


@dataclass(frozen=True)
class StartDrop:
    pass


Action = Union[Move, Rotate, StartDrop]


@dataclass(frozen=True)
class HandlingResult:
    state: HandlingState
    actions: List[Action]


def _horizontal(keys_held: AbstractSet[str]) -> Optional[int]:
    left = Key.LEFT in keys_held
    right = Key.RIGHT in keys_held
    if left == right:
        # neither or both
        return None
    return -1 if left else 1


def rotation_actions(just_pressed: AbstractSet[str]) -> List[Action]:
    ccw = Key.ROTATE_CCW in just_pressed
    cw = Key.ROTATE_CW in just_pressed
    if ccw and not cw:
        return [Rotate(-1)]
    if cw and not ccw:
        return [Rotate(1)]
    return []


def apply_handling(
    state: HandlingState,
    keys_held: AbstractSet[str],
    just_pressed: AbstractSet[str],
    rules: Optional[HandlingRules] = None,
) -> HandlingResult:
    rules = rules or HandlingRules()
    direction = _horizontal(keys_held)
    drop = Key.DOWN in just_pressed

    if isinstance(state, (Dropping, DroppingDasBuffer)):
        # piece is gone until the drop commits: buffer DAS only
        if isinstance(state, DroppingDasBuffer):
            if direction == state.direction:
                return HandlingResult(replace(state, ticks_held=state.ticks_held + 1), [])
            return HandlingResult(Dropping(), [])
        if direction is not None:
            return HandlingResult(DroppingDasBuffer(direction), [])
        return HandlingResult(state, [])

    actions = rotation_actions(just_pressed)
    if drop:
        actions.append(StartDrop())
        return HandlingResult(Dropping(), actions)

    if isinstance(state, Idle):
        if direction is None:
            return HandlingResult(state, actions)
        # immediate move, then wait for DAS
        actions.append(Move(direction))
        return HandlingResult(Started(direction), actions)

    if isinstance(state, Started):
        if direction != state.direction:
            return HandlingResult(Idle(), actions)
        ticks_held = state.ticks_held + 1
        if ticks_held >= rules.das_ticks:
            actions.append(Move(state.direction))
            return HandlingResult(AutoRepeat(state.direction), actions)
        return HandlingResult(replace(state, ticks_held=ticks_held), actions)

    if isinstance(state, AutoRepeat):
        if direction != state.direction:
            return HandlingResult(Idle(), actions)
        ticks = state.ticks_since_last_move + 1
        if ticks >= rules.arr_ticks:
            actions.append(Move(state.direction))
            return HandlingResult(AutoRepeat(state.direction), actions)
        return HandlingResult(replace(state, ticks_since_last_move=ticks), actions)

    raise TypeError(f"unknown handling state: {state!r}")


def apply_drop_completion(state: HandlingState, rules: Optional[HandlingRules] = None) -> HandlingState:
    rules = rules or HandlingRules()
    if isinstance(state, Dropping):
        return Idle()
    if isinstance(state, DroppingDasBuffer):
        if state.ticks_held >= rules.das_ticks:
            # DAS expired during the drop; the next tick moves
            return AutoRepeat(state.direction)
        return Started(state.direction, state.ticks_held)
    return state
