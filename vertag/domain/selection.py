"""
Selection state machine for interactive prompts.

The selection is a pure reducer: ``reduce(state, event) -> state``.
It has no I/O; the terminal driver in ``vertag.tui.selector`` reads keys,
maps them to KeyEvents and renders whatever state comes back.

States:
    PENDING   -> still choosing
    CONFIRMED -> terminal, ``selected_values`` returns the choice
    CANCELLED -> terminal, ``selected_values`` returns None
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import FrozenSet, List, Optional, Sequence, Tuple

from ..exit_codes import EmptySelectionError


class SelectionMode(Enum):
    SINGLE = "single"
    MULTI = "multi"


class SelectionStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class KeyEvent(Enum):
    """Abstract key events; concrete key bindings live in the driver."""
    UP = "up"
    DOWN = "down"
    TOGGLE = "toggle"
    CONFIRM = "confirm"
    CANCEL = "cancel"


@dataclass(frozen=True)
class SelectionState:
    """
    Immutable snapshot of a selection list.

    Attributes:
        items: Choices, in display order
        mode: SINGLE or MULTI
        cursor: Index of the highlighted item
        chosen: Indices toggled on (MULTI) or the confirmed index (SINGLE)
        status: PENDING, CONFIRMED or CANCELLED
    """

    items: Tuple[str, ...]
    mode: SelectionMode = SelectionMode.SINGLE
    cursor: int = 0
    chosen: FrozenSet[int] = frozenset()
    status: SelectionStatus = SelectionStatus.PENDING

    @property
    def is_terminal(self) -> bool:
        return self.status != SelectionStatus.PENDING

    def is_chosen(self, index: int) -> bool:
        return index in self.chosen


def new_selection(items: Sequence[str], mode: SelectionMode = SelectionMode.SINGLE) -> SelectionState:
    """
    Start a selection over ``items``.

    Raises:
        ValueError: If ``items`` is empty. Callers fall back to free-text
            input instead of showing an empty list.
    """
    if not items:
        raise ValueError("no choices available")
    return SelectionState(items=tuple(items), mode=mode)


def reduce(state: SelectionState, event: KeyEvent) -> SelectionState:
    """
    Apply one key event.

    Events received after the selection is confirmed or cancelled are ignored.

    Raises:
        EmptySelectionError: On CONFIRM in MULTI mode with nothing toggled.
            ``state`` itself is unchanged and still PENDING.
    """
    if state.is_terminal:
        return state

    last = len(state.items) - 1

    if event == KeyEvent.UP:
        return replace(state, cursor=max(state.cursor - 1, 0))

    if event == KeyEvent.DOWN:
        return replace(state, cursor=min(state.cursor + 1, last))

    if event == KeyEvent.CANCEL:
        return replace(state, status=SelectionStatus.CANCELLED)

    if event == KeyEvent.TOGGLE:
        if state.mode != SelectionMode.MULTI:
            return state
        return replace(state, chosen=state.chosen ^ {state.cursor})

    if event == KeyEvent.CONFIRM:
        if state.mode == SelectionMode.SINGLE:
            return replace(
                state,
                chosen=frozenset({state.cursor}),
                status=SelectionStatus.CONFIRMED
            )
        if not state.chosen:
            raise EmptySelectionError()
        return replace(state, status=SelectionStatus.CONFIRMED)

    raise ValueError(f"Unknown key event: {event!r}")


def selected_values(state: SelectionState) -> Optional[List[str]]:
    """
    Chosen items in their original list order.

    Returns:
        A one-element list (SINGLE) or the toggled items (MULTI) when
        confirmed, None when cancelled.

    Raises:
        ValueError: If the selection is still pending
    """
    if state.status == SelectionStatus.CANCELLED:
        return None
    if state.status == SelectionStatus.PENDING:
        raise ValueError("Selection is still pending")
    return [item for i, item in enumerate(state.items) if i in state.chosen]
