"""
Terminal list picker.

Drives the selection reducer from raw key presses and redraws the list
after every key. One key is read and applied at a time.

Keys:
    up / k        move up
    down / j      move down
    space         toggle (multi-select only)
    enter         confirm
    q / esc       cancel
"""

from typing import Callable, List, Optional, Sequence

import click
from rich.console import Console, Group
from rich.live import Live
from rich.text import Text

from ..domain.selection import (
    KeyEvent,
    SelectionMode,
    SelectionState,
    new_selection,
    reduce,
    selected_values,
)
from ..exit_codes import EmptySelectionError

KEY_BINDINGS = {
    '\x1b[A': KeyEvent.UP,
    '\x1bOA': KeyEvent.UP,
    '\xe0H': KeyEvent.UP,
    '\x00H': KeyEvent.UP,
    'k': KeyEvent.UP,
    '\x1b[B': KeyEvent.DOWN,
    '\x1bOB': KeyEvent.DOWN,
    '\xe0P': KeyEvent.DOWN,
    '\x00P': KeyEvent.DOWN,
    'j': KeyEvent.DOWN,
    ' ': KeyEvent.TOGGLE,
    '\r': KeyEvent.CONFIRM,
    '\n': KeyEvent.CONFIRM,
    'q': KeyEvent.CANCEL,
    '\x1b': KeyEvent.CANCEL,
    '\x03': KeyEvent.CANCEL,
}


def key_to_event(key: str) -> Optional[KeyEvent]:
    """Map a raw key to a KeyEvent, or None for unbound keys."""
    return KEY_BINDINGS.get(key)


def render(title: str, state: SelectionState, error: Optional[str] = None) -> Group:
    """Build the renderable for one frame of the picker."""
    lines = [Text(title, style="bold")]

    multi = state.mode == SelectionMode.MULTI
    for index, item in enumerate(state.items):
        pointer = "❯ " if index == state.cursor else "  "
        if multi:
            box = "[x] " if state.is_chosen(index) else "[ ] "
        else:
            box = ""
        style = "cyan" if index == state.cursor else ""
        lines.append(Text(f"{pointer}{box}{item}", style=style))

    if multi:
        help_text = "↑/↓ move • space toggle • enter confirm • q quit"
    else:
        help_text = "↑/↓ move • enter select • q quit"
    lines.append(Text(help_text, style="dim"))

    if error:
        lines.append(Text(error, style="red"))

    return Group(*lines)


def _read_key(read_key: Callable[[], str]) -> str:
    try:
        return read_key()
    except (KeyboardInterrupt, EOFError):
        return '\x03'


def run_selection(
    title: str,
    items: Sequence[str],
    mode: SelectionMode = SelectionMode.SINGLE,
    read_key: Optional[Callable[[], str]] = None,
    console: Optional[Console] = None
) -> Optional[List[str]]:
    """
    Show a picker and block until the user confirms or cancels.

    Args:
        title: Heading shown above the list
        items: Choices; must not be empty
        mode: SINGLE or MULTI
        read_key: Returns the next raw key (default: click.getchar)
        console: Console to draw on (default: stderr console)

    Returns:
        Chosen items in list order, or None if cancelled
    """
    state = new_selection(items, mode)
    read_key = read_key or click.getchar
    console = console or Console(stderr=True)
    error = None

    with Live(render(title, state), console=console, auto_refresh=False, transient=True) as live:
        while not state.is_terminal:
            event = key_to_event(_read_key(read_key))
            if event is None:
                continue
            try:
                state = reduce(state, event)
                error = None
            except EmptySelectionError as e:
                error = str(e)
            live.update(render(title, state, error), refresh=True)

    return selected_values(state)


def select_one(title: str, items: Sequence[str], **kwargs) -> Optional[str]:
    """Single-choice picker. Returns the chosen item or None if cancelled."""
    values = run_selection(title, items, SelectionMode.SINGLE, **kwargs)
    return values[0] if values else None


def select_many(title: str, items: Sequence[str], **kwargs) -> Optional[List[str]]:
    """Multi-choice picker. Returns the chosen items or None if cancelled."""
    return run_selection(title, items, SelectionMode.MULTI, **kwargs)
