"""
Interactive single-selection list of table names.

`TablePicker` holds the list state and reacts to named key presses; it does no
I/O, which keeps it easy to drive from tests. `run_picker` wires it to the
terminal: keys are read with `click.getchar` and the list is redrawn in a
rich `Live` region until the user selects an entry or quits.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

import click
from rich.console import Console, Group, RenderableType
from rich.live import Live
from rich.padding import Padding
from rich.text import Text

LIST_HEIGHT = 14
SELECTED_STYLE = "color(170)"
MUTED_STYLE = "color(241)"
HELP_TEXT = "↑/k up • ↓/j down • ←/→ page • enter select • q quit"

# Raw sequences returned by click.getchar (POSIX escape codes, then the
# Windows 0xe0/0x00-prefixed scan codes).
_KEY_SEQUENCES = {
    "\r": "enter",
    "\n": "enter",
    "\x03": "ctrl+c",
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[5~": "pgup",
    "\x1b[6~": "pgdown",
    "\xe0H": "up",
    "\xe0P": "down",
    "\xe0M": "right",
    "\xe0K": "left",
    "\xe0G": "home",
    "\xe0O": "end",
    "\xe0I": "pgup",
    "\xe0Q": "pgdown",
    "\x00H": "up",
    "\x00P": "down",
    "\x00M": "right",
    "\x00K": "left",
}


def decode_key(raw: str) -> str:
    """Map a raw terminal sequence to a key name; printable keys map to themselves."""
    return _KEY_SEQUENCES.get(raw, raw)


def _read_key() -> str:
    return decode_key(click.getchar())


@dataclass
class TablePicker:
    """
    State of the table list: cursor position, paging and the final outcome.
    """

    items: List[str]
    title: str = ""
    height: int = LIST_HEIGHT
    index: int = 0
    choice: Optional[str] = None
    quitting: bool = False
    done: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        if self.height < 1:
            raise ValueError(f"height must be positive, got {self.height}")

    @property
    def pages(self) -> int:
        return max(1, math.ceil(len(self.items) / self.height))

    @property
    def page(self) -> int:
        return self.index // self.height

    def _move_to(self, index: int) -> None:
        if self.items:
            self.index = min(max(index, 0), len(self.items) - 1)

    def update(self, key: str) -> None:
        """Apply one key press. Keys after the list has finished are ignored."""
        if self.done:
            return
        if key in ("q", "ctrl+c"):
            self.quitting = True
            self.done = True
        elif key == "enter":
            if self.items:
                self.choice = self.items[self.index]
            self.done = True
        elif key in ("up", "k"):
            self._move_to(self.index - 1)
        elif key in ("down", "j"):
            self._move_to(self.index + 1)
        elif key in ("left", "h", "pgup"):
            if self.page > 0:
                self._move_to((self.page - 1) * self.height)
        elif key in ("right", "l", "pgdown"):
            if self.page + 1 < self.pages:
                self._move_to((self.page + 1) * self.height)
        elif key in ("home", "g"):
            self._move_to(0)
        elif key in ("end", "G"):
            self._move_to(len(self.items) - 1)

    def view(self) -> RenderableType:
        if self.choice is not None:
            return Padding(Text(f"Let's take a look at {self.choice} then..."), (1, 0, 2, 4))
        if self.quitting:
            return Padding(Text("Goodbye..."), (1, 0, 2, 4))

        lines: List[RenderableType] = [Text(""), Padding(Text(self.title), (0, 0, 1, 2))]
        if not self.items:
            lines.append(Padding(Text("No items.", style=MUTED_STYLE), (0, 0, 0, 4)))

        start = self.page * self.height
        for offset, name in enumerate(self.items[start : start + self.height]):
            position = start + offset
            label = f"{position + 1}. {name}"
            if position == self.index:
                lines.append(Text(f"  > {label}", style=SELECTED_STYLE))
            else:
                lines.append(Text(f"    {label}"))

        if self.pages > 1:
            lines.append(Padding(Text(f"{self.page + 1}/{self.pages}", style=MUTED_STYLE), (1, 0, 0, 4)))
        lines.append(Padding(Text(HELP_TEXT, style=MUTED_STYLE), (1, 0, 1, 4)))
        return Group(*lines)


def run_picker(
    items: Iterable[str],
    title: str,
    console: Optional[Console] = None,
    read_key: Optional[Callable[[], str]] = None,
    height: int = LIST_HEIGHT,
) -> Optional[str]:
    """
    Show the list and block until the user selects an entry or quits.

    Parameters
    ----------
    items : iterable[str]
        Entries to display, in order.
    title : str
        Heading shown above the list.
    console : Console, optional
        Target console; defaults to a new stdout console.
    read_key : callable, optional
        Returns the next key name; defaults to reading the terminal.

    Returns
    -------
    str | None
        The selected entry, or None if the user quit.
    """
    console = console or Console()
    read_key = read_key or _read_key
    picker = TablePicker(items=list(items), title=title, height=height)

    with Live(picker.view(), console=console, auto_refresh=False, transient=True) as live:
        while not picker.done:
            try:
                key = read_key()
            except KeyboardInterrupt:
                key = "ctrl+c"
            except EOFError:
                key = "q"
            picker.update(key)
            live.update(picker.view(), refresh=True)

    console.print(picker.view())
    return picker.choice


__all__ = ["LIST_HEIGHT", "TablePicker", "decode_key", "run_picker"]
