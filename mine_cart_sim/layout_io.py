from __future__ import annotations

from pathlib import Path

from mine_cart_sim.track import SimulationState, build_state


class InputFormatError(ValueError):
    """Raised when a layout file fails validation."""


def split_layout(text: str) -> list[str]:
    """Split layout text into rows.

    Rows end at "\\n" only (a trailing "\\r" is dropped); other control
    characters stay inside their row as cells. Blank lines at the end are
    dropped. Everything else is kept verbatim, including leading spaces and
    empty rows inside the layout, since column positions matter.
    """
    rows = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]
    while rows and not rows[-1].strip():
        rows.pop()
    return rows


def load_layout(path: Path) -> list[str]:
    """Load the raw rows of a track layout file.

    Format: one grid row per line, UTF-8. Track symbols are ``- | / \\ +``,
    carts are ``^ > v <`` and a space is empty ground:

      /->-\\
      |   |  /----\\
      | /-+--+-\\  |
      | | |  | v  |
      \\-+-/  \\-+--/
        \\------/
    """

    if not path.exists():
        raise InputFormatError(f"file not found: {path}")
    if not path.is_file():
        raise InputFormatError(f"not a file: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise InputFormatError(f"layout is not valid UTF-8: {e.reason} (byte {e.start})") from e

    rows = split_layout(text)
    if not rows:
        raise InputFormatError(f"layout is empty: {path}")
    return rows


def load_state(path: Path) -> SimulationState:
    return build_state(load_layout(path))
