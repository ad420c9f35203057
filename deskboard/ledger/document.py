"""Line handling shared by the parser and the task toggler.

Both sides must split and classify lines identically, otherwise task
ordinals reported by a listing would not match the line a toggle rewrites.
"""

from __future__ import annotations

from pathlib import Path


CHECKBOX_PREFIX = "- ["
DONE_MARKERS = ("- [x]", "- [X]")
OPEN_MARKER = "- [ ]"
MARKER_LEN = len(OPEN_MARKER)


def split_lines(text: str) -> list[str]:
    """Split on LF, dropping one trailing CR per line and the final empty piece."""

    if not text:
        return []
    pieces = text.split("\n")
    if pieces[-1] == "":
        pieces.pop()
    return [piece[:-1] if piece.endswith("\r") else piece for piece in pieces]


def join_lines(lines: list[str]) -> str:
    return "\n".join(lines)


def is_checkbox_line(line: str) -> bool:
    return line.strip().startswith(CHECKBOX_PREFIX)


def is_done_marker(trimmed: str) -> bool:
    return trimmed.startswith(DONE_MARKERS)


def is_open_marker(trimmed: str) -> bool:
    return trimmed.startswith(OPEN_MARKER)


def read_document(path: Path) -> str:
    """Read UTF-8 text with no newline translation; split_lines owns that."""

    with path.open("r", encoding="utf-8", newline="") as handle:
        return handle.read()
