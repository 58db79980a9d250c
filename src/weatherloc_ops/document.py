"""
document.py - Insert rendered fragments into markdown documents.

A block is a run of consecutive non-blank lines. Blocks are addressed by a
trailing ``^block-id`` marker on their last line, e.g.::

    Morning notes ^journal-2026-10-19

Fragments are separated from their neighbours by one blank line. A fragment
written in replace mode that spans several paragraphs opens with a
``<!-- ^block-id start -->`` line so the whole fragment stays addressable::

    <!-- ^weather start -->
    ## Heading

    body ^weather
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from weatherloc_core.errors import BlockNotFoundError

logger = logging.getLogger(__name__)

_BLOCK_ID_RE = re.compile(r"(?:^|\s)\^([A-Za-z0-9][A-Za-z0-9_-]*)\s*$")


@dataclass(frozen=True)
class InsertResult:
    path: Path
    mode: str  # "append", "after" or "replace"
    block_id: Optional[str]
    line: int  # 1-based first line of the inserted fragment


def block_id_of(line: str) -> Optional[str]:
    match = _BLOCK_ID_RE.search(line)
    return match.group(1) if match else None


def _region_start(block_id: str) -> str:
    return f"<!-- ^{block_id} start -->"


def find_block(lines: List[str], block_id: str) -> Optional[Tuple[int, int]]:
    """Return (first, last) line indexes of the addressed block, inclusive."""
    opener = _region_start(block_id)
    for idx, line in enumerate(lines):
        if block_id_of(line) != block_id:
            continue
        # A region opener wins over the paragraph boundary, up to the previous block.
        for back in range(idx - 1, -1, -1):
            if lines[back].strip() == opener:
                return back, idx
            if block_id_of(lines[back]) is not None:
                break
        start = idx
        while start > 0 and lines[start - 1].strip():
            start -= 1
        return start, idx
    return None


def _fragment_lines(content: str) -> List[str]:
    return content.strip("\n").split("\n")


def insert_content(
    path: Path,
    content: str,
    *,
    block_id: Optional[str] = None,
    replace: bool = False,
) -> InsertResult:
    """Insert ``content`` into the document at ``path``.

    Without ``block_id`` the fragment is appended (creating the file if
    needed). With ``block_id`` it goes after the addressed block, or replaces
    it when ``replace`` is set; the marker is kept on the replacement.
    """
    if replace and block_id is None:
        raise ValueError("replace requires a block_id")

    text = path.read_text(encoding="utf-8") if path.exists() else ""
    lines = text.split("\n") if text else []
    if lines and lines[-1] == "":
        lines.pop()
    fragment = _fragment_lines(content)

    if block_id is None:
        while lines and not lines[-1].strip():
            lines.pop()
        start = len(lines) + (1 if lines else 0)
        new_lines = lines + ([""] if lines else []) + fragment
        result = InsertResult(path=path, mode="append", block_id=None, line=start + 1)
    else:
        span = find_block(lines, block_id)
        if span is None:
            raise BlockNotFoundError(path, block_id)
        first, last = span
        rest = lines[last + 1 :]
        if replace:
            fragment[-1] = f"{fragment[-1]} ^{block_id}"
            if any(not line.strip() for line in fragment):
                fragment.insert(0, _region_start(block_id))
            new_lines = lines[:first] + fragment + rest
            result = InsertResult(path=path, mode="replace", block_id=block_id, line=first + 1)
        else:
            tail = rest if not rest or not rest[0].strip() else [""] + rest
            new_lines = lines[: last + 1] + [""] + fragment + tail
            result = InsertResult(path=path, mode="after", block_id=block_id, line=last + 3)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(new_lines) + "\n", encoding="utf-8")
    logger.info(f"Inserted {len(fragment)} line(s) into {path} ({result.mode})")
    return result
