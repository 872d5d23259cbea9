"""JSON output adapter."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Optional, Sequence, TextIO, Union

from ...domain.errors import OutputError
from ...domain.models import OutputEntry


def render_entries(entries: Sequence[OutputEntry]) -> str:
    """Serialize output entries to a compact JSON array."""
    return json.dumps([entry.to_dict() for entry in entries])


def write_output(
    entries: Sequence[OutputEntry],
    path: Optional[Union[str, Path]] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Write the JSON result to a file, or to standard output.

    Raises:
        OutputError: If the file cannot be written.
    """
    contents = render_entries(entries)
    if path is None:
        stream = stream if stream is not None else sys.stdout
        stream.write(contents + "\n")
        stream.flush()
        return

    try:
        Path(path).write_text(contents, encoding="utf-8")
    except OSError as e:
        raise OutputError(f"could not write output file ({path})", path=str(path), cause=e)
