"""CSV input adapter.

Reads the whole input (file or standard input) and splits it into rows
of raw string fields keyed by column name. No field is interpreted
here; that is the validator's job.
"""

from __future__ import annotations

import csv
import io
import sys
from pathlib import Path
from typing import Dict, List, Optional, TextIO, Union

from ...domain.errors import InputError, InputFileError


def load_text(
    path: Optional[Union[str, Path]] = None, stream: Optional[TextIO] = None
) -> str:
    """Load the raw CSV text.

    Args:
        path: Input file path; standard input is used when None.
        stream: Stream to read when no path is given (defaults to stdin).

    Raises:
        InputFileError: If the file cannot be opened or decoded.
    """
    if path is None:
        stream = stream if stream is not None else sys.stdin
        try:
            return stream.read().lstrip("\ufeff").strip()
        except (OSError, UnicodeDecodeError) as e:
            raise InputFileError("input is not valid", cause=e)

    try:
        return Path(path).read_text(encoding="utf-8-sig").strip()
    except (OSError, UnicodeDecodeError) as e:
        raise InputFileError(
            f"invalid input file path supplied ({path})", path=str(path), cause=e
        )


def read_rows(text: str) -> List[Dict[str, str]]:
    """Split CSV text into rows keyed by header name.

    Header names are whitespace-trimmed. Entirely blank lines are
    skipped.

    Raises:
        InputError: If a row has more or fewer fields than the header.
    """
    reader = csv.DictReader(io.StringIO(text))
    if reader.fieldnames is not None:
        reader.fieldnames = [name.strip() for name in reader.fieldnames]

    rows: List[Dict[str, str]] = []
    try:
        for line, row in enumerate(reader, start=1):
            if None in row or any(value is None for value in row.values()):
                raise InputError(
                    "found record with a different number of fields than the header",
                    line=line,
                )
            rows.append(row)
    except csv.Error as e:
        raise InputError("malformed CSV", line=reader.line_num, cause=e)
    return rows
