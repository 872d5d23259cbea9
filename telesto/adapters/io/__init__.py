"""Input/output adapters.

CSV rows come from a file or standard input; the JSON result goes to a
file or standard output.
"""

from .csv_input import load_text, read_rows
from .json_output import render_entries, write_output

__all__ = ["load_text", "read_rows", "render_entries", "write_output"]
