"""Filesystem-safe output filenames."""

from __future__ import annotations

import re

# Characters rejected by at least one common filesystem.
_ILLEGAL_CHARS = re.compile(r'[<>:"/\\|?*]')


def normalize_filename(filename: str) -> str:
    """Replace illegal filename characters with ``_`` and trim whitespace.

    Parameters
    ----------
    filename : str
        Proposed filename, possibly containing separators or reserved
        characters.

    Returns
    -------
    str
        Sanitized filename. May be empty.
    """
    return _ILLEGAL_CHARS.sub("_", filename).strip()
