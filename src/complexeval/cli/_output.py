"""Output stream helper shared by CLI commands."""

from __future__ import annotations

import gzip
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, Optional


@contextmanager
def open_output(path: Optional[Path], compress: bool = False) -> Iterator[IO[str]]:
    """
    Open a text output stream.

    Writes to stdout when ``path`` is None (stdout is never closed).
    With ``compress`` the file is gzip-compressed.
    """
    if path is None:
        if compress:
            raise ValueError("--gzip requires --output")
        yield sys.stdout
        return

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if compress:
        f = gzip.open(path, 'wt', encoding='utf-8')
    else:
        f = open(path, 'w', encoding='utf-8')
    with f:
        yield f
