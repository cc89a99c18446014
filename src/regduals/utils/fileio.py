"""
Atomic file-write utilities.

Outputs are written to a sibling temporary file and moved into place with
``os.replace()``, so an interrupted run never leaves a truncated report
next to its plot.
"""

from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from typing import Iterator

import pandas as pd


@contextmanager
def atomic_target(path: str | os.PathLike, suffix: str = ".tmp") -> Iterator[str]:
    """
    Yield a temporary path in the destination directory.

    On clean exit the temporary file replaces *path*; on any error it is
    removed and *path* is left as it was.
    """
    path = os.fspath(path)
    fd, tmp_path = tempfile.mkstemp(dir=os.path.dirname(path) or ".", suffix=suffix)
    os.close(fd)
    try:
        yield tmp_path
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def atomic_write_csv(path: str | os.PathLike, frame: pd.DataFrame, **to_csv_kwargs) -> None:
    """Write *frame* to CSV at *path* atomically.

    Parameters
    ----------
    path:
        Destination file path; its directory must exist.
    frame:
        Table to write.
    **to_csv_kwargs:
        Passed to ``DataFrame.to_csv``.
    """
    with atomic_target(path) as tmp_path:
        frame.to_csv(tmp_path, **to_csv_kwargs)
