"""
CSV writer for dual regulon reports.

Each plotted pair yields a per-gene report (annotation plus the target's
correlation with both regulators). Reports are written one file per pair
so they can be opened next to the matching PDF.

Examples:
    >>> from pathlib import Path
    >>> from regduals.io.writers import write_reports
    >>> write_reports(reports, Path("results/reports"))
    [PosixPath('results/reports/IRF8.vs.STAT1.report.csv')]
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

import pandas as pd

from regduals.utils.fileio import atomic_write_csv

__all__ = ['write_reports']

logger = logging.getLogger(__name__)


def write_reports(reports: Mapping[str, pd.DataFrame], output_dir: Path) -> list[Path]:
    """
    Write each report to ``<output_dir>/<label>.report.csv``.

    Args:
        reports: Pair label -> report table
        output_dir: Destination directory (created if missing)

    Returns:
        Paths written, in the order of ``reports``
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for label, report in reports.items():
        path = output_dir / f"{label}.report.csv"
        atomic_write_csv(path, report, index_label='gene_id')
        logger.info(f"Saved: {path}")
        written.append(path)
    return written
