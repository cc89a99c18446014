"""
Normalization of the dual regulon results table for plotting.

The results table lists one evaluated regulator pair per row. Plotting only
needs the two regulator identifiers and the aggregate correlation, so the
table is projected down to those three columns, optionally restricted to a
caller-supplied list of pair labels.
"""

from __future__ import annotations

from typing import Optional, Sequence

import pandas as pd

__all__ = [
    'MOTIF_COLUMNS',
    'normalize_motif_table',
    'MotifSelectionError',
    'MotifNotFoundError',
    'PartialMotifMatchError',
]

MOTIF_COLUMNS = ['Regulon1', 'Regulon2', 'R']


class MotifSelectionError(KeyError):
    """Base class for requested pair labels missing from the results table."""
    pass


class MotifNotFoundError(MotifSelectionError):
    """Raised when none of the requested pair labels are in the results table."""
    pass


class PartialMotifMatchError(MotifSelectionError):
    """Raised when only some of the requested pair labels are in the results table."""
    pass


def normalize_motif_table(
    table: pd.DataFrame,
    names_motifs: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """
    Project the results table to Regulon1/Regulon2/R for plotting.

    Args:
        table: Results table, one row per pair, index = pair labels
        names_motifs: Pair labels to keep, in the order to plot them.
            A single label may be given as a string. None keeps every row
            in table order.

    Returns:
        New DataFrame with columns Regulon1, Regulon2, R; R rounded to
        2 decimals for display

    Raises:
        ValueError: If the table lacks a required column
        MotifNotFoundError: If no requested label is in the table
        PartialMotifMatchError: If some requested labels are missing

    Examples:
        >>> normalize_motif_table(table, ["IRF8.vs.STAT1"])
                       Regulon1 Regulon2     R
        IRF8.vs.STAT1      IRF8    STAT1 -0.42
    """
    missing_cols = [c for c in MOTIF_COLUMNS if c not in table.columns]
    if missing_cols:
        raise ValueError(f"Results table is missing required columns: {missing_cols}")

    if names_motifs is not None:
        if isinstance(names_motifs, str):
            names_motifs = [names_motifs]
        names_motifs = [str(n) for n in names_motifs]
        found = [n for n in names_motifs if n in table.index]
        if not found:
            raise MotifNotFoundError(
                "None of the requested pair labels are in the results table"
            )
        if len(found) != len(names_motifs):
            absent = [n for n in names_motifs if n not in table.index]
            raise PartialMotifMatchError(
                f"Not all pair labels are available, missing: {absent}"
            )
        subset = table.loc[names_motifs, MOTIF_COLUMNS].copy()
    else:
        subset = table.loc[:, MOTIF_COLUMNS].copy()

    subset['R'] = subset['R'].astype(float).round(2)
    return subset
