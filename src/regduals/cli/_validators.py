"""Shared argparse type validators for CLI parameter bounds checking.

Intended as the ``type=`` argument in ``add_argument()`` so invalid values
(e.g. ``--alpha 2.0``, ``--lwd 0``) fail with a clear message.
"""

from __future__ import annotations

import argparse

from regduals.stats.correlation import UnknownEstimatorError, normalize_estimator


def _unit_interval(value: str) -> float:
    """argparse type for values in the closed interval [0, 1]."""
    fvalue = float(value)
    if not (0 <= fvalue <= 1):
        raise argparse.ArgumentTypeError(
            f"{value} is not a valid opacity (must be in [0, 1])"
        )
    return fvalue


def _positive_float(value: str) -> float:
    """argparse type for positive floats (> 0)."""
    fvalue = float(value)
    if fvalue <= 0:
        raise argparse.ArgumentTypeError(f"{value} is not a positive float")
    return fvalue


def _estimator(value: str) -> str:
    """argparse type for correlation estimators (abbreviations accepted)."""
    try:
        return normalize_estimator(value)
    except UnknownEstimatorError as e:
        raise argparse.ArgumentTypeError(str(e))
