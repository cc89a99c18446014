"""Statistical helpers for dual regulon diagnostics."""

from regduals.stats.correlation import (
    ESTIMATORS,
    UnknownEstimatorError,
    normalize_estimator,
    correlate_rows,
    target_correlation,
)

__all__ = [
    'ESTIMATORS',
    'UnknownEstimatorError',
    'normalize_estimator',
    'correlate_rows',
    'target_correlation',
]
