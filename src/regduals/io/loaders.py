"""
Loader for dual regulon analyses stored as CSV tables.

Upstream inference results are exchanged as plain tables so they can be
produced by any pipeline (R, Python, ...). A dual regulon directory holds
the shared expression data, the evaluated pairs, and one sub-directory per
regulator set.

Expected layout:
```
duals/
    gexp.csv            genes × samples, first column gene id
    annotation.csv      optional, first column gene id
    motifs.csv          first column pair label; Regulon1, Regulon2, R, ...
    params.yaml         optional, e.g. "estimator: spearman"
    network1/
        regulators.csv  columns: name, id
        tn_ref.csv      genes × regulator ids, first column gene id
        tn_dpi.csv      same shape as tn_ref.csv
    network2/
        ...
```

Examples:
    >>> from pathlib import Path
    >>> from regduals.io.loaders import load_dual_regulon_set
    >>> duals = load_dual_regulon_set(Path("results/duals"))
    >>> print(duals)
    DualRegulonSet(5 + 5 regulators, 25 pairs)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import pandas as pd
import yaml

from regduals.core.network import (
    DualRegulonSet,
    NetworkParams,
    NetworkResults,
    RegulatorMap,
    RegulatoryNetwork,
)

__all__ = ['load_params', 'load_regulatory_network', 'load_dual_regulon_set']

logger = logging.getLogger(__name__)

NETWORK_DIRS = ('network1', 'network2')


def _read_table(path: Path, required: bool = True) -> Optional[pd.DataFrame]:
    if not path.exists():
        if required:
            raise FileNotFoundError(f"Required table not found: {path}")
        return None
    try:
        frame = pd.read_csv(path, index_col=0)
    except pd.errors.ParserError as e:
        raise ValueError(f"Failed to parse {path}: {e}") from e
    frame.index = frame.index.astype(str)
    return frame


def load_params(path: Path) -> NetworkParams:
    """
    Load the parameter record from a YAML file.

    A missing file yields default parameters. Keys other than
    ``estimator`` are kept in ``NetworkParams.extra``.
    """
    if not path.exists():
        return NetworkParams()

    try:
        with open(path, 'r') as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in parameter file {path}: {e}")

    if raw is None:
        return NetworkParams()
    if not isinstance(raw, dict):
        raise ValueError(f"Parameter file {path} must contain a mapping at top level")

    extra: dict[str, Any] = dict(raw)
    estimator = extra.pop('estimator', NetworkParams.estimator)
    return NetworkParams(estimator=str(estimator), extra=extra)


def load_regulatory_network(
    path: Path,
    gexp: pd.DataFrame,
    annotation: Optional[pd.DataFrame] = None,
    params: Optional[NetworkParams] = None,
) -> RegulatoryNetwork:
    """
    Load one regulon set from its directory.

    Association tables are re-indexed to the expression gene order so that
    both sub-networks of a dual set share one row space.

    Args:
        path: Directory containing regulators.csv, tn_ref.csv, tn_dpi.csv
        gexp: Shared expression matrix (genes × samples)
        annotation: Shared gene annotation
        params: Shared parameter record

    Raises:
        FileNotFoundError: If a required table is missing
        ValueError: If association rows do not cover the expression genes, or
            tn_dpi.csv and tn_ref.csv hold different regulator columns
    """
    regulators_path = path / 'regulators.csv'
    if not regulators_path.exists():
        raise FileNotFoundError(f"Required table not found: {regulators_path}")
    regulators = RegulatorMap.from_frame(pd.read_csv(regulators_path, dtype=str))

    tn_ref = _read_table(path / 'tn_ref.csv')
    tn_dpi = _read_table(path / 'tn_dpi.csv')

    for label, table in (('tn_ref', tn_ref), ('tn_dpi', tn_dpi)):
        if set(table.index) != set(gexp.index):
            raise ValueError(
                f"{path / (label + '.csv')} rows do not match the expression genes "
                f"({len(table.index)} rows for {len(gexp.index)} genes)"
            )
    if set(tn_dpi.columns) != set(tn_ref.columns):
        absent = sorted(set(tn_ref.columns) ^ set(tn_dpi.columns))
        raise ValueError(
            f"{path / 'tn_dpi.csv'} regulator columns do not match tn_ref.csv: {absent[:5]}"
        )

    results = NetworkResults(
        tn_ref=tn_ref.reindex(gexp.index),
        tn_dpi=tn_dpi.reindex(index=gexp.index, columns=tn_ref.columns),
    )

    network = RegulatoryNetwork(
        gexp=gexp,
        regulators=regulators,
        annotation=annotation,
        params=params,
        results=results,
    )
    logger.info(f"Loaded {network} from {path}")
    return network


def load_dual_regulon_set(path: Path) -> DualRegulonSet:
    """
    Load a dual regulon analysis from a directory of tables.

    Args:
        path: Directory laid out as described in the module docstring

    Returns:
        DualRegulonSet with both sub-networks processed

    Raises:
        FileNotFoundError: If the directory or a required table is missing
    """
    path = Path(path)
    if not path.is_dir():
        raise FileNotFoundError(f"Dual regulon directory not found: {path}")

    gexp = _read_table(path / 'gexp.csv')
    annotation = _read_table(path / 'annotation.csv', required=False)
    motifs = _read_table(path / 'motifs.csv')
    params = load_params(path / 'params.yaml')

    first, second = (
        load_regulatory_network(path / name, gexp, annotation=annotation, params=params)
        for name in NETWORK_DIRS
    )
    return DualRegulonSet(first=first, second=second, motifs=motifs)
