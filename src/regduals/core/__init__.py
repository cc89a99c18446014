"""
Core data structures and operations for dual regulon analysis.

1. RegulatorMap / RegulatoryNetwork / DualRegulonSet: typed network objects
2. merge_networks: unify the two sub-networks of a dual regulon set
3. normalize_motif_table: select and project the evaluated pairs to plot

Examples:
    >>> from regduals.core import merge_networks, normalize_motif_table
    >>> merged = merge_networks(duals)
    >>> motifs = normalize_motif_table(duals.motifs, ["IRF8.vs.STAT1"])
"""

from regduals.core.network import (
    RegulatorMap,
    NetworkParams,
    NetworkResults,
    RegulatoryNetwork,
    DualRegulonSet,
    RegulatorNotFoundError,
)
from regduals.core.merge import merge_networks, GeneUniverseMismatchError
from regduals.core.motifs import (
    MOTIF_COLUMNS,
    normalize_motif_table,
    MotifSelectionError,
    MotifNotFoundError,
    PartialMotifMatchError,
)

__all__ = [
    'RegulatorMap',
    'NetworkParams',
    'NetworkResults',
    'RegulatoryNetwork',
    'DualRegulonSet',
    'RegulatorNotFoundError',
    'merge_networks',
    'GeneUniverseMismatchError',
    'MOTIF_COLUMNS',
    'normalize_motif_table',
    'MotifSelectionError',
    'MotifNotFoundError',
    'PartialMotifMatchError',
]
