"""
Merge the two sub-networks of a dual regulon analysis into one network.

The merged network is a throwaway view that lets the plotter address the
regulators of both sets through one coordinate space: the shared expression
matrix and annotation, and column-concatenated association matrices.
"""

from __future__ import annotations

import logging

import pandas as pd

from regduals.core.network import (
    DualRegulonSet,
    NetworkResults,
    RegulatoryNetwork,
)

__all__ = ['merge_networks', 'GeneUniverseMismatchError']

logger = logging.getLogger(__name__)


class GeneUniverseMismatchError(ValueError):
    """Raised when the two sub-networks are defined over different genes."""
    pass


def merge_networks(duals: DualRegulonSet) -> RegulatoryNetwork:
    """
    Unify the two sub-networks of a dual regulon set.

    Expression matrix, annotation and parameters are taken from the first
    sub-network. Association matrices are concatenated column-wise: the
    first network's regulator columns, then the second's.

    Args:
        duals: Dual regulon set with both sub-networks processed

    Returns:
        New RegulatoryNetwork with len(first) + len(second) regulators

    Raises:
        ValueError: If either sub-network has no association results
        GeneUniverseMismatchError: If the gene universes differ

    Examples:
        >>> merged = merge_networks(duals)
        >>> len(merged.regulators) == len(duals.first.regulators) + len(duals.second.regulators)
        True
    """
    first, second = duals.first, duals.second

    for label, net in (('first', first), ('second', second)):
        if not net.is_processed:
            raise ValueError(
                f"The {label} sub-network has no association results; "
                "both networks must be fully processed before merging"
            )

    if not first.genes.equals(second.genes):
        n_diff = len(first.genes.symmetric_difference(second.genes))
        raise GeneUniverseMismatchError(
            "Sub-networks must share the same gene universe "
            f"({len(first.genes)} vs {len(second.genes)} genes, "
            f"{n_diff} not in both, or same genes in a different order)"
        )

    regulators = first.regulators.concat(second.regulators)
    ids1, ids2 = list(first.regulators.ids), list(second.regulators.ids)

    tn_ref = pd.concat(
        [first.incidence(ids1, kind='ref'), second.incidence(ids2, kind='ref')],
        axis=1,
    )
    tn_dpi = pd.concat(
        [first.incidence(ids1, kind='dpi'), second.incidence(ids2, kind='dpi')],
        axis=1,
    )

    logger.debug(
        f"Merged networks: {len(ids1)} + {len(ids2)} regulators over {len(first.genes)} genes"
    )

    return RegulatoryNetwork(
        gexp=first.gexp,
        regulators=regulators,
        annotation=first.annotation,
        params=first.params,
        results=NetworkResults(tn_ref=tn_ref, tn_dpi=tn_dpi),
    )
