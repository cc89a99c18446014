"""
regduals - Diagnostic plots for dual regulons

Scatterplots of shared-target correlation profiles for pairs of regulons
inferred by two independent regulatory network analyses over the same
expression data.
"""

__version__ = "0.1.0"

from regduals.core.network import RegulatorMap, RegulatoryNetwork, DualRegulonSet
from regduals.core.merge import merge_networks
from regduals.core.motifs import normalize_motif_table
from regduals.viz.duals import plot_dual_targets, plot_duals

__all__ = [
    "RegulatorMap",
    "RegulatoryNetwork",
    "DualRegulonSet",
    "merge_networks",
    "normalize_motif_table",
    "plot_dual_targets",
    "plot_duals",
]
