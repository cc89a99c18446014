"""
Visualization module for dual regulon diagnostics.

Static matplotlib figures of shared-target correlation clouds, one page
per regulator pair, written to PDF or shown on the active display.

Examples
--------
>>> from regduals.viz import plot_duals
>>> reports = plot_duals(duals, filepath="figures/")
"""

from regduals.viz.core import Figure, RenderSurface, MatplotlibSurface
from regduals.viz.styles import DualPalette, tint_toward_white, fill_color, format_corr_label
from regduals.viz.duals import (
    FILLED,
    OPEN,
    OMITTED,
    select_targets,
    classify_targets,
    plot_dual_targets,
    plot_duals,
)

__all__ = [
    # Core
    "Figure",
    "RenderSurface",
    "MatplotlibSurface",
    # Styles
    "DualPalette",
    "tint_toward_white",
    "fill_color",
    "format_corr_label",
    # Dual regulon plots
    "FILLED",
    "OPEN",
    "OMITTED",
    "select_targets",
    "classify_targets",
    "plot_dual_targets",
    "plot_duals",
]
