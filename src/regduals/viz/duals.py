"""
Shared-target scatterplots for dual regulons.

For a regulator pair, every target gene is placed at (correlation with
regulator 1, correlation with regulator 2). Targets are classified by the
signs of their two edges against the pair's aggregate correlation R:

- Negative dual (R < 0): targets activated by one regulator and repressed
  by the other are emphasized. (+, -) is drawn filled, (-, +) open.
- Positive dual (R >= 0): targets with concordant edges are emphasized.
  (-, -) is drawn filled, (+, +) open.

Discordant targets for the branch are left out of the drawing but kept in
the returned report.

Examples
--------
>>> from regduals.viz.duals import plot_duals
>>> reports = plot_duals(duals, names_motifs=["IRF8.vs.STAT1"], filepath="figures/")
>>> reports["IRF8.vs.STAT1"].head()
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Sequence, Union

import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib.axes import Axes
from matplotlib.lines import Line2D
from tqdm import tqdm

from regduals.core.merge import merge_networks
from regduals.core.motifs import normalize_motif_table
from regduals.core.network import DualRegulonSet, RegulatoryNetwork
from regduals.stats.correlation import normalize_estimator, target_correlation
from regduals.viz.core import MatplotlibSurface, RenderSurface
from regduals.viz.styles import DualPalette, fill_color, format_corr_label

__all__ = [
    'FILLED',
    'OPEN',
    'OMITTED',
    'select_targets',
    'classify_targets',
    'plot_dual_targets',
    'plot_duals',
]

logger = logging.getLogger(__name__)

FILLED = "filled"
OPEN = "open"
OMITTED = "omitted"

AXIS_LIMITS = (-1.0, 1.0)


def select_targets(incidence: pd.DataFrame, shared_targets: bool = True) -> pd.Series:
    """
    Boolean mask of genes to keep for a regulator pair.

    Parameters
    ----------
    incidence : pd.DataFrame
        Association columns of the two regulators (genes × 2), 0 = no edge.
    shared_targets : bool
        If True, keep genes targeted by both regulators; otherwise genes
        targeted by at least one.
    """
    n_edges = (incidence != 0).sum(axis=1)
    return n_edges == 2 if shared_targets else n_edges >= 1


def classify_targets(incidence: pd.DataFrame, corr_value: float) -> pd.Series:
    """
    Assign each gene a drawing category from its edge signs.

    Parameters
    ----------
    incidence : pd.DataFrame
        Association columns of the two regulators (genes × 2).
    corr_value : float
        Aggregate correlation of the dual regulon; only its sign is used.

    Returns
    -------
    pd.Series
        FILLED, OPEN or OMITTED per gene, aligned to ``incidence``.
    """
    signs = np.sign(incidence.to_numpy(dtype=float))
    s1, s2 = signs[:, 0], signs[:, 1]

    category = np.full(len(incidence), OMITTED, dtype=object)
    if corr_value < 0:
        category[(s1 == 1) & (s2 == -1)] = FILLED
        category[(s1 == -1) & (s2 == 1)] = OPEN
    else:
        total = s1 + s2
        category[total == 2] = OPEN
        category[total == -2] = FILLED

    return pd.Series(category, index=incidence.index, name="category")


def _style_axes(ax: Axes, xlabel: str, ylabel: str) -> None:
    ax.set_xlim(*AXIS_LIMITS)
    ax.set_ylim(*AXIS_LIMITS)
    ax.set_aspect("equal", adjustable="box")
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.tick_params(direction="out", length=2, width=1.5)
    for side in ("left", "bottom"):
        ax.spines[side].set_linewidth(1.5)
    sns.despine(ax=ax)


def _draw_categories(
    ax: Axes,
    xy: pd.DataFrame,
    category: pd.Series,
    edge_color: str,
    filled_color: tuple,
    open_color: str,
    lwd: float,
    marker_size: float,
) -> None:
    for label, face in ((FILLED, filled_color), (OPEN, open_color)):
        points = xy[(category == label).to_numpy()]
        if points.empty:
            continue
        ax.scatter(
            points.iloc[:, 0],
            points.iloc[:, 1],
            s=marker_size ** 2,
            marker="o",
            facecolors=[face],
            edgecolors=edge_color,
            linewidths=lwd,
            label=label,
            zorder=3,
        )


def plot_dual_targets(
    network: RegulatoryNetwork,
    duals: Sequence[str],
    corr_value: float,
    file: Optional[Union[str, os.PathLike]] = None,
    line_colors: Sequence[str] = (DualPalette.negative, DualPalette.positive),
    alpha: float = 0.80,
    lwd: float = 0.70,
    estimator: str = "spearman",
    shared_targets: bool = True,
    map_assigned_association: bool = True,
    marker_size: float = 4.0,
    surface: Optional[RenderSurface] = None,
) -> pd.DataFrame:
    """
    Scatter the target correlations of one regulator pair.

    Parameters
    ----------
    network : RegulatoryNetwork
        Merged network holding both regulators.
    duals : sequence of str
        The two regulators, each as a display name or an id.
    corr_value : float
        Aggregate correlation of the pair; selects the branch and is shown
        in the legend.
    file : str or PathLike, optional
        Path base; the plot is written to ``<file>.pdf``. None displays it.
    line_colors : (str, str)
        Outline colors for negative and positive duals.
    alpha : float
        Opacity of the tinted fill, in [0, 1].
    lwd : float
        Marker outline width.
    estimator : str
        'spearman', 'kendall' or 'pearson' (abbreviations accepted).
    shared_targets : bool
        Restrict to genes targeted by both regulators.
    map_assigned_association : bool
        Report 0 for genes without an edge to a regulator.
    marker_size : float
        Marker diameter in points.
    surface : RenderSurface, optional
        Where pages go; defaults to MatplotlibSurface.

    Returns
    -------
    pd.DataFrame
        One row per retained gene: annotation columns followed by
        ``<name>(R)`` correlation columns rounded to 3 decimals.

    Raises
    ------
    RegulatorNotFoundError
        If a pair member is neither a regulator name nor an id.
    """
    if len(duals) != 2:
        raise ValueError(f"Expected a pair of regulators, got {len(duals)}")

    estimator = normalize_estimator(estimator)
    palette = DualPalette.from_colors(line_colors)
    surface = surface if surface is not None else MatplotlibSurface()

    resolved = [network.regulators.resolve(key) for key in duals]
    names = [name for name, _ in resolved]
    ids = [regulator_id for _, regulator_id in resolved]

    tnet = network.incidence(ids, kind="ref")
    xy = target_correlation(
        network.gexp,
        tnet,
        estimator=estimator,
        map_assigned_association=map_assigned_association,
    )

    keep = select_targets(tnet, shared_targets=shared_targets).to_numpy()
    tnet = tnet[keep]
    xy = xy[keep]

    category = classify_targets(tnet, corr_value)
    if corr_value < 0:
        edge_color = palette.negative
    else:
        edge_color = palette.positive

    path = Path(f"{os.fspath(file)}.pdf") if file is not None else None
    title = f"{names[0]}.vs.{names[1]}"

    with surface.page(path=path, title=title) as ax:
        _style_axes(
            ax,
            xlabel=f"{names[0]} targets (R)",
            ylabel=f"{names[1]} targets (R)",
        )
        _draw_categories(
            ax,
            xy,
            category,
            edge_color=edge_color,
            filled_color=fill_color(edge_color, alpha),
            open_color=palette.open_fill,
            lwd=lwd,
            marker_size=marker_size,
        )
        ax.legend(
            handles=[Line2D([], [], linestyle="none", label=format_corr_label(corr_value))],
            loc="upper right",
            frameon=False,
            handlelength=0,
            handletextpad=0,
        )

    logger.debug(
        f"{title}: {len(xy)} targets kept, "
        f"{int((category == FILLED).sum())} filled, {int((category == OPEN).sum())} open"
    )

    xy = xy.copy()
    xy.columns = [f"{name}(R)" for name in names]
    annotation = network.annotation.reindex(xy.index)
    return pd.concat([annotation, xy.round(3)], axis=1)


def plot_duals(
    duals: DualRegulonSet,
    names_motifs: Optional[Sequence[str]] = None,
    filepath: Optional[Union[str, os.PathLike]] = None,
    alpha: float = 0.80,
    line_colors: Sequence[str] = (DualPalette.negative, DualPalette.positive),
    lwd: float = 0.70,
    estimator: Optional[str] = None,
    shared_targets: bool = True,
    map_assigned_association: bool = True,
    surface: Optional[RenderSurface] = None,
    progress: bool = False,
) -> dict[str, pd.DataFrame]:
    """
    Plot the shared target clouds of dual regulons.

    Validates inputs, merges the two sub-networks once, then draws one plot
    per selected pair. Any failure aborts the remaining pairs.

    Parameters
    ----------
    duals : DualRegulonSet
        Dual regulon analysis with both sub-networks processed.
    names_motifs : sequence of str, optional
        Pair labels from ``duals.motifs`` to plot; None plots all pairs.
    filepath : str or PathLike, optional
        Prefix for output files. Each pair is written to
        ``<filepath><reg1>.vs.<reg2>.pdf``. None displays the plots.
    alpha, line_colors, lwd
        Styling, see ``plot_dual_targets``.
    estimator : str, optional
        Correlation estimator; None uses the estimator recorded in the
        network parameters.
    shared_targets, map_assigned_association
        Target selection, see ``plot_dual_targets``.
    surface : RenderSurface, optional
        Rendering surface shared by all pages.
    progress : bool
        Show a progress bar over pairs.

    Returns
    -------
    dict[str, pd.DataFrame]
        Pair label -> per-gene report, in plotting order.

    Raises
    ------
    TypeError
        If ``duals`` is not a DualRegulonSet.
    UnknownEstimatorError
        If the estimator name is not recognized.
    MotifNotFoundError, PartialMotifMatchError
        If requested pair labels are missing from the results table.
    """
    if not isinstance(duals, DualRegulonSet):
        raise TypeError(f"duals must be DualRegulonSet, got {type(duals).__name__}")
    if estimator is not None:
        estimator = normalize_estimator(estimator)
    DualPalette.from_colors(line_colors)
    if not 0.0 <= alpha <= 1.0:
        raise ValueError(f"alpha must be in [0, 1], got {alpha}")

    motifs = normalize_motif_table(duals.motifs, names_motifs)
    merged = merge_networks(duals)
    if estimator is None:
        estimator = normalize_estimator(merged.params.estimator)

    surface = surface if surface is not None else MatplotlibSurface()
    prefix = os.fspath(filepath) if filepath is not None else None

    reports: dict[str, pd.DataFrame] = {}
    rows = tqdm(
        motifs.itertuples(index=False),
        total=len(motifs),
        desc="Plotting duals",
        disable=not progress,
    )
    for reg1, reg2, rval in rows:
        reg1, reg2 = str(reg1), str(reg2)
        label = f"{reg1}.vs.{reg2}"
        file = f"{prefix}{label}" if prefix is not None else None

        reports[label] = plot_dual_targets(
            merged,
            duals=(reg1, reg2),
            corr_value=float(rval),
            file=file,
            line_colors=line_colors,
            alpha=alpha,
            lwd=lwd,
            estimator=estimator,
            shared_targets=shared_targets,
            map_assigned_association=map_assigned_association,
            surface=surface,
        )

    logger.info(f"Plotted {len(reports)} dual regulons")
    return reports
