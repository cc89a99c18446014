"""
Pytest configuration and shared fixtures for dual regulon tests.

Provides synthetic dual regulon sets with hand-placed edges so the
shared-target selection and sign classification have known answers.
"""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest
from pathlib import Path

from regduals.core.network import (
    DualRegulonSet,
    NetworkParams,
    NetworkResults,
    RegulatorMap,
    RegulatoryNetwork,
)
from regduals.viz.core import MatplotlibSurface

REGULATORS_1 = {"TF1": "ID_TF1", "TF3": "ID_TF3"}
REGULATORS_2 = {"TF2": "ID_TF2", "TF4": "ID_TF4"}
TARGETS = [f"G{i}" for i in range(1, 9)]
GENES = list(REGULATORS_1.values()) + list(REGULATORS_2.values()) + TARGETS

# Signs for TF1/TF2 targets:
#   G1 (+, -)  G2 (-, +)  G3 (+, +)  G4 (-, -)  G5 (+, 0)  G6 (0, -)
DEFAULT_EDGES = {
    "ID_TF1": {"G1": 0.41, "G2": -0.32, "G3": 0.55, "G4": -0.21, "G5": 0.62},
    "ID_TF2": {"G1": -0.47, "G2": 0.36, "G3": 0.23, "G4": -0.44, "G6": -0.31},
    "ID_TF3": {"G7": 0.28},
    "ID_TF4": {"G7": 0.19, "G8": -0.35},
}

DEFAULT_MOTIFS = pd.DataFrame(
    {
        "Regulon1": ["TF1", "TF3", "TF1"],
        "Regulon2": ["TF2", "TF4", "TF4"],
        "R": [-0.4236, 0.3149, 0.0512],
        "Pvalue": [0.001, 0.02, 0.4],
    },
    index=["TF1.vs.TF2", "TF3.vs.TF4", "TF1.vs.TF4"],
)


class RecordingSurface(MatplotlibSurface):
    """Writes PDFs like MatplotlibSurface, but keeps every figure open for
    inspection and never calls plt.show()."""

    def __init__(self, figsize=(3.0, 3.0)):
        super().__init__(figsize=figsize)
        self.figures = []

    def emit(self, figure):
        if figure.path is not None:
            super().emit(figure)
        self.figures.append(figure)

    def release(self, figure):
        pass


def make_expression(genes=GENES, n_samples=12, seed=7) -> pd.DataFrame:
    """Continuous expression values (no ties) for every gene."""
    rng = np.random.default_rng(seed)
    samples = [f"S{j:02d}" for j in range(n_samples)]
    return pd.DataFrame(
        rng.normal(8.0, 2.0, size=(len(genes), n_samples)),
        index=pd.Index(genes),
        columns=samples,
    )


def make_incidence(edges: dict, regulator_ids, genes) -> pd.DataFrame:
    tnet = pd.DataFrame(0.0, index=pd.Index(genes), columns=list(regulator_ids))
    for regulator_id in regulator_ids:
        for gene, weight in edges.get(regulator_id, {}).items():
            tnet.loc[gene, regulator_id] = weight
    return tnet


def make_network(regulators: dict, edges: dict, gexp: pd.DataFrame,
                 annotation=None, params=None, processed=True) -> RegulatoryNetwork:
    regmap = RegulatorMap.from_mapping(regulators)
    results = None
    if processed:
        tn_ref = make_incidence(edges, regmap.ids, gexp.index)
        # DPI drops the weakest edge of each regulator
        tn_dpi = tn_ref.copy()
        for regulator_id in tn_dpi.columns:
            col = tn_dpi[regulator_id]
            nonzero = col[col != 0]
            if len(nonzero) > 1:
                tn_dpi.loc[nonzero.abs().idxmin(), regulator_id] = 0.0
        results = NetworkResults(tn_ref=tn_ref, tn_dpi=tn_dpi)
    return RegulatoryNetwork(
        gexp=gexp,
        regulators=regmap,
        annotation=annotation,
        params=params,
        results=results,
    )


def make_dual_regulon_set(edges=None, motifs=None, estimator="spearman",
                          n_samples=12, seed=7) -> DualRegulonSet:
    edges = DEFAULT_EDGES if edges is None else edges
    motifs = DEFAULT_MOTIFS.copy() if motifs is None else motifs
    gexp = make_expression(n_samples=n_samples, seed=seed)
    annotation = pd.DataFrame(
        {"ID": GENES, "SYMBOL": [g.replace("ID_", "") for g in GENES]},
        index=pd.Index(GENES),
    )
    params = NetworkParams(estimator=estimator, extra={"nPermutations": 10})
    first = make_network(REGULATORS_1, edges, gexp, annotation, params)
    second = make_network(REGULATORS_2, edges, gexp, annotation, params)
    return DualRegulonSet(first=first, second=second, motifs=motifs)


def write_dual_regulon_dir(duals: DualRegulonSet, path: Path) -> Path:
    """Lay a dual regulon set out on disk in the loader's directory format."""
    path.mkdir(parents=True, exist_ok=True)
    duals.first.gexp.to_csv(path / "gexp.csv")
    duals.first.annotation.to_csv(path / "annotation.csv")
    duals.motifs.to_csv(path / "motifs.csv")
    (path / "params.yaml").write_text(
        f"estimator: {duals.first.params.estimator}\nnPermutations: 10\n"
    )
    for name, net in (("network1", duals.first), ("network2", duals.second)):
        sub = path / name
        sub.mkdir(exist_ok=True)
        net.regulators.to_frame().to_csv(sub / "regulators.csv", index=False)
        net.results.tn_ref.to_csv(sub / "tn_ref.csv")
        net.results.tn_dpi.to_csv(sub / "tn_dpi.csv")
    return path


@pytest.fixture
def duals():
    """Dual regulon set with two regulators per side and three pairs."""
    return make_dual_regulon_set()


@pytest.fixture
def scenario_duals():
    """One negative pair (R = -0.42) sharing exactly two targets:
    G1 (+/-) and G2 (-/+). G3 is a TF1-only target."""
    edges = {
        "ID_TF1": {"G1": 0.5, "G2": -0.4, "G3": 0.3},
        "ID_TF2": {"G1": -0.6, "G2": 0.45},
        "ID_TF3": {"G7": 0.2},
        "ID_TF4": {"G8": 0.2},
    }
    motifs = pd.DataFrame(
        {"Regulon1": ["TF1"], "Regulon2": ["TF2"], "R": [-0.42]},
        index=["TF1.vs.TF2"],
    )
    return make_dual_regulon_set(edges=edges, motifs=motifs)


@pytest.fixture
def surface():
    """Recording surface; closes every figure after the test."""
    recorder = RecordingSurface()
    yield recorder
    plt.close("all")


@pytest.fixture
def duals_dir(tmp_path, duals):
    """The default dual regulon set written to disk."""
    return write_dual_regulon_dir(duals, tmp_path / "duals")
