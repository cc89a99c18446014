"""
Core data structures for regulatory network objects.

A regulatory network couples an expression matrix with a set of regulators
and the regulator-by-target association matrices inferred upstream
(reference network and its DPI-filtered version).

Biological Context:
    Regulons are the target sets of regulatory elements (transcription
    factors, miRNAs, ...). Upstream inference produces, for each regulator,
    a signed association with every gene in the universe:
    - Rows = genes (the gene universe, same as the expression matrix)
    - Columns = regulator ids
    - Values = signed association, 0 = no edge

    A dual regulon analysis runs two independent inferences over the same
    expression data with two disjoint regulator sets, then evaluates every
    cross pair of regulons. Those pairs are listed in the motifs table.

Engineering Design:
    - RegulatorMap: explicit two-way name <-> id lookup
    - RegulatoryNetwork: validated container (shape and label invariants)
    - DualRegulonSet: two processed networks plus the evaluated pairs

Examples:
    >>> regulators = RegulatorMap.from_mapping({"IRF8": "ID_IRF8", "STAT1": "ID_STAT1"})
    >>> regulators.resolve("ID_IRF8")
    ('IRF8', 'ID_IRF8')
    >>> network = RegulatoryNetwork(gexp=gexp, regulators=regulators, results=results)
    >>> network.incidence(["ID_IRF8", "ID_STAT1"]).shape
    (1000, 2)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence

import pandas as pd

__all__ = [
    'RegulatorMap',
    'NetworkParams',
    'NetworkResults',
    'RegulatoryNetwork',
    'DualRegulonSet',
    'RegulatorNotFoundError',
]


class RegulatorNotFoundError(KeyError):
    """Raised when a regulator key matches neither a regulator name nor an id."""
    pass


class RegulatorMap:
    """
    Ordered two-way lookup between regulator display names and ids.

    Names are what users see (gene symbols); ids are the labels used in the
    expression and association matrices (probe or Ensembl ids). Both sides
    must be unique so each direction is a proper mapping.

    Attributes:
        names: Regulator display names, in order
        ids: Regulator ids, aligned with names
    """

    def __init__(self, names: Sequence[str], ids: Sequence[str]):
        names = tuple(str(n) for n in names)
        ids = tuple(str(i) for i in ids)

        if len(names) != len(ids):
            raise ValueError(
                f"names ({len(names)}) and ids ({len(ids)}) must have the same length"
            )
        if len(set(names)) != len(names):
            raise ValueError("Regulator names must be unique")
        if len(set(ids)) != len(ids):
            raise ValueError("Regulator ids must be unique")

        self._names = names
        self._ids = ids
        self._by_name = dict(zip(names, ids))
        self._by_id = dict(zip(ids, names))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> RegulatorMap:
        """Build from a name -> id mapping (insertion order preserved)."""
        return cls(list(mapping.keys()), list(mapping.values()))

    @classmethod
    def from_frame(cls, frame: pd.DataFrame, name_col: str = 'name', id_col: str = 'id') -> RegulatorMap:
        """Build from a two-column table of names and ids."""
        missing = [c for c in (name_col, id_col) if c not in frame.columns]
        if missing:
            raise ValueError(f"Regulator table is missing columns: {missing}")
        return cls(frame[name_col].tolist(), frame[id_col].tolist())

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    @property
    def ids(self) -> tuple[str, ...]:
        return self._ids

    def id_for(self, name: str) -> str:
        """Forward lookup: name -> id."""
        return self._by_name[name]

    def name_for(self, regulator_id: str) -> str:
        """Reverse lookup: id -> name."""
        return self._by_id[regulator_id]

    def resolve(self, key: str) -> tuple[str, str]:
        """
        Resolve a regulator given either its name or its id.

        Names are tried first, then ids.

        Returns:
            (name, id) tuple

        Raises:
            RegulatorNotFoundError: If key is neither a name nor an id
        """
        key = str(key)
        if key in self._by_name:
            return key, self._by_name[key]
        if key in self._by_id:
            return self._by_id[key], key
        raise RegulatorNotFoundError(
            f"'{key}' is neither a regulator name nor a regulator id"
        )

    def concat(self, other: RegulatorMap) -> RegulatorMap:
        """
        Concatenate two maps, self first.

        Raises:
            ValueError: If the maps share any name or id
        """
        shared_ids = set(self._ids) & set(other.ids)
        shared_names = set(self._names) & set(other.names)
        if shared_ids or shared_names:
            raise ValueError(
                "Regulator sets overlap: "
                f"{sorted(shared_names | shared_ids)[:10]}"
            )
        return RegulatorMap(self._names + other.names, self._ids + other.ids)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame({'name': list(self._names), 'id': list(self._ids)})

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(zip(self._names, self._ids))

    def __contains__(self, key: object) -> bool:
        return key in self._by_name or key in self._by_id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RegulatorMap):
            return NotImplemented
        return self._names == other.names and self._ids == other.ids

    def __repr__(self) -> str:
        preview = ", ".join(f"{n}={i}" for n, i in list(self)[:3])
        suffix = ", ..." if len(self) > 3 else ""
        return f"RegulatorMap({preview}{suffix})"


@dataclass
class NetworkParams:
    """Parameter record carried from the upstream inference."""
    estimator: str = "spearman"
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class NetworkResults:
    """Reference and DPI-filtered regulator-by-target association matrices."""
    tn_ref: pd.DataFrame
    tn_dpi: pd.DataFrame


class RegulatoryNetwork:
    """
    Validated container for one regulon set.

    Attributes:
        gexp: Expression matrix (genes × samples)
        regulators: Two-way regulator name/id lookup
        annotation: Per-gene metadata keyed by gene id
        params: Upstream parameter record
        results: Association matrices, None until processed

    Shape Invariants:
        - every regulator id is a row of gexp
        - results.tn_ref.index equals gexp.index
        - every regulator id is a column of results.tn_ref
        - results.tn_dpi has the same labels as results.tn_ref
    """

    def __init__(
        self,
        gexp: pd.DataFrame,
        regulators: RegulatorMap,
        annotation: Optional[pd.DataFrame] = None,
        params: Optional[NetworkParams] = None,
        results: Optional[NetworkResults] = None,
    ):
        if not isinstance(gexp, pd.DataFrame):
            raise TypeError(f"gexp must be pd.DataFrame, got {type(gexp)}")
        if not isinstance(regulators, RegulatorMap):
            raise TypeError(f"regulators must be RegulatorMap, got {type(regulators)}")
        if annotation is not None and not isinstance(annotation, pd.DataFrame):
            raise TypeError(f"annotation must be pd.DataFrame, got {type(annotation)}")
        if results is not None and not isinstance(results, NetworkResults):
            raise TypeError(f"results must be NetworkResults, got {type(results)}")

        if not all(pd.api.types.is_numeric_dtype(dtype) for dtype in gexp.dtypes):
            raise ValueError("gexp must contain only numeric columns")
        if not gexp.index.is_unique:
            raise ValueError("gexp row labels (gene ids) must be unique")

        missing = [rid for rid in regulators.ids if rid not in gexp.index]
        if missing:
            raise ValueError(
                f"{len(missing)} regulator ids are not rows of gexp: {missing[:5]}"
            )

        if results is not None:
            self._validate_results(results, gexp.index, regulators)

        if annotation is None:
            annotation = pd.DataFrame({'ID': gexp.index.astype(str)}, index=gexp.index)

        self._gexp = gexp
        self._regulators = regulators
        self._annotation = annotation
        self._params = params if params is not None else NetworkParams()
        self._results = results

    @staticmethod
    def _validate_results(
        results: NetworkResults,
        genes: pd.Index,
        regulators: RegulatorMap,
    ) -> None:
        tn_ref, tn_dpi = results.tn_ref, results.tn_dpi
        if not tn_ref.index.equals(genes):
            raise ValueError(
                "tn_ref rows must match gexp rows exactly. "
                f"Got {len(tn_ref.index)} rows for {len(genes)} genes."
            )
        absent = [rid for rid in regulators.ids if rid not in tn_ref.columns]
        if absent:
            raise ValueError(f"Regulator ids missing from tn_ref columns: {absent[:5]}")
        if tn_dpi.shape != tn_ref.shape:
            raise ValueError(
                f"tn_dpi shape {tn_dpi.shape} must match tn_ref shape {tn_ref.shape}"
            )
        if not (tn_dpi.index.equals(tn_ref.index) and tn_dpi.columns.equals(tn_ref.columns)):
            raise ValueError("tn_dpi labels must match tn_ref labels")

    @property
    def gexp(self) -> pd.DataFrame:
        return self._gexp

    @property
    def regulators(self) -> RegulatorMap:
        return self._regulators

    @property
    def annotation(self) -> pd.DataFrame:
        return self._annotation

    @property
    def params(self) -> NetworkParams:
        return self._params

    @property
    def results(self) -> Optional[NetworkResults]:
        return self._results

    @property
    def genes(self) -> pd.Index:
        """The gene universe (rows of the expression matrix)."""
        return self._gexp.index

    @property
    def is_processed(self) -> bool:
        return self._results is not None

    def incidence(self, regulator_ids: Iterable[str], kind: str = 'ref') -> pd.DataFrame:
        """
        Columns of the association matrix for the given regulator ids.

        Args:
            regulator_ids: Regulator ids (column labels)
            kind: 'ref' for the reference network, 'dpi' for the filtered one

        Raises:
            ValueError: If the network has no results or kind is unknown
        """
        if self._results is None:
            raise ValueError("Network has no association results; run the inference first")
        if kind == 'ref':
            matrix = self._results.tn_ref
        elif kind == 'dpi':
            matrix = self._results.tn_dpi
        else:
            raise ValueError(f"kind must be 'ref' or 'dpi', got '{kind}'")
        return matrix.loc[:, list(regulator_ids)]

    def __repr__(self) -> str:
        status = "processed" if self.is_processed else "unprocessed"
        return (
            f"RegulatoryNetwork({len(self.genes)} genes × {self._gexp.shape[1]} samples, "
            f"{len(self._regulators)} regulators, {status})"
        )


class DualRegulonSet:
    """
    Two regulatory networks with disjoint regulator sets, plus the table of
    evaluated regulator pairs.

    Attributes:
        first: Network for the first regulator set
        second: Network for the second regulator set
        motifs: One row per evaluated pair, index = unique pair labels,
            columns include 'Regulon1', 'Regulon2' and 'R'
    """

    def __init__(
        self,
        first: RegulatoryNetwork,
        second: RegulatoryNetwork,
        motifs: pd.DataFrame,
    ):
        for label, net in (('first', first), ('second', second)):
            if not isinstance(net, RegulatoryNetwork):
                raise TypeError(f"{label} must be RegulatoryNetwork, got {type(net)}")
        if not isinstance(motifs, pd.DataFrame):
            raise TypeError(f"motifs must be pd.DataFrame, got {type(motifs)}")
        if not motifs.index.is_unique:
            dupes = motifs.index[motifs.index.duplicated()].unique().tolist()
            raise ValueError(f"Pair labels must be unique, duplicated: {dupes[:5]}")

        for kind in ('ids', 'names'):
            overlap = set(getattr(first.regulators, kind)) & set(getattr(second.regulators, kind))
            if overlap:
                raise ValueError(
                    f"Regulator sets must not overlap, shared {kind}: {sorted(overlap)[:5]}"
                )

        self._first = first
        self._second = second
        self._motifs = motifs

    @property
    def first(self) -> RegulatoryNetwork:
        return self._first

    @property
    def second(self) -> RegulatoryNetwork:
        return self._second

    @property
    def motifs(self) -> pd.DataFrame:
        return self._motifs

    def __repr__(self) -> str:
        return (
            f"DualRegulonSet({len(self._first.regulators)} + "
            f"{len(self._second.regulators)} regulators, {len(self._motifs)} pairs)"
        )
