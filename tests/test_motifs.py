"""Tests for motif table normalization."""

import pandas as pd
import pytest

from regduals.core.motifs import (
    MotifNotFoundError,
    MotifSelectionError,
    PartialMotifMatchError,
    normalize_motif_table,
)


@pytest.fixture
def table():
    return pd.DataFrame(
        {
            "Regulon1": ["IRF8", "IRF1", "PRDM1"],
            "Regulon2": ["STAT1", "LMO4", "STAT4"],
            "R": [-0.42357, 0.31549, 0.7],
            "Pvalue": [0.001, 0.03, 0.2],
            "Jaccard": [0.2, 0.1, 0.4],
        },
        index=["IRF8.vs.STAT1", "IRF1.vs.LMO4", "PRDM1.vs.STAT4"],
    )


class TestNormalizeMotifTable:
    """Tests for normalize_motif_table()."""

    def test_all_rows_by_default(self, table):
        result = normalize_motif_table(table)
        assert list(result.index) == list(table.index)
        assert list(result.columns) == ["Regulon1", "Regulon2", "R"]

    def test_subset_in_requested_order(self, table):
        result = normalize_motif_table(table, ["PRDM1.vs.STAT4", "IRF8.vs.STAT1"])
        assert list(result.index) == ["PRDM1.vs.STAT4", "IRF8.vs.STAT1"]
        assert list(result["Regulon1"]) == ["PRDM1", "IRF8"]

    def test_r_rounded_to_two_decimals(self, table):
        result = normalize_motif_table(table)
        assert list(result["R"]) == [-0.42, 0.32, 0.7]

    def test_input_not_mutated(self, table):
        original = table.copy()
        normalize_motif_table(table, ["IRF8.vs.STAT1"])
        pd.testing.assert_frame_equal(table, original)

    def test_none_found(self, table):
        with pytest.raises(MotifNotFoundError):
            normalize_motif_table(table, ["MYC.vs.MAX"])

    def test_partial_match(self, table):
        with pytest.raises(PartialMotifMatchError, match="MYC.vs.MAX"):
            normalize_motif_table(table, ["IRF8.vs.STAT1", "MYC.vs.MAX"])

    def test_failure_kinds_are_distinct(self, table):
        with pytest.raises(MotifSelectionError) as none_found:
            normalize_motif_table(table, ["MYC.vs.MAX"])
        with pytest.raises(MotifSelectionError) as partial:
            normalize_motif_table(table, ["IRF8.vs.STAT1", "MYC.vs.MAX"])

        assert type(none_found.value) is MotifNotFoundError
        assert type(partial.value) is PartialMotifMatchError

    def test_missing_column(self, table):
        with pytest.raises(ValueError, match="Regulon2"):
            normalize_motif_table(table.drop(columns=["Regulon2"]))

    def test_empty_subset_list_is_not_found(self, table):
        """An empty request matches nothing."""
        with pytest.raises(MotifNotFoundError):
            normalize_motif_table(table, [])

    def test_single_label_string(self, table):
        result = normalize_motif_table(table, "IRF1.vs.LMO4")
        assert list(result.index) == ["IRF1.vs.LMO4"]
        assert list(result["Regulon2"]) == ["LMO4"]
