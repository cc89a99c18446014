"""Tests for merging the two sub-networks of a dual regulon set."""

import pandas as pd
import pytest

from regduals.core.merge import GeneUniverseMismatchError, merge_networks
from regduals.core.network import DualRegulonSet

from conftest import (
    DEFAULT_EDGES,
    DEFAULT_MOTIFS,
    GENES,
    REGULATORS_1,
    REGULATORS_2,
    make_expression,
    make_network,
)


class TestMergeNetworks:
    """Tests for merge_networks()."""

    def test_regulator_count(self, duals):
        merged = merge_networks(duals)
        n1, n2 = len(duals.first.regulators), len(duals.second.regulators)
        assert len(merged.regulators) == n1 + n2
        assert merged.results.tn_ref.shape[1] == n1 + n2
        assert merged.results.tn_dpi.shape[1] == n1 + n2

    def test_column_order(self, duals):
        merged = merge_networks(duals)
        expected = ["ID_TF1", "ID_TF3", "ID_TF2", "ID_TF4"]
        assert list(merged.regulators.ids) == expected
        assert list(merged.results.tn_ref.columns) == expected
        assert list(merged.results.tn_dpi.columns) == expected

    def test_columns_taken_from_owning_network(self, duals):
        merged = merge_networks(duals)
        pd.testing.assert_series_equal(
            merged.results.tn_ref["ID_TF1"], duals.first.results.tn_ref["ID_TF1"]
        )
        pd.testing.assert_series_equal(
            merged.results.tn_dpi["ID_TF4"], duals.second.results.tn_dpi["ID_TF4"]
        )

    def test_shared_data_from_first(self, duals):
        merged = merge_networks(duals)
        assert merged.gexp is duals.first.gexp
        assert merged.annotation is duals.first.annotation
        assert merged.params is duals.first.params

    def test_names_resolve_across_sets(self, duals):
        merged = merge_networks(duals)
        assert merged.regulators.resolve("TF1") == ("TF1", "ID_TF1")
        assert merged.regulators.resolve("ID_TF4") == ("TF4", "ID_TF4")

    def test_inputs_untouched(self, duals):
        before = duals.first.results.tn_ref.copy()
        merge_networks(duals)
        pd.testing.assert_frame_equal(duals.first.results.tn_ref, before)
        assert len(duals.first.regulators) == 2

    def test_unprocessed_network_rejected(self):
        gexp = make_expression()
        first = make_network(REGULATORS_1, DEFAULT_EDGES, gexp)
        second = make_network(REGULATORS_2, DEFAULT_EDGES, gexp, processed=False)
        duals = DualRegulonSet(first, second, DEFAULT_MOTIFS.copy())
        with pytest.raises(ValueError, match="second sub-network"):
            merge_networks(duals)

    def test_gene_universe_mismatch(self):
        first = make_network(REGULATORS_1, DEFAULT_EDGES, make_expression())
        second = make_network(
            REGULATORS_2, DEFAULT_EDGES, make_expression(genes=GENES + ["G9"])
        )
        duals = DualRegulonSet(first, second, DEFAULT_MOTIFS.copy())
        with pytest.raises(GeneUniverseMismatchError, match="same gene universe"):
            merge_networks(duals)

    def test_gene_order_mismatch(self):
        """Same genes in another order would misalign rows; rejected too."""
        first = make_network(REGULATORS_1, DEFAULT_EDGES, make_expression())
        second = make_network(
            REGULATORS_2, DEFAULT_EDGES, make_expression(genes=list(reversed(GENES)))
        )
        duals = DualRegulonSet(first, second, DEFAULT_MOTIFS.copy())
        with pytest.raises(GeneUniverseMismatchError):
            merge_networks(duals)

    def test_mismatch_is_value_error(self):
        first = make_network(REGULATORS_1, DEFAULT_EDGES, make_expression())
        second = make_network(
            REGULATORS_2, DEFAULT_EDGES, make_expression(genes=GENES + ["G9"])
        )
        with pytest.raises(ValueError):
            merge_networks(DualRegulonSet(first, second, DEFAULT_MOTIFS.copy()))
