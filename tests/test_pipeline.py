"""End-to-end tests of the gene-set network pipeline."""

from __future__ import annotations

import pytest

from geneset_graph import (
    EnrichmentRecord,
    GeneSet,
    InvalidInputError,
    NetworkConfig,
    build_enrichment_network,
)


def test_six_gene_set_scenario(six_gene_sets, six_records):
    result = build_enrichment_network(six_gene_sets, six_records)

    assert list(result.singletons["name"]) == ["HALLMARK_HYPOXIA"]
    assert list(result.small_clusters["name"]) == [
        "GOBP_T_CELL_ACTIVATION",
        "KEGG_T_CELL_RECEPTOR_SIGNALING_PATHWAY",
    ]
    assert list(result.small_clusters["group"]) == [2, 2]

    assert result.membership.to_dict() == {
        "GOBP_FATTY_ACID_OXIDATION": 1,
        "KEGG_FATTY_ACID_METABOLISM": 1,
        "REACTOME_FATTY_ACID_TRANSPORT": 1,
    }
    assert result.labels == {1: "fatty acid"}

    assert len(result.nodes) == 3
    assert list(result.nodes["display_label"]) == [
        "FATTY\nACID\nOXIDATION", "FATTY\nACID\nMETABOLISM", "FATTY\nACID\nTRANSPORT",
    ]
    assert list(result.edges["weight"]) == [2, 2, 2]

    row = result.clusters.iloc[0]
    assert row["label"] == "fatty acid"
    assert row["size"] == 3
    assert (row["n_up"], row["n_down"], row["n_mixed"]) == (2, 0, 1)
    assert row["min_p_adjust"] == pytest.approx(0.001)

    assert set(result.timing) == {"similarity_graph", "pruning", "communities", "labels", "export"}
    assert "fatty acid" in result.summary()


def test_every_node_accounted_for(six_gene_sets, six_records):
    result = build_enrichment_network(six_gene_sets, six_records)
    reported = (set(result.singletons["name"]) | set(result.small_clusters["name"])
                | set(result.communities.dropped["name"]) | set(result.membership.index))
    assert reported == {r.name for r in six_records}


def test_nothing_survives(six_gene_sets, six_records):
    result = build_enrichment_network(six_gene_sets, six_records[3:])

    assert result.membership.empty
    assert result.labels == {}
    assert result.nodes.empty and result.edges.empty and result.clusters.empty
    assert "Communities: 0" in result.summary()


def test_stricter_threshold_leaves_no_edges(six_gene_sets, six_records):
    result = build_enrichment_network(six_gene_sets, six_records, NetworkConfig(similarity_threshold=0.5))
    assert result.similarity_graph.n_edges == 0
    assert len(result.singletons) == 6
    assert result.membership.empty


def test_smaller_min_size_keeps_pairs(six_gene_sets, six_records):
    result = build_enrichment_network(six_gene_sets, six_records, NetworkConfig(min_component_size=2))
    assert result.small_clusters.empty
    assert result.membership.nunique() == 2
    assert result.membership["GOBP_T_CELL_ACTIVATION"] == 2


def test_two_themes_split_by_betweenness():
    def genes(*ids):
        return {f"g{i}" for i in ids}

    # lipid triangle and immune triangle joined by one overlapping pair
    gene_sets = [
        GeneSet("GOBP_LIPID_STORAGE", genes(1, 2, 3)),
        GeneSet("KEGG_LIPID_TRANSPORT", genes(2, 3, 4)),
        GeneSet("WP_LIPID_DROPLET", genes(1, 3, 4, 50, 51)),
        GeneSet("GOBP_INTERFERON_GAMMA", genes(50, 51, 11, 12, 13)),
        GeneSet("REACTOME_INTERFERON_ALPHA", genes(11, 12, 14)),
        GeneSet("HALLMARK_INTERFERON_RESPONSE", genes(12, 13, 14)),
    ]
    records = [EnrichmentRecord(gs.name, "Up", 0.01) for gs in gene_sets]
    result = build_enrichment_network(gene_sets, records)

    assert result.similarity_graph.n_edges == 7
    assert result.communities.crossing_edges == (("WP_LIPID_DROPLET", "GOBP_INTERFERON_GAMMA"),)
    assert result.labels == {1: "lipid", 2: "interferon"}


def test_invalid_input_fails_before_graph_construction(six_gene_sets, six_records):
    records = six_records + [EnrichmentRecord("KEGG_MISSING", "Up", 0.01)]
    with pytest.raises(InvalidInputError) as excinfo:
        build_enrichment_network(six_gene_sets, records)
    assert excinfo.value.name == "KEGG_MISSING"


def test_verbose_run_prints_summary(six_gene_sets, six_records, capsys):
    build_enrichment_network(six_gene_sets, six_records, verbose=True)
    out = capsys.readouterr().out
    assert "[Gene-set network] START" in out
    assert "cluster 1" in out
