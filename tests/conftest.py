"""Shared fixtures: small gene-set libraries with engineered overlaps."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from geneset_graph import EnrichmentRecord, GeneSet, GeneSetGraph, NetworkConfig


def make_node_df(names, direction="Up"):
    config = NetworkConfig()
    return pd.DataFrame(
        {
            "size": [5] * len(names),
            "direction": [direction] * len(names),
            "color": [config.color_for(direction)] * len(names),
            "p_adjust": [0.01] * len(names),
        },
        index=pd.Index(list(names), name="name"),
    )


def make_graph(n_nodes, edges, prefix="GOBP_NODE"):
    """GeneSetGraph over ``n_nodes`` nodes from (i, j) pairs, every weight 1."""
    names = [f"{prefix}_{i}" for i in range(n_nodes)]
    pairs = sorted((min(i, j), max(i, j)) for i, j in edges)
    a = np.array([p[0] for p in pairs], dtype=np.int64)
    b = np.array([p[1] for p in pairs], dtype=np.int64)
    return GeneSetGraph.from_edges(make_node_df(names), a, b, np.ones(len(pairs)))


@pytest.fixture
def six_gene_sets():
    """
    A, B, C form a triangle (pairwise Jaccard 0.5), D shares nothing,
    E and F overlap at Jaccard 0.3.
    """
    return [
        GeneSet("GOBP_FATTY_ACID_OXIDATION", {"g1", "g2", "g3"}),
        GeneSet("KEGG_FATTY_ACID_METABOLISM", {"g2", "g3", "g4"}),
        GeneSet("REACTOME_FATTY_ACID_TRANSPORT", {"g1", "g3", "g4"}),
        GeneSet("HALLMARK_HYPOXIA", {"g10", "g11"}),
        GeneSet("GOBP_T_CELL_ACTIVATION", {f"g{i}" for i in range(20, 27)}),
        GeneSet("KEGG_T_CELL_RECEPTOR_SIGNALING_PATHWAY", {f"g{i}" for i in range(24, 30)}),
    ]


@pytest.fixture
def six_records():
    return [
        EnrichmentRecord("GOBP_FATTY_ACID_OXIDATION", "Up", 0.001),
        EnrichmentRecord("KEGG_FATTY_ACID_METABOLISM", "Up", 0.004),
        EnrichmentRecord("REACTOME_FATTY_ACID_TRANSPORT", "Mixed", 0.02),
        EnrichmentRecord("HALLMARK_HYPOXIA", "Down", 0.01),
        EnrichmentRecord("GOBP_T_CELL_ACTIVATION", "Down", 0.03),
        EnrichmentRecord("KEGG_T_CELL_RECEPTOR_SIGNALING_PATHWAY", "down", 0.04),
    ]


@pytest.fixture
def bridged_triangles():
    """Two triangles 0-1-2 and 3-4-5 joined by the bridge 2-3."""
    return make_graph(6, [(0, 1), (0, 2), (1, 2), (3, 4), (3, 5), (4, 5), (2, 3)])


@pytest.fixture
def graph_factory():
    return make_graph
