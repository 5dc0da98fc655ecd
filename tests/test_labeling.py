"""Tests for name tokenization and cluster labels."""

from __future__ import annotations

import pandas as pd
import pytest

from geneset_graph import DOMAIN_STOPWORDS, cluster_label, label_clusters, tokenize_name
from geneset_graph.labeling import build_stoplist, term_frequencies


@pytest.mark.parametrize("name, tokens", [
    ("GOBP_RESPONSE_TO_IL-6", ["gobp", "response", "to", "il"]),
    ("HALLMARK_TNFA_SIGNALING_VIA_NFKB", ["hallmark", "tnfa", "signaling", "via", "nfkb"]),
    ("KEGG_ABC_TRANSPORTERS", ["kegg", "abc", "transporters"]),
    ("WP_1_2_3", ["wp"]),
    ("REACTOME_SEMA4D__(PLEXIN)", ["reactome", "semad", "plexin"]),
])
def test_tokenize_name(name, tokens):
    assert tokenize_name(name) == tokens


def test_stoplist_combines_english_and_domain_terms():
    stoplist = build_stoplist()
    assert {"the", "of", "and"} <= stoplist
    assert DOMAIN_STOPWORDS <= stoplist
    assert "fatty" not in stoplist


def test_frequencies_count_occurrences_across_names():
    counts = term_frequencies(["KEGG_HEME_HEME_TRANSPORT", "WP_HEME_UPTAKE"], build_stoplist())
    assert counts["heme"] == 3
    assert "kegg" not in counts and "wp" not in counts


def test_label_from_shared_tokens():
    names = ["GOBP_FATTY_ACID_OXIDATION", "KEGG_FATTY_ACID_METABOLISM", "REACTOME_FATTY_ACID_TRANSPORT"]
    assert cluster_label(names) == "fatty acid"


def test_ties_keep_first_seen_order():
    names = ["GOBP_IRON_TRANSPORT", "KEGG_HEME_TRANSPORT", "WP_HEME_IRON_TRANSPORT"]
    assert cluster_label(names) == "transport iron heme"


def test_at_most_four_terms():
    names = ["GOBP_LIPID_STEROL_BILE_HEME_IRON", "KEGG_LIPID_STEROL_BILE_HEME_IRON"]
    assert cluster_label(names) == "lipid sterol bile heme"
    assert cluster_label(names, max_terms=2) == "lipid sterol"


def test_no_repeated_token_gives_empty_label():
    assert cluster_label(["KEGG_APOPTOSIS", "REACTOME_AUTOPHAGY", "WP_NECROPTOSIS"]) == ""


def test_stopwords_are_case_insensitive():
    names = ["GOBP_POSITIVE_REGULATION_OF_CELLULAR_RESPONSE", "GOBP_Cellular_Response_Process"]
    assert cluster_label(names) == ""


def test_label_is_deterministic():
    names = ["GOBP_WNT_RECEPTOR_BINDING", "KEGG_WNT_RECEPTOR", "PID_WNT_CANONICAL_BINDING"]
    labels = {cluster_label(names) for _ in range(5)}
    assert labels == {"wnt receptor binding"}


def test_label_clusters_by_id():
    membership = pd.Series(
        [1, 1, 1, 2, 2, 2],
        index=[
            "GOBP_FATTY_ACID_OXIDATION", "KEGG_FATTY_ACID_METABOLISM", "REACTOME_FATTY_ACID_TRANSPORT",
            "KEGG_APOPTOSIS", "REACTOME_AUTOPHAGY", "WP_NECROPTOSIS",
        ],
    )
    assert label_clusters(membership) == {1: "fatty acid", 2: ""}


def test_custom_domain_stopwords():
    membership = pd.Series([1, 1], index=["KEGG_FATTY_ACID", "WP_FATTY_ACID"])
    assert label_clusters(membership, domain_stopwords={"FATTY"}) == {1: "acid"}
