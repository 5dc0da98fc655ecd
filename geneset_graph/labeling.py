"""Word-frequency labels for gene-set communities."""
from __future__ import annotations

import re
from collections import Counter
from typing import Dict, Iterable, List

import pandas as pd
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS

from .config import DOMAIN_STOPWORDS

_NON_LETTERS = re.compile(r"[\W\d_]+")


def tokenize_name(name: str) -> List[str]:
    """Split a gene-set name on underscores into lowercase letter-only tokens."""
    tokens = []
    for raw in name.split("_"):
        token = _NON_LETTERS.sub("", raw.lower())
        if token:
            tokens.append(token)
    return tokens


def build_stoplist(domain_stopwords: Iterable[str] = DOMAIN_STOPWORDS) -> frozenset:
    return frozenset(ENGLISH_STOP_WORDS) | frozenset(word.lower() for word in domain_stopwords)


def term_frequencies(names: Iterable[str], stoplist: frozenset) -> Counter:
    """Occurrences of every non-stopword token across all names, in first-seen order."""
    counts: Counter = Counter()
    for name in names:
        for token in tokenize_name(name):
            if token not in stoplist:
                counts[token] += 1
    return counts


def cluster_label(
    names: Iterable[str],
    stoplist: frozenset | None = None,
    min_frequency: int = 2,
    max_terms: int = 4,
) -> str:
    """
    Label a cluster with its most frequent name tokens.

    Tokens occurring at least ``min_frequency`` times are ranked by count;
    ties keep the order in which tokens were first seen. Returns an empty
    string when no token qualifies.
    """
    if stoplist is None:
        stoplist = build_stoplist()
    counts = term_frequencies(names, stoplist)
    frequent = [(token, count) for token, count in counts.items() if count >= min_frequency]
    frequent.sort(key=lambda item: item[1], reverse=True)
    return " ".join(token for token, _ in frequent[:max_terms])


def label_clusters(
    membership: pd.Series,
    domain_stopwords: Iterable[str] = DOMAIN_STOPWORDS,
    min_frequency: int = 2,
    max_terms: int = 4,
) -> Dict[int, str]:
    """Label every cluster of a name -> cluster id membership, keyed by cluster id."""
    stoplist = build_stoplist(domain_stopwords)
    labels: Dict[int, str] = {}
    for cluster_id in sorted(membership.unique()):
        names = membership.index[membership == cluster_id]
        labels[int(cluster_id)] = cluster_label(names, stoplist, min_frequency, max_terms)
    return labels
