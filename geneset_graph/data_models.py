"""
Typed records shared across the gene-set network pipeline.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple

import pandas as pd


class InvalidInputError(ValueError):
    """Raised when gene sets or enrichment records cannot be ingested."""

    def __init__(self, message, name=None):
        super().__init__(message)
        self.name = name


class Direction(str, Enum):
    UP = "Up"
    DOWN = "Down"
    MIXED = "Mixed"

    @classmethod
    def parse(cls, value, name=None):
        """Parse a direction case-insensitively."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        raise InvalidInputError(
            f"Unknown direction {value!r} for gene set {name!r}; "
            f"expected one of {[m.value for m in cls]}",
            name=name,
        )


@dataclass(frozen=True)
class GeneSet:
    """A named collection of gene identifiers."""

    name: str
    genes: frozenset

    def __post_init__(self):
        object.__setattr__(self, "genes", frozenset(self.genes))
        if not self.genes:
            raise InvalidInputError(f"Gene set {self.name!r} has no members", name=self.name)

    @property
    def library(self) -> str:
        return self.name.split("_", 1)[0]

    def __len__(self):
        return len(self.genes)


@dataclass(frozen=True)
class EnrichmentRecord:
    name: str
    direction: Direction
    p_adjust: float
    gene_count: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "direction", Direction.parse(self.direction, self.name))
        p_adjust = float(self.p_adjust)
        if not 0.0 <= p_adjust <= 1.0:
            raise InvalidInputError(
                f"Adjusted p-value {self.p_adjust!r} of gene set {self.name!r} is outside [0, 1]",
                name=self.name,
            )
        object.__setattr__(self, "p_adjust", p_adjust)


@dataclass
class PruneResult:
    """Output of the two pruning passes."""

    graph: "GeneSetGraph"
    singletons: pd.DataFrame
    small_clusters: pd.DataFrame


@dataclass
class CommunityResult:
    graph: "GeneSetGraph"
    membership: pd.Series
    modularity: float
    crossing_edges: Tuple[Tuple[str, str], ...]
    dropped: pd.DataFrame

    @property
    def n_clusters(self) -> int:
        return int(self.membership.nunique())

    def clusters(self) -> Dict[int, Tuple[str, ...]]:
        """Cluster id -> member names, in node order."""
        groups: Dict[int, Tuple[str, ...]] = {}
        for cluster_id in sorted(self.membership.unique()):
            members = self.membership.index[self.membership == cluster_id]
            groups[int(cluster_id)] = tuple(members)
        return groups


REPORT_COLUMNS = ["name", "direction", "p_adjust", "size"]


def report_frame(node_df: pd.DataFrame, names: Iterable[str], group=None) -> pd.DataFrame:
    """
    Build a reportable table of removed gene sets.

    Parameters:
    -----------
    node_df : pandas.DataFrame
        Node table indexed by gene-set name
    names : iterable of str
        Names of the removed nodes
    group : sequence of int, optional
        Grouping id per removed node (small-cluster reports only)
    """
    names = list(names)
    columns = REPORT_COLUMNS + (["group"] if group is not None else [])
    if not names:
        return pd.DataFrame(columns=columns)

    rows = node_df.loc[names]
    report = pd.DataFrame({
        "name": names,
        "direction": [Direction(d).value for d in rows["direction"]],
        "p_adjust": rows["p_adjust"].to_numpy(dtype=float),
        "size": rows["size"].to_numpy(dtype=int),
    })
    if group is not None:
        report["group"] = list(group)
    return report


@dataclass
class NetworkResult:
    """Everything produced by one pipeline run."""

    similarity_graph: "GeneSetGraph"
    pruned: PruneResult
    communities: CommunityResult
    labels: Dict[int, str]
    nodes: pd.DataFrame
    edges: pd.DataFrame
    clusters: pd.DataFrame
    timing: Dict[str, dict] = field(default_factory=dict)

    @property
    def singletons(self) -> pd.DataFrame:
        return self.pruned.singletons

    @property
    def small_clusters(self) -> pd.DataFrame:
        return self.pruned.small_clusters

    @property
    def membership(self) -> pd.Series:
        return self.communities.membership

    def summary(self) -> str:
        lines = [
            f"Similarity graph: {self.similarity_graph}",
            f"Singletons removed: {len(self.singletons)}",
            f"Small-cluster gene sets removed: {len(self.small_clusters)}",
            f"Communities: {self.communities.n_clusters} "
            f"(modularity {self.communities.modularity:.3f}, "
            f"{len(self.communities.crossing_edges)} crossing edges removed)",
        ]
        for cluster_id, label in self.labels.items():
            size = int((self.membership == cluster_id).sum())
            lines.append(f"  • cluster {cluster_id} ({size} gene sets): {label or '<no label>'}")
        return "\n".join(lines)
