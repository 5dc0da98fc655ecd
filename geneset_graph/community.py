"""
Divisive community detection on gene-set graphs.

Communities are found with Girvan–Newman edge removal on the unweighted
graph: the edge of highest betweenness is removed repeatedly and the
partition of highest modularity along the way is kept. Edges between
communities are then cut and components that became too small are dropped.
"""
import numpy as np
import pandas as pd
from scipy.sparse.csgraph import connected_components

from .core_utilities import csr_from_undirected_edges, edge_betweenness_from_pairs
from .data_models import CommunityResult
from .pruning import remove_small_components

TIE_TOLERANCE = 1e-9

def edge_betweenness(graph):
    """
    Betweenness of every edge of the unweighted graph.

    Returns:
    --------
    numpy.ndarray
        One value per edge, aligned with graph.edge_arrays()
    """
    a, b, _ = graph.edge_arrays()
    return edge_betweenness_from_pairs(a, b, graph.n_nodes)

def modularity(adjacency, labels):
    """
    Newman modularity of a partition of an unweighted undirected graph.

    Parameters:
    -----------
    adjacency : scipy.sparse matrix
        Symmetric adjacency; any stored value counts as one edge
    labels : array-like of int
        Community label per node

    Returns:
    --------
    float
        Sum over communities of L_c/m - (D_c/2m)^2; 0.0 for an edgeless graph
    """
    labels = np.asarray(labels)
    coo = adjacency.tocoo()
    upper = coo.row < coo.col
    rows, cols = coo.row[upper], coo.col[upper]
    m = len(rows)
    if m == 0:
        return 0.0

    n_labels = int(labels.max()) + 1
    degrees = np.bincount(np.concatenate([rows, cols]), minlength=len(labels))
    inside = labels[rows] == labels[cols]
    within = np.bincount(labels[rows][inside], minlength=n_labels)
    degree_sums = np.bincount(labels, weights=degrees, minlength=n_labels)
    return float(np.sum(within / m) - np.sum((degree_sums / (2.0 * m)) ** 2))

def _select_edge(betweenness):
    """Index of the highest-betweenness edge; ties go to the lowest (u, v) pair."""
    top = betweenness.max()
    candidates = np.flatnonzero(betweenness >= top - TIE_TOLERANCE * max(1.0, top))
    return int(candidates[0])

def girvan_newman(graph, verbose=False):
    """
    Divisive edge-betweenness clustering.

    Parameters:
    -----------
    graph : GeneSetGraph
        Graph to split; edge weights are ignored
    verbose : bool, default=False
        Whether to print progress messages

    Returns:
    --------
    labels : numpy.ndarray
        Community label per node for the partition of highest modularity
        (the earliest one when several share the maximum)
    best_q : float
        Its modularity
    """
    n = graph.n_nodes
    if n == 0:
        return np.zeros(0, dtype=np.int64), 0.0

    adjacency = graph.binary_adjacency()
    a, b, _ = graph.edge_arrays()
    active = np.ones(len(a), dtype=bool)

    n_parts, labels = connected_components(adjacency, directed=False)
    best_labels, best_q = labels, modularity(adjacency, labels)
    n_removed = 0

    while active.any():
        live = np.flatnonzero(active)
        betweenness = edge_betweenness_from_pairs(a[live], b[live], n)
        removed = live[_select_edge(betweenness)]
        active[removed] = False
        n_removed += 1

        remaining = csr_from_undirected_edges(a[active], b[active], np.ones(active.sum()), n)
        n_now, labels = connected_components(remaining, directed=False)
        if n_now > n_parts:
            n_parts = n_now
            q = modularity(adjacency, labels)
            if q > best_q + TIE_TOLERANCE:
                best_labels, best_q = labels, q

    if verbose:
        print(f"  • Girvan–Newman removed {n_removed} edges; best partition has "
              f"{len(np.unique(best_labels))} communities (modularity {best_q:.3f})")
    return best_labels, best_q

def _relabel_by_size(labels):
    """Cluster ids 1..K by descending size; equal sizes keep first-appearance order."""
    uniques, first_seen, counts = np.unique(labels, return_index=True, return_counts=True)
    order = sorted(range(len(uniques)), key=lambda k: (-counts[k], first_seen[k]))
    mapping = {uniques[k]: rank + 1 for rank, k in enumerate(order)}
    return np.array([mapping[label] for label in labels], dtype=np.int64)

def detect_communities(graph, min_size=3, verbose=False):
    """
    Split a pruned graph into communities and re-apply the minimum size filter.

    Parameters:
    -----------
    graph : GeneSetGraph
        Output of the pruner
    min_size : int, default=3
        Smallest community size that is kept
    verbose : bool, default=False
        Whether to print progress messages

    Returns:
    --------
    CommunityResult
        Final graph (crossing edges removed, weights kept), membership
        name -> cluster id ordered by descending size, modularity of the
        selected partition, the crossing edges and the gene sets dropped
        because their community was smaller than min_size
    """
    labels, best_q = girvan_newman(graph, verbose=verbose)

    a, b, _ = graph.edge_arrays()
    crossing = labels[a] != labels[b] if len(a) else np.zeros(0, dtype=bool)
    names = graph.node_names
    crossing_edges = tuple((names[i], names[j]) for i, j in zip(a[crossing], b[crossing]))

    split = graph.without_edges(zip(a[crossing], b[crossing])) if crossing.any() else graph
    final, dropped = remove_small_components(split, min_size, verbose=verbose)

    if final.n_nodes:
        cluster_ids = _relabel_by_size(final.component_labels)
    else:
        cluster_ids = np.zeros(0, dtype=np.int64)
    membership = pd.Series(cluster_ids, index=pd.Index(final.node_names, name="name"),
                           name="cluster", dtype=np.int64)

    if verbose:
        print(f"  • {len(crossing_edges)} crossing edges cut, "
              f"{membership.nunique()} communities kept")
    return CommunityResult(
        graph=final,
        membership=membership,
        modularity=best_q,
        crossing_edges=crossing_edges,
        dropped=dropped,
    )
