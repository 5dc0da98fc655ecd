"""
Graph pruning: drop singleton gene sets, then drop connected components
that are too small to form a theme.
"""
import numpy as np

from .data_models import PruneResult, report_frame

def remove_singletons(graph, verbose=False):
    """
    Remove degree-0 nodes.

    Parameters:
    -----------
    graph : GeneSetGraph
        Input graph (left unchanged)
    verbose : bool, default=False
        Whether to print progress messages

    Returns:
    --------
    retained : GeneSetGraph
        Induced subgraph on nodes with at least one edge
    singletons : pandas.DataFrame
        Report of the removed gene sets
    """
    degrees = graph.get_all_degrees()
    keep = np.flatnonzero(degrees > 0)
    drop = np.flatnonzero(degrees == 0)

    names = graph.node_names
    singletons = report_frame(graph.node_df, [names[i] for i in drop])
    if verbose:
        print(f"  • Removed {len(drop)} singleton gene sets, {len(keep)} remain")
    return graph.subgraph(keep), singletons

def remove_small_components(graph, min_size=3, verbose=False):
    """
    Remove every connected component with fewer than min_size nodes.

    Edge weights are ignored; only connectivity matters.

    Parameters:
    -----------
    graph : GeneSetGraph
        Input graph (left unchanged)
    min_size : int, default=3
        Smallest component size that is kept
    verbose : bool, default=False
        Whether to print progress messages

    Returns:
    --------
    retained : GeneSetGraph
        Induced subgraph on the components of size >= min_size
    small_clusters : pandas.DataFrame
        Report of the removed gene sets; ``group`` is the 1-based index of
        the component each one belonged to before removal
    """
    labels = graph.component_labels
    sizes = graph.component_sizes
    small = sizes[labels] < min_size if graph.n_nodes else np.zeros(0, dtype=bool)

    keep = np.flatnonzero(~small)
    drop = np.flatnonzero(small)

    names = graph.node_names
    small_clusters = report_frame(
        graph.node_df,
        [names[i] for i in drop],
        group=[int(labels[i]) + 1 for i in drop],
    )
    if verbose:
        n_small = len(np.unique(labels[drop]))
        print(f"  • Removed {n_small} components smaller than {min_size} "
              f"({len(drop)} gene sets), {len(keep)} gene sets remain")
    return graph.subgraph(keep), small_clusters

def prune_graph(graph, min_size=3, verbose=False):
    """Run the singleton pass followed by the small-component pass."""
    without_singletons, singletons = remove_singletons(graph, verbose=verbose)
    retained, small_clusters = remove_small_components(without_singletons, min_size, verbose=verbose)
    return PruneResult(graph=retained, singletons=singletons, small_clusters=small_clusters)
