"""
Export helpers for the rendering layer: cluster ordering, node display
labels and flat node/edge/cluster tables.
"""
import numpy as np
import pandas as pd

from .data_models import Direction

LABEL_SUFFIXES = frozenset({"PATHWAY", "SIGNALING"})
LINE_BREAK = "\n"

def cluster_order(membership):
    """Cluster ids by descending size, smaller id first on ties."""
    counts = membership.value_counts()
    return sorted((int(c) for c in counts.index), key=lambda c: (-counts[c], c))

def node_display_label(name):
    """
    Short display label for a gene set.

    Tokens 2 to 5 of the underscore-delimited name are kept (the library
    prefix is dropped), PATHWAY and SIGNALING tokens are removed and the
    rest are joined with line breaks.
    """
    tokens = name.split("_")[1:5]
    return LINE_BREAK.join(t for t in tokens if t and t.upper() not in LABEL_SUFFIXES)

def node_display_labels(membership, max_members=5):
    """
    Display label per node; nodes of clusters with more than max_members
    members get an empty label.
    """
    sizes = membership.map(membership.value_counts())
    labels = [
        node_display_label(name) if size <= max_members else ""
        for name, size in zip(membership.index, sizes)
    ]
    return pd.Series(labels, index=membership.index, name="display_label", dtype=object)

def export_nodes(graph, membership, cluster_labels, max_members=5):
    """
    Node table for rendering, ordered by cluster and then by node order.

    Parameters:
    -----------
    graph : GeneSetGraph
        Final community graph
    membership : pandas.Series
        name -> cluster id
    cluster_labels : dict
        cluster id -> label
    max_members : int, default=5
        Clusters larger than this get no per-node labels

    Returns:
    --------
    pandas.DataFrame
        Columns name, cluster, cluster_label, display_label, size,
        direction, color, p_adjust
    """
    columns = ["name", "cluster", "cluster_label", "display_label",
               "size", "direction", "color", "p_adjust"]
    if graph.n_nodes == 0:
        return pd.DataFrame(columns=columns)

    display = node_display_labels(membership, max_members)
    nodes = graph.node_df.loc[membership.index]
    table = pd.DataFrame({
        "name": list(membership.index),
        "cluster": membership.to_numpy(dtype=np.int64),
        "cluster_label": [cluster_labels.get(int(c), "") for c in membership],
        "display_label": display.to_numpy(),
        "size": nodes["size"].to_numpy(dtype=np.int64),
        "direction": nodes["direction"].to_numpy(),
        "color": nodes["color"].to_numpy(),
        "p_adjust": nodes["p_adjust"].to_numpy(dtype=float),
    })
    rank = {cluster_id: pos for pos, cluster_id in enumerate(cluster_order(membership))}
    table["_rank"] = table["cluster"].map(rank)
    table = table.sort_values("_rank", kind="stable").drop(columns="_rank")
    return table[columns].reset_index(drop=True)

def export_edges(graph):
    """Edge table (source, target, weight) with the raw shared-gene counts."""
    edges = graph.get_edge_list()
    return pd.DataFrame(edges, columns=["source", "target", "weight"]).astype({"weight": np.int64})

def cluster_table(graph, membership, cluster_labels):
    """One row per cluster: id, label, size, counts per direction and best p_adjust."""
    columns = ["cluster", "label", "size"] + [f"n_{d.value.lower()}" for d in Direction] + ["min_p_adjust"]
    rows = []
    for cluster_id in cluster_order(membership):
        members = membership.index[membership == cluster_id]
        nodes = graph.node_df.loc[members]
        row = {
            "cluster": cluster_id,
            "label": cluster_labels.get(cluster_id, ""),
            "size": len(members),
        }
        for d in Direction:
            row[f"n_{d.value.lower()}"] = int((nodes["direction"] == d.value).sum())
        row["min_p_adjust"] = float(nodes["p_adjust"].min())
        rows.append(row)
    return pd.DataFrame(rows, columns=columns)
