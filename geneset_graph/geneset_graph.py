"""
GeneSetGraph - Core data structure for similarity graphs over gene sets.
"""
import numpy as np
import pandas as pd
from scipy import sparse
from scipy.sparse.csgraph import connected_components

from .core_utilities import csr_from_undirected_edges

NODE_COLUMNS = ["size", "direction", "color", "p_adjust"]

class GeneSetGraph:
    """
    Core data structure representing a gene-set similarity graph.
    Encapsulates the weighted adjacency matrix and the node table.

    Graphs are derived data: every operation that changes nodes or edges
    returns a new GeneSetGraph and leaves this one untouched.
    """

    def __init__(self, graph_matrix=None, node_df=None):
        """
        Initialize a GeneSetGraph.

        Parameters:
        -----------
        graph_matrix : scipy.sparse matrix, optional
            Symmetric adjacency matrix; values are shared-gene counts.
            If None, an edgeless graph over node_df is created.
        node_df : pandas.DataFrame, optional
            Node table indexed by gene-set name with columns
            size, direction, color and p_adjust. If None, an empty graph is created.
        """
        if node_df is None:
            node_df = pd.DataFrame(columns=NODE_COLUMNS, index=pd.Index([], name="name"))
        missing = [col for col in NODE_COLUMNS if col not in node_df.columns]
        if missing:
            raise ValueError(f"node_df is missing columns {missing}")

        n_nodes = len(node_df)
        if graph_matrix is None:
            graph_matrix = sparse.csr_matrix((n_nodes, n_nodes), dtype=np.float64)
        if graph_matrix.shape != (n_nodes, n_nodes):
            raise ValueError(f"Adjacency shape {graph_matrix.shape} does not match {n_nodes} nodes")

        graph = sparse.csr_matrix(graph_matrix, dtype=np.float64)
        if n_nodes:
            # no self loops
            graph = (sparse.triu(graph, k=1) + sparse.tril(graph, k=-1)).tocsr()
            graph.eliminate_zeros()
            graph.sort_indices()
            if abs(graph - graph.T).sum() > 0:
                raise ValueError("Adjacency matrix must be symmetric")

        self.node_df = node_df
        self.graph = graph
        self.n_nodes = n_nodes
        self.compute_components()

    @classmethod
    def from_edges(cls, node_df, a, b, w):
        """Build a graph from unique undirected pairs a[k] < b[k] with weights w[k]."""
        matrix = csr_from_undirected_edges(a, b, w, len(node_df))
        return cls(matrix, node_df)

    @property
    def node_names(self):
        return list(self.node_df.index)

    @property
    def n_edges(self):
        return self.graph.nnz // 2

    def compute_components(self):
        """Compute connected components of the graph"""
        if self.n_nodes == 0:
            self.n_components = 0
            self.component_labels = np.zeros(0, dtype=np.int64)
            self.component_sizes = np.zeros(0, dtype=np.int64)
            return self.component_labels
        self.n_components, self.component_labels = connected_components(self.graph, directed=False)
        self.component_sizes = np.bincount(self.component_labels)
        return self.component_labels

    def get_component(self, component_idx):
        """
        Get nodes in a specific component.

        Parameters:
        -----------
        component_idx : int
            Index of the component

        Returns:
        --------
        nodes : numpy.ndarray
            Indices of nodes in the component
        """
        if component_idx < 0 or component_idx >= self.n_components:
            raise ValueError(f"Component index {component_idx} out of range [0, {self.n_components-1}]")

        return np.where(self.component_labels == component_idx)[0]

    def get_neighbors(self, node_idx):
        """
        Get neighbors of a node.

        Returns:
        --------
        neighbors : numpy.ndarray
            Neighbor indices
        weights : numpy.ndarray
            Corresponding shared-gene counts
        """
        if node_idx < 0 or node_idx >= self.n_nodes:
            raise ValueError(f"Node index {node_idx} out of range [0, {self.n_nodes-1}]")

        start, end = self.graph.indptr[node_idx], self.graph.indptr[node_idx+1]
        return self.graph.indices[start:end], self.graph.data[start:end]

    def get_edge_weight(self, i, j):
        """Shared-gene count on edge (i, j), 0 when the edge is absent."""
        return self.graph[i, j]

    def get_all_degrees(self):
        """Get the degrees of all nodes"""
        return np.diff(self.graph.indptr)

    def edge_arrays(self):
        """
        Edges as parallel arrays, each undirected edge once.

        Returns:
        --------
        a, b : numpy.ndarray
            Endpoints with a < b, sorted by (a, b)
        w : numpy.ndarray
            Edge weights
        """
        if self.n_edges == 0:
            empty = np.zeros(0, dtype=np.int64)
            return empty, empty.copy(), np.zeros(0, dtype=np.float64)
        upper = sparse.triu(self.graph, k=1).tocoo()
        order = np.lexsort((upper.col, upper.row))
        return (upper.row[order].astype(np.int64),
                upper.col[order].astype(np.int64),
                upper.data[order])

    def get_edge_list(self):
        """
        Get a list of all edges in the graph.

        Returns:
        --------
        edges : list of tuples
            List of (name_i, name_j, weight) tuples
        """
        names = self.node_names
        a, b, w = self.edge_arrays()
        return [(names[i], names[j], int(wt)) for i, j, wt in zip(a, b, w)]

    def binary_adjacency(self):
        """Unweighted copy of the adjacency matrix"""
        binary = self.graph.copy()
        binary.data = np.ones_like(binary.data)
        return binary

    def subgraph(self, node_indices):
        """Induced subgraph on node_indices, kept in their original order."""
        node_indices = np.sort(np.asarray(node_indices, dtype=np.int64))
        if len(node_indices) == 0:
            return GeneSetGraph(None, self.node_df.iloc[node_indices])
        matrix = self.graph[node_indices][:, node_indices]
        return GeneSetGraph(matrix, self.node_df.iloc[node_indices])

    def without_edges(self, pairs):
        """Copy of the graph with the given (i, j) index pairs removed."""
        matrix = self.graph.tolil(copy=True)
        for i, j in pairs:
            matrix[i, j] = 0
            matrix[j, i] = 0
        return GeneSetGraph(matrix.tocsr(), self.node_df)

    def __str__(self):
        """String representation of the graph"""
        return (f"GeneSetGraph with {self.n_nodes} nodes, "
                f"{self.n_edges} edges, {self.n_components} components")

    def __repr__(self):
        return self.__str__()
