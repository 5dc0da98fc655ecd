"""
Core utilities for the gene-set network package.
Contains timing helpers and the numba kernels used by the graph stages.
"""
import time
from collections import defaultdict

import numpy as np
import scipy.sparse as sp
from numba import njit, prange

class TimingStats:
    """Utility class to track timing statistics for pipeline stages"""
    def __init__(self):
        self.stats = defaultdict(list)
        self.current_timers = {}

    def start(self, operation):
        """Start timing an operation"""
        self.current_timers[operation] = time.time()

    def end(self, operation):
        """End timing an operation and record the elapsed time"""
        if operation in self.current_timers:
            elapsed = time.time() - self.current_timers[operation]
            self.stats[operation].append(elapsed)
            del self.current_timers[operation]
            return elapsed
        return None

    def get_stats(self, as_dict=False):
        """Get statistics for all operations"""
        result = {}
        for op, times in self.stats.items():
            result[op] = {
                'count': len(times),
                'total': sum(times),
                'mean': sum(times) / len(times) if times else 0,
            }

        if as_dict:
            return result

        lines = ["Stage timings:"]
        for op, stats in sorted(result.items(), key=lambda x: x[1]['total'], reverse=True):
            lines.append(f"  • {op}: {stats['total']:.3f}s total, "
                        f"{stats['count']} calls")
        return "\n".join(lines)

@njit(parallel=True, cache=True)
def jaccard_from_intersections(intersections, sizes):
    """
    Jaccard index for every pair of sets, given pairwise intersection sizes.

    Parameters:
    -----------
    intersections : numpy.ndarray
        (n, n) int64 matrix of shared member counts
    sizes : numpy.ndarray
        (n,) int64 set sizes

    Returns:
    --------
    numpy.ndarray
        (n, n) float64 matrix with a zero diagonal
    """
    n = sizes.shape[0]
    out = np.zeros((n, n), dtype=np.float64)
    for i in prange(n):
        for j in range(n):
            if i == j:
                continue
            inter = intersections[i, j]
            union = sizes[i] + sizes[j] - inter
            if union > 0:
                out[i, j] = inter / union
    return out

@njit(cache=True)
def _build_csr_arrays_from_pairs(a, b, w, n):
    # a<b, unique
    deg = np.zeros(n, np.int64)
    m = a.size
    for i in range(m):
        deg[a[i]] += 1
        deg[b[i]] += 1

    indptr = np.empty(n + 1, np.int64)
    indptr[0] = 0
    for i in range(n):
        indptr[i + 1] = indptr[i] + deg[i]

    nnz = indptr[n]
    indices = np.empty(nnz, np.int64)
    data = np.empty(nnz, np.float64)

    cursor = indptr[:-1].copy()
    for i in range(m):
        u = a[i]; v = b[i]; wt = w[i]
        pu = cursor[u]; indices[pu] = v; data[pu] = wt; cursor[u] = pu + 1
        pv = cursor[v]; indices[pv] = u; data[pv] = wt; cursor[v] = pv + 1

    return indptr, indices, data

@njit(cache=True)
def _row_sort_inplace(indptr, indices, data):
    for i in range(indptr.size - 1):
        s = indptr[i]; e = indptr[i+1]
        # degrees are small, insertion sort per row
        for j in range(s + 1, e):
            key_idx = indices[j]
            key_val = data[j]
            k = j - 1
            while k >= s and indices[k] > key_idx:
                indices[k + 1] = indices[k]
                data[k + 1] = data[k]
                k -= 1
            indices[k + 1] = key_idx
            data[k + 1] = key_val

def csr_from_undirected_edges(a, b, w, n_nodes):
    """
    Symmetric CSR matrix from unique undirected pairs a[k] < b[k] with values w[k].
    Column indices are sorted within each row.
    """
    a = np.asarray(a, dtype=np.int64)
    b = np.asarray(b, dtype=np.int64)
    w = np.asarray(w, dtype=np.float64)
    n = int(n_nodes)

    indptr, indices, data = _build_csr_arrays_from_pairs(a, b, w, n)
    _row_sort_inplace(indptr, indices, data)

    return sp.csr_matrix((data, indices, indptr), shape=(n, n))

@njit(cache=True)
def _edge_betweenness_csr(indptr, indices, edge_ids, n_nodes, n_edges):
    # Brandes accumulation, unweighted and undirected
    betweenness = np.zeros(n_edges, dtype=np.float64)
    sigma = np.zeros(n_nodes, dtype=np.float64)
    delta = np.zeros(n_nodes, dtype=np.float64)
    dist = np.empty(n_nodes, dtype=np.int64)
    queue = np.empty(n_nodes, dtype=np.int64)

    for s in range(n_nodes):
        for v in range(n_nodes):
            sigma[v] = 0.0
            delta[v] = 0.0
            dist[v] = -1
        sigma[s] = 1.0
        dist[s] = 0
        queue[0] = s
        head = 0
        tail = 1
        while head < tail:
            v = queue[head]
            head += 1
            for k in range(indptr[v], indptr[v + 1]):
                w = indices[k]
                if dist[w] < 0:
                    dist[w] = dist[v] + 1
                    queue[tail] = w
                    tail += 1
                if dist[w] == dist[v] + 1:
                    sigma[w] += sigma[v]

        # dependencies, in reverse BFS order
        for pos in range(tail - 1, 0, -1):
            w = queue[pos]
            for k in range(indptr[w], indptr[w + 1]):
                v = indices[k]
                if dist[v] == dist[w] - 1:
                    c = sigma[v] / sigma[w] * (1.0 + delta[w])
                    betweenness[edge_ids[k]] += c
                    delta[v] += c

    # every unordered pair was seen from both ends
    return betweenness / 2.0

def edge_betweenness_from_pairs(a, b, n_nodes):
    """
    Edge betweenness for the undirected graph given by pairs a[k] < b[k].

    Parameters:
    -----------
    a, b : array-like of int
        Edge endpoints, one entry per undirected edge
    n_nodes : int
        Number of nodes

    Returns:
    --------
    numpy.ndarray
        Betweenness per edge, aligned with the input pair order
    """
    n_edges = len(a)
    if n_edges == 0:
        return np.zeros(0, dtype=np.float64)
    csr = csr_from_undirected_edges(a, b, np.arange(n_edges), n_nodes)
    edge_ids = csr.data.astype(np.int64)
    return _edge_betweenness_csr(csr.indptr.astype(np.int64), csr.indices.astype(np.int64),
                                 edge_ids, int(n_nodes), n_edges)
