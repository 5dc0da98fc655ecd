"""
SimilarityGraphGenerator - Builds a thresholded Jaccard similarity graph over enriched gene sets.
"""
from collections import OrderedDict

import numpy as np
import pandas as pd
from scipy import sparse

from .config import NetworkConfig
from .core_utilities import TimingStats, jaccard_from_intersections
from .data_models import GeneSet, InvalidInputError
from .geneset_graph import GeneSetGraph

def validate_inputs(gene_sets, records, universe=None):
    """
    Check gene sets and enrichment records before graph construction.

    Parameters:
    -----------
    gene_sets : iterable of GeneSet, or mapping name -> iterable of genes
        The gene-set library
    records : iterable of EnrichmentRecord
        Enrichment results, one per gene set
    universe : iterable of str, optional
        Genes considered present; members outside it are ignored

    Returns:
    --------
    OrderedDict
        name -> member frozenset, in record order

    Raises:
    -------
    InvalidInputError
        For empty gene sets, duplicate record names, records without a gene
        set and gene counts that disagree with the member sets
    """
    library = {}
    if hasattr(gene_sets, "items"):
        gene_sets = [GeneSet(name, genes) for name, genes in gene_sets.items()]
    for gene_set in gene_sets:
        previous = library.get(gene_set.name)
        if previous is not None and previous != gene_set.genes:
            raise InvalidInputError(
                f"Gene set {gene_set.name!r} is defined twice with different members",
                name=gene_set.name)
        library[gene_set.name] = gene_set.genes

    present = frozenset(universe) if universe is not None else None

    members = OrderedDict()
    for record in records:
        if record.name in members:
            raise InvalidInputError(f"Duplicate enrichment record for {record.name!r}", name=record.name)
        if record.name not in library:
            raise InvalidInputError(
                f"Enrichment record {record.name!r} has no matching gene set", name=record.name)

        genes = library[record.name]
        if present is not None:
            genes = genes & present
            if not genes:
                raise InvalidInputError(
                    f"Gene set {record.name!r} has no members in the gene universe", name=record.name)
        if record.gene_count is not None and record.gene_count != len(genes):
            raise InvalidInputError(
                f"Gene set {record.name!r} reports {record.gene_count} genes "
                f"but {len(genes)} are present", name=record.name)
        members[record.name] = genes

    return members

def membership_matrix(member_sets):
    """
    Binary set-by-gene incidence matrix.

    Returns:
    --------
    matrix : scipy.sparse.csr_matrix
        (n_sets, n_genes) int64 matrix
    vocabulary : list of str
        Sorted gene identifiers labelling the columns
    """
    vocabulary = sorted(set().union(*member_sets)) if member_sets else []
    column = {gene: idx for idx, gene in enumerate(vocabulary)}

    rows, cols = [], []
    for row, genes in enumerate(member_sets):
        for gene in genes:
            rows.append(row)
            cols.append(column[gene])

    data = np.ones(len(rows), dtype=np.int64)
    matrix = sparse.csr_matrix((data, (rows, cols)), shape=(len(member_sets), len(vocabulary)))
    return matrix, vocabulary

def intersection_matrix(member_sets):
    """Pairwise shared-member counts with the diagonal forced to 0."""
    matrix, _ = membership_matrix(member_sets)
    intersections = (matrix @ matrix.T).toarray().astype(np.int64)
    np.fill_diagonal(intersections, 0)
    return intersections

def jaccard_matrix(intersections, sizes):
    """Pairwise Jaccard indices from shared counts and set sizes."""
    intersections = np.ascontiguousarray(intersections, dtype=np.int64)
    sizes = np.ascontiguousarray(sizes, dtype=np.int64)
    return jaccard_from_intersections(intersections, sizes)

class SimilarityGraphGenerator:
    """
    Graph generator for gene-set similarity networks.

    An edge joins two gene sets when their Jaccard index exceeds the
    similarity threshold; the edge weight is the number of shared genes.
    """

    def __init__(self, config=None, verbose=None):
        """
        Parameters:
        -----------
        config : NetworkConfig, optional
            Thresholds and palette. Defaults to NetworkConfig().
        verbose : bool, optional
            Whether to print progress messages. Defaults to config.verbose.
        """
        self.config = config if config is not None else NetworkConfig()
        self.verbose = self.config.verbose if verbose is None else verbose
        self.timing = TimingStats()

    def node_table(self, members, records):
        """Node attributes for the validated gene sets, in record order."""
        by_name = {record.name: record for record in records}
        names = list(members)
        directions = [by_name[name].direction for name in names]
        return pd.DataFrame(
            {
                "size": [len(members[name]) for name in names],
                "direction": [d.value for d in directions],
                "color": [self.config.color_for(d) for d in directions],
                "p_adjust": [by_name[name].p_adjust for name in names],
            },
            index=pd.Index(names, name="name"),
        )

    def build(self, gene_sets, records, universe=None):
        """
        Validate the inputs and build the similarity graph.

        Parameters:
        -----------
        gene_sets : iterable of GeneSet or mapping name -> genes
        records : iterable of EnrichmentRecord
        universe : iterable of str, optional

        Returns:
        --------
        GeneSetGraph
        """
        records = list(records)
        self.timing.start("validate")
        members = validate_inputs(gene_sets, records, universe)
        self.timing.end("validate")

        node_df = self.node_table(members, records)
        n = len(node_df)
        if self.verbose:
            print(f"[Similarity graph] {n} gene sets, Jaccard threshold {self.config.similarity_threshold}")

        if n == 0:
            return GeneSetGraph(None, node_df)

        self.timing.start("similarity")
        member_sets = list(members.values())
        intersections = intersection_matrix(member_sets)
        sizes = node_df["size"].to_numpy(dtype=np.int64)
        jaccard = jaccard_matrix(intersections, sizes)
        self.timing.end("similarity")

        a, b = np.nonzero(np.triu(jaccard > self.config.similarity_threshold, k=1))
        weights = intersections[a, b]
        graph = GeneSetGraph.from_edges(node_df, a, b, weights)

        if self.verbose:
            print(f"  • {graph}")
        return graph

def build_similarity_graph(gene_sets, records, config=None, universe=None):
    """Convenience wrapper around SimilarityGraphGenerator.build."""
    return SimilarityGraphGenerator(config).build(gene_sets, records, universe)
