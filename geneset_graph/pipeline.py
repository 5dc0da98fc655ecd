"""
End-to-end gene-set network pipeline: similarity graph, pruning, community
detection, labels and export tables.
"""
import time

from .community import detect_communities
from .config import NetworkConfig
from .core_utilities import TimingStats
from .data_models import NetworkResult
from .geneset_graph_generator import SimilarityGraphGenerator
from .labeling import label_clusters
from .layout import cluster_table, export_edges, export_nodes
from .pruning import prune_graph

def build_enrichment_network(gene_sets, records, config=None, universe=None, verbose=None):
    """
    Full pipeline from enriched gene sets to labelled communities.

    Parameters:
    -----------
    gene_sets : iterable of GeneSet or mapping name -> genes
        Gene-set library; only sets named by a record become nodes
    records : iterable of EnrichmentRecord
        Enrichment results, already filtered for significance
    config : NetworkConfig, optional
        Thresholds, stoplist and palette. Defaults to NetworkConfig().
    universe : iterable of str, optional
        Genes considered present
    verbose : bool, optional
        Whether to print progress messages. Defaults to config.verbose.

    Returns:
    --------
    NetworkResult
    """
    config = config if config is not None else NetworkConfig()
    verbose = config.verbose if verbose is None else verbose
    timing = TimingStats()
    t0 = time.time()

    if verbose:
        print("[Gene-set network] START")

    timing.start("similarity_graph")
    generator = SimilarityGraphGenerator(config, verbose=verbose)
    similarity_graph = generator.build(gene_sets, records, universe)
    timing.end("similarity_graph")

    timing.start("pruning")
    pruned = prune_graph(similarity_graph, config.min_component_size, verbose=verbose)
    timing.end("pruning")

    timing.start("communities")
    communities = detect_communities(pruned.graph, config.min_component_size, verbose=verbose)
    timing.end("communities")

    timing.start("labels")
    labels = label_clusters(
        communities.membership,
        domain_stopwords=config.domain_stopwords,
        min_frequency=config.min_term_frequency,
        max_terms=config.max_label_terms,
    )
    timing.end("labels")

    timing.start("export")
    nodes = export_nodes(communities.graph, communities.membership, labels, config.max_labeled_members)
    edges = export_edges(communities.graph)
    clusters = cluster_table(communities.graph, communities.membership, labels)
    timing.end("export")

    result = NetworkResult(
        similarity_graph=similarity_graph,
        pruned=pruned,
        communities=communities,
        labels=labels,
        nodes=nodes,
        edges=edges,
        clusters=clusters,
        timing=timing.get_stats(as_dict=True),
    )
    if verbose:
        print(result.summary())
        print(timing.get_stats())
        print(f"[Gene-set network] done in {time.time() - t0:.2f}s")
    return result
