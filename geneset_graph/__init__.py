"""
Gene-set Graph Package - Similarity networks, communities and theme labels for enriched gene sets.
"""

# Import main classes for easy access
from .config import NetworkConfig, DOMAIN_STOPWORDS
from .data_models import (
    GeneSet,
    EnrichmentRecord,
    Direction,
    InvalidInputError,
    PruneResult,
    CommunityResult,
    NetworkResult,
)
from .geneset_graph import GeneSetGraph
from .geneset_graph_generator import SimilarityGraphGenerator, build_similarity_graph, validate_inputs
from .pruning import remove_singletons, remove_small_components, prune_graph
from .community import detect_communities, girvan_newman, edge_betweenness, modularity
from .labeling import cluster_label, label_clusters, tokenize_name
from .layout import node_display_label, node_display_labels, export_nodes, export_edges, cluster_table
from .pipeline import build_enrichment_network

# Define what gets imported with `from geneset_graph import *`
__all__ = [
    # Main classes
    'GeneSetGraph',
    'SimilarityGraphGenerator',
    'NetworkConfig',

    # Records
    'GeneSet',
    'EnrichmentRecord',
    'Direction',
    'InvalidInputError',
    'PruneResult',
    'CommunityResult',
    'NetworkResult',
    'DOMAIN_STOPWORDS',

    # Pipeline stages
    'build_similarity_graph',
    'validate_inputs',
    'remove_singletons',
    'remove_small_components',
    'prune_graph',
    'detect_communities',
    'girvan_newman',
    'edge_betweenness',
    'modularity',
    'cluster_label',
    'label_clusters',
    'tokenize_name',
    'node_display_label',
    'node_display_labels',
    'export_nodes',
    'export_edges',
    'cluster_table',
    'build_enrichment_network',
]

# Package metadata
__version__ = '1.0.0'
