from geneset_graph import EnrichmentRecord, GeneSet, NetworkConfig, build_enrichment_network

# 1. A small gene-set library: one fatty-acid theme, one isolated set and a loose pair
gene_sets = [
    GeneSet("GOBP_FATTY_ACID_OXIDATION", {"ACADM", "CPT1A", "HADHA"}),
    GeneSet("KEGG_FATTY_ACID_METABOLISM", {"CPT1A", "HADHA", "ACSL1"}),
    GeneSet("REACTOME_FATTY_ACID_TRANSPORT", {"ACADM", "HADHA", "ACSL1"}),
    GeneSet("HALLMARK_HYPOXIA", {"HIF1A", "VEGFA"}),
    GeneSet("GOBP_T_CELL_ACTIVATION", {"CD3E", "CD28", "LCK", "ZAP70", "CD4", "CD8A", "IL2"}),
    GeneSet("KEGG_T_CELL_RECEPTOR_SIGNALING_PATHWAY", {"CD4", "CD8A", "IL2", "NFATC1", "FOS", "JUN"}),
]

# 2. Enrichment results produced upstream
records = [
    EnrichmentRecord("GOBP_FATTY_ACID_OXIDATION", "Up", 0.001),
    EnrichmentRecord("KEGG_FATTY_ACID_METABOLISM", "Up", 0.004),
    EnrichmentRecord("REACTOME_FATTY_ACID_TRANSPORT", "Mixed", 0.02),
    EnrichmentRecord("HALLMARK_HYPOXIA", "Down", 0.01),
    EnrichmentRecord("GOBP_T_CELL_ACTIVATION", "Down", 0.03),
    EnrichmentRecord("KEGG_T_CELL_RECEPTOR_SIGNALING_PATHWAY", "Down", 0.04),
]

# 3. Run the pipeline
result = build_enrichment_network(gene_sets, records, NetworkConfig(verbose=True))

# 4. Tables for the rendering layer
print(result.singletons)
print(result.small_clusters)
print(result.nodes)
print(result.edges)
print(result.clusters)
