# geneset_graph/config.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, FrozenSet

from matplotlib.colors import to_hex

# Versioned domain stoplist for cluster labels (v1): generic biological
# vocabulary plus source-library prefixes.
DOMAIN_STOPWORDS_VERSION = "1"
DOMAIN_STOPWORDS: FrozenSet[str] = frozenset({
    "process", "regulation", "pathway", "pathways", "positive", "negative",
    "cellular", "cell", "response", "activity", "involved", "mediated",
    "signaling", "signalling", "biological", "molecular", "function",
    "component", "gobp", "gomf", "gocc", "go", "kegg", "reactome",
    "hallmark", "biocarta", "pid", "wp",
})

DEFAULT_DIRECTION_PALETTE = {
    "Up": "#d62728",
    "Down": "#1f77b4",
    "Mixed": "#7f7f7f",
}


@dataclass(frozen=True)
class NetworkConfig:
    similarity_threshold: float = 0.2      # edge iff Jaccard > threshold
    min_component_size: int = 3            # components below this are dropped
    min_term_frequency: int = 2            # label terms must occur at least this often
    max_label_terms: int = 4
    max_labeled_members: int = 5           # clusters above this get no node labels
    direction_palette: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_DIRECTION_PALETTE))
    domain_stopwords: FrozenSet[str] = DOMAIN_STOPWORDS
    verbose: bool = False

    def __post_init__(self):
        if not 0.0 <= self.similarity_threshold < 1.0:
            raise ValueError(f"similarity_threshold must lie in [0, 1), got {self.similarity_threshold}")
        if self.min_component_size < 1:
            raise ValueError(f"min_component_size must be >= 1, got {self.min_component_size}")
        if self.min_term_frequency < 1:
            raise ValueError(f"min_term_frequency must be >= 1, got {self.min_term_frequency}")
        if self.max_label_terms < 1:
            raise ValueError(f"max_label_terms must be >= 1, got {self.max_label_terms}")
        if self.max_labeled_members < 0:
            raise ValueError(f"max_labeled_members must be >= 0, got {self.max_labeled_members}")

        missing = {"Up", "Down", "Mixed"} - set(self.direction_palette)
        if missing:
            raise ValueError(f"direction_palette is missing colours for {sorted(missing)}")
        palette = {key: to_hex(value) for key, value in self.direction_palette.items()}
        object.__setattr__(self, "direction_palette", palette)
        object.__setattr__(self, "domain_stopwords",
                           frozenset(word.lower() for word in self.domain_stopwords))

    def color_for(self, direction) -> str:
        """Display colour for a regulation direction."""
        return self.direction_palette[getattr(direction, "value", direction)]
