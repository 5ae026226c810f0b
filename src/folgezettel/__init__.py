"""folgezettel - hierarchical note identifiers for Markdown vaults."""

__version__ = "0.1.0"
