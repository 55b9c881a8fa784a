"""
Retrieval-side configuration.

Only the reconstruction of original content from stored chunks lives in
this package; search and ranking belong to the vector store.
"""

from dataclasses import dataclass


@dataclass
class RetrievalConfig:
    """Original-content reconstruction settings."""

    # Characters of trailing text compared against the next chunk's prefix
    reconstruction_overlap: int = 200

    def __post_init__(self) -> None:
        assert (
            self.reconstruction_overlap >= 0
        ), "reconstruction_overlap cannot be negative"
