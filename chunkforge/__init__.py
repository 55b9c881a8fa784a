"""ChunkForge - content chunking engine for retrieval pipelines.

Splits plain text, Markdown and source code into bounded, overlapping
chunks that respect syntactic boundaries where possible.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
