"""
Configuration Management for ChunkForge.

Dataclass hierarchy mapped onto an optional YAML file
(chunkforge.yaml or config.yaml in the working directory), with
${VAR:default} expansion and CHUNKFORGE_* environment overrides.

    from chunkforge.core.config import Config, load_config

    config = load_config()
    options = config.chunking.to_options("README.md")
"""

from chunkforge.core.config.config import Config
from chunkforge.core.config.chunking import ChunkingConfig, ParserConfig
from chunkforge.core.config.retrieval import RetrievalConfig
from chunkforge.core.config_loaders import load_config, save_config

__all__ = [
    "Config",
    "ChunkingConfig",
    "ParserConfig",
    "RetrievalConfig",
    "load_config",
    "save_config",
]
