"""
Core services shared by every ChunkForge module.

- exceptions: ChunkForgeError hierarchy with error codes and fix hints
- logging: StructuredLogger / get_logger with Rich console output
- config: dataclass configuration loaded from YAML with env overrides
- env: bounded environment variable readers
"""
