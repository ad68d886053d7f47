"""Application services composed from the repository and domain layers."""

from .rulebook_compiler import RulebookCompiler, cache_key, compiled_version

__all__ = [
    "RulebookCompiler",
    "cache_key",
    "compiled_version",
]
