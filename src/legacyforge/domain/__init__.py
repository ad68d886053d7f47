"""Pure rules and board logic for LegacyForge.

* :mod:`topology`: indexed board graph with adjacency and integrity queries.
* :mod:`modifiers`: application of pack modifiers to a working rulebook.
* :mod:`search`: keyword/tag search, relevance ranking and id lookups.
* :mod:`errors`: the exception hierarchy shared across the package.

Nothing here performs I/O; documents arrive already validated from the
repository layer.
"""

from . import errors, modifiers, search, topology

__all__ = [
    "errors",
    "modifiers",
    "search",
    "topology",
]
