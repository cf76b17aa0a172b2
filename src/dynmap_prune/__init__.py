"""
Dynmap marker pruning.

- selection: region/chunk selection list -> SelectionSet
- prune: keep/delete decision, two-pass document pruning, reporting
- model: marker document I/O and value types
"""
from dynmap_prune.errors import PruneError
from dynmap_prune.model.models import PruneMode, SelectionArea

__all__ = ["PruneError", "PruneMode", "SelectionArea"]
