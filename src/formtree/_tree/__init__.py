"""Resolved form trees.

Key types and functions:
- FormTree: Base of the resolved node types (Leaf, Combine, Transform, Named)
- resolve_tree / resolve_tree_async: Turn a Form into a FormTree
- lookup / query_field: Address sub-forms by path
- map_view: Change the error view type of a tree
"""

from ._nodes import Combine, FormTree, Leaf, Named, Transform
from ._query import children, debug_paths, format_tree, get_ref, lookup, pop_name, query_field, to_field
from ._resolution import resolve_tree, resolve_tree_async
from ._view import map_view

__all__ = [
    "Combine",
    "FormTree",
    "Leaf",
    "Named",
    "Transform",
    "children",
    "debug_paths",
    "format_tree",
    "get_ref",
    "lookup",
    "map_view",
    "pop_name",
    "query_field",
    "resolve_tree",
    "resolve_tree_async",
    "to_field",
]
