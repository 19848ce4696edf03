"""
behaviorgraph — Default Node Catalogue
======================================
The node types of the visual module editor, as plain data grouped by
category.  ``default_library()`` builds a fresh NodeLibrary every call, so
callers are free to register extra definitions on the result:

    library = default_library()
    library.register(NodeDefinition(type="shake", ...), category="Effects")
    source = compile_graph(graph, library)
"""

from collections import OrderedDict

from ..core.NodeDefinition import NodeLibrary
from . import (
    arithmetic,
    comparison,
    debug,
    drawing,
    events,
    gameobject,
    inputs,
    logic,
    organization,
    values,
    variables,
)

CATEGORIES = OrderedDict([
    ("Events", events.NODES),
    ("Variables", variables.NODES),
    ("Values", values.NODES),
    ("Logic", logic.NODES),
    ("Math", arithmetic.NODES),
    ("Comparison", comparison.NODES),
    ("GameObject", gameobject.NODES),
    ("Drawing", drawing.NODES),
    ("Debug", debug.NODES),
    ("Input", inputs.NODES),
    ("Organization", organization.NODES),
])


def default_library() -> NodeLibrary:
    return NodeLibrary.from_categories(CATEGORIES)


__all__ = ["CATEGORIES", "default_library"]
