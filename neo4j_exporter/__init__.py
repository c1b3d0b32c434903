"""Neo4j exporter data-access package."""

__version__ = "1.0.0"

from .exceptions import (
    ErrorKind,
    ExporterError,
    Neo4jQueryError,
    Neo4jRuntimeError,
)
from .models import (
    Found,
    NodeHandle,
    NotFound,
    RelationshipHandle,
)
from .utils import (
    create_node,
    create_relationship,
    format_labels,
    format_where,
    get_node,
    get_relationship,
    sort_nodes_by_label,
)
from .access import GraphConnection, Neo4jAl

__all__ = [
    "ErrorKind",
    "ExporterError",
    "Neo4jQueryError",
    "Neo4jRuntimeError",
    "Found",
    "NotFound",
    "NodeHandle",
    "RelationshipHandle",
    "format_labels",
    "format_where",
    "get_node",
    "sort_nodes_by_label",
    "create_node",
    "get_relationship",
    "create_relationship",
    "GraphConnection",
    "Neo4jAl",
]
