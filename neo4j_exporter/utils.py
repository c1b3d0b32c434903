"""Lookup and creation helpers for nodes and relationships.

Every helper takes the access layer as its first argument and keeps no
state between calls. Identifiers (labels, relationship types, property
keys) are embedded in the query text quoted or validated; values are
always passed as bound parameters.
"""

from typing import Any, Iterable, Mapping

from .exceptions import Neo4jQueryError
from .models import Found, NodeHandle, NotFound, RelationshipHandle

UTILS_CODE = "NEO4JUTILS"


def quote_identifier(name: str) -> str:
    """Backtick-quote a label or relationship type."""
    return "`" + str(name).replace("`", "``") + "`"


def format_labels(labels: Iterable[str]) -> str:
    """
    Format labels as a node pattern suffix.

    Example:
        format_labels(["A", "B"]) -> ":`A`:`B`"
        format_labels([]) -> ""
    """
    quoted = [quote_identifier(label) for label in labels]
    if not quoted:
        return ""
    return ":" + ":".join(quoted)


def format_where(properties: Mapping[str, Any], alias: str) -> str:
    """
    Format an equality WHERE clause with one named parameter per key.

    Returns a single space when there is nothing to match on.

    Raises:
        ValueError: If a key is not a plain identifier
    """
    terms = []
    for key in properties:
        if not isinstance(key, str) or not key.isidentifier():
            raise ValueError(f"Invalid property key: {key!r}")
        terms.append(f"{alias}.{key}=${key}")
    if not terms:
        return " "
    return " WHERE " + " AND ".join(terms)


def _first(result) -> Any:
    return next(iter(result), None)


def get_node(al, labels: Iterable[str], properties: Mapping[str, Any]) -> Found | NotFound:
    """
    Find a node by its labels and properties.

    Returns:
        Found with the first matching node, or NotFound
    """
    req = None
    try:
        req = f"MATCH (o{format_labels(labels)}){format_where(properties, 'o')} RETURN o AS node"
        record = _first(al.execute_query(req, dict(properties)))
        if record is None:
            return NotFound()
        return Found(NodeHandle.from_entity(al, record["node"]))
    except Exception as e:
        al.error(f"Failed to get the node. Request : {req}", e)
        raise Neo4jQueryError("Failed to get the node.", e, f"{UTILS_CODE}_GET_NODE", query=req)


def sort_nodes_by_label(al, ids: list[int]) -> dict[str, list[NodeHandle]]:
    """
    Group nodes by their first label.

    Returns:
        Dict of label -> nodes, in the order the rows came back
    """
    req = (
        "MATCH (o) WHERE id(o) IN $idList "
        "RETURN DISTINCT o AS node, labels(o)[0] AS label"
    )
    try:
        grouped: dict[str, list[NodeHandle]] = {}
        seen = set()
        for record in al.execute_query(req, {"idList": list(ids)}):
            node = NodeHandle.from_entity(al, record["node"])
            if node.element_id in seen:
                continue
            seen.add(node.element_id)
            grouped.setdefault(record["label"], []).append(node)
        return grouped
    except Exception as e:
        al.error(f"Failed to build the node map. Request : {req}", e)
        raise Neo4jQueryError("Failed to build the node map.", e, f"{UTILS_CODE}_SORT_NODES", query=req)


def create_node(al, labels: Iterable[str], properties: Mapping[str, Any]) -> NodeHandle:
    """
    Create a node with the given labels and properties.

    Mutations already applied are not undone on failure; that is up to
    the enclosing transaction.
    """
    try:
        node = al.create_node()
        for label in labels:
            node.add_label(label)
        for key, value in properties.items():
            node.set_property(key, value)
        return node
    except Exception as e:
        al.error("Failed to create the node.", e)
        raise Neo4jQueryError("Failed to create the node.", e, f"{UTILS_CODE}_CREATE_NODE")


def _endpoint_where(al) -> str:
    tmp = quote_identifier(al.temp_id_property)
    return f"WHERE a.{tmp}=$start AND b.{tmp}=$end "


def get_relationship(al, rel_type: str, start: Any, end: Any) -> Found | NotFound:
    """
    Find a relationship of a type between two endpoints matched by temporary id.

    Returns:
        Found with the first matching relationship, or NotFound
    """
    req = None
    try:
        req = (
            f"MATCH (a)-[r:{quote_identifier(rel_type)}]-(b) "
            f"{_endpoint_where(al)}"
            "RETURN r AS relationship"
        )
        record = _first(al.execute_query(req, {"start": start, "end": end}))
        if record is None:
            return NotFound()
        return Found(RelationshipHandle.from_entity(al, record["relationship"]))
    except Exception as e:
        al.error(f"Failed to get the relationship. Request : {req}", e)
        raise Neo4jQueryError("Failed to get the relationship.", e, f"{UTILS_CODE}_GET_REL", query=req)


def create_relationship(
    al,
    rel_type: str,
    start: Any,
    end: Any,
    properties: Mapping[str, Any] | None = None,
) -> RelationshipHandle:
    """
    Merge a relationship between two endpoints matched by temporary id.

    Raises:
        Neo4jQueryError: If the query fails or an endpoint cannot be matched
    """
    req = None
    try:
        req = (
            "MATCH (a), (b) "
            f"{_endpoint_where(al)}"
            f"MERGE (a)-[r:{quote_identifier(rel_type)}]-(b) "
            "RETURN r AS relationship"
        )
        record = _first(al.execute_query(req, {"start": start, "end": end}))
        if record is None:
            raise LookupError("Failed to create the relationship. No return resulted.")

        rel = RelationshipHandle.from_entity(al, record["relationship"])
        for key, value in (properties or {}).items():
            rel.set_property(key, value)
        return rel
    except Exception as e:
        al.error(f"Failed to create the relationship. Request : {req}", e)
        raise Neo4jQueryError("Failed to create the relationship.", e, f"{UTILS_CODE}_CREATE_REL", query=req)
