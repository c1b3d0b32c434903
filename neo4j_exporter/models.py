"""Data classes for graph entities and lookup results."""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Found(Generic[T]):
    """Lookup that matched a row."""
    value: T

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class NotFound:
    """Lookup that matched nothing."""

    def __bool__(self) -> bool:
        return False


@dataclass(eq=False)
class NodeHandle:
    """Reference to a node owned by the engine.

    Labels and properties are a snapshot taken when the handle was read,
    kept in sync with mutations issued through the handle.
    """
    access_layer: Any = field(repr=False)
    element_id: str
    labels: set[str] = field(default_factory=set)
    properties: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_entity(cls, access_layer: Any, node: Any) -> "NodeHandle":
        """Wrap a driver node."""
        return cls(
            access_layer=access_layer,
            element_id=node.element_id,
            labels=set(node.labels),
            properties=dict(node.items()),
        )

    def add_label(self, label: str) -> None:
        self.access_layer.add_label(self.element_id, label)
        self.labels.add(label)

    def set_property(self, key: str, value: Any) -> None:
        self.access_layer.set_property(self.element_id, key, value)
        self.properties[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.properties[key]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NodeHandle) and other.element_id == self.element_id

    def __hash__(self) -> int:
        return hash(self.element_id)


@dataclass(eq=False)
class RelationshipHandle:
    """Reference to a relationship owned by the engine."""
    access_layer: Any = field(repr=False)
    element_id: str
    type: str
    start_element_id: str | None = None
    end_element_id: str | None = None
    properties: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_entity(cls, access_layer: Any, rel: Any) -> "RelationshipHandle":
        """Wrap a driver relationship."""
        start, end = rel.start_node, rel.end_node
        return cls(
            access_layer=access_layer,
            element_id=rel.element_id,
            type=rel.type,
            start_element_id=start.element_id if start is not None else None,
            end_element_id=end.element_id if end is not None else None,
            properties=dict(rel.items()),
        )

    def set_property(self, key: str, value: Any) -> None:
        self.access_layer.set_relationship_property(self.element_id, key, value)
        self.properties[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.properties[key]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RelationshipHandle) and other.element_id == self.element_id

    def __hash__(self) -> int:
        return hash(self.element_id)
