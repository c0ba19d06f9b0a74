import enum
from dataclasses import dataclass
from typing import Dict, NamedTuple, Optional, Sequence

from .lookups import DEFAULT_LAYER


class Tag(NamedTuple):
    key: str
    value: str


class EntityType(enum.Enum):
    NODE = "node"
    WAY = "way"
    RELATION = "relation"


@dataclass(frozen=True)
class Entity:
    """
    An OSM element reduced to what the tag extractors need.

    Args:
        id: OSM ID, only unique within an entity type
        type: node, way or relation
        tags: ordered (key, value) pairs, None is read as no tags
    """

    id: int
    type: EntityType
    tags: Optional[Sequence[Tag]] = None


@dataclass(frozen=True)
class SpecialFields:
    """
    Semantic fields extracted from an entity's tags.

    Layer is stored shifted so that the default ground layer (0) becomes 5.
    """

    name: Optional[str] = None
    ref: Optional[str] = None
    housenumber: Optional[str] = None
    layer: int = DEFAULT_LAYER
    elevation: int = 0
    relation_type: Optional[str] = None


def entity_from_element(element: Dict) -> Entity:
    """
    Build an Entity from an element of an overpass response.

    Args:
        element: element of any type from overpass response JSON

    Returns
        entity : Entity with the element's tags in JSON order
    """
    entity_type = EntityType(element["type"])
    tags = [Tag(key, value) for key, value in (element.get("tags") or {}).items()]
    return Entity(id=element["id"], type=entity_type, tags=tags)
