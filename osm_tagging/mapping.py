import functools
import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Tuple, Union

from .exceptions import InvalidTagMapping
from .lookups import DEFAULT_TAG_MAPPING

logger = logging.getLogger(__name__)


class OSMTag(NamedTuple):
    id: int
    key: str
    value: str

    @property
    def tag_key(self) -> str:
        return _tag_key(self.key, self.value)


def _tag_key(key: str, value: str) -> str:
    return f"{key}={value}"


def _parse_entry(entry: Union[str, Dict]) -> Tuple[str, str]:
    """
    Split a mapping entry into its key and value.

    Args:
        entry: either a "key=value" string or a dict with "key" and "value"

    Returns
        (key, value) tuple
    """
    if isinstance(entry, str):
        key, sep, value = entry.partition("=")
        if not sep or not key:
            raise InvalidTagMapping(f"Expected 'key=value', got {entry!r}")
        return key, value

    if isinstance(entry, dict):
        try:
            key, value = entry["key"], entry["value"]
        except KeyError as e:
            raise InvalidTagMapping(f"Mapping entry {entry!r} is missing {e}") from e
        if not isinstance(key, str) or not isinstance(value, str):
            raise InvalidTagMapping(f"Key and value must be strings: {entry!r}")
        return key, value

    raise InvalidTagMapping(f"Unsupported mapping entry: {entry!r}")


def _build_section(entries: Iterable, section: str) -> Dict[Tuple[str, str], OSMTag]:
    tags = dict()
    for tag_id, entry in enumerate(entries):
        key, value = _parse_entry(entry)
        if (key, value) in tags:
            raise InvalidTagMapping(f"'{_tag_key(key, value)}' declared twice in '{section}' section")
        tags[(key, value)] = OSMTag(tag_id, key, value)
    return tags


class TagMapping:
    """
    Read-only lookup of known POI and way tags.

    POI and way identifiers are separate spaces, each numbered from 0 in the
    order the tags were declared. Lookups are exact: no case folding or
    trimming is applied to keys or values.
    """

    __slots__ = ("_poi_tags", "_way_tags")

    def __init__(self, poi_tags: Mapping[Tuple[str, str], OSMTag], way_tags: Mapping[Tuple[str, str], OSMTag]):
        object.__setattr__(self, "_poi_tags", MappingProxyType(dict(poi_tags)))
        object.__setattr__(self, "_way_tags", MappingProxyType(dict(way_tags)))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"TagMapping(poi_tags={len(self._poi_tags)}, way_tags={len(self._way_tags)})"

    @classmethod
    def from_dict(cls, document: Dict[str, List]) -> "TagMapping":
        """
        Build a mapping from a document with "poi" and "way" sections.

        Args:
            document: dict of section name to a list of "key=value" strings or
                {"key": ..., "value": ...} dicts; missing sections are empty

        Returns:
            mapping: the immutable TagMapping
        """
        if not isinstance(document, dict):
            raise InvalidTagMapping("Tag mapping document must be a JSON object")

        poi_tags = _build_section(document.get("poi") or [], "poi")
        way_tags = _build_section(document.get("way") or [], "way")
        logger.debug(f"Tag mapping built with {len(poi_tags)} POI tags and {len(way_tags)} way tags")
        return cls(poi_tags, way_tags)

    @property
    def poi_tags(self) -> Mapping[Tuple[str, str], OSMTag]:
        return self._poi_tags

    @property
    def way_tags(self) -> Mapping[Tuple[str, str], OSMTag]:
        return self._way_tags

    def get_poi_tag(self, key: str, value: str) -> Optional[OSMTag]:
        return self._poi_tags.get((key, value))

    def get_way_tag(self, key: str, value: str) -> Optional[OSMTag]:
        return self._way_tags.get((key, value))


def load_tag_mapping(path: Union[str, Path]) -> TagMapping:
    """
    Read a tag mapping from a JSON file.

    Args:
        path: location of a JSON document with "poi" and "way" sections

    Returns:
        mapping: the immutable TagMapping
    """
    path = Path(path)
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise InvalidTagMapping(f"{path} is not valid JSON: {e}") from e

    logger.debug(f"Loading tag mapping from {path}")
    return TagMapping.from_dict(document)


@functools.lru_cache(maxsize=None)
def default_tag_mapping() -> TagMapping:
    """The bundled tag mapping, built on first use and shared afterwards."""
    return TagMapping.from_dict(DEFAULT_TAG_MAPPING)
