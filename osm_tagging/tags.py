import enum
import logging
import math
from typing import Iterable, List, Optional

from .exceptions import TagMappingNotInitialized
from .lookups import (
    AREA_FALSE_VALUES,
    AREA_TRUE_VALUES,
    DEFAULT_LAYER,
    INT_RANGE,
    LAYER_BYTE_RANGE,
    LAYER_SHIFT_RANGE,
    LINEAR_KEYS,
    MAX_ELEVATION,
    NAME_LANGUAGE_PREFIX,
)
from .mapping import TagMapping
from .model import Entity, SpecialFields, Tag

# Extraction of the tag information that is carried into the map file:
#   known tag ids, the special fields and the area / line decision for ways.
#
# None of these functions raise on bad tag data, unparsable values are
# reported through the logger and replaced by the defaults.

logger = logging.getLogger(__name__)


class TagKind(enum.Enum):
    POI = "poi"
    WAY = "way"


def _tags_of(entity: Entity) -> Iterable[Tag]:
    return entity.tags or ()


def extract_known_tags(entity: Entity, mapping: TagMapping, kind: TagKind) -> List[int]:
    """
    Collect the ids of the entity's tags that are known to the mapping.

    Args:
        entity: the node, way or relation
        mapping: tag mapping to look the tags up in
        kind: whether to use the POI or the way section of the mapping

    Returns:
        tag_ids: ids in tag order, duplicates kept
    """
    if mapping is None:
        raise TagMappingNotInitialized(
            "A TagMapping must be built before extracting known tags"
        )

    lookup = mapping.get_poi_tag if kind is TagKind.POI else mapping.get_way_tag

    tag_ids = []
    for key, value in _tags_of(entity):
        osm_tag = lookup(key, value)
        if osm_tag is not None:
            tag_ids.append(osm_tag.id)
    return tag_ids


def extract_known_poi_tags(entity: Entity, mapping: TagMapping) -> List[int]:
    """Ids of the entity's known POI tags."""
    return extract_known_tags(entity, mapping, TagKind.POI)


def extract_known_way_tags(entity: Entity, mapping: TagMapping) -> List[int]:
    """Ids of the entity's known way tags."""
    return extract_known_tags(entity, mapping, TagKind.WAY)


def _parse_byte(value: str) -> Optional[int]:
    """Parse a signed decimal byte ("-3", "+7", "12"), None if not one.

    Any Unicode decimal digits are accepted, "٣" parses as 3.
    """
    digits = value[1:] if value[:1] in ("-", "+") else value
    if not digits or not digits.isdecimal():
        return None

    number = int(value)
    low, high = LAYER_BYTE_RANGE
    if not low <= number <= high:
        return None
    return number


def _parse_elevation(value: str) -> Optional[float]:
    # elevations are often written with a unit and a decimal comma: "1234,5m"
    cleaned = value.replace("m", "").replace(",", ".")
    if "_" in cleaned:
        return None
    try:
        elevation = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(elevation):
        return None
    return elevation


def _to_short(value: float) -> int:
    """Truncate to a signed 16 bit int, saturating at 32 bits first and then wrapping."""
    number = max(INT_RANGE[0], min(INT_RANGE[1], int(value)))
    return ((number + 0x8000) & 0xFFFF) - 0x8000


def _language_of_name_key(key: str) -> Optional[str]:
    """Return "de" for "name:de", None for keys not of that form."""
    if len(key) != len(NAME_LANGUAGE_PREFIX) + 2 or not key.startswith(NAME_LANGUAGE_PREFIX):
        return None
    language = key[len(NAME_LANGUAGE_PREFIX):]
    if not all("a" <= char <= "z" for char in language):
        return None
    return language


def _log_ignored(log: Optional[logging.Logger], reason: str, value: str, entity: Entity) -> None:
    if log is not None:
        log.debug(
            f"{reason}: {value}"
            f"\tentity-id: {entity.id}\tentity-type: {entity.type.name}"
        )


def extract_special_fields(
    entity: Entity,
    preferred_language: Optional[str] = None,
    log: Optional[logging.Logger] = logger,
) -> SpecialFields:
    """
    Extract name, ref, house number, layer, elevation and relation type.

    The tags are scanned once, in order. A "name:<xx>" tag matching the
    preferred language wins over any "name" tag, whatever their order, and
    "piste:name" is only used when nothing else named the entity before it.

    Layers in [-5, 5] are stored shifted by 5, other parsable layers are
    stored as they are. Elevations of 9000 and above are ignored, the
    others are truncated to a signed 16 bit value.

    Args:
        entity: the node, way or relation
        preferred_language: two letter language code, e.g. "de", or None
        log: receives a debug message for every unparsable layer or
            elevation, None disables these messages

    Returns:
        fields: SpecialFields for this entity
    """
    preferred_language = preferred_language.lower() if preferred_language else None
    found_preferred_name = False

    name = None
    ref = None
    housenumber = None
    layer = DEFAULT_LAYER
    elevation = 0
    relation_type = None

    for raw_key, value in _tags_of(entity):
        key = raw_key.lower()

        if key == "name" and not found_preferred_name:
            name = value
        elif key == "piste:name" and name is None:
            name = value
        elif key == "addr:housenumber":
            housenumber = value
        elif key == "ref":
            ref = value
        elif key == "layer":
            parsed_layer = _parse_byte(value)
            if parsed_layer is None:
                _log_ignored(log, "could not parse layer information", value, entity)
            else:
                low, high = LAYER_SHIFT_RANGE
                if low <= parsed_layer <= high:
                    parsed_layer += DEFAULT_LAYER
                layer = parsed_layer
        elif key == "ele":
            parsed_elevation = _parse_elevation(value)
            if parsed_elevation is None:
                _log_ignored(log, "could not parse elevation information", value, entity)
            elif parsed_elevation < MAX_ELEVATION:
                elevation = _to_short(parsed_elevation)
            else:
                _log_ignored(log, f"elevation of {MAX_ELEVATION} or more ignored", value, entity)
        elif key == "type":
            relation_type = value
        elif preferred_language is not None and not found_preferred_name:
            if _language_of_name_key(key) == preferred_language:
                name = value
                found_preferred_name = True

    return SpecialFields(
        name=name,
        ref=ref,
        housenumber=housenumber,
        layer=layer,
        elevation=elevation,
        relation_type=relation_type,
    )


def is_area(way: Entity) -> bool:
    """
    Heuristic to decide from its tags if a closed way is an area.

    Telling areas from lines is close to impossible in OSM, the explicit
    area tag decides when present, otherwise highways, railways and
    barriers are lines and everything else is an area.
        see: https://wiki.openstreetmap.org/wiki/The_Future_of_Areas

    Args:
        way: the way, assumed closed and long enough to be an area

    Returns
        is_area: True if the tags indicate an area
    """
    result = True
    for raw_key, raw_value in _tags_of(way):
        key = raw_key.lower()
        if key == "area":
            value = raw_value.lower()
            if value in AREA_TRUE_VALUES:
                return True
            if value in AREA_FALSE_VALUES:
                return False
        if key in LINEAR_KEYS:
            # line unless an area tag says otherwise
            result = False
    return result
