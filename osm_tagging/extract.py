import logging
from typing import Dict, List, Optional, Tuple

import geopandas as gpd
import numpy as np
from shapely.geometry import LineString, Point, Polygon

from .exceptions import InvalidOverpassResponse, TagMappingNotInitialized
from .mapping import TagMapping
from .model import Entity, EntityType, entity_from_element
from .tags import extract_known_poi_tags, extract_known_way_tags, extract_special_fields, is_area

# Conversion of an Overpass QL JSON response into a table of features that
#   carries everything the map file needs per element: known tag ids, the
#   special fields and, for ways, the area / line decision.
#
# Element parsing follows the approach of
#    - osmnx: https://github.com/gboeing/osmnx

logger = logging.getLogger(__name__)

FEATURE_COLUMNS = [
    "osmid",
    "element_type",
    "tag_ids",
    "name",
    "ref",
    "housenumber",
    "layer",
    "elevation",
    "relation_type",
    "is_area",
    "geometry",
]

# a closed way needs at least 3 distinct nodes plus the repeated first one
MIN_AREA_NODES = 4


def _parse_node_to_coords(element: Dict) -> Dict:
    """
    Parse coordinates from a node in the overpass response.

    Args:
        element: element type "node" from overpass response JSON

    Returns
        coords : dict of latitude/longitude coordinates
    """
    return {"lat": element["lat"], "lon": element["lon"]}


def _feature_row(
    entity: Entity,
    tag_ids: List[int],
    preferred_language: Optional[str],
    geometry,
    area: Optional[bool] = None,
) -> Dict:
    fields = extract_special_fields(entity, preferred_language)
    return {
        "osmid": entity.id,
        "element_type": entity.type.value,
        "tag_ids": np.array(tag_ids, dtype=np.int16),
        "name": fields.name,
        "ref": fields.ref,
        "housenumber": fields.housenumber,
        "layer": fields.layer,
        "elevation": fields.elevation,
        "relation_type": fields.relation_type,
        "is_area": area,
        "geometry": geometry,
    }


def _parse_node_to_point(
    element: Dict, mapping: TagMapping, preferred_language: Optional[str] = None
) -> Dict:
    """
    Parse a POI from a tagged node in the overpass response.

    Args:
        element : element type "node" from overpass response JSON
        mapping : tag mapping for the POI tag ids
        preferred_language : language code used to pick the name

    Returns
        point : dict of feature columns with a Point geometry
    """
    entity = entity_from_element(element)
    return _feature_row(
        entity,
        extract_known_poi_tags(entity, mapping),
        preferred_language,
        Point(element["lon"], element["lat"]),
    )


def _way_coordinates(element: Dict, coords: Dict) -> Optional[List[Tuple[float, float]]]:
    try:
        return [(coords[node]["lon"], coords[node]["lat"]) for node in element["nodes"]]
    except KeyError:
        # nodes outside of the query area, fall back to the inline geometry (out geom)
        geom = element.get("geometry")
        if not geom:
            return None
        return [(p["lon"], p["lat"]) for p in geom]


def _is_closed_way(element: Dict) -> bool:
    nodes = element.get("nodes") or []
    return len(nodes) >= MIN_AREA_NODES and nodes[0] == nodes[-1]


def _parse_way_to_linestring_or_polygon(
    element: Dict, coords: Dict, mapping: TagMapping, preferred_language: Optional[str] = None
) -> Dict:
    """
    Parse a LineString or Polygon from an OSM 'way'.

    Only closed ways can be areas; whether a closed way is one is decided by
    its tags, see `osm_tagging.tags.is_area`.

    Args:
        element : element type "way" from overpass response JSON
        coords : dict of node IDs and their latitude/longitude coordinates
        mapping : tag mapping for the way tag ids
        preferred_language : language code used to pick the name

    Returns:
        linestring_or_polygon : dict of feature columns with the way geometry
    """
    entity = entity_from_element(element)
    area = _is_closed_way(element) and is_area(entity)

    points = _way_coordinates(element, coords)
    if points is None or len(points) < 2:
        logger.debug(
            "Not enough coordinates, the geometry for "
            f"https://www.openstreetmap.org/way/{element['id']} was not created."
        )
        geometry = None
    elif area and len(points) >= MIN_AREA_NODES:
        geometry = Polygon(points)
    else:
        geometry = LineString(points)

    return _feature_row(
        entity,
        extract_known_way_tags(entity, mapping),
        preferred_language,
        geometry,
        area=area,
    )


def _parse_relation(
    element: Dict, mapping: TagMapping, preferred_language: Optional[str] = None
) -> Dict:
    """
    Parse the tags of an OSM relation, relations are kept without geometry.

    Args:
        element: element type "relation" from overpass response JSON
        mapping : tag mapping for the way tag ids
        preferred_language : language code used to pick the name

    Returns
        relation: dict of feature columns without geometry
    """
    entity = entity_from_element(element)
    return _feature_row(
        entity,
        extract_known_way_tags(entity, mapping),
        preferred_language,
        None,
    )


def json_to_features(
    response_json: Dict, mapping: TagMapping, preferred_language: Optional[str] = None
) -> gpd.GeoDataFrame:
    """
    Parse JSON response from the Overpass API to a GeoDataFrame of features.

    Args:
        response_json: dict with the list of elements returned by the Overpass API
        mapping: tag mapping used for the known tag ids
        preferred_language: two letter language code used to pick names

    Returns:
        gdf: GeoDataFrame with one row per tagged node, way and relation
    """
    if mapping is None:
        raise TagMappingNotInitialized("A TagMapping must be built before parsing features")

    try:
        elements = response_json["elements"]
    except KeyError:
        raise InvalidOverpassResponse("OSM Overpass response json is invalid")

    if len(elements) == 0:
        logger.warning("No data elements: check query tags and location.")
        return gpd.GeoDataFrame(columns=FEATURE_COLUMNS, geometry="geometry", crs="epsg:4326")

    logger.debug(f"Converting {len(elements)} elements in JSON responses to features")

    # nodes come first in overpass output, so way coordinates can be looked up
    coords = dict()
    features = []

    for element in elements:
        element_type = element["type"]

        # untagged nodes only provide coordinates, untagged ways and
        # relations are of no use for the map
        tagged = bool(element.get("tags"))

        if element_type == EntityType.NODE.value:
            coords[element["id"]] = _parse_node_to_coords(element)
            if tagged:
                features.append(_parse_node_to_point(element, mapping, preferred_language))

        elif not tagged:
            continue

        elif element_type == EntityType.WAY.value:
            features.append(
                _parse_way_to_linestring_or_polygon(element, coords, mapping, preferred_language)
            )

        elif element_type == EntityType.RELATION.value:
            features.append(_parse_relation(element, mapping, preferred_language))

        else:
            logger.debug(f' .. Unknown element type, skipping= {element["id"]}')

    logger.debug(f"{len(features)} features in the final GeoDataFrame")

    return gpd.GeoDataFrame(features, columns=FEATURE_COLUMNS, geometry="geometry", crs="epsg:4326")
