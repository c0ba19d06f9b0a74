import logging
from typing import Dict, List, Optional, Union

import geopandas as gpd
import rasterio as rio
import requests
from rasterio.warp import transform_geom
from shapely.geometry import Polygon, shape
from tenacity import retry, retry_if_not_exception_type, stop_after_attempt, wait_fixed

from .exceptions import (
    OverpassBadRequest,
    OverpassGatewayTimeout,
    OverpassMoved,
    OverpassTooManyRequests,
)
from .extract import json_to_features
from .mapping import TagMapping

EPSG_4326 = rio.crs.CRS.from_epsg(4326)  # geo coords

DEFAULT_ENDPOINT = "http://overpass-api.de/api/interpreter"

STATUS_ERRORS = {
    302: OverpassMoved,
    400: OverpassBadRequest,
    429: OverpassTooManyRequests,
    504: OverpassGatewayTimeout,
}

logger = logging.getLogger(__name__)


def _tag_filter(tag: str, value_constraints: Optional[List[str]]) -> str:
    if value_constraints:
        if len(value_constraints) > 1:
            return f'["{ tag }"~"^({ "|".join(value_constraints) })$"]'
        return f'["{ tag }"="{ value_constraints[0] }"]'
    return f'["{ tag }"]'


def build_query(
    bbox: Polygon,
    tags: Dict[str, Union[None, List[str]]],
    crs: rio.crs.CRS = EPSG_4326,
    timeout: Optional[int] = 1000,
) -> str:
    """
    Translate a bounding box and a dictionary of OSM tags into an Overpass query
        * see more: https://wiki.openstreetmap.org/wiki/Overpass_API
        * test out queries online: https://overpass-turbo.eu/

    Ways are returned with their nodes (`>;`) so that every way geometry can
    be built from the node coordinates.

    Args:
        bbox: Bounding box polygon
        tags: OSM keys to query (ex: "highway") with a list of allowed values,
            or None to allow any value
        crs: CRS of the provided bbox, default= geo coords
        timeout: Overpass timeout, in seconds

    Returns:
        query: Formatted Overpass query
    """
    if crs != EPSG_4326:  # make sure its geo coords!
        bbox = shape(transform_geom(src_crs=crs, dst_crs=EPSG_4326, geom=bbox.__geo_interface__))

    # Shapely bounds = (W, S, E, N) -->  but the overpass ql expects bbox format = (S,W,N,E)
    bbox_tuple = (bbox.bounds[1], bbox.bounds[0], bbox.bounds[3], bbox.bounds[2])

    sub_queries = "".join(
        f"nwr{ _tag_filter(tag, values) }{ bbox_tuple };" for tag, values in tags.items()
    )
    return f"[out:json][timeout:{ timeout }];({ sub_queries });(._;>;);out qt;"


def request(query: str, endpoint: str) -> dict:
    """Send a request to the Overpass API.

    Args:
        query : Overpass QL query
        endpoint: API endpoint

    Returns
        response : JSON response as a dictionary
    """
    response = requests.get(endpoint, params={"data": query})

    error = STATUS_ERRORS.get(response.status_code)
    if error is not None:
        raise error(f"Overpass API answered {response.status_code} for {endpoint}")

    return response.json()


def retry_info(retry_state):
    logger.info(
        f"OSM request attempt #{retry_state.attempt_number} ended with: {retry_state.outcome}"
    )


@retry(
    retry=retry_if_not_exception_type((OverpassMoved, OverpassBadRequest)),
    stop=stop_after_attempt(10),
    wait=wait_fixed(10),
    before_sleep=retry_info,
)
def request_osm(query: str, endpoint: str = DEFAULT_ENDPOINT) -> Dict:
    """
    Wrapper for `request()` that attempts retries

    Args:
        query : Overpass QL query
        endpoint: API endpoint, default = DEFAULT_ENDPOINT

    Returns
        response : JSON response as a dictionary
    """
    return request(query, endpoint)


def fetch_features(
    bbox: Polygon,
    tags: Dict[str, Union[None, List[str]]],
    mapping: TagMapping,
    preferred_language: Optional[str] = None,
    crs: rio.crs.CRS = EPSG_4326,
    endpoint: str = DEFAULT_ENDPOINT,
    timeout: Optional[int] = 1000,
) -> gpd.GeoDataFrame:
    """
    Query the Overpass API and convert the answer to a feature table.

    Args:
        bbox: Bounding box polygon
        tags: OSM keys to query with their allowed values, see `build_query`
        mapping: tag mapping used for the known tag ids
        preferred_language: two letter language code used to pick names
        crs: CRS of the provided bbox, default= geo coords
        endpoint: API endpoint
        timeout: Overpass timeout, in seconds

    Returns:
        gdf: GeoDataFrame of features, see `osm_tagging.extract.json_to_features`
    """
    query = build_query(bbox, tags, crs=crs, timeout=timeout)
    logger.debug(f"Requesting {query}")
    return json_to_features(request_osm(query, endpoint), mapping, preferred_language)
