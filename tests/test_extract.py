import pytest

from osm_tagging.exceptions import InvalidOverpassResponse, TagMappingNotInitialized
from osm_tagging.extract import FEATURE_COLUMNS, json_to_features


def _node(node_id, lon, lat, tags=None):
    element = {"type": "node", "id": node_id, "lon": lon, "lat": lat}
    if tags is not None:
        element["tags"] = tags
    return element


def _way(way_id, nodes, tags=None):
    element = {"type": "way", "id": way_id, "nodes": nodes}
    if tags is not None:
        element["tags"] = tags
    return element


@pytest.fixture
def response_json():
    return {
        "elements": [
            _node(1, 16.0, 48.0),
            _node(2, 16.1, 48.0),
            _node(3, 16.1, 48.1),
            _node(4, 16.0, 48.1),
            _node(5, 16.05, 48.05, {"amenity": "cafe", "name": "Café", "name:de": "Kaffeehaus"}),
            _way(10, [1, 2, 3, 1], {"building": "yes", "ele": "180m"}),
            _way(11, [1, 2], {"highway": "residential", "layer": "-1"}),
            _way(12, [1, 2, 3, 4, 1], {"highway": "pedestrian", "area": "yes"}),
            _way(13, [1, 2, 3, 1], {"highway": "residential", "building": "yes"}),
            _way(14, [1, 2, 3]),
            _way(15, [100, 101], {"highway": "residential"}),
            {
                "type": "relation",
                "id": 20,
                "members": [{"type": "way", "ref": 10, "role": "outer"}],
                "tags": {"type": "multipolygon", "building": "yes"},
            },
        ]
    }


@pytest.fixture
def features(response_json, mapping):
    gdf = json_to_features(response_json, mapping, preferred_language="de")
    return gdf.set_index(gdf["element_type"] + "/" + gdf["osmid"].astype(str))


def test_columns_and_crs(features):
    assert list(features.columns) == FEATURE_COLUMNS
    assert features.crs.to_epsg() == 4326


def test_untagged_elements_are_dropped(features):
    assert sorted(features.index) == [
        "node/5",
        "relation/20",
        "way/10",
        "way/11",
        "way/12",
        "way/13",
        "way/15",
    ]


def test_poi(features):
    poi = features.loc["node/5"]
    assert poi["geometry"].geom_type == "Point"
    assert poi["tag_ids"].tolist() == [0]
    assert poi["name"] == "Kaffeehaus"
    assert poi["layer"] == 5
    assert poi["is_area"] is None


def test_closed_way_with_area_tags_is_polygon(features):
    building = features.loc["way/10"]
    assert building["geometry"].geom_type == "Polygon"
    assert bool(building["is_area"]) is True
    assert building["tag_ids"].tolist() == [1]
    assert building["elevation"] == 180

    square = features.loc["way/12"]
    assert square["geometry"].geom_type == "Polygon"
    assert bool(square["is_area"]) is True


def test_highways_are_lines(features):
    street = features.loc["way/11"]
    assert street["geometry"].geom_type == "LineString"
    assert bool(street["is_area"]) is False
    assert street["layer"] == 4
    assert street["tag_ids"].tolist() == [0]

    closed_street = features.loc["way/13"]
    assert closed_street["geometry"].geom_type == "LineString"
    assert bool(closed_street["is_area"]) is False
    assert closed_street["tag_ids"].tolist() == [0, 1]


def test_way_without_coordinates_has_no_geometry(features):
    assert features.loc["way/15", "geometry"] is None


def test_relation(features):
    relation = features.loc["relation/20"]
    assert relation["relation_type"] == "multipolygon"
    assert relation["geometry"] is None
    assert relation["tag_ids"].tolist() == [1]


def test_inline_geometry_is_used_when_nodes_are_missing(mapping):
    way = _way(30, [7, 8], {"highway": "residential"})
    way["geometry"] = [{"lat": 48.0, "lon": 16.0}, {"lat": 48.1, "lon": 16.1}]

    gdf = json_to_features({"elements": [way]}, mapping)
    assert list(gdf.iloc[0]["geometry"].coords) == [(16.0, 48.0), (16.1, 48.1)]


def test_empty_response(mapping, caplog):
    gdf = json_to_features({"elements": []}, mapping)
    assert len(gdf) == 0
    assert list(gdf.columns) == FEATURE_COLUMNS
    assert "No data elements" in caplog.text


def test_invalid_response(mapping):
    with pytest.raises(InvalidOverpassResponse):
        json_to_features({"remark": "runtime error"}, mapping)


def test_missing_mapping(response_json):
    with pytest.raises(TagMappingNotInitialized):
        json_to_features(response_json, None)
