import pytest

from osm_tagging.model import EntityType
from osm_tagging.tags import is_area


@pytest.fixture
def way(make_entity):
    def _way(tags):
        return make_entity(tags, EntityType.WAY)

    return _way


@pytest.mark.parametrize("tags", [None, []])
def test_no_tags_is_area(way, tags):
    assert is_area(way(tags)) is True


def test_explicit_area_wins_over_highway(way):
    assert is_area(way([("area", "yes"), ("highway", "residential")])) is True
    assert is_area(way([("highway", "pedestrian"), ("area", "yes")])) is True


@pytest.mark.parametrize("key", ["highway", "railway", "barrier", "HighWay"])
def test_linear_keys_are_lines(way, key):
    assert is_area(way([(key, "whatever")])) is False


@pytest.mark.parametrize(
    "tags",
    [
        [("area", "no")],
        [("area", "no"), ("building", "yes")],
        [("building", "yes"), ("area", "NO")],
        [("area", "false")],
        [("area", "n")],
    ],
)
def test_area_no_is_line(way, tags):
    assert is_area(way(tags)) is False


@pytest.mark.parametrize("value", ["yes", "Y", "TRUE"])
def test_area_yes_values(way, value):
    assert is_area(way([("barrier", "fence"), ("area", value)])) is True


def test_first_area_tag_decides(way):
    assert is_area(way([("area", "yes"), ("area", "no")])) is True
    assert is_area(way([("area", "no"), ("area", "yes")])) is False


def test_unknown_area_value_is_ignored(way):
    assert is_area(way([("area", "maybe")])) is True
    assert is_area(way([("area", "maybe"), ("railway", "rail")])) is False


def test_other_tags_keep_area(way):
    assert is_area(way([("building", "yes"), ("name", "Town hall")])) is True
