import pytest

from osm_tagging.mapping import TagMapping
from osm_tagging.model import Entity, EntityType, Tag


@pytest.fixture
def mapping():
    return TagMapping.from_dict(
        {
            "poi": ["amenity=cafe", "amenity=restaurant", "shop=bakery"],
            "way": ["highway=residential", "building=yes", "amenity=restaurant"],
        }
    )


@pytest.fixture
def make_entity():
    def _make(tags, entity_type=EntityType.NODE, entity_id=1):
        if tags is not None:
            tags = [Tag(key, value) for key, value in tags]
        return Entity(id=entity_id, type=entity_type, tags=tags)

    return _make
