import importlib.metadata

from osm_tagging.extract import json_to_features
from osm_tagging.mapping import OSMTag, TagMapping, default_tag_mapping, load_tag_mapping
from osm_tagging.model import Entity, EntityType, SpecialFields, Tag
from osm_tagging.tags import (
    TagKind,
    extract_known_poi_tags,
    extract_known_tags,
    extract_known_way_tags,
    extract_special_fields,
    is_area,
)

# import package version from root 'pyproject.toml' file
__version__ = importlib.metadata.version("osm-tagging")
