""" Constants for the special field and area rules applied to OSM tags

Note: the area rules follow the discussion on the following pages:
    https://wiki.openstreetmap.org/wiki/The_Future_of_Areas
    https://wiki.openstreetmap.org/wiki/Way
"""

# elevations at or above this value (in meters) are discarded
MAX_ELEVATION = 9000

# layer stored when no (parsable) layer tag exists, i.e. layer=0 shifted
DEFAULT_LAYER = 5

# signed layer values inside this range are shifted by DEFAULT_LAYER
LAYER_SHIFT_RANGE = (-5, 5)

# layers are parsed as signed bytes
LAYER_BYTE_RANGE = (-128, 127)

# elevations saturate to this range before being narrowed to 16 bits
INT_RANGE = (-(2**31), 2**31 - 1)

NAME_LANGUAGE_PREFIX = "name:"

AREA_TRUE_VALUES = frozenset({"yes", "y", "true"})

AREA_FALSE_VALUES = frozenset({"no", "n", "false"})

# closed ways with one of these keys are lines unless tagged area=yes
LINEAR_KEYS = frozenset({"highway", "railway", "barrier"})


""" Bundled tag mapping, identifiers are assigned in list order per section """

DEFAULT_TAG_MAPPING = {
    "poi": [
        "aeroway=helipad",
        "amenity=atm",
        "amenity=bank",
        "amenity=bar",
        "amenity=bench",
        "amenity=bicycle_rental",
        "amenity=bus_station",
        "amenity=cafe",
        "amenity=cinema",
        "amenity=drinking_water",
        "amenity=fast_food",
        "amenity=fire_station",
        "amenity=fountain",
        "amenity=fuel",
        "amenity=hospital",
        "amenity=library",
        "amenity=parking",
        "amenity=pharmacy",
        "amenity=place_of_worship",
        "amenity=police",
        "amenity=post_box",
        "amenity=post_office",
        "amenity=pub",
        "amenity=restaurant",
        "amenity=school",
        "amenity=shelter",
        "amenity=telephone",
        "amenity=theatre",
        "amenity=toilets",
        "amenity=university",
        "barrier=bollard",
        "barrier=gate",
        "highway=bus_stop",
        "highway=traffic_signals",
        "historic=memorial",
        "historic=monument",
        "leisure=playground",
        "man_made=lighthouse",
        "man_made=windmill",
        "natural=cave_entrance",
        "natural=peak",
        "natural=spring",
        "natural=volcano",
        "place=city",
        "place=island",
        "place=suburb",
        "place=town",
        "place=village",
        "railway=halt",
        "railway=level_crossing",
        "railway=station",
        "railway=tram_stop",
        "shop=bakery",
        "shop=convenience",
        "shop=supermarket",
        "tourism=alpine_hut",
        "tourism=attraction",
        "tourism=hostel",
        "tourism=hotel",
        "tourism=information",
        "tourism=museum",
        "tourism=viewpoint",
    ],
    "way": [
        "aeroway=aerodrome",
        "aeroway=runway",
        "aeroway=taxiway",
        "amenity=parking",
        "amenity=school",
        "area=yes",
        "barrier=fence",
        "barrier=wall",
        "boundary=administrative",
        "boundary=national_park",
        "bridge=yes",
        "building=yes",
        "highway=bridleway",
        "highway=cycleway",
        "highway=footway",
        "highway=living_street",
        "highway=motorway",
        "highway=motorway_link",
        "highway=path",
        "highway=pedestrian",
        "highway=primary",
        "highway=primary_link",
        "highway=residential",
        "highway=secondary",
        "highway=service",
        "highway=steps",
        "highway=tertiary",
        "highway=track",
        "highway=trunk",
        "highway=trunk_link",
        "highway=unclassified",
        "landuse=allotments",
        "landuse=cemetery",
        "landuse=commercial",
        "landuse=farmland",
        "landuse=forest",
        "landuse=grass",
        "landuse=industrial",
        "landuse=residential",
        "landuse=retail",
        "leisure=garden",
        "leisure=park",
        "leisure=pitch",
        "natural=beach",
        "natural=coastline",
        "natural=glacier",
        "natural=water",
        "natural=wood",
        "oneway=yes",
        "piste:type=downhill",
        "piste:type=nordic",
        "railway=light_rail",
        "railway=rail",
        "railway=subway",
        "railway=tram",
        "route=ferry",
        "tunnel=yes",
        "waterway=canal",
        "waterway=river",
        "waterway=riverbank",
        "waterway=stream",
    ],
}
