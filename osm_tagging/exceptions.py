class OSMTaggingError(Exception):
    """Base class for all errors raised by osm_tagging."""


class OverpassBadRequest(OSMTaggingError):
    """Error 400: Syntax error."""


class OverpassMoved(OSMTaggingError):
    """Error 302: Moved to new location?"""


class OverpassTooManyRequests(OSMTaggingError):
    """Error 429: Too many requests."""


class OverpassGatewayTimeout(OSMTaggingError):
    """Error 504: Too much load."""


class InvalidOverpassResponse(OSMTaggingError):
    """Response JSON has no 'elements' member."""


class InvalidTagMapping(OSMTaggingError):
    """Tag mapping document is malformed or declares a tag twice."""


class TagMappingNotInitialized(OSMTaggingError):
    """An extractor was called before a tag mapping was built."""
