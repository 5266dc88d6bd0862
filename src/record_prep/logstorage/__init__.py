"""JSON log line flattening for columnar log storage."""

from .errors import MalformedJSONError, ParserReleasedError, StaleFieldError, UnexpectedRootTypeError
from .fields import Field
from .json_parser import JSONParser, get_json_parser, get_parser_pool, json_parser, put_json_parser
from .json_types import JSONType, json_type_of

__all__ = [
    "Field",
    "JSONParser",
    "JSONType",
    "MalformedJSONError",
    "ParserReleasedError",
    "StaleFieldError",
    "UnexpectedRootTypeError",
    "get_json_parser",
    "get_parser_pool",
    "json_parser",
    "json_type_of",
    "put_json_parser",
]
