"""Quiz block scanning, metadata parsing and Markdown encoding."""

from .attributes import AttributeList, parse_attribute_list, parse_metadata_line
from .blocks import ParseResult, iter_parse, parse, parse_file
from .encode import encode_block, encode_document, encode_metadata

__all__ = [
    "AttributeList",
    "parse_attribute_list",
    "parse_metadata_line",
    "ParseResult",
    "iter_parse",
    "parse",
    "parse_file",
    "encode_block",
    "encode_document",
    "encode_metadata",
]
