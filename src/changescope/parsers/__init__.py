"""External tool integrations."""

from .go_list_parser import GoListParser, decode_json_stream

__all__ = ["GoListParser", "decode_json_stream"]
