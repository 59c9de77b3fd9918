"""
JSON codec for policy records.

Key Components:
- parser: stdlib JSON parsing with exact-number support
- codec: encode() / decode() with type-mismatch reporting
"""

from iampolicy.codec.codec import decode, encode
from iampolicy.codec.parser import parse_json

__all__ = [
    "encode",
    "decode",
    "parse_json",
]
