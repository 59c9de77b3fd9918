"""
Semantic comparison of policy JSON documents.

Key Components:
- equality: equal() and differences() between two raw JSON documents
- canonicalizer: canonical form and content fingerprints

Design Principles:
- Key order and whitespace never matter; array order always does
- Numbers compare by exact value, never by their textual form
- Parse errors propagate unmodified, first argument first
"""

from iampolicy.compare.canonicalizer import (
    canonical_bytes,
    canonicalize_json,
    fingerprint,
    to_canonical_json_pretty,
    to_canonical_json_string,
)
from iampolicy.compare.equality import JsonDifference, differences, equal, values_equal

__all__ = [
    "equal",
    "differences",
    "values_equal",
    "JsonDifference",
    "canonicalize_json",
    "to_canonical_json_string",
    "to_canonical_json_pretty",
    "canonical_bytes",
    "fingerprint",
]
