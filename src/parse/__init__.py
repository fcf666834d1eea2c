"""Text-level parsing utilities for brace-delimited sources.

The tree-sitter outline lives in ``parse.treesitter_outline`` and is only
imported by the symbol providers that need it.
"""

from parse.body import BodyExtraction, extract_body, find_block_end, find_block_start
from parse.call_sites import dedupe_call_sites, extract_call_sites, unique_call_sites
from parse.keywords import KEYWORDS_AND_BUILTINS

__all__ = [
    "BodyExtraction",
    "KEYWORDS_AND_BUILTINS",
    "dedupe_call_sites",
    "extract_body",
    "extract_call_sites",
    "find_block_end",
    "find_block_start",
    "unique_call_sites",
]
