from .record_extractor import (
    BrainstormDocument,
    dedupe_sources,
    extract_brainstorm,
    extract_project,
    parse_rankings,
    split_sections,
    tokenize_block,
)

__all__ = [
    "BrainstormDocument",
    "dedupe_sources",
    "extract_brainstorm",
    "extract_project",
    "parse_rankings",
    "split_sections",
    "tokenize_block",
]
