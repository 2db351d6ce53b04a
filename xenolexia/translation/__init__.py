"""
Translation - lexical substitution pipeline.

Quick start:
    from xenolexia.schemas import TranslationOptions
    from xenolexia.translation import TranslationEngine

    engine = TranslationEngine(TranslationOptions(density=0.5))
    result = engine.process_content("<p>The dog saw a house.</p>")
    result.content          # markup with foreign-word markers
    result.substitutions    # SubstitutionRecord list
    result.stats            # ProcessingStats
"""

from xenolexia.translation.engine import TranslationEngine, process_content
from xenolexia.translation.renderer import (
    MarkerMatch,
    build_marker,
    iter_markers,
    preserve_case,
    render_substitutions,
    strip_markers,
)
from xenolexia.translation.selector import (
    eligible_matches,
    select_substitutions,
    target_count,
)
from xenolexia.translation.tokenizer import (
    count_words,
    extract_plain_text,
    iter_text_segments,
    iter_tokens,
    tokenize,
)
from xenolexia.translation.types import (
    CandidateMatch,
    ProcessedText,
    ProcessingStats,
    SubstitutionRecord,
    TextSegment,
    Token,
)


__all__ = [
    # Pipeline
    "TranslationEngine",
    "process_content",

    # Stages
    "iter_text_segments",
    "iter_tokens",
    "tokenize",
    "extract_plain_text",
    "count_words",
    "eligible_matches",
    "select_substitutions",
    "target_count",
    "render_substitutions",
    "preserve_case",
    "build_marker",
    "iter_markers",
    "strip_markers",

    # Types
    "TextSegment",
    "Token",
    "CandidateMatch",
    "SubstitutionRecord",
    "ProcessingStats",
    "ProcessedText",
    "MarkerMatch",
]
