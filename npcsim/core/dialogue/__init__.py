"""대사 Core 패키지 — 공개 API"""

from npcsim.core.dialogue.models import (
    DialogueLine,
    DialoguePriority,
    DialogueTag,
    EnrichmentContext,
)
from npcsim.core.dialogue.bank import DIALOGUE_BANK
from npcsim.core.dialogue.selection import (
    generate_dialogue,
    generate_mixed,
    score_line,
)
from npcsim.core.dialogue.enrichment import (
    ENRICHMENT_MAX_TOKENS,
    ENRICHMENT_TEMPERATURE,
    SYSTEM_MESSAGE,
    build_enrichment_context,
    build_enrichment_prompt,
    parse_generated_lines,
)
from npcsim.core.dialogue.flavor import compose_flavor_line, humanize_memory

__all__ = [
    "DialogueLine",
    "DialoguePriority",
    "DialogueTag",
    "EnrichmentContext",
    "DIALOGUE_BANK",
    "generate_dialogue",
    "generate_mixed",
    "score_line",
    "ENRICHMENT_MAX_TOKENS",
    "ENRICHMENT_TEMPERATURE",
    "SYSTEM_MESSAGE",
    "build_enrichment_context",
    "build_enrichment_prompt",
    "parse_generated_lines",
    "compose_flavor_line",
    "humanize_memory",
]
