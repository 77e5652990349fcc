"""
Narrative Assessment Component.

Asks an LLM for a free-form MT assessment and extracts advisory evidence
(explicit requirement statement, design type) from the prose.

Usage:
    from components.narrative import NarrativeAdapter

    adapter = NarrativeAdapter()
    verdict = await adapter.analyze("Replace valve ...", {"Equipment Classification": "..."})
"""

from components.narrative.extraction import (
    AFFIRMATIVE_PHRASES,
    NEGATIVE_PHRASES,
    extract_design_type,
    extract_required_flag,
    extract_verdict,
)
from components.narrative.models import NarrativeProvider, NarrativeRequest, NarrativeVerdict
from components.narrative.service import NarrativeAdapter, NarrativeConfig, NarrativeService

__all__ = [
    "AFFIRMATIVE_PHRASES",
    "NEGATIVE_PHRASES",
    "extract_design_type",
    "extract_required_flag",
    "extract_verdict",
    "NarrativeProvider",
    "NarrativeRequest",
    "NarrativeVerdict",
    "NarrativeAdapter",
    "NarrativeConfig",
    "NarrativeService",
]
