"""
Semantic Classification Component.

Nearest-exemplar classification of change descriptions on the equipment
and modification-type axes.

Usage:
    from components.semantic import SemanticClassifier, SemanticRequest

    classifier = SemanticClassifier()
    result = await classifier.process(SemanticRequest(text="..."))
    print(result.equipment.label, result.modification_type.category)
"""

from components.semantic.models import (
    AXES,
    EQUIPMENT_AXIS,
    MODIFICATION_TYPE_AXIS,
    UNKNOWN_LABEL,
    ReferenceExemplar,
    ReferenceVector,
    ScoredLabel,
    SemanticClassification,
    SemanticRequest,
    SemanticVerdict,
)
from components.semantic.reference_store import ReferenceVectorStore
from components.semantic.references import (
    DEFAULT_EXEMPLARS,
    EQUIPMENT_EXEMPLARS,
    MODIFICATION_TYPE_EXEMPLARS,
    technical_category,
)
from components.semantic.service import (
    SemanticClassifier,
    SemanticConfig,
    create_default_classifier,
    design_type_of,
)
from components.semantic.similarity import cosine_similarity, rank_by_similarity

__all__ = [
    "AXES",
    "EQUIPMENT_AXIS",
    "MODIFICATION_TYPE_AXIS",
    "UNKNOWN_LABEL",
    "ReferenceExemplar",
    "ReferenceVector",
    "ScoredLabel",
    "SemanticClassification",
    "SemanticRequest",
    "SemanticVerdict",
    "ReferenceVectorStore",
    "DEFAULT_EXEMPLARS",
    "EQUIPMENT_EXEMPLARS",
    "MODIFICATION_TYPE_EXEMPLARS",
    "technical_category",
    "SemanticClassifier",
    "SemanticConfig",
    "create_default_classifier",
    "design_type_of",
    "cosine_similarity",
    "rank_by_similarity",
]
