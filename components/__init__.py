"""
MT analysis components.

Each component can be:
1. Imported directly as a Python module
2. Used as a node in the LangGraph analysis pipeline
3. Used independently or chained together

Usage:
    from components.intake import ClassificationInput
    from components.decision_tree import evaluate_decision_tree
    from components.semantic import SemanticClassifier
    from components.narrative import NarrativeAdapter
    from components.synthesis import EvidenceSynthesizer
    from components.risk import derive_risk
"""

from components.base import BaseComponent, ComponentConfig, ComponentError

__all__ = [
    "BaseComponent",
    "ComponentConfig",
    "ComponentError",
]
