"""
Review Component.

Missing elements, inconsistencies, suggested actions, expected design
outputs and impacted documents for a submission.
"""

from components.review.models import DesignOutput, ImpactedDocument, InputReview
from components.review.service import InputReviewer, review_input

__all__ = [
    "DesignOutput",
    "ImpactedDocument",
    "InputReview",
    "InputReviewer",
    "review_input",
]
