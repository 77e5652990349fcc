"""
Review Service Component.

Checks a submission for missing and inconsistent information and lists
the design outputs and controlled documents the decision implies.
"""

from typing import Any, Dict, List

from components.base import BaseComponent, get_logger
from components.intake.models import NON_SAFETY, ClassificationInput, DesignType
from components.review.models import DesignOutput, ImpactedDocument, InputReview
from components.risk.models import RiskRequest
from components.synthesis.models import Decision

logger = get_logger(__name__)


# (attribute, message) for required administrative/free-text fields
REQUIRED_FIELDS = (
    ("project_number", "Project Number is required"),
    ("problem_description", "Problem Description is required"),
    ("proposed_solution", "Proposed Solution is required"),
    ("design_authority", "Design Authority assignment is required"),
)

BASE_OUTPUTS = (
    DesignOutput(type="Design Drawings", description="Technical drawings and specifications"),
    DesignOutput(type="Calculations", description="Engineering calculations and analysis"),
)

TYPE_OUTPUTS = {
    DesignType.I: (
        DesignOutput(type="PrHA", description="Process Hazard Analysis"),
        DesignOutput(
            type="IQRPE",
            description="Installation, Qualification, Readiness, Performance Evaluation",
        ),
        DesignOutput(type="Environmental Assessment", description="Environmental impact evaluation"),
    ),
    DesignType.II: (
        DesignOutput(type="Impact Analysis", description="Analysis of system impacts"),
    ),
    DesignType.III: (
        DesignOutput(type="Compatibility Analysis", description="Component compatibility verification"),
        DesignOutput(type="Installation Plan", description="Replacement installation procedures"),
    ),
    DesignType.IV: (
        DesignOutput(type="Temporary Installation Plan", description="Temporary modification procedures"),
        DesignOutput(type="Restoration Plan", description="Plan to restore original configuration"),
    ),
    DesignType.V: (
        DesignOutput(
            type="Verification Documentation",
            description="Documentation proving identical replacement",
        ),
    ),
}


def _is_blank(value) -> bool:
    return value is None or not str(value).strip()


def _safety_classified_for_review(data: ClassificationInput) -> bool:
    # Any classification other than Non-Safety counts
    value = (data.safety_classification or "").strip()
    return bool(value) and value.lower() != NON_SAFETY.lower()


def missing_elements(data: ClassificationInput) -> List[str]:
    return [message for attr, message in REQUIRED_FIELDS if _is_blank(getattr(data, attr))]


def inconsistencies(data: ClassificationInput) -> List[str]:
    found = []
    if data.is_temporary and data.requires_multiple_documents:
        found.append("Temporary changes typically should not require multiple design documents")
    if data.is_identical_replacement and data.requires_new_procedures:
        found.append("Identical replacements typically should not require new procedures")
    return found


def suggested_actions(decision: Decision) -> List[str]:
    actions = [
        "Review and validate all input information",
        "Coordinate with Design Authority for approval",
    ]
    if decision.mt_required:
        actions.append("Proceed with Modification Traveler process per Section 4.1")
        actions.append("Identify and engage all required reviewers")
    actions.append("Ensure all required design outputs are planned and scheduled")
    return actions


def expected_outputs(data: ClassificationInput, design_type: DesignType) -> List[DesignOutput]:
    outputs = list(BASE_OUTPUTS) + list(TYPE_OUTPUTS[design_type])

    if design_type == DesignType.II:
        outputs.append(DesignOutput(
            type="Procedure Updates",
            description="Updated operating procedures",
            required=data.requires_new_procedures,
        ))

    if _safety_classified_for_review(data):
        outputs.append(DesignOutput(type="Safety Analysis", description="Safety system impact analysis"))

    if data.requires_software_change:
        outputs.append(DesignOutput(
            type="Software Design Document", description="Software modification specifications"
        ))
        outputs.append(DesignOutput(type="Testing Plan", description="Software testing and validation plan"))

    return outputs


def impacted_documents(data: ClassificationInput) -> List[ImpactedDocument]:
    documents = []

    if data.is_physical_change:
        documents.append(ImpactedDocument(
            document_type="P&ID",
            impact_rationale="Physical changes may affect piping and instrumentation",
            suggested_reviewers=["Process Engineering", "Instrumentation & Controls"],
        ))
        documents.append(ImpactedDocument(
            document_type="System Description",
            impact_rationale="System configuration changes",
            suggested_reviewers=["System Engineering"],
        ))

    if data.requires_new_procedures:
        documents.append(ImpactedDocument(
            document_type="Operating Procedures",
            impact_rationale="New procedures required for operation",
            suggested_reviewers=["Operations", "Training"],
        ))
        documents.append(ImpactedDocument(
            document_type="Maintenance Procedures",
            impact_rationale="Maintenance activities may be affected",
            suggested_reviewers=["Maintenance", "Engineering"],
        ))

    if _safety_classified_for_review(data):
        documents.append(ImpactedDocument(
            document_type="Safety Analysis Report",
            impact_rationale="Safety-related changes require SAR update",
            suggested_reviewers=["Nuclear Safety", "Regulatory Affairs"],
        ))

    return documents


def review_input(data: ClassificationInput, decision: Decision) -> InputReview:
    """
    Review a submission against its decision.

    Args:
        data: Change description (after scenario inference)
        decision: Final decision

    Returns:
        InputReview
    """
    return InputReview(
        missing_elements=missing_elements(data),
        inconsistencies=inconsistencies(data),
        suggested_actions=suggested_actions(decision),
        expected_outputs=expected_outputs(data, decision.design_type),
        impacted_documents=impacted_documents(data),
    )


class InputReviewer(BaseComponent[RiskRequest, InputReview]):
    """Component wrapper around review_input(); takes the same request as the risk deriver."""

    @property
    def component_name(self) -> str:
        return "review"

    async def process(self, request: RiskRequest) -> InputReview:
        return review_input(request.input, request.decision)

    async def health_check(self) -> Dict[str, Any]:
        return {"status": "healthy", "component": self.component_name}
