"""
Analysis Service - facade over the compiled workflow.

Runs one change description through the graph under an overall deadline
and packages the final state as an AnalysisReport. When the deadline
passes or the graph fails, the Decision is synthesised from the decision
tree alone and risk and review still run.
"""

import asyncio
import time
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from config import Config
from components.base import get_logger
from components.decision_tree.models import DecisionTreeVerdict
from components.decision_tree.service import evaluate_decision_tree
from components.intake.agent import intake_node
from components.intake.models import ClassificationInput
from components.narrative.models import NarrativeVerdict
from components.narrative.service import NarrativeAdapter
from components.review.models import InputReview
from components.review.service import review_input
from components.risk.models import RiskAssessment
from components.risk.service import derive_risk
from components.semantic.models import SemanticVerdict
from components.semantic.service import SemanticClassifier
from components.synthesis.models import Decision
from components.synthesis.service import (
    EvidenceSynthesizer,
    synthesize_from_tree,
    tree_grounding,
)
from pipeline.orchestrator.workflow import build_workflow, get_workflow

logger = get_logger(__name__)


class AnalysisReport(BaseModel):
    """Plain-data result handed to the document layer."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    decision: Decision
    risk_assessment: RiskAssessment
    review: InputReview
    decision_tree: DecisionTreeVerdict
    equipment: SemanticVerdict
    modification_type: SemanticVerdict
    narrative: NarrativeVerdict
    inferred_flags: Dict[str, bool] = Field(default_factory=dict)
    scenario: Optional[str] = None
    degraded: bool = Field(
        default=False,
        description="True when the run missed its deadline or failed and the tree-only fallback was used",
    )
    processing_time_seconds: float = 0.0


class ModificationAnalysisService:
    """
    Entry point for analysing a proposed change.

    Providers are injected into the graph per run through the LangGraph
    config, so one compiled graph serves every service instance.
    """

    def __init__(
        self,
        semantic_classifier: Optional[SemanticClassifier] = None,
        narrative_adapter: Optional[NarrativeAdapter] = None,
        synthesizer: Optional[EvidenceSynthesizer] = None,
        timeout_seconds: Optional[float] = None,
        narrative_uses_semantic_context: Optional[bool] = None,
    ):
        self.semantic_classifier = semantic_classifier
        self.narrative_adapter = narrative_adapter
        self.synthesizer = synthesizer
        self.timeout_seconds = timeout_seconds or Config.REQUEST_TIMEOUT_SECONDS

        if narrative_uses_semantic_context is None:
            self.workflow = get_workflow()
        else:
            self.workflow = build_workflow(narrative_uses_semantic_context)

    def _run_config(self) -> Dict[str, Any]:
        configurable = {
            "semantic_classifier": self.semantic_classifier,
            "narrative_adapter": self.narrative_adapter,
            "synthesizer": self.synthesizer,
        }
        return {"configurable": {k: v for k, v in configurable.items() if v is not None}}

    async def analyze(self, change: Union[ClassificationInput, Dict[str, Any]]) -> AnalysisReport:
        """
        Analyse one change description.

        Args:
            change: ClassificationInput or its JSON dict (camelCase or snake_case keys)

        Returns:
            AnalysisReport
        """
        start_time = time.time()
        data = change if isinstance(change, ClassificationInput) else ClassificationInput.model_validate(change)

        initial_state = {
            "input": data,
            "status": "processing",
            "current_agent": "start",
            "messages": [],
        }

        try:
            final_state = await asyncio.wait_for(
                self.workflow.ainvoke(initial_state, config=self._run_config()),
                timeout=self.timeout_seconds,
            )
            degraded = False
        except asyncio.TimeoutError:
            logger.warning(
                f"Analysis exceeded {self.timeout_seconds}s; using decision tree only",
                extra={"component": "orchestrator"},
            )
            final_state = await self._tree_only_state(data)
            degraded = True
        except Exception as e:
            logger.error(
                f"Workflow failed: {e}; using decision tree only",
                exc_info=True,
                extra={"component": "orchestrator"},
            )
            final_state = await self._tree_only_state(data)
            degraded = True

        processing_time = time.time() - start_time
        report = AnalysisReport(
            decision=final_state["decision"],
            risk_assessment=final_state["risk_assessment"],
            review=final_state["review"],
            decision_tree=final_state["tree_verdict"],
            equipment=final_state.get("equipment") or SemanticVerdict.unavailable("equipment"),
            modification_type=(
                final_state.get("modification_type") or SemanticVerdict.unavailable("modification_type")
            ),
            narrative=final_state.get("narrative") or NarrativeVerdict.unavailable(),
            inferred_flags=final_state.get("inferred_flags") or {},
            scenario=final_state.get("scenario"),
            degraded=degraded,
            processing_time_seconds=round(processing_time, 3),
        )

        logger.info(
            f"Analysis complete in {processing_time:.2f}s: required={report.decision.mt_required} "
            f"type={report.decision.design_type.name} risk={report.risk_assessment.overall_risk.value}",
            extra={"component": "orchestrator"},
        )
        return report

    async def _tree_only_state(self, data: ClassificationInput) -> Dict[str, Any]:
        """Final state built from intake and the decision tree alone."""
        intake = await intake_node({"input": data})
        normalized = intake["classification_input"]
        inferred = intake["inferred_flags"]

        verdict = evaluate_decision_tree(normalized)
        synth_config = self.synthesizer.config if self.synthesizer is not None else None
        decision = synthesize_from_tree(
            verdict,
            normalized.combined_text,
            tree_grounding(intake["explicit_flags"], inferred),
            config=synth_config,
            scenario=intake["scenario"],
            inferred_flags=inferred,
        )

        return {
            **intake,
            "tree_verdict": verdict,
            "decision": decision,
            "risk_assessment": derive_risk(normalized, decision),
            "review": review_input(normalized, decision),
        }

    async def health_check(self) -> Dict[str, Any]:
        checks = {}
        for name, component in (
            ("semantic", self.semantic_classifier),
            ("narrative", self.narrative_adapter),
        ):
            if component is not None:
                checks[name] = await component.health_check()
        status = "healthy"
        if any(check.get("status") != "healthy" for check in checks.values()):
            status = "degraded"
        return {"status": status, "component": "orchestrator", "components": checks}
