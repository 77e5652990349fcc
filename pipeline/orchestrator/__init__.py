"""
Orchestrator Module - LangGraph workflow for MT analysis.

This module provides the workflow orchestration using LangGraph and the
ModificationAnalysisService facade that runs it under a deadline.
"""

from pipeline.orchestrator.workflow import get_workflow, build_workflow
from pipeline.orchestrator.state import AnalysisState
from pipeline.orchestrator.service import AnalysisReport, ModificationAnalysisService

__all__ = [
    "get_workflow",
    "build_workflow",
    "AnalysisState",
    "AnalysisReport",
    "ModificationAnalysisService",
]
