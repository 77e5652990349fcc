"""
Main entry point for the MT Analyzer.

Processes a single change description through the LangGraph workflow.

Usage:
    python main.py input/current_change.json
    python main.py input/current_change.json --output output/report.json
"""
import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict

from config import Config
from components.intake.models import ClassificationInput
from pipeline.orchestrator import AnalysisReport, ModificationAnalysisService
from pipeline.orchestrator.workflow import visualize_workflow


def load_input_change(file_path: Path) -> ClassificationInput:
    """
    Load a change description from a JSON file.

    Args:
        file_path: Path to input JSON file

    Returns:
        ClassificationInput
    """
    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)

    return ClassificationInput.model_validate(data)


def save_output(output: Dict[str, Any], file_path: Path):
    """
    Save output to JSON file.

    Args:
        output: Output dict to save
        file_path: Path to save file
    """
    file_path.parent.mkdir(parents=True, exist_ok=True)

    with open(file_path, "w", encoding="utf-8") as f:
        json.dump(output, f, indent=2)

    print(f"\n💾 Saved report to: {file_path}")


def print_summary(report: AnalysisReport):
    decision = report.decision
    risk = report.risk_assessment

    print("\n" + "=" * 80)
    print("✅ ANALYSIS COMPLETE" if not report.degraded else "⚠️  ANALYSIS COMPLETE (decision tree only)")
    print("=" * 80)
    print(f"   MT Required: {'Yes' if decision.mt_required else 'No'}")
    print(f"   Design Type: {decision.design_type}")
    print(f"   Reason: {decision.reason}")
    print(f"   Confidence: {decision.confidence:.2%}")
    if report.scenario:
        print(f"   Scenario: {report.scenario} (inferred: {', '.join(report.inferred_flags) or 'none'})")
    print(f"   Overall Risk: {risk.overall_risk.value}")
    print(f"   Risk Factors: {len(risk.risk_factors)}")
    print(f"   Expected Design Outputs: {len(report.review.expected_outputs)}")
    if report.review.missing_elements:
        print(f"   Missing: {', '.join(report.review.missing_elements)}")
    print(f"   Processing Time: {report.processing_time_seconds:.2f} seconds")
    print("\n   Evidence:")
    for item in decision.evidence_trail:
        print(f"   - [{item.source}] {item.summary}")
    print("=" * 80)


async def process_change(input_file: Path, output_file: Path = None, graph_file: Path = None):
    """
    Process a single change description through the workflow.

    Args:
        input_file: Path to input change JSON
        output_file: Optional path to write the report JSON
        graph_file: Optional path to write the workflow graph PNG
    """
    print("=" * 80)
    print("📋 MODIFICATION TRAVELER ANALYZER")
    print("=" * 80)

    print(f"\n📂 Loading change from: {input_file}")
    change = load_input_change(input_file)
    if change.project_number:
        print(f"   Project Number: {change.project_number}")

    if graph_file is not None:
        print(f"\n📊 Generating workflow graph...")
        visualize_workflow(str(graph_file))

    print(f"\n🚀 Starting LangGraph workflow...")
    service = ModificationAnalysisService()
    report = await service.analyze(change)

    output = report.model_dump(mode="json", by_alias=True)
    print_summary(report)

    if output_file is not None:
        save_output(output, output_file)
    else:
        print(json.dumps(output, indent=2))


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Determine whether a facility change needs a Modification Traveler")
    parser.add_argument(
        "input",
        nargs="?",
        default=str(Config.PROJECT_ROOT / "input" / "current_change.json"),
        help="Path to the change description JSON",
    )
    parser.add_argument("--output", "-o", default=None, help="Write the report JSON to this path")
    parser.add_argument("--graph", default=None, help="Write the workflow graph PNG to this path")
    args = parser.parse_args()

    input_file = Path(args.input)
    if not input_file.exists():
        print(f"❌ Error: Input file not found at {input_file}")
        print("   Create a change description JSON file in the input/ directory")
        sys.exit(1)

    await process_change(
        input_file,
        output_file=Path(args.output) if args.output else None,
        graph_file=Path(args.graph) if args.graph else None,
    )


def cli():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    cli()
