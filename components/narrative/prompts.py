"""
Prompt templates for the Narrative Assessment Agent.
"""

from typing import Any, Dict

SYSTEM_PROMPT = """You are a senior nuclear facility modification analyst with deep experience in:
- 10 CFR 50.59 screening and evaluation
- 10 CFR 50 Appendix B quality assurance
- Modification Traveler (MT) classification, Design Types I-V
- Identical versus non-identical replacement determination
- Temporary modification safety analysis

Provide accurate MT classifications with detailed reasoning."""

ANALYSIS_PROMPT = """NUCLEAR FACILITY MODIFICATION ANALYSIS REQUEST

CHANGE DESCRIPTION:
{text}

PRELIMINARY ANALYSIS:
{context}

Design types:
- Type I: New Design
- Type II: Modification
- Type III: Non-Identical Replacement
- Type IV: Temporary
- Type V: Identical Replacement

Determine whether a Modification Traveler is required and which design type applies.
Explain which regulatory criteria drive the decision and why the other types were ruled out.

Your answer MUST contain exactly one line of the form "MT Required: Yes" or "MT Required: No"
and exactly one line of the form "Design Type: Type <I|II|III|IV|V>"."""


def format_context(context: Dict[str, Any]) -> str:
    """
    Render preliminary evidence for the prompt.

    Args:
        context: Mapping of evidence name to a short description

    Returns:
        Bulleted lines, or a placeholder when nothing is available
    """
    if not context:
        return "- No preliminary analysis available."
    return "\n".join(f"- {name}: {value}" for name, value in context.items())


def build_analysis_prompt(text: str, context: Dict[str, Any]) -> str:
    """Build the user prompt for a narrative assessment."""
    return ANALYSIS_PROMPT.format(text=text.strip(), context=format_context(context))
