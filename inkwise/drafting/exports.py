"""
Secondary renderings of a session: markdown download, full breakdown,
and the filenames used for exported files.
"""

from datetime import datetime
from typing import Optional

from inkwise.drafting.composer import get_clean_claims, get_clean_paragraphs
from inkwise.drafting.profiles import validate_output_profile
from inkwise.state.schemas import SessionState
from inkwise.utils.timestamps import file_stamp


def build_markdown_export(state: SessionState) -> str:
    intent = state.intent.strip()
    claims = get_clean_claims(state.claims)
    paragraphs = get_clean_paragraphs(claims, state.expressions)

    lines = []
    if intent:
        lines += [f"# {intent}", ""]

    if claims and paragraphs:
        for i, claim in enumerate(claims):
            lines += [f"## {claim.text}", ""]
            if i < len(paragraphs):
                lines += [paragraphs[i], ""]
    elif claims:
        lines += [f"- {c.text}" for c in claims]
        lines.append("")

    return "\n".join(lines).strip()


def build_full_breakdown(state: SessionState) -> str:
    """Intent, structure and expression laid out as labelled sections."""
    intent = state.intent.strip()
    claims = get_clean_claims(state.claims)
    paragraphs = get_clean_paragraphs(claims, state.expressions)

    lines = []
    if intent:
        lines += ["INTENT", intent, ""]
    if claims:
        lines.append("STRUCTURE")
        lines += [f"• {c.text}" for c in claims]
        lines.append("")
    if paragraphs:
        lines.append("EXPRESSION")
        for paragraph in paragraphs:
            lines += [paragraph, ""]

    return "\n".join(lines).strip()


def is_first_time_user(state: SessionState) -> bool:
    """True when nothing has been written yet."""
    has_intent = bool(state.intent.strip())
    has_claims = any(c.text.strip() for c in state.claims)
    has_expressions = any(
        isinstance(e, str) and e.strip() for e in state.expressions.values()
    )
    return not (has_intent or has_claims or has_expressions)


def session_filename(moment: Optional[datetime] = None) -> str:
    return f"inkwise_session_{file_stamp(moment)}.json"


def project_filename(moment: Optional[datetime] = None) -> str:
    return f"inkwise_project_{file_stamp(moment)}.json"


def markdown_filename(profile_key: str, moment: Optional[datetime] = None) -> str:
    return f"inkwise_{validate_output_profile(profile_key)}_{file_stamp(moment)}.md"
