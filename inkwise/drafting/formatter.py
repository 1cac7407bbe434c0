"""
Profile Formatter

Re-shapes the base draft for the selected output profile.
"""

from inkwise.drafting.composer import compose_base, get_clean_claims, get_clean_paragraphs
from inkwise.drafting.profiles import OUTPUT_PROFILES
from inkwise.drafting.thread_splitter import split_into_thread
from inkwise.state.schemas import SessionState

EMAIL_SUBJECT_FALLBACK = "Quick note"
MEMO_TITLE_FALLBACK = "Memo"
MEMO_TLDR_LIMIT = 5
THREAD_SEPARATOR = "\n\n---\n\n"


def format_email(base: str, state: SessionState) -> str:
    subject = (
        state.linkedin.hook_override.strip()
        or state.intent.strip()
        or EMAIL_SUBJECT_FALLBACK
    )
    return f"Subject: {subject}\n\n{base.strip()}"


def format_memo(base: str, state: SessionState) -> str:
    title = state.intent.strip() or MEMO_TITLE_FALLBACK
    claims = get_clean_claims(state.claims)
    if claims:
        tldr = "\n".join(f"- {c.text}" for c in claims[:MEMO_TLDR_LIMIT])
    else:
        tldr = "- "
    return (
        f"TITLE\n{title}\n\n"
        f"TL;DR\n{tldr}\n\n"
        f"DETAILS\n{base.strip()}\n\n"
        f"NEXT STEPS\n- "
    )


def format_blog(base: str, state: SessionState) -> str:
    title = state.intent.strip()
    claims = get_clean_claims(state.claims)
    paragraphs = get_clean_paragraphs(claims, state.expressions)

    output = f"# {title}\n\n" if title else ""
    if claims and paragraphs:
        # Paragraphs are matched to headings by position
        for i, claim in enumerate(claims):
            output += f"## {claim.text}\n\n"
            if i < len(paragraphs):
                output += f"{paragraphs[i]}\n\n"
    else:
        output += base.strip()
    return output.strip()


def format_thread(base: str, state: SessionState) -> str:
    chunk_size = OUTPUT_PROFILES["xthread"].chunk_size
    return THREAD_SEPARATOR.join(split_into_thread(base, chunk_size))


_FORMATTERS = {
    "email": format_email,
    "memo": format_memo,
    "blog": format_blog,
    "xthread": format_thread,
}


def format_for_profile(base: str, state: SessionState) -> str:
    """
    Shape the base draft for state.output_profile.

    linkedin, custom and anything unrecognized pass the base through unchanged.
    """
    formatter = _FORMATTERS.get(state.output_profile)
    if formatter is None:
        return base
    return formatter(base, state)


def build_draft(state: SessionState) -> str:
    """Compose and format in one step."""
    return format_for_profile(compose_base(state), state)
