"""
Draft Composer

Assembles the platform-agnostic base draft from a canonical session:
hook, optional bullets, body paragraphs, CTA, signature, hashtags.
Pure and deterministic.
"""

from typing import Dict, List, Any

from inkwise.state.schemas import Claim, SessionState
from inkwise.state.sanitizer import clamp_max_bullets

EMPTY_DRAFT_PLACEHOLDER = "(Add intent/claims/expressions to generate a draft.)"


def get_clean_claims(claims: List[Claim]) -> List[Claim]:
    """Claims with trimmed text, dropping the empty ones."""
    cleaned = [Claim(id=c.id, text=(c.text or "").strip()) for c in claims]
    return [c for c in cleaned if c.text]


def get_clean_paragraphs(claims: List[Claim], expressions: Dict[str, Any]) -> List[str]:
    """Non-empty expression paragraphs for the given claims, in claim order."""
    paragraphs = []
    for claim in claims:
        expression = expressions.get(claim.id)
        # Imported/persisted values are not guaranteed to be strings
        if isinstance(expression, str) and expression.strip():
            paragraphs.append(expression.strip())
    return paragraphs


def get_hook(state: SessionState) -> str:
    return state.linkedin.hook_override.strip() or state.intent.strip()


def compose_base(state: SessionState) -> str:
    """Build the base draft shared by every output profile."""
    cfg = state.linkedin
    claims = get_clean_claims(state.claims)
    paragraphs = get_clean_paragraphs(claims, state.expressions)
    max_bullets = clamp_max_bullets(cfg.max_bullets)

    blocks = []

    hook = get_hook(state)
    if hook:
        blocks.append(hook)

    if cfg.include_bullets and claims:
        lines = []
        intro = cfg.bullet_intro.strip()
        if intro:
            lines.append(intro)
        lines.extend(f"• {c.text}" for c in claims[:max_bullets])
        blocks.append("\n".join(lines))

    if paragraphs:
        blocks.extend(paragraphs)
    elif not hook and claims:
        blocks.extend(c.text for c in claims[:max_bullets])
    elif not hook:
        blocks.append(EMPTY_DRAFT_PLACEHOLDER)

    for enabled, text in (
        (cfg.include_cta, cfg.cta_text),
        (cfg.include_signature, cfg.signature),
        (cfg.include_hashtags, cfg.hashtags),
    ):
        if enabled and text.strip():
            blocks.append(text.strip())

    return "\n\n".join(blocks).strip()
