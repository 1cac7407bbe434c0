"""
Drafts REST API

Stateless rendering: profiles catalogue and compose-from-payload.
"""

from typing import Any, Dict, List
from fastapi import APIRouter, Body
from pydantic import BaseModel

from inkwise.drafting.composer import compose_base
from inkwise.drafting.formatter import format_for_profile
from inkwise.drafting.profiles import (
    OUTPUT_PROFILES,
    character_count,
    get_profile,
    is_over_character_limit,
)
from inkwise.state.sanitizer import reconcile
from inkwise.state.schemas import SessionState


router = APIRouter(prefix="/api", tags=["drafts"])


# --- Pydantic Schemas ---

class DraftResponse(BaseModel):
    profile: str
    base: str
    text: str
    char_count: int
    max_chars: int
    over_limit: bool


def render_draft(state: SessionState) -> DraftResponse:
    """Compose, format and measure the draft for the session's profile."""
    base = compose_base(state)
    text = format_for_profile(base, state)
    profile = get_profile(state.output_profile)
    count = character_count(text)
    return DraftResponse(
        profile=profile.key,
        base=base,
        text=text,
        char_count=count,
        max_chars=profile.max_chars,
        over_limit=is_over_character_limit(text, profile.key),
    )


# --- Endpoints ---

@router.get("/profiles")
async def list_profiles() -> List[Dict[str, Any]]:
    """List the output profiles and their character budgets."""
    return [profile.to_dict() for profile in OUTPUT_PROFILES.values()]


@router.post("/drafts/compose", response_model=DraftResponse)
async def compose_draft(payload: Any = Body(default=None)):
    """Render a draft from any state-like payload without touching the stored session."""
    return render_draft(reconcile(payload))
