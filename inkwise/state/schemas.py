"""
Pydantic schemas for the canonical writing session.

This module is the shared data model for the session pipeline:
1. Sanitizer → SessionState (lenient reconciliation of anything)
2. Validator → SessionState (strict gate for imported files)
3. Composer / Formatter → read-only consumers of SessionState

Field names are snake_case in Python and camelCase on the wire
(`outputProfile`, `hookOverride`, `exportedAt`, ...).
"""

from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS & CONSTANTS
# =============================================================================

Phase = Literal["intent", "structure", "expression", "draft"]
OutputProfileKey = Literal["linkedin", "xthread", "email", "memo", "blog", "custom"]

PHASES = ("intent", "structure", "expression", "draft")
OUTPUT_PROFILE_KEYS = ("linkedin", "xthread", "email", "memo", "blog", "custom")

DEFAULT_PHASE = "intent"
DEFAULT_OUTPUT_PROFILE = "linkedin"
DEFAULT_PRESET_ID = "systems_coordination"
DEFAULT_MAX_BULLETS = 5
MIN_BULLETS = 1
MAX_BULLETS = 12

SESSION_VERSION_PREFIX = "inkwise:session:"
SESSION_VERSION = "inkwise:session:v1"


# =============================================================================
# 1. CLAIMS
# =============================================================================

class Claim(BaseModel):
    """One discrete point supporting the intent. Text is trimmed when consumed, not stored."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Non-empty identifier, unique within the session")
    text: str = Field(default="", description="Raw claim text as typed")


# =============================================================================
# 2. LINKEDIN DRAFT OPTIONS
# =============================================================================

class LinkedInConfig(BaseModel):
    """Options shaping the base draft (shared by every output profile)."""
    model_config = ConfigDict(populate_by_name=True)

    hook_override: str = Field(default="", alias="hookOverride")
    include_bullets: bool = Field(default=False, alias="includeBullets")
    bullet_intro: str = Field(default="Key points:", alias="bulletIntro")
    max_bullets: int = Field(
        default=DEFAULT_MAX_BULLETS,
        ge=MIN_BULLETS,
        le=MAX_BULLETS,
        alias="maxBullets",
    )
    include_cta: bool = Field(default=True, alias="includeCTA")
    cta_text: str = Field(default="What would you change?", alias="ctaText")
    include_hashtags: bool = Field(default=False, alias="includeHashtags")
    hashtags: str = Field(default="#leadership #execution #systems")
    include_signature: bool = Field(default=False, alias="includeSignature")
    signature: str = Field(default="— Posted via Inkwise")


# =============================================================================
# 3. UI & METADATA
# =============================================================================

class UIState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    preset_id: str = Field(
        default=DEFAULT_PRESET_ID,
        alias="presetId",
        description="Last selected quick-start preset",
    )


class ProjectMetadata(BaseModel):
    """Optional project header carried along with exports."""
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    title: Optional[str] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    updated_at: Optional[str] = Field(default=None, alias="updatedAt")


# =============================================================================
# 4. SESSION STATE (aggregate root)
# =============================================================================

class SessionState(BaseModel):
    """
    The canonical writing session.

    Invariants (enforced by the sanitizer, which is the only writer):
    - claims is never empty and claim ids are non-empty and unique
    - phase and output_profile are always recognized values
    - linkedin.max_bullets is an integer in [1, 12]
    """
    model_config = ConfigDict(populate_by_name=True)

    phase: Phase = DEFAULT_PHASE
    intent: str = ""
    claims: List[Claim] = Field(min_length=1)
    expressions: Dict[str, Any] = Field(
        default_factory=dict,
        description="{claim_id: paragraph}; orphaned entries are tolerated",
    )
    output_profile: OutputProfileKey = Field(default=DEFAULT_OUTPUT_PROFILE, alias="outputProfile")
    ui: UIState = Field(default_factory=UIState)
    linkedin: LinkedInConfig = Field(default_factory=LinkedInConfig)
    metadata: Optional[ProjectMetadata] = None

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation (camelCase keys, no empty metadata)."""
        data = self.model_dump(by_alias=True)
        if self.metadata is None:
            data.pop("metadata")
        else:
            data["metadata"] = self.metadata.model_dump(by_alias=True, exclude_none=True)
        return data


# =============================================================================
# 5. SESSION EXPORT ENVELOPE
# =============================================================================

class SessionExport(BaseModel):
    """Versioned wrapper used for file-based backup/restore."""
    model_config = ConfigDict(populate_by_name=True)

    version: str = SESSION_VERSION
    exported_at: str = Field(alias="exportedAt")
    state: SessionState

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "exportedAt": self.exported_at,
            "state": self.state.to_dict(),
        }
