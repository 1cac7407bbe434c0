"""
Session Schema Validator

The strict gate used for anything arriving from outside the application
(imported files, the bundled demo project). Unlike the sanitizer it never
repairs: every structural violation is collected as a ValidationIssue with
a field path and a message.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from inkwise.state.schemas import (
    DEFAULT_MAX_BULLETS,
    DEFAULT_OUTPUT_PROFILE,
    DEFAULT_PHASE,
    DEFAULT_PRESET_ID,
    MAX_BULLETS,
    MIN_BULLETS,
    OutputProfileKey,
    Phase,
    SESSION_VERSION,
    SESSION_VERSION_PREFIX,
    SessionExport,
    SessionState,
)
from inkwise.utils.timestamps import is_iso_timestamp, utc_now_iso

SESSION_VERSION_PATTERN = re.compile(r"^" + re.escape(SESSION_VERSION_PREFIX) + r"v\d+$")

INVALID_IMPORT_ERROR = "Invalid import: data must be an object"
UNPARSEABLE_IMPORT_ERROR = (
    "Could not parse import data. Ensure it's a valid Inkwise session or project file."
)


# =============================================================================
# STRICT SCHEMAS
# =============================================================================

_STRICT = ConfigDict(strict=True)


def _check_timestamp(value: Optional[str]) -> Optional[str]:
    if value is not None and not is_iso_timestamp(value):
        raise PydanticCustomError("datetime_format", "Invalid ISO-8601 datetime")
    return value


class ClaimSchema(BaseModel):
    model_config = _STRICT

    id: str = Field(min_length=1)
    text: str


class LinkedInConfigSchema(BaseModel):
    model_config = _STRICT

    hookOverride: str = ""
    includeBullets: bool = False
    bulletIntro: str = "Key points:"
    maxBullets: int = Field(default=DEFAULT_MAX_BULLETS, ge=MIN_BULLETS, le=MAX_BULLETS)
    includeCTA: bool = True
    ctaText: str = "What would you change?"
    includeHashtags: bool = False
    hashtags: str = "#leadership #execution #systems"
    includeSignature: bool = False
    signature: str = "— Posted via Inkwise"


class UIStateSchema(BaseModel):
    model_config = _STRICT

    presetId: str = DEFAULT_PRESET_ID


class ProjectMetadataSchema(BaseModel):
    model_config = _STRICT

    id: Optional[str] = None
    title: Optional[str] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None

    check_timestamps = field_validator("createdAt", "updatedAt")(_check_timestamp)


class SessionStateSchema(BaseModel):
    model_config = _STRICT

    phase: Phase = DEFAULT_PHASE
    intent: str = ""
    claims: List[ClaimSchema] = Field(min_length=1)
    expressions: Dict[str, str] = Field(default_factory=dict)
    outputProfile: OutputProfileKey = DEFAULT_OUTPUT_PROFILE
    ui: UIStateSchema = Field(default_factory=UIStateSchema)
    linkedin: LinkedInConfigSchema = Field(default_factory=LinkedInConfigSchema)
    metadata: Optional[ProjectMetadataSchema] = None


class SessionExportSchema(BaseModel):
    model_config = _STRICT

    version: str
    exportedAt: str
    state: SessionStateSchema

    @field_validator("version")
    @classmethod
    def check_version(cls, value: str) -> str:
        if not SESSION_VERSION_PATTERN.match(value):
            raise PydanticCustomError(
                "session_version",
                "Version must match 'inkwise:session:v<N>'",
            )
        return value

    @field_validator("exportedAt")
    @classmethod
    def check_exported_at(cls, value: str) -> str:
        return _check_timestamp(value)


# =============================================================================
# RESULTS
# =============================================================================

@dataclass
class ValidationIssue:
    """A single structural violation."""
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message


@dataclass
class ValidationResult:
    success: bool
    data: Optional[Any] = None
    issues: List[ValidationIssue] = field(default_factory=list)


@dataclass
class ImportResult:
    """Outcome of resolving an arbitrary imported payload to a session state."""
    success: bool
    data: Optional[SessionState] = None
    error: Optional[str] = None
    issues: List[ValidationIssue] = field(default_factory=list)


def _issues_from(error: ValidationError) -> List[ValidationIssue]:
    return [
        ValidationIssue(
            path=".".join(str(part) for part in item["loc"]),
            message=item["msg"],
        )
        for item in error.errors()
    ]


def format_errors(issues: List[ValidationIssue]) -> List[str]:
    """Render issues as user-facing lines: "claims.0.id: ..."."""
    return [str(issue) for issue in issues]


# =============================================================================
# VALIDATION
# =============================================================================

def _to_state(schema: SessionStateSchema) -> SessionState:
    return SessionState.model_validate(schema.model_dump())


def validate_state(raw: Any) -> ValidationResult:
    """Strictly validate a bare session state."""
    try:
        schema = SessionStateSchema.model_validate(raw)
    except ValidationError as e:
        return ValidationResult(success=False, issues=_issues_from(e))
    return ValidationResult(success=True, data=_to_state(schema))


def validate_export(raw: Any) -> ValidationResult:
    """Strictly validate a session export envelope."""
    try:
        schema = SessionExportSchema.model_validate(raw)
    except ValidationError as e:
        return ValidationResult(success=False, issues=_issues_from(e))
    envelope = SessionExport(
        version=schema.version,
        exportedAt=schema.exportedAt,
        state=_to_state(schema.state),
    )
    return ValidationResult(success=True, data=envelope)


def extract_state_from_import(data: Any) -> ImportResult:
    """
    Resolve an imported payload to a session state.

    Resolution order:
    1. Session export envelope (version starts with "inkwise:session:"):
       the whole envelope, then the nested state alone for partial recovery.
    2. A bare session state.
    3. Any object with a nested "state" property.
    """
    if not isinstance(data, dict):
        return ImportResult(success=False, error=INVALID_IMPORT_ERROR)

    nested = data.get("state")
    version = data.get("version")

    if isinstance(version, str) and version.startswith(SESSION_VERSION_PREFIX):
        exported = validate_export(data)
        if exported.success:
            return ImportResult(success=True, data=exported.data.state)

        if isinstance(nested, dict):
            recovered = validate_state(nested)
            if recovered.success:
                return ImportResult(success=True, data=recovered.data)

        return ImportResult(
            success=False,
            error="Invalid session format: " + ", ".join(i.message for i in exported.issues),
            issues=exported.issues,
        )

    direct = validate_state(data)
    if direct.success:
        return ImportResult(success=True, data=direct.data)

    if isinstance(nested, dict):
        recovered = validate_state(nested)
        if recovered.success:
            return ImportResult(success=True, data=recovered.data)

    return ImportResult(success=False, error=UNPARSEABLE_IMPORT_ERROR, issues=direct.issues)


def create_session_export(state: SessionState, exported_at: Optional[str] = None) -> SessionExport:
    """Wrap a canonical state in the current export envelope."""
    return SessionExport(
        version=SESSION_VERSION,
        exportedAt=exported_at or utc_now_iso(),
        state=state,
    )
