"""
State Sanitizer

Reconciles arbitrary input (fresh default, partial patch, persisted value,
imported payload) into a canonical SessionState. Always succeeds: anything
malformed or missing is silently replaced by its default.

Only known fields are copied, one by one, into a freshly built record, so
unexpected keys on the input never reach the canonical state.
"""

from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel

from inkwise.state.schemas import (
    Claim,
    DEFAULT_MAX_BULLETS,
    DEFAULT_OUTPUT_PROFILE,
    DEFAULT_PHASE,
    LinkedInConfig,
    MAX_BULLETS,
    MIN_BULLETS,
    OUTPUT_PROFILE_KEYS,
    PHASES,
    ProjectMetadata,
    SESSION_VERSION_PREFIX,
    SessionState,
    UIState,
)
from inkwise.utils.id_generator import generate_claim_id
from inkwise.utils.numbers import clamp_int
from inkwise.utils.timestamps import is_iso_timestamp

IdFactory = Callable[[], str]

_LINKEDIN_TEXT_FIELDS = ("hookOverride", "bulletIntro", "ctaText", "hashtags", "signature")
_LINKEDIN_FLAG_FIELDS = ("includeBullets", "includeCTA", "includeHashtags", "includeSignature")


def _is_object(value: Any) -> bool:
    return isinstance(value, dict)


def unwrap_envelope(raw: Any) -> Any:
    """Return the nested state of an inkwise session export, else the input itself."""
    if (
        _is_object(raw)
        and _is_object(raw.get("state"))
        and isinstance(raw.get("version"), str)
        and raw["version"].startswith(SESSION_VERSION_PREFIX)
    ):
        return raw["state"]
    return raw


def clamp_max_bullets(value: Any) -> int:
    return clamp_int(value, MIN_BULLETS, MAX_BULLETS, DEFAULT_MAX_BULLETS)


def _sanitize_claims(raw_claims: Any, id_factory: IdFactory) -> List[Claim]:
    if not isinstance(raw_claims, list) or not raw_claims:
        return [Claim(id=id_factory(), text="")]

    claims = []
    seen = set()
    for entry in raw_claims:
        entry = entry if _is_object(entry) else {}
        claim_id = entry.get("id")
        if not isinstance(claim_id, str) or not claim_id or claim_id in seen:
            claim_id = id_factory()
            while claim_id in seen:
                claim_id = id_factory()
        seen.add(claim_id)
        text = entry.get("text")
        claims.append(Claim(id=claim_id, text=text if isinstance(text, str) else ""))
    return claims


def _sanitize_expressions(raw_expressions: Any) -> Dict[str, Any]:
    if not _is_object(raw_expressions):
        return {}
    return {key: value for key, value in raw_expressions.items() if isinstance(key, str)}


def _sanitize_linkedin(raw_linkedin: Any) -> LinkedInConfig:
    source = raw_linkedin if _is_object(raw_linkedin) else {}
    fields: Dict[str, Any] = {}

    for name in _LINKEDIN_TEXT_FIELDS:
        if isinstance(source.get(name), str):
            fields[name] = source[name]
    for name in _LINKEDIN_FLAG_FIELDS:
        if isinstance(source.get(name), bool):
            fields[name] = source[name]

    fields["maxBullets"] = clamp_max_bullets(source.get("maxBullets"))
    return LinkedInConfig(**fields)


def _sanitize_ui(raw_ui: Any) -> UIState:
    source = raw_ui if _is_object(raw_ui) else {}
    if isinstance(source.get("presetId"), str):
        return UIState(presetId=source["presetId"])
    return UIState()


def _sanitize_metadata(raw_metadata: Any) -> Optional[ProjectMetadata]:
    if not _is_object(raw_metadata):
        return None
    fields = {}
    for name in ("id", "title"):
        if isinstance(raw_metadata.get(name), str):
            fields[name] = raw_metadata[name]
    for name in ("createdAt", "updatedAt"):
        if is_iso_timestamp(raw_metadata.get(name)):
            fields[name] = raw_metadata[name]
    return ProjectMetadata(**fields)


def reconcile(raw_input: Any, id_factory: IdFactory = generate_claim_id) -> SessionState:
    """
    Reconcile any input into a canonical SessionState.

    Args:
        raw_input: Anything - a SessionState, a session export envelope,
            a raw state dict, a partial patch, None, or garbage.
        id_factory: Generates ids for claims that lack a usable one.

    Returns:
        A SessionState satisfying every invariant. Never raises.
    """
    if isinstance(raw_input, BaseModel):
        raw_input = raw_input.to_dict() if hasattr(raw_input, "to_dict") else raw_input.model_dump(by_alias=True)

    candidate = unwrap_envelope(raw_input)
    parsed = candidate if _is_object(candidate) else {}

    phase = parsed.get("phase")
    output_profile = parsed.get("outputProfile")
    intent = parsed.get("intent")

    return SessionState(
        phase=phase if isinstance(phase, str) and phase in PHASES else DEFAULT_PHASE,
        intent=intent if isinstance(intent, str) else "",
        claims=_sanitize_claims(parsed.get("claims"), id_factory),
        expressions=_sanitize_expressions(parsed.get("expressions")),
        outputProfile=(
            output_profile
            if isinstance(output_profile, str) and output_profile in OUTPUT_PROFILE_KEYS
            else DEFAULT_OUTPUT_PROFILE
        ),
        ui=_sanitize_ui(parsed.get("ui")),
        linkedin=_sanitize_linkedin(parsed.get("linkedin")),
        metadata=_sanitize_metadata(parsed.get("metadata")),
    )


def default_state(id_factory: IdFactory = generate_claim_id) -> SessionState:
    """A fresh session: default values and one empty claim."""
    return reconcile({}, id_factory)
