"""
Session edit operations.

Every operation takes a canonical SessionState and returns a new one; the
result always passes back through the sanitizer, so edits can never break
an invariant. Phase is a position marker only: any transition is allowed.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from inkwise.state.sanitizer import IdFactory, reconcile
from inkwise.state.schemas import PHASES, SessionState
from inkwise.utils.id_generator import generate_claim_id

_NESTED_SECTIONS = ("ui", "linkedin")


def apply_patch(
    state: SessionState,
    patch: Dict[str, Any],
    id_factory: IdFactory = generate_claim_id,
) -> SessionState:
    """
    Apply a field-level patch (wire names, e.g. {"outputProfile": "email"}).

    Top-level fields are replaced; "ui" and "linkedin" sections are merged
    so a patch may name a single sub-field.
    """
    data = state.to_dict()
    if isinstance(patch, dict):
        for key, value in patch.items():
            if key in _NESTED_SECTIONS and isinstance(value, dict):
                data[key] = {**data[key], **value}
            else:
                data[key] = value
    return reconcile(data, id_factory)


def replace_state(raw: Any, id_factory: IdFactory = generate_claim_id) -> SessionState:
    """Wholesale replacement (import, demo load)."""
    return reconcile(raw, id_factory)


# --- Phase navigation ---

def set_phase(state: SessionState, phase: str) -> SessionState:
    return apply_patch(state, {"phase": phase})


def next_phase(phase: str) -> Optional[str]:
    if phase not in PHASES or phase == PHASES[-1]:
        return None
    return PHASES[PHASES.index(phase) + 1]


def previous_phase(phase: str) -> Optional[str]:
    if phase not in PHASES or phase == PHASES[0]:
        return None
    return PHASES[PHASES.index(phase) - 1]


# --- Intent & claims ---

def update_intent(state: SessionState, intent: str) -> SessionState:
    return apply_patch(state, {"intent": intent})


def find_claim_index(state: SessionState, claim_id: str) -> int:
    for i, claim in enumerate(state.claims):
        if claim.id == claim_id:
            return i
    return -1


def add_claim(
    state: SessionState,
    text: str = "",
    id_factory: IdFactory = generate_claim_id,
) -> SessionState:
    claims = [c.model_dump() for c in state.claims]
    claims.append({"id": id_factory(), "text": text})
    return apply_patch(state, {"claims": claims}, id_factory)


def update_claim(state: SessionState, claim_id: str, text: str) -> SessionState:
    claims = [
        {"id": c.id, "text": text if c.id == claim_id else c.text}
        for c in state.claims
    ]
    return apply_patch(state, {"claims": claims})


def remove_claim(
    state: SessionState,
    claim_id: str,
    id_factory: IdFactory = generate_claim_id,
) -> SessionState:
    """Drop a claim and its expression. Removing the last claim leaves one empty claim."""
    claims = [c.model_dump() for c in state.claims if c.id != claim_id]
    expressions = {k: v for k, v in state.expressions.items() if k != claim_id}
    # An empty list makes the sanitizer fall back to a fresh empty claim
    return apply_patch(state, {"claims": claims, "expressions": expressions}, id_factory)


def move_claim(state: SessionState, claim_id: str, direction: str) -> SessionState:
    """Move a claim one slot "up" or "down". No-op at the edges or for unknown ids."""
    index = find_claim_index(state, claim_id)
    if index < 0 or direction not in ("up", "down"):
        return state

    target = index - 1 if direction == "up" else index + 1
    if target < 0 or target >= len(state.claims):
        return state

    claims = [c.model_dump() for c in state.claims]
    claims.insert(target, claims.pop(index))
    return apply_patch(state, {"claims": claims})


# --- Expressions & options ---

def update_expression(state: SessionState, claim_id: str, text: str) -> SessionState:
    return apply_patch(state, {"expressions": {**state.expressions, claim_id: text}})


def update_linkedin_field(state: SessionState, name: str, value: Any) -> SessionState:
    return apply_patch(state, {"linkedin": {name: value}})


def update_ui_field(state: SessionState, name: str, value: Any) -> SessionState:
    return apply_patch(state, {"ui": {name: value}})


# --- Progress ---

@dataclass
class ProgressMetrics:
    current_phase_index: int
    total_phases: int
    non_empty_claims: int
    total_claims: int
    completed_expressions: int

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def get_progress_metrics(state: SessionState) -> ProgressMetrics:
    def has_text(value: Any) -> bool:
        return isinstance(value, str) and bool(value.strip())

    return ProgressMetrics(
        current_phase_index=PHASES.index(state.phase),
        total_phases=len(PHASES),
        non_empty_claims=sum(1 for c in state.claims if has_text(c.text)),
        total_claims=len(state.claims),
        completed_expressions=sum(
            1 for c in state.claims if has_text(state.expressions.get(c.id))
        ),
    )
