"""
Session REST API

The single-user writing session: read, edit, preset/demo loads, import and
export. Every write goes through the sanitizer before it is stored.
"""

from typing import Any, Dict, Literal, Optional
from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel

from inkwise.api.drafts import DraftResponse, render_draft
from inkwise.drafting.exports import build_markdown_export, markdown_filename, session_filename
from inkwise.persistence import KeyValueStore, get_store, load_session, reset_session, save_session
from inkwise.state import presets, session as ops
from inkwise.state.schemas import SessionState
from inkwise.state.validator import (
    ImportResult,
    create_session_export,
    extract_state_from_import,
    format_errors,
)


router = APIRouter(prefix="/api/session", tags=["session"])


# --- Pydantic Schemas ---

class PhaseUpdate(BaseModel):
    phase: str


class ClaimCreate(BaseModel):
    text: str = ""


class ClaimUpdate(BaseModel):
    text: str


class ClaimMove(BaseModel):
    direction: Literal["up", "down"]


class ExpressionUpdate(BaseModel):
    text: str


class ProgressResponse(BaseModel):
    current_phase_index: int
    total_phases: int
    non_empty_claims: int
    total_claims: int
    completed_expressions: int


# --- Helpers ---

async def _store_and_return(store: KeyValueStore, state: SessionState) -> Dict[str, Any]:
    await save_session(store, state)
    return state.to_dict()


async def _require_claim(store: KeyValueStore, claim_id: str) -> SessionState:
    state = await load_session(store)
    if ops.find_claim_index(state, claim_id) < 0:
        raise HTTPException(status_code=404, detail="Claim not found")
    return state


def _import_error(result: ImportResult) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={"message": result.error, "errors": format_errors(result.issues)},
    )


# --- Endpoints ---

@router.get("")
async def get_current_session(store: KeyValueStore = Depends(get_store)):
    """
    Get the current session.

    The first read creates and stores the default session so claim ids stay
    stable across requests.
    """
    return await _store_and_return(store, await load_session(store))


@router.put("")
async def replace_session(
    payload: Any = Body(default=None),
    store: KeyValueStore = Depends(get_store),
):
    """Replace the whole session. Malformed fields fall back to defaults."""
    return await _store_and_return(store, ops.replace_state(payload))


@router.patch("")
async def patch_session(
    patch: Dict[str, Any] = Body(...),
    store: KeyValueStore = Depends(get_store),
):
    """Apply a field-level patch (wire field names)."""
    state = await load_session(store)
    return await _store_and_return(store, ops.apply_patch(state, patch))


@router.delete("")
async def delete_session(store: KeyValueStore = Depends(get_store)):
    """Reset to a fresh default session."""
    state = await reset_session(store)
    return await _store_and_return(store, state)


@router.post("/phase")
async def change_phase(body: PhaseUpdate, store: KeyValueStore = Depends(get_store)):
    state = await load_session(store)
    return await _store_and_return(store, ops.set_phase(state, body.phase))


@router.post("/claims")
async def create_claim(body: ClaimCreate, store: KeyValueStore = Depends(get_store)):
    state = await load_session(store)
    return await _store_and_return(store, ops.add_claim(state, body.text))


@router.patch("/claims/{claim_id}")
async def edit_claim(claim_id: str, body: ClaimUpdate, store: KeyValueStore = Depends(get_store)):
    state = await _require_claim(store, claim_id)
    return await _store_and_return(store, ops.update_claim(state, claim_id, body.text))


@router.delete("/claims/{claim_id}")
async def delete_claim(claim_id: str, store: KeyValueStore = Depends(get_store)):
    state = await _require_claim(store, claim_id)
    return await _store_and_return(store, ops.remove_claim(state, claim_id))


@router.post("/claims/{claim_id}/move")
async def reorder_claim(claim_id: str, body: ClaimMove, store: KeyValueStore = Depends(get_store)):
    state = await _require_claim(store, claim_id)
    return await _store_and_return(store, ops.move_claim(state, claim_id, body.direction))


@router.put("/expressions/{claim_id}")
async def edit_expression(
    claim_id: str,
    body: ExpressionUpdate,
    store: KeyValueStore = Depends(get_store),
):
    state = await _require_claim(store, claim_id)
    return await _store_and_return(store, ops.update_expression(state, claim_id, body.text))


@router.post("/presets/{preset_id}")
async def load_preset(preset_id: str, store: KeyValueStore = Depends(get_store)):
    """Load a quick-start preset into the session."""
    if presets.get_preset(preset_id) is None:
        raise HTTPException(status_code=404, detail="Preset not found")
    state = await load_session(store)
    return await _store_and_return(store, presets.apply_preset(state, preset_id))


@router.post("/demo")
async def load_demo(store: KeyValueStore = Depends(get_store)):
    """Replace the session with the bundled demo project."""
    result = presets.load_demo_project()
    if not result.success:
        raise _import_error(result)
    return await _store_and_return(store, ops.replace_state(result.data))


@router.get("/draft", response_model=DraftResponse)
async def get_draft(store: KeyValueStore = Depends(get_store)):
    """Render the draft for the session's output profile."""
    return render_draft(await load_session(store))


@router.get("/progress", response_model=ProgressResponse)
async def get_progress(store: KeyValueStore = Depends(get_store)):
    return ops.get_progress_metrics(await load_session(store)).to_dict()


@router.get("/markdown")
async def download_markdown(store: KeyValueStore = Depends(get_store)):
    state = await load_session(store)
    filename = markdown_filename(state.output_profile)
    return PlainTextResponse(
        build_markdown_export(state),
        media_type="text/markdown",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/export")
async def export_session(store: KeyValueStore = Depends(get_store)):
    """Download the session as a versioned export envelope."""
    envelope = create_session_export(await load_session(store))
    return JSONResponse(
        envelope.to_dict(),
        headers={"Content-Disposition": f'attachment; filename="{session_filename()}"'},
    )


@router.post("/import")
async def import_session(
    payload: Optional[Any] = Body(default=None),
    store: KeyValueStore = Depends(get_store),
):
    """
    Import a session file.

    The payload must pass strict validation; nothing is applied otherwise.
    A successful import lands in the draft phase.
    """
    result = extract_state_from_import(payload)
    if not result.success:
        raise _import_error(result)

    state = ops.replace_state(result.data)
    if state.phase != "draft":
        state = ops.set_phase(state, "draft")
    return await _store_and_return(store, state)
