"""
Session state - the canonical data model and its two gates.

- reconcile (sanitizer): lenient, always succeeds; used for internal data
- extract_state_from_import (validator): strict, reports every violation;
  used for anything arriving from a file
"""

from inkwise.state.sanitizer import default_state, reconcile
from inkwise.state.schemas import SessionExport, SessionState
from inkwise.state.validator import (
    create_session_export,
    extract_state_from_import,
    validate_export,
    validate_state,
)

__all__ = [
    "default_state",
    "reconcile",
    "SessionExport",
    "SessionState",
    "create_session_export",
    "extract_state_from_import",
    "validate_export",
    "validate_state",
]
