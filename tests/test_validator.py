"""Tests for the strict session schema validator and import boundary."""

import json

import pytest

from inkwise.state.sanitizer import reconcile
from inkwise.state.schemas import SessionExport, SessionState
from inkwise.state.validator import (
    INVALID_IMPORT_ERROR,
    UNPARSEABLE_IMPORT_ERROR,
    ValidationIssue,
    create_session_export,
    extract_state_from_import,
    format_errors,
    validate_export,
    validate_state,
)
from inkwise.utils.timestamps import is_iso_timestamp

VALID_STATE = {
    "phase": "structure",
    "intent": "Say one thing well",
    "claims": [{"id": "c1", "text": "First"}, {"id": "c2", "text": ""}],
    "expressions": {"c1": "Paragraph"},
    "outputProfile": "memo",
}

VALID_EXPORT = {
    "version": "inkwise:session:v1",
    "exportedAt": "2025-01-18T00:00:00.000Z",
    "state": VALID_STATE,
}


def paths(result):
    return {issue.path for issue in result.issues}


class TestValidateState:
    """Test strict state validation."""

    def test_minimal_state_gets_defaults(self):
        result = validate_state({"claims": [{"id": "a", "text": ""}]})
        assert result.success
        state = result.data
        assert isinstance(state, SessionState)
        assert state.phase == "intent"
        assert state.output_profile == "linkedin"
        assert state.linkedin.max_bullets == 5
        assert state.ui.preset_id == "systems_coordination"

    def test_full_state(self):
        result = validate_state(VALID_STATE)
        assert result.success
        assert result.data.expressions == {"c1": "Paragraph"}
        assert result.data.output_profile == "memo"

    def test_empty_claims_rejected(self):
        result = validate_state({"claims": []})
        assert not result.success
        assert paths(result) == {"claims"}

    def test_missing_claims_rejected(self):
        result = validate_state({"intent": "x"})
        assert not result.success
        assert "claims" in paths(result)

    def test_empty_claim_id_rejected(self):
        result = validate_state({"claims": [{"id": "", "text": "x"}]})
        assert paths(result) == {"claims.0.id"}

    def test_no_type_coercion(self):
        result = validate_state(
            {"claims": [{"id": "a", "text": 5}], "linkedin": {"includeBullets": "yes"}}
        )
        assert not result.success
        assert {"claims.0.text", "linkedin.includeBullets"} <= paths(result)

    @pytest.mark.parametrize("value", [0, 13, "5"])
    def test_max_bullets_bounds(self, value):
        result = validate_state({"claims": [{"id": "a", "text": ""}], "linkedin": {"maxBullets": value}})
        assert paths(result) == {"linkedin.maxBullets"}

    def test_non_string_expression_rejected(self):
        result = validate_state({"claims": [{"id": "a", "text": ""}], "expressions": {"a": 1}})
        assert not result.success
        assert paths(result) == {"expressions.a"}

    def test_collects_every_violation(self):
        result = validate_state({"claims": [], "phase": "publish", "outputProfile": "fax"})
        assert {"claims", "phase", "outputProfile"} <= paths(result)

    def test_non_object(self):
        result = validate_state("nope")
        assert not result.success
        assert result.issues

    def test_metadata_timestamps(self):
        ok = validate_state({"claims": [{"id": "a", "text": ""}], "metadata": {"createdAt": "2025-01-18T00:00:00Z"}})
        bad = validate_state({"claims": [{"id": "a", "text": ""}], "metadata": {"createdAt": "soon"}})
        assert ok.success
        assert paths(bad) == {"metadata.createdAt"}


class TestValidateExport:
    """Test strict envelope validation."""

    def test_valid_export(self):
        result = validate_export(VALID_EXPORT)
        assert result.success
        assert isinstance(result.data, SessionExport)
        assert result.data.state.intent == "Say one thing well"

    def test_invalid_version_prefix(self):
        result = validate_export({**VALID_EXPORT, "version": "other:format:v1"})
        assert paths(result) == {"version"}

    def test_version_needs_number(self):
        result = validate_export({**VALID_EXPORT, "version": "inkwise:session:latest"})
        assert paths(result) == {"version"}

    def test_invalid_datetime(self):
        result = validate_export({**VALID_EXPORT, "exportedAt": "not-a-date"})
        assert paths(result) == {"exportedAt"}

    def test_nested_paths(self):
        result = validate_export({**VALID_EXPORT, "state": {"claims": []}})
        assert paths(result) == {"state.claims"}


class TestExtractStateFromImport:
    """Test the import resolution order."""

    def test_session_export(self):
        result = extract_state_from_import(VALID_EXPORT)
        assert result.success
        assert result.data.intent == "Say one thing well"

    def test_raw_state(self):
        result = extract_state_from_import(VALID_STATE)
        assert result.success
        assert result.data.phase == "structure"

    @pytest.mark.parametrize("raw", [None, "text", 5, [VALID_STATE]])
    def test_non_object(self, raw):
        result = extract_state_from_import(raw)
        assert not result.success
        assert result.error == INVALID_IMPORT_ERROR

    def test_partial_recovery_of_nested_state(self):
        result = extract_state_from_import({**VALID_EXPORT, "exportedAt": "garbage"})
        assert result.success
        assert result.data.intent == "Say one thing well"

    def test_invalid_session_reports_errors(self):
        result = extract_state_from_import({**VALID_EXPORT, "state": {"claims": []}})
        assert not result.success
        assert result.error.startswith("Invalid session format: ")
        assert paths(result) == {"state.claims"}

    def test_nested_state_without_version(self):
        result = extract_state_from_import({"state": VALID_STATE, "exportedAt": "whenever"})
        assert result.success
        assert result.data.output_profile == "memo"

    def test_empty_claims_rejected_even_though_sanitizer_repairs(self):
        raw = {"state": {"claims": []}}
        result = extract_state_from_import(raw)
        assert not result.success
        assert result.error == UNPARSEABLE_IMPORT_ERROR
        assert len(reconcile(raw).claims) == 1

    def test_unrelated_object(self):
        result = extract_state_from_import({"hello": "world"})
        assert not result.success
        assert result.error == UNPARSEABLE_IMPORT_ERROR


class TestExport:
    """Test export creation and round-trips."""

    def test_create_session_export(self, make_state):
        state = make_state({"intent": "x"})
        envelope = create_session_export(state)
        assert envelope.version == "inkwise:session:v1"
        assert is_iso_timestamp(envelope.exported_at)
        assert envelope.state == state

    def test_export_dict_shape(self, make_state):
        data = create_session_export(make_state(), exported_at="2025-01-18T00:00:00.000Z").to_dict()
        assert data["version"] == "inkwise:session:v1"
        assert data["exportedAt"] == "2025-01-18T00:00:00.000Z"
        assert data["state"]["outputProfile"] == "linkedin"
        assert data["state"]["linkedin"]["maxBullets"] == 5

    @pytest.mark.parametrize(
        "raw",
        [
            {},
            VALID_STATE,
            {
                "intent": "Ship it",
                "claims": [{"id": "a", "text": "Be bold"}, None],
                "expressions": {"a": "Because", "orphan": "left over"},
                "outputProfile": "xthread",
                "linkedin": {"maxBullets": 40, "includeHashtags": True},
                "metadata": {"title": "Launch", "updatedAt": "2025-01-18T09:30:00+02:00"},
            },
        ],
    )
    def test_round_trip(self, raw, ids):
        state = reconcile(raw, ids)
        serialized = json.dumps(create_session_export(state).to_dict())
        result = extract_state_from_import(json.loads(serialized))
        assert result.success
        assert result.data == state


class TestFormatErrors:
    def test_paths_prefix_messages(self):
        issues = [ValidationIssue("claims.0.id", "too short"), ValidationIssue("", "not an object")]
        assert format_errors(issues) == ["claims.0.id: too short", "not an object"]
