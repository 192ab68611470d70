"""Tests for request validation helpers."""

import pytest
from mchn.exceptions import RequestValidationError
from mchn.validation import (
    ValidationError,
    ValidationResult,
    validate_id,
    validate_present,
)


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_starts_valid(self):
        result = ValidationResult()
        assert result.is_valid
        assert result.errors == []
        assert str(result) == "Validation passed"

    def test_add_error_defaults_to_400(self):
        result = ValidationResult().add_error("type", "Missing type")

        assert not result.is_valid
        assert result.errors == [ValidationError(field="type", description="Missing type")]
        assert result.errors[0].code == 400

    def test_collects_multiple_errors(self):
        result = ValidationResult()
        result.add_error("id", "Missing id").add_error("type", "Missing type")

        assert [e.field for e in result.errors] == ["id", "type"]
        assert "id: Missing id" in str(result)
        assert "type: Missing type" in str(result)

    def test_merge(self):
        first = ValidationResult()
        second = ValidationResult().add_error("data", "Missing data")

        first.merge(second)

        assert not first.is_valid
        assert first.errors[0].field == "data"

    def test_raise_if_invalid(self):
        ValidationResult().raise_if_invalid()

        with pytest.raises(RequestValidationError, match="Missing data"):
            ValidationResult().add_error("data", "Missing data").raise_if_invalid()

    def test_error_to_dict(self):
        error = ValidationError(field="type", description="Missing type")
        assert error.to_dict() == {
            "field": "type",
            "code": 400,
            "errorDescription": "Missing type",
        }

    def test_error_str_includes_value(self):
        error = ValidationError(field="id", description="bad id", value="abc")
        assert str(error) == "id: bad id (got: 'abc')"


@pytest.mark.parametrize("value", [14, "14", " 7 "])
def test_validate_id_accepts_positive_integers(value):
    assert validate_id(value, "id", "bad id").is_valid


@pytest.mark.parametrize("value", [None, 0, -3, "", "abc", True, 1.5, [1]])
def test_validate_id_rejects(value):
    result = validate_id(value, "id", "bad id")
    assert not result.is_valid
    assert result.errors[0].field == "id"


@pytest.mark.parametrize("value", [None, "", 0, {}, []])
def test_validate_present_rejects_empty(value):
    assert not validate_present(value, "ID", "missing").is_valid


def test_validate_present_reuses_result():
    result = ValidationResult()
    validate_present(None, "ID", "missing", result)
    validate_present("x", "type", "missing", result)
    assert [e.field for e in result.errors] == ["ID"]
