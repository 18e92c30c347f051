"""
Tests for shared_utils.validation.InputValidator.
"""

import pytest

from shared_utils.error_handler import ValidationError
from shared_utils.validation import InputValidator


# ---------------------------------------------------------------------------
# validate_non_empty_string
# ---------------------------------------------------------------------------


class TestValidateNonEmptyString:
    def test_valid_string_stripped(self) -> None:
        assert InputValidator.validate_non_empty_string("  budget  ", "query") == "budget"

    @pytest.mark.parametrize("value", ["", "   ", "\n\t"])
    def test_empty_rejected(self, value: str) -> None:
        with pytest.raises(ValidationError, match="query cannot be empty"):
            InputValidator.validate_non_empty_string(value, "query")

    def test_non_string_rejected(self) -> None:
        with pytest.raises(ValidationError, match="query must be a string"):
            InputValidator.validate_non_empty_string(42, "query")
