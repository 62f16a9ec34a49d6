"""Tests for diff exceptions."""

import pytest

from diff.diff_exceptions import DiffError, DiffParseError


class TestDiffError:
    """Test base DiffError exception."""

    def test_create_simple_error(self):
        """Test creating a simple error without details."""
        error = DiffError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.error_details is None

    def test_create_error_with_details(self):
        """Test creating an error with details."""
        error = DiffError("Error occurred", error_details={'header': '@@ x', 'line': 42})

        assert str(error) == "Error occurred"
        assert error.error_details == {'header': '@@ x', 'line': 42}


class TestDiffParseError:
    """Test DiffParseError exception."""

    def test_inherits_from_diff_error(self):
        """Test that DiffParseError inherits from DiffError."""
        assert issubclass(DiffParseError, DiffError)

    def test_caught_as_diff_error(self):
        """Test that DiffParseError can be caught as DiffError."""
        with pytest.raises(DiffError):
            raise DiffParseError("bad header")
