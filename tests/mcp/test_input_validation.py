"""Tests for MCP tool input validation using Pydantic models."""

import pytest
from pydantic import ValidationError

from mailscan.mcp.tools import SearchLogsInput


class TestSearchLogsInputValidation:
    """Tests for SearchLogsInput Pydantic model validation."""

    def test_valid_input_minimal(self):
        """Test valid input with required fields only."""
        input_data = SearchLogsInput(folder="/var/log/smtp", email="a@x.com")
        assert input_data.folder == "/var/log/smtp"
        assert input_data.email == "a@x.com"
        assert input_data.date is None
        assert input_data.workers is None
        assert input_data.include_content is True

    def test_valid_input_full(self):
        """Test valid input with all fields."""
        input_data = SearchLogsInput(
            folder="/var/log/smtp",
            email="a@x.com",
            date="2025-01-15",
            workers=8,
            include_content=False,
        )
        assert input_data.date == "2025-01-15"
        assert input_data.workers == 8
        assert input_data.include_content is False

    @pytest.mark.parametrize("field", ["folder", "email"])
    def test_required(self, field):
        """Test that folder and email are required."""
        data = {"folder": "/var/log/smtp", "email": "a@x.com"}
        del data[field]
        with pytest.raises(ValidationError) as exc_info:
            SearchLogsInput(**data)
        assert field in str(exc_info.value)

    def test_email_cannot_be_blank(self):
        """Test that a whitespace-only email is rejected."""
        with pytest.raises(ValidationError) as exc_info:
            SearchLogsInput(folder="/var/log/smtp", email="   ")
        assert "email" in str(exc_info.value)

    def test_whitespace_stripped(self):
        """Test that whitespace is stripped from strings."""
        input_data = SearchLogsInput(
            folder="  /var/log/smtp ", email=" a@x.com ", date=" 2025-01-15 "
        )
        assert input_data.folder == "/var/log/smtp"
        assert input_data.email == "a@x.com"
        assert input_data.date == "2025-01-15"

    def test_empty_date_is_none(self):
        """Test that an empty date means any date."""
        input_data = SearchLogsInput(folder="/logs", email="a@x.com", date="")
        assert input_data.date is None

    @pytest.mark.parametrize("workers", [0, -1, 1001])
    def test_workers_bounds(self, workers):
        """Test that the worker count stays within bounds."""
        with pytest.raises(ValidationError):
            SearchLogsInput(folder="/logs", email="a@x.com", workers=workers)
