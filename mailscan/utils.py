import re

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def date_validation(date: str | None) -> str:
    """
    Validate the date criterion.

    The scanner only does a substring comparison, so this is advisory.

    Args:
        date: Date string in format YYYY-MM-DD, or empty

    Returns:
        Empty string if validation passes, error message if validation fails
    """

    if date and not _DATE_RE.match(date):
        return f"Date {date} should be in format YYYY-MM-DD"
    return ""
