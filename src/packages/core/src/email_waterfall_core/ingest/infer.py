"""Column auto-detection for uploaded files."""
from email_waterfall_core.jobs import TargetField


def _is_email(h: str) -> bool:
    return "email" in h or "e-mail" in h or "mail" in h


def _is_first_name(h: str) -> bool:
    return ("first" in h and "name" in h) or h in ("firstname", "first_name", "fname")


def _is_last_name(h: str) -> bool:
    return ("last" in h and "name" in h) or h in (
        "lastname",
        "last_name",
        "lname",
        "surname",
    )


def _is_company(h: str) -> bool:
    return "company" in h or "organization" in h or h in ("org", "business")


DETECTORS = [
    (TargetField.EMAIL, _is_email),
    (TargetField.FIRST_NAME, _is_first_name),
    (TargetField.LAST_NAME, _is_last_name),
    (TargetField.COMPANY, _is_company),
]


def auto_detect_columns(headers: list[str]) -> dict[str, str]:
    """Suggest a header for each target field based on its name.

    When several headers match a field the last one wins.
    """
    suggestions: dict[str, str] = {}
    for header in headers:
        h = header.lower().strip()
        for field, matches in DETECTORS:
            if matches(h):
                suggestions[field.value] = header
    return suggestions
