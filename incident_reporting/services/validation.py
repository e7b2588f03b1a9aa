"""Required-field checks for inbound report payloads."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final, Mapping

REQUIRED_FIELDS: Final[tuple[str, ...]] = (
    "collegeCode",
    "incidentCategory",
    "incidentType",
    "description",
)


class ReportValidationError(ValueError):
    """Raised when a payload is missing one or more required fields."""

    def __init__(self, required_fields: list[str], missing_fields: list[str]) -> None:
        super().__init__(f"Missing required fields: {', '.join(missing_fields)}")
        self.required_fields = required_fields
        self.missing_fields = missing_fields


@dataclass(frozen=True, slots=True)
class ReportFields:
    """Normalized report input ready for persistence."""

    college_code: str
    incident_category: str
    incident_type: str
    description: str
    date: Any = None


def required_fields(*, date_required: bool = False) -> list[str]:
    fields = list(REQUIRED_FIELDS)
    if date_required:
        fields.append("date")
    return fields


def _coerce_text(value: Any) -> str | None:
    # bool is an int subclass; True is not a meaningful code or description.
    if not value or isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return None


def validate_report_payload(payload: Any, *, date_required: bool = False) -> ReportFields:
    """Return normalized fields or raise :class:`ReportValidationError`.

    Anything that is not a mapping is treated as an empty payload. The error
    always lists the full required set so clients can render one message.
    """

    data: Mapping[str, Any] = payload if isinstance(payload, Mapping) else {}

    values: dict[str, str] = {}
    missing: list[str] = []
    for name in REQUIRED_FIELDS:
        text = _coerce_text(data.get(name))
        if text is None:
            missing.append(name)
        else:
            values[name] = text

    raw_date = data.get("date")
    if date_required and not raw_date:
        missing.append("date")

    if missing:
        raise ReportValidationError(required_fields(date_required=date_required), missing)

    return ReportFields(
        college_code=values["collegeCode"],
        incident_category=values["incidentCategory"],
        incident_type=values["incidentType"],
        description=values["description"],
        date=raw_date or None,
    )


__all__ = [
    "REQUIRED_FIELDS",
    "ReportFields",
    "ReportValidationError",
    "required_fields",
    "validate_report_payload",
]
