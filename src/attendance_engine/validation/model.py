from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ..core.enums import DayState, ErrorCode, WarningCode


@dataclass(frozen=True)
class ValidationVerdict:
    """Result of validating one proposed action. Not persisted."""

    valid: bool
    errors: Tuple[ErrorCode, ...] = ()
    warnings: Tuple[WarningCode, ...] = ()
    expected_status: Optional[DayState] = None
    projected_hours_worked: float = 0.0

    @classmethod
    def reject(cls, *errors: ErrorCode, warnings: Tuple[WarningCode, ...] = ()) -> "ValidationVerdict":
        return cls(valid=False, errors=tuple(errors), warnings=tuple(warnings))

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "errors": [e.value for e in self.errors],
            "warnings": [w.value for w in self.warnings],
            "expected_status": self.expected_status.value if self.expected_status else None,
            "projected_hours_worked": round(self.projected_hours_worked, 2),
        }
