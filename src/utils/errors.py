"""Error handling utilities."""

from typing import Optional


class SupporterOpsError(Exception):
    """Base exception for the supporter operations backend."""
    pass


class SupabaseError(SupporterOpsError):
    """Supabase operation error."""
    pass


class NotFoundError(SupporterOpsError):
    """Requested record does not exist."""

    def __init__(self, table: str, record_id: str):
        self.table = table
        self.record_id = record_id
        super().__init__(f"{table} record not found: {record_id}")


class FormValidationError(SupporterOpsError):
    """Submitted form failed validation; carries field -> message pairs."""

    def __init__(self, errors: dict[str, str], message: Optional[str] = None):
        self.errors = errors
        super().__init__(message or "Form validation failed")

    @classmethod
    def from_pydantic(cls, exc) -> "FormValidationError":
        """Build from a pydantic ValidationError, keeping the first message per field."""
        errors: dict[str, str] = {}
        for err in exc.errors():
            field = ".".join(str(part) for part in err.get("loc", ())) or "__root__"
            errors.setdefault(field, err.get("msg", "invalid value"))
        return cls(errors)
