"""
Error classes for document composition and serialization.

Two disjoint kinds exist: ValidationError is caller-facing and recoverable,
InternalConsistencyError signals a defect in derived values and is fatal.
"""
from typing import Dict, List, Optional


class FacturaError(Exception):
    """
    Base error class with structured error information
    """
    error_code = "FACTURA_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, object]:
        return {"code": self.error_code, "message": self.message}


class ValidationError(FacturaError):
    """Raised when validate-then-act is attempted on an entity that fails its rules"""
    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field_errors: Optional[Dict[str, List[str]]] = None):
        self.field_errors = {field: list(messages) for field, messages in (field_errors or {}).items()}
        super().__init__(f"{message}: {self.field_errors}" if self.field_errors else message)

    @property
    def errors(self) -> Dict[str, List[str]]:
        return self.field_errors

    def to_dict(self) -> Dict[str, object]:
        data = super().to_dict()
        data["field_errors"] = self.field_errors
        return data


class InvalidDocumentError(ValidationError):
    """Raised by document level operations (key, serialization) on an invalid document"""
    error_code = "INVALID_DOCUMENT"


class InternalConsistencyError(FacturaError):
    """Raised when a derived value breaks its invariant even though validation passed"""
    error_code = "INTERNAL_CONSISTENCY_ERROR"
