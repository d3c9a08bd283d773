"""
Costa Rica electronic documents: composition, validation, key derivation and XML rendering.
"""
from facturacr.core.exceptions import (
    FacturaError,
    InternalConsistencyError,
    InvalidDocumentError,
    ValidationError,
)
from facturacr.schemas import (
    CreditNote,
    DebitNote,
    Document,
    Exoneration,
    Fax,
    IdentificationDocument,
    Invoice,
    Issuer,
    Item,
    Location,
    OtherText,
    Phone,
    Receiver,
    Reference,
    Regulation,
    Summary,
    Tax,
    Ticket,
)
from facturacr.utils.validators import ValidationResult, validate

__version__ = "1.0.0"

__all__ = [
    "FacturaError",
    "ValidationError",
    "InvalidDocumentError",
    "InternalConsistencyError",
    "ValidationResult",
    "validate",
    "Document",
    "Invoice",
    "DebitNote",
    "CreditNote",
    "Ticket",
    "IdentificationDocument",
    "Issuer",
    "Receiver",
    "Location",
    "Phone",
    "Fax",
    "Item",
    "Tax",
    "Exoneration",
    "Summary",
    "Reference",
    "Regulation",
    "OtherText",
]
