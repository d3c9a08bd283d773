"""
Document and sub-entity models
"""
from .contact import Fax, Location, Phone, PhoneType
from .documents import DOCUMENT_CLASSES, CreditNote, DebitNote, Document, Invoice, Ticket
from .identification import IdentificationDocument
from .items import Exoneration, Item, Tax
from .parties import Issuer, Receiver
from .references import OtherText, Reference, Regulation
from .summary import Summary

__all__ = [
    "Document",
    "Invoice",
    "DebitNote",
    "CreditNote",
    "Ticket",
    "DOCUMENT_CLASSES",
    "IdentificationDocument",
    "Issuer",
    "Receiver",
    "Location",
    "PhoneType",
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
