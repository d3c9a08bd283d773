"""
Electronic documents: the abstract Document and its concrete variants.

A document composes its sub-entities, validates the whole tree on demand,
derives the 50-character key and the 20-character consecutive number, and
emits the hierarchical XML plus the flat API payload.
"""
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Optional
from xml.etree.ElementTree import Element

from pydantic import Field

from facturacr.core.config import settings
from facturacr.core.exceptions import InternalConsistencyError, InvalidDocumentError, ValidationError
from facturacr.core.logging import document_logger
from facturacr.schemas.base import Record
from facturacr.schemas.codes import (
    CONDITIONS,
    CREDIT_CONDITION,
    DOCUMENT_SITUATION,
    DOCUMENT_TYPES,
    PAYMENT_TYPES,
    REFERENCING_DOCUMENT_TYPES,
)
from facturacr.schemas.items import Item
from facturacr.schemas.parties import Issuer, Receiver
from facturacr.schemas.references import OtherText, Reference, Regulation
from facturacr.schemas.summary import Summary
from facturacr.utils.key_generator import generate_consecutive_number, generate_document_key
from facturacr.utils.validators import (
    BLANK_MESSAGE,
    ConditionalPresence,
    Length,
    Membership,
    Presence,
    ValidationResult,
    is_blank,
)
from facturacr.utils.xml_generator import add_element, create_root, format_datetime, format_xml

SCHEMA_BASE_URL = "https://tribunet.hacienda.go.cr/docs/esquemas/2017/v4.2"


def schema_namespaces(schema_name: str) -> Dict[str, str]:
    """Namespace declarations for the root of a v4.2 document."""
    return {
        "xmlns": f"{SCHEMA_BASE_URL}/{schema_name}",
        "xmlns:ds": "http://www.w3.org/2000/09/xmldsig#",
        "xmlns:xsd": "http://www.w3.org/2001/XMLSchema",
        "xmlns:xsi": "http://www.w3.org/2001/XMLSchema-instance",
    }


class Document(Record):
    """
    Abstract electronic document.

    Concrete variants fix DOCUMENT_TYPE (and with it which conditional rules
    are live), the root element name and the default namespace set.
    Headquarters and terminal are defaulted once, at construction.
    """
    DOCUMENT_TYPE: ClassVar[Optional[str]] = None
    DOCUMENT_TAG: ClassVar[Optional[str]] = None
    SCHEMA_NAME: ClassVar[Optional[str]] = None
    ERROR_CLASS = InvalidDocumentError
    ERROR_MESSAGE = "Invalid document"

    RULES = {
        "date": (Presence(),),
        "number": (Presence(),),
        "issuer": (Presence(),),
        "condition": (Presence(), Membership(CONDITIONS)),
        "credit_term": (ConditionalPresence(lambda document: document.condition == CREDIT_CONDITION),),
        "payment_type": (Presence(), Membership(PAYMENT_TYPES)),
        "document_type": (Presence(), Membership(DOCUMENT_TYPES)),
        "document_situation": (Presence(), Membership(DOCUMENT_SITUATION)),
        "summary": (Presence(),),
        "regulation": (Presence(),),
        "security_code": (Presence(), Length(8)),
        "references": (
            ConditionalPresence(lambda document: document.document_type in REFERENCING_DOCUMENT_TYPES),
        ),
        "items": (Presence(),),
        "headquarters": (Presence(), Length(3)),
        "terminal": (Presence(), Length(5)),
    }

    number: Optional[int] = Field(None, gt=0)
    date: Optional[datetime] = None
    issuer: Optional[Issuer] = None
    receiver: Optional[Receiver] = None
    condition: Optional[str] = None
    credit_term: Optional[str] = None
    payment_type: Optional[str] = None
    document_situation: Optional[str] = None
    security_code: Optional[str] = None
    items: List[Item] = Field(default_factory=list)
    references: List[Reference] = Field(default_factory=list)
    summary: Optional[Summary] = None
    regulation: Optional[Regulation] = None
    other_texts: List[OtherText] = Field(default_factory=list)
    headquarters: str = Field(default_factory=lambda: settings.DEFAULT_HEADQUARTERS)
    terminal: str = Field(default_factory=lambda: settings.DEFAULT_TERMINAL)
    namespaces: Optional[Dict[str, str]] = None

    def __init__(self, **data: Any) -> None:
        if type(self).DOCUMENT_TAG is None:
            raise TypeError("Document is abstract; instantiate one of its variants")
        super().__init__(**data)

    @property
    def document_type(self) -> Optional[str]:
        return self.DOCUMENT_TYPE

    def default_namespaces(self) -> Dict[str, str]:
        return schema_namespaces(self.SCHEMA_NAME)

    def ensure_valid(self) -> ValidationResult:
        try:
            return super().ensure_valid()
        except ValidationError as e:
            document_logger.log_document_event(
                "validation_failed",
                document_type=self.document_type,
                field_errors=e.field_errors
            )
            raise

    def compute_sequence(self) -> str:
        """
        20-character consecutive number: headquarters + terminal + type + number.

        Only the number is required; the full document is not validated.
        """
        if is_blank(self.number):
            raise InvalidDocumentError(self.ERROR_MESSAGE, field_errors={"number": [BLANK_MESSAGE]})
        return generate_consecutive_number(self.headquarters, self.terminal, self.document_type, self.number)

    def compute_key(self) -> str:
        """
        50-character document key, recomputed on every call.

        Raises:
            InvalidDocumentError: If the document does not validate
            InternalConsistencyError: If the assembled key is not 50 characters
        """
        self.ensure_valid()
        return self._derive_key()

    def _derive_key(self) -> str:
        consecutive_number = self.compute_sequence()
        try:
            key = generate_document_key(
                emission_date=self.date,
                issuer_id=self.issuer.identification_document.id_number,
                consecutive_number=consecutive_number,
                situation=self.document_situation,
                security_code=self.security_code
            )
        except InternalConsistencyError as e:
            document_logger.log_document_event(
                "internal_error",
                document_type=self.document_type,
                consecutive_number=consecutive_number,
                error_message=e.message
            )
            raise

        document_logger.log_document_event(
            "key_generated",
            document_type=self.document_type,
            document_key=key,
            consecutive_number=consecutive_number
        )
        return key

    def create_element(self, parent: Optional[Element]) -> Element:
        namespaces = self.namespaces if self.namespaces is not None else self.default_namespaces()
        root = create_root(self.DOCUMENT_TAG, namespaces)
        if parent is not None:
            parent.append(root)
        return root

    def fill_xml(self, element: Element, key: Optional[str] = None) -> None:
        add_element(element, "Clave", key if key is not None else self._derive_key())
        add_element(element, "NumeroConsecutivo", self.compute_sequence())
        add_element(element, "FechaEmision", self.date)
        self.issuer.build_xml(element)
        if self.receiver is not None:
            self.receiver.build_xml(element)
        add_element(element, "CondicionVenta", self.condition)
        if self.condition == CREDIT_CONDITION and not is_blank(self.credit_term):
            add_element(element, "PlazoCredito", self.credit_term)
        add_element(element, "MedioPago", self.payment_type)

        details = add_element(element, "DetalleServicio")
        for item in self.items:
            item.build_xml(details)

        self.summary.build_xml(element)
        for reference in self.references:
            reference.build_xml(element)
        self.regulation.build_xml(element)

        if self.other_texts:
            others = add_element(element, "Otros")
            for other_text in self.other_texts:
                other_text.build_xml(others)

    def serialize(self) -> Element:
        """
        Validate the whole tree, then build the XML element tree.

        Raises:
            InvalidDocumentError: If the document or any sub-entity is invalid
        """
        root = self.build_xml()
        document_logger.log_document_event("serialized", document_type=self.document_type)
        return root

    def generate(self) -> str:
        """UTF-8 XML text of the document, with declaration."""
        return format_xml(self.serialize())

    def to_api_payload(self) -> Dict[str, Any]:
        """
        Flat payload for the reception API: key, date and identification pairs.

        The receiver block is only present when the receiver is identified.
        """
        return self._api_payload(self.compute_key())

    def _api_payload(self, key: str) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "clave": key,
            "fecha": format_datetime(self.date),
            "emisor": {
                "tipoIdentificacion": self.issuer.identification_document.document_type,
                "numeroIdentificacion": self.issuer.identification_document.id_number,
            },
        }
        if self.receiver is not None and self.receiver.identification_document is not None:
            payload["receptor"] = {
                "tipoIdentificacion": self.receiver.identification_document.document_type,
                "numeroIdentificacion": self.receiver.identification_document.id_number,
            }
        return payload

    def render(self) -> Dict[str, Any]:
        """
        Key, consecutive number, XML text and API payload in one pass.

        The tree is validated and the key derived once for all four outputs.

        Raises:
            InvalidDocumentError: If the document or any sub-entity is invalid
            InternalConsistencyError: If the assembled key is not 50 characters
        """
        self.ensure_valid()
        key = self._derive_key()
        root = self.create_element(None)
        self.fill_xml(root, key)
        document_logger.log_document_event("serialized", document_type=self.document_type, document_key=key)
        return {
            "clave": key,
            "numero_consecutivo": self.compute_sequence(),
            "xml": format_xml(root),
            "payload": self._api_payload(key),
        }


class Invoice(Document):
    """Factura Electrónica"""
    DOCUMENT_TYPE = "01"
    DOCUMENT_TAG = "FacturaElectronica"
    SCHEMA_NAME = "facturaElectronica"


class DebitNote(Document):
    """Nota de Débito Electrónica; must reference the amended document."""
    DOCUMENT_TYPE = "02"
    DOCUMENT_TAG = "NotaDebitoElectronica"
    SCHEMA_NAME = "notaDebitoElectronica"


class CreditNote(Document):
    """Nota de Crédito Electrónica; must reference the amended document."""
    DOCUMENT_TYPE = "03"
    DOCUMENT_TAG = "NotaCreditoElectronica"
    SCHEMA_NAME = "notaCreditoElectronica"


class Ticket(Document):
    """Tiquete Electrónico"""
    DOCUMENT_TYPE = "04"
    DOCUMENT_TAG = "TiqueteElectronico"
    SCHEMA_NAME = "tiqueteElectronico"


DOCUMENT_CLASSES = {
    document_class.DOCUMENT_TYPE: document_class
    for document_class in (Invoice, DebitNote, CreditNote, Ticket)
}
