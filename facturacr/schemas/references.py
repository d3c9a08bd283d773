"""
Reference information, regulation citation and free-form other texts.
"""
from datetime import datetime
from typing import Dict, Optional
from xml.etree.ElementTree import Element

from pydantic import Field

from facturacr.core.config import settings
from facturacr.schemas.base import Record
from facturacr.schemas.codes import DOCUMENT_TYPES, REFERENCE_CODES
from facturacr.utils.validators import Membership, Presence
from facturacr.utils.xml_generator import add_element


class Reference(Record):
    """Document referenced by a credit or debit note (InformacionReferencia)."""
    XML_TAG = "InformacionReferencia"
    RULES = {
        "document_type": (Presence(), Membership(DOCUMENT_TYPES)),
        "number": (Presence(),),
        "date": (Presence(),),
        "code": (Presence(), Membership(REFERENCE_CODES)),
        "reason": (Presence(),),
    }

    document_type: Optional[str] = None
    number: Optional[str] = None
    date: Optional[datetime] = None
    code: Optional[str] = None
    reason: Optional[str] = None

    def fill_xml(self, element: Element) -> None:
        add_element(element, "TipoDoc", self.document_type)
        add_element(element, "Numero", self.number)
        add_element(element, "FechaEmision", self.date)
        add_element(element, "Codigo", self.code)
        add_element(element, "Razon", self.reason)


class Regulation(Record):
    """Resolution that regulates electronic documents (Normativa)."""
    XML_TAG = "Normativa"
    RULES = {
        "number": (Presence(),),
        "date": (Presence(),),
    }

    number: Optional[str] = Field(default_factory=lambda: settings.REGULATION_NUMBER)
    date: Optional[str] = Field(default_factory=lambda: settings.REGULATION_DATE)

    def fill_xml(self, element: Element) -> None:
        add_element(element, "NumeroResolucion", self.number)
        add_element(element, "FechaResolucion", self.date)


class OtherText(Record):
    """Free text node; its attribute mapping is attached to the element as is."""
    XML_TAG = "OtroTexto"

    content: Optional[str] = None
    xml_attributes: Dict[str, str] = Field(default_factory=dict)

    def fill_xml(self, element: Element) -> None:
        for name, value in self.xml_attributes.items():
            element.set(name, value)
        if self.content is not None:
            element.text = self.content
