"""
Identification document owned by an issuer or receiver.
"""
import re
from typing import Optional
from xml.etree.ElementTree import Element

from pydantic import computed_field, field_validator

from facturacr.schemas.base import Record
from facturacr.schemas.codes import IDENTIFICATION_TYPES
from facturacr.utils.validators import Length, Membership, Presence
from facturacr.utils.xml_generator import add_element

ID_NUMBER_LENGTH = 12


class IdentificationDocument(Record):
    """
    Identification type plus number.

    The raw number is kept as supplied and emitted in the XML fragment; the
    normalized number (left zero-padded to 12 digits) is what the document
    key and the API payload use.
    """
    XML_TAG = "Identificacion"
    RULES = {
        "document_type": (Presence(), Membership(IDENTIFICATION_TYPES)),
        "id_number": (Presence(), Length(ID_NUMBER_LENGTH)),
    }

    document_type: Optional[str] = None
    raw_id_number: Optional[str] = None

    @field_validator("raw_id_number")
    @classmethod
    def validate_raw_id_number(cls, v: Optional[str]) -> Optional[str]:
        """Raw number must be digits only and fit in 12 positions."""
        if v is None:
            return v
        v = v.strip()
        if not re.fullmatch(r"\d*", v):
            raise ValueError(f"Identification number must contain only digits: {v}")
        if len(v) > ID_NUMBER_LENGTH:
            raise ValueError(f"Identification number too long (max {ID_NUMBER_LENGTH} digits): {v}")
        return v

    @computed_field
    @property
    def id_number(self) -> Optional[str]:
        if not self.raw_id_number:
            return None
        return self.raw_id_number.zfill(ID_NUMBER_LENGTH)

    def fill_xml(self, element: Element) -> None:
        add_element(element, "Tipo", self.document_type)
        add_element(element, "Numero", self.raw_id_number)
