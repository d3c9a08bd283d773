"""
Issuer (Emisor) and receiver (Receptor) of a document.
"""
from typing import Optional
from xml.etree.ElementTree import Element

from facturacr.schemas.base import Record
from facturacr.schemas.contact import Fax, Location, Phone, add_contact_xml
from facturacr.schemas.identification import IdentificationDocument
from facturacr.utils.validators import Presence
from facturacr.utils.xml_generator import add_element, add_optional_element


class Issuer(Record):
    """Issuer data; identification, location and email are mandatory."""
    XML_TAG = "Emisor"
    RULES = {
        "name": (Presence(),),
        "identification_document": (Presence(),),
        "location": (Presence(),),
        "email": (Presence(),),
    }

    name: Optional[str] = None
    identification_document: Optional[IdentificationDocument] = None
    comercial_name: Optional[str] = None
    location: Optional[Location] = None
    phone: Optional[Phone] = None
    fax: Optional[Fax] = None
    email: Optional[str] = None

    def fill_xml(self, element: Element) -> None:
        add_element(element, "Nombre", self.name)
        self.identification_document.build_xml(element)
        add_optional_element(element, "NombreComercial", self.comercial_name)
        self.location.build_xml(element)
        add_contact_xml(element, self.phone, self.fax, self.email)


class Receiver(Record):
    """Receiver data; only the name is mandatory (tickets may omit the rest)."""
    XML_TAG = "Receptor"
    RULES = {
        "name": (Presence(),),
    }

    name: Optional[str] = None
    identification_document: Optional[IdentificationDocument] = None
    foreign_id_number: Optional[str] = None
    comercial_name: Optional[str] = None
    location: Optional[Location] = None
    phone: Optional[Phone] = None
    fax: Optional[Fax] = None
    email: Optional[str] = None

    def fill_xml(self, element: Element) -> None:
        add_element(element, "Nombre", self.name)
        if self.identification_document is not None:
            self.identification_document.build_xml(element)
        add_optional_element(element, "IdentificacionExtranjero", self.foreign_id_number)
        add_optional_element(element, "NombreComercial", self.comercial_name)
        if self.location is not None:
            self.location.build_xml(element)
        add_contact_xml(element, self.phone, self.fax, self.email)
