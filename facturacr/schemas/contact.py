"""
Location and phone records used by issuers and receivers.
"""
from typing import Optional
from xml.etree.ElementTree import Element

from facturacr.schemas.base import Record
from facturacr.utils.validators import Presence
from facturacr.utils.xml_generator import add_element, add_optional_element


class Location(Record):
    """Costa Rican address: province, canton, district, neighborhood and details."""
    XML_TAG = "Ubicacion"
    RULES = {
        "province": (Presence(),),
        "canton": (Presence(),),
        "district": (Presence(),),
        "others": (Presence(),),
    }

    province: Optional[str] = None
    canton: Optional[str] = None
    district: Optional[str] = None
    neighborhood: Optional[str] = None
    others: Optional[str] = None

    def fill_xml(self, element: Element) -> None:
        add_element(element, "Provincia", self.province)
        add_element(element, "Canton", self.canton.zfill(2))  # Zero-pad to 2 digits
        add_element(element, "Distrito", self.district.zfill(2))
        if self.neighborhood:
            add_element(element, "Barrio", self.neighborhood.zfill(2))
        add_element(element, "OtrasSenas", self.others)


class PhoneType(Record):
    """Country code plus number; the subclass decides the element name."""
    RULES = {
        "country_code": (Presence(),),
        "number": (Presence(),),
    }

    country_code: Optional[str] = "506"
    number: Optional[str] = None

    def fill_xml(self, element: Element) -> None:
        add_element(element, "CodigoPais", self.country_code)
        add_element(element, "NumTelefono", self.number)


class Phone(PhoneType):
    XML_TAG = "Telefono"


class Fax(PhoneType):
    XML_TAG = "Fax"


def add_contact_xml(element: Element, phone: Optional[PhoneType], fax: Optional[PhoneType], email: Optional[str]) -> None:
    """Emit the optional phone, fax and email tail shared by issuer and receiver."""
    if phone is not None:
        phone.build_xml(element)
    if fax is not None:
        fax.build_xml(element)
    add_optional_element(element, "CorreoElectronico", email)
