"""
Line items (LineaDetalle) with their taxes and exoneration.
"""
from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from xml.etree.ElementTree import Element

from pydantic import Field

from facturacr.schemas.base import Record
from facturacr.schemas.codes import COMMERCIAL_CODE_TYPES, EXONERATION_TYPES, TAX_CODES
from facturacr.utils.validators import ConditionalPresence, Membership, Presence, is_blank
from facturacr.utils.xml_generator import add_element, add_optional_element

# Units of measure that denote services rather than goods
SERVICE_UNITS = frozenset({"Al", "Alc", "Cm", "I", "Os", "Sp", "Spe", "St"})


class Exoneration(Record):
    """Tax exemption declaration; every field is mandatory."""
    XML_TAG = "Exoneracion"
    RULES = {
        "document_type": (Presence(), Membership(EXONERATION_TYPES)),
        "document_number": (Presence(),),
        "institution": (Presence(),),
        "date": (Presence(),),
        "total_tax": (Presence(),),
        "percentage": (Presence(),),
    }

    document_type: Optional[str] = None
    document_number: Optional[str] = None
    institution: Optional[str] = None
    date: Optional[datetime] = None
    total_tax: Optional[Decimal] = None
    percentage: Optional[int] = Field(None, ge=0, le=100)

    def fill_xml(self, element: Element) -> None:
        add_element(element, "TipoDocumento", self.document_type)
        add_element(element, "NumeroDocumento", self.document_number)
        add_element(element, "NombreInstitucion", self.institution)
        add_element(element, "FechaEmision", self.date)
        add_element(element, "MontoImpuesto", self.total_tax)
        add_element(element, "PorcentajeCompra", self.percentage)


class Tax(Record):
    """Tax applied to a line item."""
    XML_TAG = "Impuesto"
    RULES = {
        "code": (Presence(), Membership(TAX_CODES)),
        "rate": (Presence(),),
        "total": (Presence(),),
    }

    code: Optional[str] = None
    rate: Optional[Decimal] = None
    total: Optional[Decimal] = None

    def fill_xml(self, element: Element) -> None:
        add_element(element, "Codigo", self.code)
        add_element(element, "Tarifa", self.rate)
        add_element(element, "Monto", self.total)


class Item(Record):
    """
    One line of the document detail.

    The item exclusively owns its taxes and its exoneration.
    """
    XML_TAG = "LineaDetalle"
    RULES = {
        "line_number": (Presence(),),
        "code_type": (
            ConditionalPresence(lambda item: not is_blank(item.code)),
            Membership(COMMERCIAL_CODE_TYPES),
        ),
        "quantity": (Presence(),),
        "unit": (Presence(),),
        "description": (Presence(),),
        "unit_price": (Presence(),),
        "total": (Presence(),),
        "discount_reason": (ConditionalPresence(lambda item: bool(item.discount)),),
        "subtotal": (Presence(),),
        "net_total": (Presence(),),
    }

    line_number: Optional[int] = Field(None, gt=0)
    code_type: Optional[str] = None
    code: Optional[str] = None
    quantity: Optional[Decimal] = None
    unit: Optional[str] = None
    comercial_unit: Optional[str] = None
    description: Optional[str] = None
    unit_price: Optional[Decimal] = None
    total: Optional[Decimal] = None
    discount: Optional[Decimal] = None
    discount_reason: Optional[str] = None
    subtotal: Optional[Decimal] = None
    taxes: List[Tax] = Field(default_factory=list)
    exoneration: Optional[Exoneration] = None
    net_total: Optional[Decimal] = None

    @property
    def is_service(self) -> bool:
        return self.unit in SERVICE_UNITS

    @property
    def tax_total(self) -> Decimal:
        return sum((tax.total or Decimal("0") for tax in self.taxes), Decimal("0"))

    def fill_xml(self, element: Element) -> None:
        add_element(element, "NumeroLinea", self.line_number)
        if self.code:
            code_element = add_element(element, "Codigo")
            add_element(code_element, "Tipo", self.code_type)
            add_element(code_element, "Codigo", self.code)
        add_element(element, "Cantidad", self.quantity)
        add_element(element, "UnidadMedida", self.unit)
        add_optional_element(element, "UnidadMedidaComercial", self.comercial_unit)
        add_element(element, "Detalle", self.description)
        add_element(element, "PrecioUnitario", self.unit_price)
        add_element(element, "MontoTotal", self.total)
        if self.discount:
            add_element(element, "MontoDescuento", self.discount)
            add_element(element, "NaturalezaDescuento", self.discount_reason)
        add_element(element, "SubTotal", self.subtotal)
        for tax in self.taxes:
            tax.build_xml(element)
        if self.exoneration is not None:
            self.exoneration.build_xml(element)
        add_element(element, "MontoTotalLinea", self.net_total)
