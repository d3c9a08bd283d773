"""
Document totals (ResumenFactura).
"""
from decimal import Decimal
from typing import Dict, Iterable, Optional
from xml.etree.ElementTree import Element

from facturacr.schemas.base import Record
from facturacr.schemas.items import Item
from facturacr.utils.validators import ConditionalPresence, Presence
from facturacr.utils.xml_generator import add_element

LOCAL_CURRENCY = "CRC"
ZERO = Decimal("0")


class Summary(Record):
    """Document totals; currency is optional and implies colones when absent."""
    XML_TAG = "ResumenFactura"
    RULES = {
        "exchange_rate": (
            ConditionalPresence(lambda summary: bool(summary.currency) and summary.currency != LOCAL_CURRENCY),
        ),
        "subtotal": (Presence(),),
        "net_total": (Presence(),),
        "total": (Presence(),),
    }

    currency: Optional[str] = None
    exchange_rate: Optional[Decimal] = None
    services_taxable_total: Decimal = ZERO
    services_exempt_total: Decimal = ZERO
    goods_taxable_total: Decimal = ZERO
    goods_exempt_total: Decimal = ZERO
    taxable_total: Decimal = ZERO
    exempt_total: Decimal = ZERO
    subtotal: Optional[Decimal] = None
    discount_total: Decimal = ZERO
    net_total: Optional[Decimal] = None
    tax_total: Decimal = ZERO
    total: Optional[Decimal] = None

    @classmethod
    def from_items(
        cls,
        items: Iterable[Item],
        currency: Optional[str] = None,
        exchange_rate: Optional[Decimal] = None
    ) -> "Summary":
        """
        Calculate document totals from line items.

        Lines carrying at least one tax count as taxable, the rest as exempt;
        service units split services from goods.
        """
        totals: Dict[str, Decimal] = {
            "services_taxable_total": ZERO,
            "services_exempt_total": ZERO,
            "goods_taxable_total": ZERO,
            "goods_exempt_total": ZERO,
            "subtotal": ZERO,
            "discount_total": ZERO,
            "net_total": ZERO,
            "tax_total": ZERO,
        }

        for item in items:
            line_total = item.total or ZERO
            if item.taxes:
                bucket = "services_taxable_total" if item.is_service else "goods_taxable_total"
            else:
                bucket = "services_exempt_total" if item.is_service else "goods_exempt_total"
            totals[bucket] += line_total

            totals["subtotal"] += line_total
            totals["discount_total"] += item.discount or ZERO
            totals["net_total"] += item.subtotal if item.subtotal is not None else line_total - (item.discount or ZERO)
            totals["tax_total"] += item.tax_total

        return cls(
            currency=currency,
            exchange_rate=exchange_rate,
            taxable_total=totals["services_taxable_total"] + totals["goods_taxable_total"],
            exempt_total=totals["services_exempt_total"] + totals["goods_exempt_total"],
            total=totals["net_total"] + totals["tax_total"],
            **totals
        )

    def fill_xml(self, element: Element) -> None:
        if self.currency:
            add_element(element, "CodigoMoneda", self.currency)
            add_element(element, "TipoCambio", self.exchange_rate if self.exchange_rate is not None else Decimal("1"))
        add_element(element, "TotalServGravados", self.services_taxable_total)
        add_element(element, "TotalServExentos", self.services_exempt_total)
        add_element(element, "TotalMercanciasGravadas", self.goods_taxable_total)
        add_element(element, "TotalMercanciasExentas", self.goods_exempt_total)
        add_element(element, "TotalGravado", self.taxable_total)
        add_element(element, "TotalExento", self.exempt_total)
        add_element(element, "TotalVenta", self.subtotal)
        add_element(element, "TotalDescuentos", self.discount_total)
        add_element(element, "TotalVentaNeta", self.net_total)
        add_element(element, "TotalImpuesto", self.tax_total)
        add_element(element, "TotalComprobante", self.total)
