"""
Shared fixtures: a complete, valid entity graph for the documents under test
"""
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from facturacr.schemas import (
    IdentificationDocument,
    Invoice,
    Issuer,
    Item,
    Location,
    Phone,
    Receiver,
    Reference,
    Regulation,
    Summary,
    Tax,
)

CR_TZ = timezone(timedelta(hours=-6))
EMISSION_DATE = datetime(2023, 5, 10, 9, 0, 0, tzinfo=CR_TZ)
EXPECTED_SEQUENCE = "00100001010000000042"
EXPECTED_KEY = "506100523000301230456001000010100000000421A1B2C3D4"


def make_issuer(**overrides):
    data = dict(
        name="Servicios Tecnicos S.A.",
        identification_document=IdentificationDocument(document_type="01", raw_id_number="301230456"),
        comercial_name="ServiTec",
        location=Location(province="1", canton="1", district="3", others="Frente al parque central"),
        phone=Phone(country_code="506", number="22223333"),
        email="facturas@servitec.example",
    )
    data.update(overrides)
    return Issuer(**data)


def make_receiver(**overrides):
    data = dict(
        name="Cliente Ejemplo",
        identification_document=IdentificationDocument(document_type="02", raw_id_number="3101123456"),
        email="cliente@example.com",
    )
    data.update(overrides)
    return Receiver(**data)


def make_item(**overrides):
    data = dict(
        line_number=1,
        code_type="01",
        code="SRV-001",
        quantity=Decimal("1"),
        unit="Sp",
        description="Consultoria",
        unit_price=Decimal("1000.00"),
        total=Decimal("1000.00"),
        subtotal=Decimal("1000.00"),
        taxes=[Tax(code="01", rate=Decimal("13.00"), total=Decimal("130.00"))],
        net_total=Decimal("1130.00"),
    )
    data.update(overrides)
    return Item(**data)


def make_reference(**overrides):
    data = dict(
        document_type="01",
        number="506100523000301230456001000010100000000411A1B2C3D4",
        date=EMISSION_DATE,
        code="01",
        reason="Anula factura",
    )
    data.update(overrides)
    return Reference(**data)


def make_document_data(**overrides):
    items = overrides.pop("items", None) or [make_item()]
    data = dict(
        number=42,
        date=EMISSION_DATE,
        issuer=make_issuer(),
        receiver=make_receiver(),
        condition="01",
        payment_type="01",
        document_situation="1",
        security_code="A1B2C3D4",
        items=items,
        summary=Summary.from_items(items),
        regulation=Regulation(),
    )
    data.update(overrides)
    return data


def make_invoice(**overrides):
    return Invoice(**make_document_data(**overrides))


@pytest.fixture
def invoice():
    return make_invoice()


@pytest.fixture
def invoice_json():
    """Invoice body as a JSON client would send it"""
    return {
        "number": 42,
        "date": "2023-05-10T09:00:00-06:00",
        "issuer": {
            "name": "Servicios Tecnicos S.A.",
            "identification_document": {"document_type": "01", "raw_id_number": "301230456"},
            "location": {"province": "1", "canton": "1", "district": "3", "others": "Frente al parque central"},
            "email": "facturas@servitec.example",
        },
        "condition": "01",
        "payment_type": "01",
        "document_situation": "1",
        "security_code": "A1B2C3D4",
        "items": [
            {
                "line_number": 1,
                "quantity": "1",
                "unit": "Sp",
                "description": "Consultoria",
                "unit_price": "1000.00",
                "total": "1000.00",
                "subtotal": "1000.00",
                "taxes": [{"code": "01", "rate": "13.00", "total": "130.00"}],
                "net_total": "1130.00",
            }
        ],
        "summary": {"subtotal": "1000.00", "net_total": "1000.00", "tax_total": "130.00", "total": "1130.00"},
        "regulation": {},
    }
