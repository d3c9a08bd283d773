"""
Tests for document validation, key derivation, serialization and API payload
"""
import json
import logging
from xml.etree.ElementTree import fromstring

import pytest
from pydantic import ValidationError as PydanticValidationError

from facturacr.core.exceptions import InternalConsistencyError, InvalidDocumentError, ValidationError
from facturacr.schemas import CreditNote, DebitNote, Document, Invoice, OtherText, Ticket
from facturacr.utils.key_generator import parse_document_key

from conftest import (
    EXPECTED_KEY,
    EXPECTED_SEQUENCE,
    make_document_data,
    make_invoice,
    make_item,
    make_receiver,
    make_reference,
)


def test_concrete_scenario_sequence_and_key(invoice):
    """Number 42 emitted 2023-05-10 by 01/301230456 with defaults"""
    assert invoice.headquarters == "001"
    assert invoice.terminal == "00001"
    assert invoice.compute_sequence() == EXPECTED_SEQUENCE
    key = invoice.compute_key()
    assert key == EXPECTED_KEY
    assert len(key) == 50


def test_key_is_stable_across_calls(invoice):
    assert invoice.compute_key() == invoice.compute_key()


def test_key_is_recomputed_after_mutation(invoice):
    first = invoice.compute_key()
    invoice.number = 43
    second = invoice.compute_key()
    assert first != second
    assert parse_document_key(second)["consecutive_number"].endswith("0000000043")


@pytest.mark.parametrize("number", [0, -5])
def test_non_positive_number_is_rejected_on_assignment(invoice, number):
    with pytest.raises(PydanticValidationError):
        invoice.number = number
    assert invoice.number == 42
    assert invoice.compute_key() == EXPECTED_KEY


def test_assignment_is_checked_on_sub_entities(invoice):
    with pytest.raises(PydanticValidationError):
        invoice.issuer.identification_document.raw_id_number = "1234567890123"
    with pytest.raises(PydanticValidationError):
        invoice.items[0].line_number = 0


def test_key_accepts_any_security_code_characters():
    key = make_invoice(security_code="ABCD-123").compute_key()
    assert parse_document_key(key)["security_code"] == "ABCD-123"


def test_key_uses_explicit_headquarters_and_terminal():
    document = make_invoice(headquarters="002", terminal="00010")
    assert document.compute_sequence() == "00200010010000000042"
    assert parse_document_key(document.compute_key())["consecutive_number"] == "00200010010000000042"


def test_valid_document_validates():
    result = make_invoice().validate()
    assert result.valid
    assert result.errors == {}


def test_validate_is_idempotent():
    document = make_invoice(security_code="SHORT")
    assert document.validate() == document.validate()


def test_credit_condition_requires_credit_term():
    document = make_invoice(condition="02")
    result = document.validate()
    assert not result.valid
    assert result.errors == {"credit_term": ["can't be blank"]}


def test_serialize_without_credit_term_raises_and_emits_nothing():
    document = make_invoice(condition="02")
    with pytest.raises(ValidationError) as exc_info:
        document.serialize()
    assert "credit_term" in exc_info.value.errors
    with pytest.raises(InvalidDocumentError):
        document.generate()


def test_credit_term_optional_for_other_conditions():
    assert make_invoice(condition="01", credit_term=None).validate().valid


def test_credit_term_emitted_only_for_credit_sales():
    with_credit = make_invoice(condition="02", credit_term="30").serialize()
    assert with_credit.find("PlazoCredito").text == "30"

    cash = make_invoice(condition="01", credit_term="30").serialize()
    assert cash.find("PlazoCredito") is None


@pytest.mark.parametrize("document_class", [DebitNote, CreditNote])
def test_notes_require_references(document_class):
    document = document_class(**make_document_data())
    assert document.validate().errors == {"references": ["can't be blank"]}

    referenced = document_class(**make_document_data(references=[make_reference()]))
    assert referenced.validate().valid


@pytest.mark.parametrize("document_class", [Invoice, Ticket])
def test_references_optional_for_other_types(document_class):
    assert document_class(**make_document_data()).validate().valid


def test_membership_and_length_violations_are_reported_together():
    document = make_invoice(condition="77", payment_type="00", document_situation="9", security_code="123")
    errors = document.validate().errors
    assert errors["condition"] == ["is not included in the list"]
    assert errors["payment_type"] == ["is not included in the list"]
    assert errors["document_situation"] == ["is not included in the list"]
    assert errors["security_code"] == ["is the wrong length (should be 8 characters)"]


def test_missing_required_fields():
    document = Invoice()
    errors = document.validate().errors
    for field in ("date", "number", "issuer", "condition", "payment_type",
                  "document_situation", "summary", "regulation", "security_code", "items"):
        assert errors[field] == ["can't be blank"], field
    assert "document_type" not in errors


def test_error_order_is_deterministic():
    errors = Invoice().validate().errors
    assert list(errors)[:3] == ["date", "number", "issuer"]


def test_sub_entity_violations_are_aggregated():
    document = make_invoice(receiver=make_receiver(name=None))
    document.items[0].taxes[0].code = "55"
    document.issuer.identification_document.document_type = "09"

    errors = document.validate().errors
    assert errors["receiver.name"] == ["can't be blank"]
    assert errors["items[0].taxes[0].code"] == ["is not included in the list"]
    assert errors["issuer.identification_document.document_type"] == ["is not included in the list"]

    with pytest.raises(InvalidDocumentError) as exc_info:
        document.compute_key()
    assert set(exc_info.value.errors) == set(errors)


def test_key_requires_valid_document():
    with pytest.raises(InvalidDocumentError):
        make_invoice(security_code=None).compute_key()


def test_sequence_only_needs_number():
    document = Invoice(number=7)
    assert document.compute_sequence() == "00100001010000000007"
    with pytest.raises(InvalidDocumentError):
        Invoice().compute_sequence()


def test_oversized_number_is_an_internal_consistency_error():
    document = make_invoice(number=10 ** 10)
    assert document.validate().valid
    with pytest.raises(InternalConsistencyError):
        document.compute_key()
    with pytest.raises(InternalConsistencyError):
        document.serialize()


def test_wrong_length_headquarters_is_a_validation_error():
    document = make_invoice(headquarters="01")
    assert document.validate().errors == {"headquarters": ["is the wrong length (should be 3 characters)"]}


def test_abstract_document_cannot_be_instantiated():
    with pytest.raises(TypeError):
        Document(**make_document_data())


@pytest.mark.parametrize("document_class, code, tag", [
    (Invoice, "01", "FacturaElectronica"),
    (DebitNote, "02", "NotaDebitoElectronica"),
    (CreditNote, "03", "NotaCreditoElectronica"),
    (Ticket, "04", "TiqueteElectronico"),
])
def test_variants_fix_type_and_root(document_class, code, tag):
    document = document_class(**make_document_data(references=[make_reference()]))
    assert document.document_type == code
    root = document.serialize()
    assert root.tag == tag
    assert root.find("NumeroConsecutivo").text[8:10] == code


def test_serialized_element_order(invoice):
    invoice.references = [make_reference(), make_reference(number="2")]
    invoice.condition = "02"
    invoice.credit_term = "15"
    root = invoice.serialize()
    assert [child.tag for child in root] == [
        "Clave",
        "NumeroConsecutivo",
        "FechaEmision",
        "Emisor",
        "Receptor",
        "CondicionVenta",
        "PlazoCredito",
        "MedioPago",
        "DetalleServicio",
        "ResumenFactura",
        "InformacionReferencia",
        "InformacionReferencia",
        "Normativa",
    ]
    assert [r.find("Numero").text for r in root.findall("InformacionReferencia")][1] == "2"


def test_receiver_is_omitted_when_absent():
    root = make_invoice(receiver=None).serialize()
    assert root.find("Receptor") is None


def test_header_values(invoice):
    root = invoice.serialize()
    assert root.find("Clave").text == EXPECTED_KEY
    assert root.find("NumeroConsecutivo").text == EXPECTED_SEQUENCE
    assert root.find("FechaEmision").text == "2023-05-10T09:00:00-06:00"


def test_items_keep_caller_order():
    items = [make_item(line_number=n, description=f"Linea {n}") for n in (1, 2, 3)]
    root = make_invoice(items=items).serialize()
    lines = root.find("DetalleServicio").findall("LineaDetalle")
    assert [line.find("Detalle").text for line in lines] == ["Linea 1", "Linea 2", "Linea 3"]


def test_default_namespaces_are_attached(invoice):
    root = invoice.serialize()
    assert root.get("xmlns") == "https://tribunet.hacienda.go.cr/docs/esquemas/2017/v4.2/facturaElectronica"
    assert root.get("xmlns:ds") == "http://www.w3.org/2000/09/xmldsig#"


def test_caller_namespaces_are_attached_verbatim():
    namespaces = {"xmlns": "urn:example", "xmlns:xsi": "http://www.w3.org/2001/XMLSchema-instance"}
    root = make_invoice(namespaces=namespaces).serialize()
    assert dict(root.attrib) == namespaces


def test_other_texts_are_emitted_last():
    document = make_invoice(other_texts=[OtherText(content="Gracias", xml_attributes={"codigo": "obs"})])
    root = document.serialize()
    assert root[-1].tag == "Otros"
    other = root[-1].find("OtroTexto")
    assert other.text == "Gracias"
    assert other.get("codigo") == "obs"


def test_generate_is_byte_identical(invoice):
    first = invoice.generate()
    assert first == invoice.generate()
    assert first.startswith('<?xml version="1.0" encoding="UTF-8"?>')


def test_identification_round_trip(invoice):
    root = fromstring(invoice.generate().encode("utf-8"))
    issuer_id = root.find("{*}Emisor/{*}Identificacion")
    assert issuer_id.find("{*}Tipo").text == "01"
    assert issuer_id.find("{*}Numero").text == "301230456"
    receiver_id = root.find("{*}Receptor/{*}Identificacion")
    assert (receiver_id.find("{*}Tipo").text, receiver_id.find("{*}Numero").text) == ("02", "3101123456")


def test_api_payload(invoice):
    payload = invoice.to_api_payload()
    assert payload == {
        "clave": EXPECTED_KEY,
        "fecha": "2023-05-10T09:00:00-06:00",
        "emisor": {"tipoIdentificacion": "01", "numeroIdentificacion": "000301230456"},
        "receptor": {"tipoIdentificacion": "02", "numeroIdentificacion": "003101123456"},
    }


def test_api_payload_without_identified_receiver():
    assert "receptor" not in make_invoice(receiver=None).to_api_payload()
    assert "receptor" not in make_invoice(
        receiver=make_receiver(identification_document=None)
    ).to_api_payload()


def test_api_payload_requires_valid_document():
    with pytest.raises(InvalidDocumentError):
        make_invoice(condition="02").to_api_payload()


def test_render_matches_individual_outputs(invoice):
    rendered = invoice.render()
    assert rendered == {
        "clave": EXPECTED_KEY,
        "numero_consecutivo": EXPECTED_SEQUENCE,
        "xml": invoice.generate(),
        "payload": invoice.to_api_payload(),
    }


def test_render_derives_key_once(invoice, caplog):
    with caplog.at_level(logging.DEBUG, logger="facturacr.documents"):
        invoice.render()
    events = [
        json.loads(record.getMessage())["event_type"]
        for record in caplog.records
        if record.name == "facturacr.documents"
    ]
    assert events == ["key_generated", "serialized"]


def test_render_requires_valid_document():
    with pytest.raises(InvalidDocumentError) as exc_info:
        make_invoice(condition="02").render()
    assert exc_info.value.errors == {"credit_term": ["can't be blank"]}
