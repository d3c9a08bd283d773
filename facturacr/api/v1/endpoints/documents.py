"""
Document rendering API endpoints for Costa Rica electronic documents.
Validates an entity graph and returns its key, consecutive number, XML and API payload.
"""
from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException, Path, status
from pydantic import BaseModel, Field

from facturacr.schemas.documents import DOCUMENT_CLASSES, Document

router = APIRouter(
    prefix="/documents",
    tags=["Electronic Documents"],
    responses={404: {"description": "Unknown document type"}}
)


class DocumentResponse(BaseModel):
    """Rendered document"""
    clave: str = Field(..., description="50-character document key")
    numero_consecutivo: str = Field(..., description="20-digit consecutive number")
    xml: str = Field(..., description="Unsigned XML document")
    payload: Dict[str, Any] = Field(..., description="Reception API payload")


class ValidationResponse(BaseModel):
    """Validation outcome"""
    valid: bool
    errors: Dict[str, list] = Field(default_factory=dict)


def load_document(document_type: str, body: Dict[str, Any]) -> Document:
    """Build the variant for ``document_type`` from a JSON body."""
    document_class = DOCUMENT_CLASSES.get(document_type)
    if document_class is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unsupported document type: {document_type}"
        )
    return document_class.model_validate(body)


@router.post(
    "/{document_type}",
    response_model=DocumentResponse,
    summary="Render document",
    description="Validate a document and render its key, consecutive number, XML and API payload"
)
async def render_document(
    document_type: str = Path(..., description="Document type code (01-04)"),
    body: Dict[str, Any] = Body(...)
):
    """
    Render an electronic document

    Supports:
    - 01: Factura Electrónica
    - 02: Nota de Débito Electrónica
    - 03: Nota de Crédito Electrónica
    - 04: Tiquete Electrónico
    """
    document = load_document(document_type, body)
    return DocumentResponse(**document.render())


@router.post(
    "/{document_type}/validate",
    response_model=ValidationResponse,
    summary="Validate document",
    description="Report every rule violation of a document without rendering it"
)
async def validate_document(
    document_type: str = Path(..., description="Document type code (01-04)"),
    body: Dict[str, Any] = Body(...)
):
    """Validate an electronic document"""
    document = load_document(document_type, body)
    return ValidationResponse(**document.validate().to_dict())
