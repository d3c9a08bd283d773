"""
Document key generation utilities for Costa Rica electronic documents.
Provides functions for generating and parsing document keys and consecutive numbers.
"""
import logging
import re
import secrets
from datetime import datetime
from typing import Dict

from facturacr.core.exceptions import InternalConsistencyError

logger = logging.getLogger(__name__)

COUNTRY_CODE = "506"
KEY_LENGTH = 50
CONSECUTIVE_LENGTH = 20


def generate_consecutive_number(
    headquarters: str,
    terminal: str,
    document_type: str,
    number: int
) -> str:
    """
    Generate consecutive number following Costa Rican format

    Format: Headquarters(3) + Terminal(5) + DocType(2) + Number(10)

    Args:
        headquarters: Headquarters code (3 characters)
        terminal: Terminal/POS code (5 characters)
        document_type: Document type code (2 characters)
        number: Document number, zero-padded to 10 digits

    Returns:
        Consecutive number
    """
    return f"{headquarters}{terminal}{document_type}{number:010d}"


def generate_document_key(
    emission_date: datetime,
    issuer_id: str,
    consecutive_number: str,
    situation: str,
    security_code: str
) -> str:
    """
    Generate 50-character document key

    Format: Country(3) + Day(2) + Month(2) + Year(2) + Issuer(12) +
            Consecutive(20) + Situation(1) + SecurityCode(8)

    Args:
        emission_date: Document emission date
        issuer_id: Issuer identification, already normalized to 12 digits
        consecutive_number: 20-character consecutive number
        situation: Document situation code
        security_code: 8-character security code

    Returns:
        50-character document key

    Raises:
        InternalConsistencyError: If the assembled key is not 50 characters
    """
    day = f"{emission_date.day:02d}"
    month = f"{emission_date.month:02d}"
    year = f"{emission_date.year % 100:02d}"

    document_key = f"{COUNTRY_CODE}{day}{month}{year}{issuer_id}{consecutive_number}{situation}{security_code}"

    if len(document_key) != KEY_LENGTH:
        logger.critical("Generated document key has %d characters: %s", len(document_key), document_key)
        raise InternalConsistencyError(
            f"Generated document key must be {KEY_LENGTH} characters: {document_key}"
        )

    return document_key


def generate_security_code() -> str:
    """
    Generate 8-digit security code for document uniqueness
    """
    return f"{secrets.randbelow(10 ** 8):08d}"


def parse_consecutive_number(consecutive_number: str) -> Dict[str, str]:
    """
    Parse consecutive number into its components

    Raises:
        ValueError: If format is invalid
    """
    if not validate_consecutive_format(consecutive_number):
        raise ValueError(f"Invalid consecutive number format: {consecutive_number}")

    return {
        "headquarters": consecutive_number[0:3],
        "terminal": consecutive_number[3:8],
        "document_type": consecutive_number[8:10],
        "number": consecutive_number[10:20]
    }


def parse_document_key(document_key: str) -> Dict[str, str]:
    """
    Parse document key into its components

    Raises:
        ValueError: If format is invalid
    """
    if not validate_document_key_format(document_key):
        raise ValueError(f"Invalid document key format: {document_key}")

    return {
        "country": document_key[0:3],
        "day": document_key[3:5],
        "month": document_key[5:7],
        "year": document_key[7:9],
        "issuer": document_key[9:21],
        "consecutive_number": document_key[21:41],
        "situation": document_key[41:42],
        "security_code": document_key[42:50]
    }


def validate_consecutive_format(consecutive_number: str) -> bool:
    """Validate consecutive number format (20 digits)"""
    return bool(re.fullmatch(r"\d{20}", consecutive_number or ""))


def validate_document_key_format(document_key: str) -> bool:
    """Validate document key format (country, date, issuer and consecutive are digits; any 8-character security code)"""
    return bool(re.fullmatch(r"506\d{38}[123].{8}", document_key or "", re.DOTALL))
