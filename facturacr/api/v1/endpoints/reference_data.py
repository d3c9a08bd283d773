"""
Reference data API endpoints exposing the official code tables.
"""
from typing import Dict

from fastapi import APIRouter, HTTPException, status

from facturacr.schemas.codes import CODE_TABLES

router = APIRouter(prefix="/reference", tags=["Reference Data"])


@router.get("/codes", summary="List code tables")
async def list_code_tables() -> Dict[str, Dict[str, str]]:
    """All code tables, keyed by table name"""
    return CODE_TABLES


@router.get("/codes/{table}", summary="Get code table")
async def get_code_table(table: str) -> Dict[str, str]:
    """One code table mapping code to label"""
    if table not in CODE_TABLES:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown code table: {table}"
        )
    return CODE_TABLES[table]
