import logging
from typing import List

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from gitinfo.check import check_text
from gitinfo.config import settings
from gitinfo.errors import ParseFailure
from gitinfo.schema import load_schema, read_schema_document

logger = logging.getLogger(__name__)

router = APIRouter()

class ValidateRequest(BaseModel):
    document: str

class ErrorItem(BaseModel):
    path: str
    message: str

class ValidateResponse(BaseModel):
    valid: bool
    errors: List[ErrorItem]

def _schema():
    try:
        return load_schema(settings.schema_path)
    except ParseFailure as e:
        logger.error("schema unavailable: %s", e)
        raise HTTPException(status_code=500, detail=str(e))

@router.get("/schema", summary="Schema document in use")
def get_schema():
    try:
        return read_schema_document(settings.schema_path)
    except ParseFailure as e:
        raise HTTPException(status_code=500, detail=str(e))

@router.post("/validate", summary="Validate a .gitinfo document", response_model=ValidateResponse)
def validate_document(payload: ValidateRequest):
    schema = _schema()
    try:
        report = check_text(payload.document, schema, source="request")
    except ParseFailure as e:
        raise HTTPException(status_code=400, detail=e.message)
    return ValidateResponse(
        valid=report.valid,
        errors=[ErrorItem(**err.to_dict()) for err in report.errors],
    )
