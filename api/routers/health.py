from fastapi import APIRouter
from fastapi.responses import JSONResponse

from gitinfo.config import settings
from gitinfo.errors import ParseFailure
from gitinfo.schema import load_schema

router = APIRouter()

@router.get("", summary="Liveness probe")
def liveness():
    return JSONResponse({"status": "ok"})

@router.get("/ready", summary="Readiness probe: schema loads")
def readiness():
    try:
        load_schema(settings.schema_path)
    except ParseFailure as e:
        return JSONResponse({"status": "unavailable", "detail": str(e)}, status_code=503)
    return JSONResponse({"status": "ok"})
