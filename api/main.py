from fastapi import FastAPI
from fastapi.responses import JSONResponse
from api.routers import health, validate

app = FastAPI(title="gitinfo validator API", version="0.1.0")

app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(validate.router, tags=["validate"])

@app.get("/", include_in_schema=False)
def root():
    return JSONResponse({"ok": True})
