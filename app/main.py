from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .db import engine, Base, SessionLocal
from .routers.values import router as values_router
from app.repositories import seed_demo_values
from app.settings import SEED_DEMO_VALUES
from app.setup_logging import setup_logging

# --------------------------------------------------------------------
# App bootstrap
# --------------------------------------------------------------------
setup_logging() # Init Logging


# --------------------------------------------------------------------
# FastAPI application with lifespan hook
# --------------------------------------------------------------------
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Runs once at startup: create tables if they don't exist and, when
    SEED_DEMO_VALUES is on, put a few values into an empty table so the
    directory page has something to show.
    """
    Base.metadata.create_all(bind=engine)
    app.state.seeded = 0
    if SEED_DEMO_VALUES:
        db = SessionLocal()
        try:
            app.state.seeded = seed_demo_values(db)
        finally:
            db.close()
    yield


# Development backend for the values directory
app = FastAPI(title="Values Directory (dev backend)", lifespan=lifespan)


# --------------------------------------------------------------------
# Error bodies: {"message": ...} for HTTP errors, {"error": ...} for bad input
# --------------------------------------------------------------------
@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    return JSONResponse({"message": str(exc.detail)}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())[1:]) or "body"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return JSONResponse({"error": "; ".join(parts)}, status_code=400)


# --------------------------------------------------------------------
# Routes
# --------------------------------------------------------------------
@app.get("/healthz")
def health():
    """Simple health probe for monitoring."""
    return {"ok": True, "service": "values", "version": 1}

# Register API routers:
app.include_router(values_router)
