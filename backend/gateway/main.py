# gateway/main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gateway.config import settings
from gateway.core.db import init_db, close_db
from gateway.core.errors import field_errors
from gateway.core.bootstrap import ensure_default_admin, ensure_default_models

from gateway.api.routers import auth, users, generation, stream

logger = logging.getLogger("uvicorn.error")

app = FastAPI(
    title=settings.APP_NAME,
    description="Credit-metered text generation API",
    docs_url="/api-docs",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report every field error at once as INVALID_INPUT (400)."""
    errors = field_errors(exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": {"code": "INVALID_INPUT", "message": "Invalid input", "errors": errors}},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Log the traceback server-side; the client only sees a generic 500."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": {"code": "INTERNAL_ERROR", "message": "Internal server error"}},
    )


@app.on_event("startup")
async def on_startup():
    await init_db(generate_schemas=settings.generate_schemas)
    await ensure_default_models()
    await ensure_default_admin()

@app.on_event("shutdown")
async def on_shutdown():
    await close_db()

app.include_router(auth.router)
app.include_router(users.router)
app.include_router(generation.router)
app.include_router(stream.router)

@app.get("/healthz")
def healthz():
    return {"ok": True}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("gateway.main:app", host=settings.host, port=settings.port)
