# app/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# Your configuration and DB
from app.config import settings
from app.core.db import init_db, close_db
from app.core.errors import AppError, MESSAGES
from app.core.security import TokenIssuer

from app.api.v1.routers import users, products

from app.core.bootstrap import ensure_default_admin
logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.APP_NAME)

# Token issuer is configured once, at process start
app.state.token_issuer = TokenIssuer(
    settings.jwt_secret,
    algorithm=settings.jwt_algorithm,
    expire_minutes=settings.jwt_expire_minutes,
)

# CORS (with Cookie)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(_: Request, exc: AppError):
    """
    Unified error response format:
    {
        "detail": {"code": "<ERROR_CODE>", "message": "<text>"}
    }
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.to_detail()},
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_: Request, exc: RequestValidationError):
    # Request shape failures are reported as 400 VALIDATION_ERROR
    errors = [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg"), "type": e.get("type")}
        for e in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content={"detail": {"code": "VALIDATION_ERROR", "message": MESSAGES["VALIDATION_ERROR"], "errors": errors}},
    )


@app.on_event("startup")
async def on_startup():
    await init_db()
    # Ensure there's a default admin account on first run
    await ensure_default_admin()
    logger.info("[startup] %s ready (env=%s)", settings.APP_NAME, settings.env)

@app.on_event("shutdown")
async def on_shutdown():
    await close_db()

# REST
app.include_router(users.router, prefix="/api/v1")
app.include_router(products.router, prefix="/api/v1")

@app.get("/healthz")
def healthz():
    return {"ok": True}
