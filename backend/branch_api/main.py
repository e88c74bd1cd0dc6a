import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.db import Base, engine
from .core.config import get_settings
from .core.rate_limit import limiter, rate_limit_exceeded_handler
from .core.responses import error
from .api import auth, branches
from . import models  # noqa: F401

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

Base.metadata.create_all(bind=engine)

app = FastAPI(title=settings.app_name)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    if isinstance(exc.detail, dict):
        message = exc.detail.get("message", "Request failed.")
        errors = exc.detail.get("errors")
    else:
        message = str(exc.detail)
        errors = None
    return error(message, status_code=exc.status_code, errors=errors, headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors: dict[str, list[str]] = {}
    for item in exc.errors():
        # drop the "body"/"query"/"path" prefix: data.0.opens_at
        loc = [str(part) for part in item.get("loc", ())[1:]] or ["request"]
        errors.setdefault(".".join(loc), []).append(item.get("msg", "Invalid value."))
    logger.info("Validation failed on %s %s: %s", request.method, request.url.path, list(errors))
    return error("The given data was invalid.", status_code=422, errors=errors)


app.include_router(auth.router, prefix="/api/v1/auth", tags=["auth"])
app.include_router(branches.router, prefix="/api/v1/branches", tags=["branches"])


@app.get("/api/health")
def health():
    return {"status": "ok"}
