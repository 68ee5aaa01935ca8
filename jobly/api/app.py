"""FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from jobly.api.deps import validation_message
from jobly.api.limiter import limiter
from jobly.config import settings
from jobly.db.base import init_db
from jobly.errors import JoblyError

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def error_response(status: int, message) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": {"message": message, "status": status}})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    try:
        init_db()
    except ValueError:
        logger.warning("DATABASE_URL not configured; skipping table creation")
    yield


app = FastAPI(
    title="Jobly API",
    description="Companies, jobs, users and job applications",
    version="0.1.0",
    lifespan=lifespan,
)

app.state.limiter = limiter


@app.exception_handler(JoblyError)
async def jobly_error_handler(request: Request, exc: JoblyError):
    return error_response(exc.status, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies, path and query params are a 400, not FastAPI's 422."""
    return error_response(400, validation_message(exc.errors()))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, exc.detail)


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    """Return 429 with a clear message when rate limit is exceeded."""
    return error_response(429, f"Rate limit exceeded: {exc.detail}")


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(500, "Internal Server Error")


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["Content-Type", "Authorization"],
)


# Import and include routers
from jobly.api.routes import auth, companies, jobs, users  # noqa: E402

app.include_router(auth.router, prefix="/auth", tags=["Auth"])
app.include_router(companies.router, prefix="/companies", tags=["Companies"])
app.include_router(jobs.router, prefix="/jobs", tags=["Jobs"])
app.include_router(users.router, prefix="/users", tags=["Users"])


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
