# Load environment variables FIRST, before any module imports that need them
from dotenv import load_dotenv
load_dotenv()

import logging
import uuid

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware

from .config import CORS_ORIGINS
from .exceptions import InvalidCheckoutInput
from .logging_config import bind_request_id, setup_logging, unbind_request_id
from .routes import checkout_router, limiter, shipping_router, tax_router

# Configure logging at module load time
setup_logging()

logger = logging.getLogger(__name__)


app = FastAPI(
    title="Storefront Checkout API",
    description="Shipping options and tax calculation for the storefront checkout",
    version="1.0.0",
    openapi_tags=[
        {"name": "Health", "description": "Health check endpoints"},
        {"name": "Shipping", "description": "Shipping settings and option calculation"},
        {"name": "Tax", "description": "Jurisdiction resolution and tax calculation"},
        {"name": "Checkout", "description": "Combined checkout quote"},
    ],
)


# ---------- Request ID Middleware ----------
# Adds a unique request ID to each request for debugging and log correlation


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds a unique request ID to each request.
    The ID is available in request.state.request_id, stamped on every log line
    written while the request is handled, and returned in the X-Request-ID header.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        token = bind_request_id(request_id)
        try:
            response = await call_next(request)
        finally:
            unbind_request_id(token)

        response.headers["X-Request-ID"] = request_id
        return response


app.add_middleware(RequestIDMiddleware)

# Add rate limit exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS configuration
# In production, set CORS_ORIGINS environment variable to restrict allowed origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidCheckoutInput)
async def invalid_checkout_input_handler(request: Request, exc: InvalidCheckoutInput):
    """Invalid caller input is a 400, never a 500."""
    logger.info("Rejected checkout input: %s", exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


# ---------- Routers ----------

api_v1_router = APIRouter(prefix="/api/v1")
api_v1_router.include_router(shipping_router)
api_v1_router.include_router(tax_router)
api_v1_router.include_router(checkout_router)
app.include_router(api_v1_router)

# Also mount at root, where the storefront frontend calls them
app.include_router(shipping_router)
app.include_router(tax_router)
app.include_router(checkout_router)


@app.get("/health", tags=["Health"])
def health_check():
    return {"status": "healthy"}
