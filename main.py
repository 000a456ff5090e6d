import logging
import os

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from dotenv import load_dotenv
import uvicorn

from database import check_connection
from logging_config import setup_logging
from routers import employee_payments_router, payments_router
from services import PaymentError, SwiftDirectory

# Load .env
load_dotenv()
setup_logging()
logger = logging.getLogger(__name__)

SWIFT_DATA_PATH = os.getenv(
    "SWIFT_DATA_PATH",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "swift_codes.json"),
)
REVALIDATE_ON_PERSIST = os.getenv("REVALIDATE_ON_PERSIST", "false").lower() == "true"

# App instance
app = FastAPI(title="Payment Review API")

# Reference data is loaded once; an unreadable file leaves the directory empty
app.state.swift_directory = SwiftDirectory.from_file(SWIFT_DATA_PATH)
app.state.revalidate_on_persist = REVALIDATE_ON_PERSIST

# CORS
origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PaymentError)
async def payment_error_handler(request: Request, exc: PaymentError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
    else:
        message = "Invalid request."
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": message})


@app.get("/api/health")
def health():
    database_ok = check_connection()
    return {
        "status": "ok" if database_ok else "degraded",
        "database": "ok" if database_ok else "unavailable",
        "swiftCodesLoaded": len(app.state.swift_directory),
    }


app.include_router(employee_payments_router)
app.include_router(payments_router)


# Error fallback middleware
@app.middleware("http")
async def error_middleware(request: Request, call_next):
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": "Internal server error"})


if __name__ == "__main__":
    port = int(os.getenv("PORT", 10000))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=os.getenv("APP_ENV") == "development")
