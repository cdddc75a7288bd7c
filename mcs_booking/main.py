import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse

from . import config
from .domain.booking.exceptions import BookingError, StorageError
from .domain.booking.router import get_booking_service, get_notifier
from .domain.booking.router import router as booking_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    logger.info(
        f"Booking store: {config.BOOKINGS_FILE} (capacity {config.CAPACITY_PER_SLOT} per slot, "
        f"hours {config.OPEN_HOUR}:00-{config.CLOSE_HOUR}:00)"
    )
    # Create the store and resolve the SMS sender at startup instead of on the first request
    get_booking_service()
    get_notifier()
    if not (config.PUBLIC_DIR / "index.html").is_file():
        logger.warning(f"⚠️ No front end found in {config.PUBLIC_DIR}, serving the API only")
    yield
    logger.info("Application shutting down...")


app = FastAPI(title="MCS Cleaning Booking API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(StorageError)
async def storage_exception_handler(request: Request, exc: StorageError):
    logger.error(f"{request.method} {request.url.path} - Storage error: {exc.message}")
    return JSONResponse(status_code=500, content={"error": "Internal error"})


@app.exception_handler(BookingError)
async def booking_exception_handler(request: Request, exc: BookingError):
    logger.info(f"{request.method} {request.url.path} - {exc.code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed bodies and query values as 400 {"error": ...} like every other client error"""
    logger.warning(f"Validation error for {request.url.path}: {exc.errors()}")
    errors = exc.errors()
    message = "Invalid request"
    if errors and errors[0].get("type") == "json_invalid":
        message = "Invalid JSON body"
    elif errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query"))
        message = f"Invalid {field}: {first.get('msg')}" if field else f"Invalid request: {first.get('msg')}"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"{request.method} {request.url.path} - Error: {str(exc)}")
    return JSONResponse(status_code=500, content={"error": "Internal error"})


app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# Routes
app.include_router(booking_router)


@app.get("/health")
def health():
    return {"ok": True}


def resolve_public_file(public_dir: Path, request_path: str) -> Path | None:
    """Map a URL path to a file inside public_dir, refusing anything that escapes it"""
    root = public_dir.resolve()
    candidate = (root / request_path.lstrip("/")).resolve()
    if not candidate.is_relative_to(root):
        return None
    if candidate.is_dir():
        candidate = candidate / "index.html"
    return candidate if candidate.is_file() else None


# Static front end with SPA-style fallback to index.html; registered last so API routes win
@app.get("/{full_path:path}", include_in_schema=False)
async def serve_frontend(full_path: str):
    file_path = resolve_public_file(config.PUBLIC_DIR, full_path)
    if file_path:
        return FileResponse(file_path)

    index_path = config.PUBLIC_DIR / "index.html"
    if index_path.is_file():
        return FileResponse(index_path)
    return PlainTextResponse("Not found", status_code=404)


def run():
    """Console entry point: serve the app with uvicorn"""
    import uvicorn

    logger.info(f"Cleaning booking app running on http://localhost:{config.PORT}")
    uvicorn.run("mcs_booking.main:app", host="0.0.0.0", port=config.PORT)  # noqa: S104
