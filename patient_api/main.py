import logging
from contextlib import asynccontextmanager
from typing import Dict, Any

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pymongo.errors import PyMongoError

from patient_api import __version__
from patient_api.config import settings
from patient_api.database import (
    check_mongodb_connection,
    close_mongo_client,
    create_mongo_client,
    get_patients_collection,
)
from patient_api.exceptions import PatientServiceError
from patient_api.routers.patients import router as patients_router

# Configure logging
logging.basicConfig(
    level=logging.INFO if not settings.DEBUG else logging.DEBUG,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Service health state
service_state: Dict[str, Any] = {
    "mongodb": False,
    "startup_complete": False,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown lifecycle."""
    logger.info("=" * 50)
    logger.info("Patient API Starting...")
    logger.info("=" * 50)

    client = None
    app.state.patients_collection = None
    service_state["mongodb"] = False
    try:
        client = create_mongo_client(settings)
        app.state.patients_collection = get_patients_collection(client, settings)
    except PyMongoError as e:
        logger.error(f"  MongoDB: Invalid configuration - {e}")

    # A failed ping is logged only; pymongo reconnects on the next request
    if client is not None:
        service_state["mongodb"] = await run_in_threadpool(check_mongodb_connection, client)
    if service_state["mongodb"]:
        logger.info(f"  MongoDB: Connected to {app.state.patients_collection.full_name}")
    else:
        logger.warning("  MongoDB: Not available - requests will fail until it is reachable")

    service_state["startup_complete"] = True
    logger.info(f"  CORS Origins: {settings.CORS_ORIGINS}")
    logger.info("=" * 50)
    logger.info("Patient API Ready")
    logger.info("=" * 50)

    yield

    logger.info("Patient API shutting down...")
    close_mongo_client(client)
    app.state.patients_collection = None
    service_state["mongodb"] = False
    service_state["startup_complete"] = False


app = FastAPI(
    title=settings.APP_NAME,
    description="CRUD service for patient records",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(patients_router)


@app.get("/", response_class=PlainTextResponse)
async def root():
    """Liveness message."""
    return "Patient API is running"


@app.get("/health")
async def health_check():
    """Basic health check for load balancers."""
    return {"status": "healthy", "service": "patient"}


@app.get("/ready")
async def readiness_check():
    """Detailed readiness check."""
    return {
        "status": "ready" if service_state["startup_complete"] else "starting",
        "services": {
            "mongodb": service_state["mongodb"],
        },
    }


def _format_validation_errors(exc: RequestValidationError) -> str:
    details = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        field = ".".join(loc)
        details.append(f"{field}: {error['msg']}" if field else error["msg"])
    return "; ".join(details)


@app.exception_handler(PatientServiceError)
async def patient_service_exception_handler(request: Request, exc: PatientServiceError):
    return JSONResponse(status_code=exc.status_code, content=f"Error: {exc}")


@app.exception_handler(RequestValidationError)
async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.debug(f"Rejected request body for {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content=f"Error: ValidationError: {_format_validation_errors(exc)}",
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content="Error: Internal server error",
    )
