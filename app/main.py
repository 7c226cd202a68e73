from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import Callable, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from openai import AsyncOpenAI
from pymongo.errors import DuplicateKeyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import Settings, get_settings
from app.core.logging import logger, setup_logging
from app.core.security import PasswordHasher, TokenMaker
from app.database import Database
from app.features.appointments.router import (
    doctor_appointments_router,
    patient_appointments_router,
    router as appointments_router,
)
from app.features.appointments.service import AppointmentService
from app.features.chat.router import router as chat_router
from app.features.chat.service import ChatService
from app.features.doctors.router import router as doctors_router
from app.features.doctors.service import DoctorService
from app.features.patients.router import router as patients_router
from app.features.patients.service import PatientService
from app.features.payments.router import router as payments_router
from app.features.payments.service import PaymentService
from app.features.prescriptions.router import router as prescriptions_router
from app.features.prescriptions.service import PrescriptionService
from app.routers import health_router
from app.shared.exceptions import AppException, ConfigError
from app.shared.schemas import ErrorResponse


# Error kinds for framework-raised HTTP errors (unknown route, wrong method)
HTTP_ERROR_KINDS = {
    status.HTTP_400_BAD_REQUEST: "validation_error",
    status.HTTP_401_UNAUTHORIZED: "unauthenticated",
    status.HTTP_403_FORBIDDEN: "unauthorized",
    status.HTTP_404_NOT_FOUND: "not_found",
}


def error_response(status_code: int, kind: str, message: str, headers: Optional[dict] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=kind, message=message).model_dump(),
        headers=headers,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for FastAPI application."""
    # Startup
    logger.info(f"Starting {app.state.settings.APP_NAME} API...")
    await Database.connect_db(app.state.settings)
    logger.info("Application started successfully")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await Database.close_db()
    logger.info("Application shutdown complete")


def register_exception_handlers(app: FastAPI):
    """Render every error as ``{"success": false, "error": kind, "message": ...}``."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(f"{request.method} {request.url.path} failed: {exc.kind}: {exc.detail}")
        return error_response(exc.status_code, exc.kind, str(exc.detail), exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if errors:
            first = errors[0]
            location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
            message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
        else:
            message = "Invalid request"
        return error_response(status.HTTP_400_BAD_REQUEST, "validation_error", message)

    @app.exception_handler(DuplicateKeyError)
    async def duplicate_key_handler(request: Request, exc: DuplicateKeyError):
        logger.warning(f"Unique index violation on {request.method} {request.url.path}")
        return error_response(status.HTTP_400_BAD_REQUEST, "conflict", "Resource already exists")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        kind = HTTP_ERROR_KINDS.get(exc.status_code, "internal_error")
        return error_response(exc.status_code, kind, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {type(exc).__name__}")
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error", "Internal server error")


def create_app(
    settings: Optional[Settings] = None,
    *,
    chat_client: Optional[AsyncOpenAI] = None,
    today: Optional[Callable[[], date]] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration; loaded from the environment when omitted
        chat_client: Replacement for the OpenAI-compatible chat client
        today: Calendar source for the appointment listing windows
        clock: Time source for session tokens

    Raises:
        ConfigError: If the database URL is empty or the token key has the wrong size
    """
    settings = settings or get_settings()
    setup_logging("DEBUG" if settings.DEBUG else settings.LOG_LEVEL)

    if not settings.MONGODB_URL:
        raise ConfigError("MONGODB_URL must be set")

    app = FastAPI(
        title=settings.APP_NAME,
        description="VitaReach telemedicine backend API",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
    token_maker = TokenMaker(settings.TOKEN_SYMMETRIC_KEY, clock=clock)
    appointment_service = AppointmentService(today=today)

    app.state.settings = settings
    app.state.token_maker = token_maker
    app.state.patient_service = PatientService(settings, hasher, token_maker)
    app.state.doctor_service = DoctorService(settings, hasher, token_maker)
    app.state.appointment_service = appointment_service
    app.state.prescription_service = PrescriptionService(appointment_service)
    app.state.payment_service = PaymentService(settings)
    app.state.chat_service = ChatService(settings, client=chat_client)

    # Register routers; the role listing routers go before the account routers
    app.include_router(health_router)
    app.include_router(patient_appointments_router)
    app.include_router(doctor_appointments_router)
    app.include_router(patients_router)
    app.include_router(doctors_router)
    app.include_router(appointments_router)
    app.include_router(prescriptions_router)
    app.include_router(payments_router)
    app.include_router(chat_router)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "service": settings.APP_NAME,
            "version": "1.0.0",
            "docs": "/docs",
            "health": "/health",
        }

    return app
