"""
Voice Relay - FastAPI Backend

Main application entry point.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from voice_relay import __version__
from voice_relay.auth.routes import router as auth_router
from voice_relay.config import Settings, get_settings
from voice_relay.exceptions import VoiceRelayError
from voice_relay.logging_config import setup_logging
from voice_relay.routers.speech import router as speech_router
from voice_relay.services.speech import SpeechSynthesizer
from voice_relay.services.store import UserStore

logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, headers: Optional[dict] = None) -> JSONResponse:
    """JSON error body. ``error`` and ``message`` carry the same text."""
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "message": message},
        headers=headers,
    )


async def handle_relay_error(request: Request, exc: VoiceRelayError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return error_response(exc.status_code, exc.public_message, headers)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    problems = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ())[1:]) or "body"
        problems.append(f"{field}: {err.get('msg')}")
    return error_response(400, "; ".join(problems) or "Invalid request")


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "Internal server error")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the production clients for anything not injected."""
    state = app.state
    if state.user_store is None:
        from voice_relay.services.firestore import FirestoreUserStore
        state.user_store = FirestoreUserStore.from_settings(state.settings)
    if state.synthesizer is None:
        from voice_relay.services.speech import AzureSpeechSynthesizer
        state.synthesizer = AzureSpeechSynthesizer.from_settings(state.settings)

    logger.info(
        "%s started (store=%s, synthesizer=%s)",
        state.settings.app_name,
        type(state.user_store).__name__,
        state.synthesizer.name,
    )
    yield
    await state.user_store.close()


def create_app(
    settings: Optional[Settings] = None,
    user_store: Optional[UserStore] = None,
    synthesizer: Optional[SpeechSynthesizer] = None,
) -> FastAPI:
    """
    Create the FastAPI app.

    Args:
        settings: Configuration; defaults to the environment-loaded settings.
        user_store: User store; defaults to Firestore, built at startup.
        synthesizer: Speech provider; defaults to Azure, built at startup.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Speech synthesis relay with user registration and login.",
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.user_store = user_store
    app.state.synthesizer = synthesizer

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(VoiceRelayError, handle_relay_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    # Include routers
    app.include_router(speech_router, tags=["Speech"])
    app.include_router(auth_router, prefix="/api/auth", tags=["Authentication"])

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "app": settings.app_name}

    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn on the configured port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("voice_relay.main:app", host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
