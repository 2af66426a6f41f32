"""Study Buddy API — FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from study_buddy.auth.routes import router as auth_router
from study_buddy.config.cors import configure_cors
from study_buddy.config.settings import get_settings
from study_buddy.conversations.routes import router as conversations_router
from study_buddy.llm.client import CompletionConfig, create_llm_client
from study_buddy.messages.generator import ResponseGenerator
from study_buddy.messages.routes import router as messages_router
from study_buddy.messages.scheduler import GenerationScheduler
from study_buddy.middleware.error_handler import register_error_handlers
from study_buddy.middleware.request_id import RequestIDMiddleware
from study_buddy.study.routes import router as study_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    # A client set on app.state before startup wins over the configured provider
    client = getattr(app.state, "llm_client", None) or create_llm_client(CompletionConfig.from_settings(settings))
    generator = ResponseGenerator(client)
    scheduler = GenerationScheduler(generator.generate_response, workers=settings.GENERATION_WORKERS)

    app.state.llm_client = client
    app.state.scheduler = scheduler
    await scheduler.start()
    try:
        yield
    finally:
        await scheduler.stop()


app = FastAPI(
    title="Study Buddy API",
    description=(
        "Backend for Study Buddy, an AI tutor for humanities undergraduates.\n\n"
        "## Features\n"
        "- JWT authentication\n"
        "- Named study conversations with per-user ownership\n"
        "- Assistant replies generated in the background after each message\n"
        "- Live message events via SSE\n"
        "- Study tips, academic resources and starter prompts\n\n"
        "## Authentication\n"
        "All endpoints (except `/health`, `/docs`, `/api/v1/auth/*`) require authentication.\n"
        "Use `Authorization: Bearer <jwt>` header."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Health", "description": "Health check endpoints"},
        {"name": "Auth", "description": "Authentication: register, login, token refresh, logout"},
        {"name": "Conversations", "description": "Create and list study conversations"},
        {"name": "Messages", "description": "Send messages, list messages, live events"},
        {"name": "Study", "description": "Static study content"},
    ],
)

# --- Middleware ---
app.add_middleware(RequestIDMiddleware)
configure_cors(app)

# --- Error handlers ---
register_error_handlers(app)

# --- Routes ---
app.include_router(auth_router)
app.include_router(conversations_router)
app.include_router(messages_router)
app.include_router(study_router)


@app.get("/health", tags=["Health"], summary="Health check", description="Returns OK if the service is running.")
async def health_check():
    return {"status": "ok"}
