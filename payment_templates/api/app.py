"""FastAPI application factory"""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from payment_templates import __version__
from payment_templates.api.routes import forms
from payment_templates.api.session_store import FormSessionStore
from payment_templates.utils.config import get_settings, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run the expired-session sweep for as long as the app is up"""
    sweeper = asyncio.create_task(forms.store.sweep(get_settings().session_evict_interval))
    try:
        yield
    finally:
        sweeper.cancel()
        await asyncio.gather(sweeper, return_exceptions=True)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    settings = get_settings()
    setup_logging()

    forms.init_store(FormSessionStore(
        ttl_minutes=settings.session_ttl_minutes,
        max_sessions=settings.max_sessions,
    ))

    app = FastAPI(
        title=settings.api_title,
        description="Formularios dinámicos de solicitudes de pago por plantilla",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(forms.router)

    return app
