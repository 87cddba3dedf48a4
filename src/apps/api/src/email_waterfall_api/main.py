"""FastAPI application entrypoint."""
import asyncio
from datetime import timedelta
from typing import Sequence

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from email_waterfall_api.logging import configure_logging
from email_waterfall_api.routers import export, health, jobs, uploads, validation
from email_waterfall_api.settings import Settings, get_settings
from email_waterfall_core.jobs import JobStore
from email_waterfall_core.providers import BaseProvider, IcypeasProvider, ProspeoProvider
from email_waterfall_core.ratelimit import RateLimiter
from email_waterfall_core.validation import ValidationOrchestrator, WaterfallValidator

configure_logging()
logger = structlog.get_logger()


def build_providers(settings: Settings) -> list[BaseProvider]:
    """Providers in waterfall order: Prospeo first, Icypeas as fallback."""
    return [
        ProspeoProvider(
            api_key=settings.prospeo_api_key,
            api_url=settings.prospeo_api_url,
            limiter=RateLimiter(
                settings.prospeo_max_concurrent,
                settings.prospeo_min_interval,
                name="prospeo",
            ),
            timeout=settings.provider_timeout_seconds,
        ),
        IcypeasProvider(
            api_key=settings.icypeas_api_key,
            api_url=settings.icypeas_api_url,
            limiter=RateLimiter(
                settings.icypeas_max_concurrent,
                settings.icypeas_min_interval,
                name="icypeas",
            ),
            timeout=settings.provider_timeout_seconds,
        ),
    ]


def create_app(
    settings: Settings | None = None,
    providers: Sequence[BaseProvider] | None = None,
    store: JobStore | None = None,
) -> FastAPI:
    """Build the application and its components."""
    settings = settings or get_settings()
    store = store or JobStore()
    validator = WaterfallValidator(providers or build_providers(settings))
    orchestrator = ValidationOrchestrator(store, validator, batch_size=settings.batch_size)

    app = FastAPI(title="Email Waterfall Validation API", version="1.0.0")
    app.state.settings = settings
    app.state.store = store
    app.state.validator = validator
    app.state.orchestrator = orchestrator
    app.state.eviction_task = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.cors_origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, prefix="/api")
    app.include_router(uploads.router, prefix="/api")
    app.include_router(validation.router, prefix="/api")
    app.include_router(export.router, prefix="/api")
    app.include_router(jobs.router, prefix="/api")

    @app.on_event("startup")
    async def startup():
        """Start the job eviction loop."""
        logger.info(
            "api_starting",
            providers=[p.name for p in validator.providers],
            batch_size=settings.batch_size,
            max_rows=settings.max_rows,
        )
        app.state.eviction_task = asyncio.create_task(
            store.run_eviction(
                interval=timedelta(minutes=settings.eviction_interval_minutes),
                max_age=timedelta(minutes=settings.job_max_age_minutes),
            )
        )

    @app.on_event("shutdown")
    async def shutdown():
        """Stop background work."""
        task = app.state.eviction_task
        if task is not None:
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        await orchestrator.shutdown()
        logger.info("api_stopped")

    return app


app = create_app()
