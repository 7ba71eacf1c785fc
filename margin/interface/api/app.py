"""FastAPI application."""

import asyncio
import contextlib
from collections.abc import AsyncIterator

import logfire
from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from margin.application.usecase.migration import (
    MigrateLegacyMessagesRequest,
    MigrateLegacyMessagesUseCase,
)
from margin.application.usecase.page import (
    ProvisionPagesRequest,
    ProvisionPagesUseCase,
)
from margin.config import Settings
from margin.domain.error import DomainError
from margin.domain.model.common import utcnow
from margin.domain.repository import ChallengeStore
from margin.interface.api.routes import auth, comments, health, pages, realtime, votes
from margin.interface.error import register_error_handlers
from margin.util.di.container import create_container, setup_di
from margin.util.observability import instrument_fastapi


async def sweep_challenges(store: ChallengeStore, interval_seconds: float) -> None:
    """Periodically drop expired challenges until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            removed = await store.sweep(utcnow())
        except Exception:
            logfire.exception("Challenge sweep failed")
            continue
        if removed:
            logfire.debug("Expired challenges swept", count=removed)


async def provision_protected_pages(
    container: AsyncContainer, settings: Settings
) -> None:
    """Create configured protected pages that do not exist yet."""
    if not settings.protected_pages:
        return

    async with container() as request_container:
        use_case = await request_container.get(ProvisionPagesUseCase)
        try:
            response = await use_case.execute(
                ProvisionPagesRequest(pages=settings.protected_pages)
            )
        except DomainError as e:
            logfire.error("Protected page provisioning failed", error=str(e))
            return
    logfire.info("Protected pages provisioned", page_ids=response.page_ids)


async def migrate_legacy_messages(container: AsyncContainer) -> None:
    """Run the legacy message migration if it has not been applied."""
    async with container() as request_container:
        use_case = await request_container.get(MigrateLegacyMessagesUseCase)
        try:
            await use_case.execute(MigrateLegacyMessagesRequest())
        except DomainError as e:
            logfire.error("Legacy message migration failed at startup", error=str(e))


@contextlib.asynccontextmanager
async def lifespan(app_instance: FastAPI) -> AsyncIterator[None]:
    """Seed pages, start the challenge sweeper and close the container on exit."""
    container: AsyncContainer = app_instance.state.dishka_container
    settings = await container.get(Settings)

    await provision_protected_pages(container, settings)
    if settings.comments.migrate_legacy_on_startup:
        await migrate_legacy_messages(container)

    store = await container.get(ChallengeStore)
    sweeper = asyncio.create_task(
        sweep_challenges(store, settings.auth.challenge_sweep_interval_seconds)
    )
    try:
        yield
    finally:
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper
        await container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.
    In tests, conftest.py configures it without sending data.

    Args:
        container: DI container to use (production container when omitted)
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Margin API",
        description="Threaded page comments and password-gated pages",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(auth.router)
    app_instance.include_router(pages.router)
    app_instance.include_router(realtime.router)

    return app_instance


# Create app instance for uvicorn
# Note: Logfire must be configured before this module is imported
app = create_app()
