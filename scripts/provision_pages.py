#!/usr/bin/env python3
"""Create protected pages listed in PROTECTED_PAGES.

Pages that already have a salted hash are left untouched; legacy pages
without a salt are upgraded.
"""

import asyncio
import sys

import logfire

from margin.application.usecase.page import (
    ProvisionPagesRequest,
    ProvisionPagesUseCase,
)
from margin.config import Settings
from margin.util.di.container import create_container
from margin.util.logging import get_logger, setup_logging
from margin.util.observability import configure_logfire

logger = get_logger(__name__)


async def run(settings: Settings) -> int:
    if not settings.protected_pages:
        logger.warning("PROTECTED_PAGES is empty, nothing to provision")
        return 0

    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(ProvisionPagesUseCase)
            response = await use_case.execute(
                ProvisionPagesRequest(pages=settings.protected_pages)
            )
    finally:
        await container.close()

    logger.info(f"Provisioned pages: {', '.join(response.page_ids)}")
    return 0


def main() -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    try:
        return asyncio.run(run(settings))
    except Exception as e:
        logfire.error(
            "Page provisioning failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
