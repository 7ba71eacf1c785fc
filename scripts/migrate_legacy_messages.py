#!/usr/bin/env python3
"""Promote legacy flat chat messages to top-level comments.

Safe to re-run: messages that already have an equivalent comment are
skipped, and a completed run is recorded in the data migration ledger.

Usage:
    python scripts/migrate_legacy_messages.py [--force]
"""

import argparse
import asyncio
import sys

import logfire

from margin.application.usecase.migration import (
    MigrateLegacyMessagesRequest,
    MigrateLegacyMessagesUseCase,
)
from margin.config import Settings
from margin.util.di.container import create_container
from margin.util.logging import get_logger, setup_logging
from margin.util.observability import configure_logfire

logger = get_logger(__name__)


async def run(force: bool) -> int:
    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(MigrateLegacyMessagesUseCase)
            report = await use_case.execute(MigrateLegacyMessagesRequest(force=force))
    finally:
        await container.close()

    if report.already_applied:
        logger.info(
            f"Migration {report.migration_id} already applied (use --force to re-scan)"
        )
    else:
        logger.info(
            f"Migration {report.migration_id}: scanned={report.scanned} "
            f"migrated={report.migrated} skipped_existing={report.skipped_existing} "
            f"skipped_invalid={report.skipped_invalid}"
        )
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--force",
        action="store_true",
        help="Re-scan legacy messages even if the migration is recorded as applied",
    )
    args = parser.parse_args()

    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    try:
        return asyncio.run(run(force=args.force))
    except Exception as e:
        logfire.error(
            "Legacy message migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
