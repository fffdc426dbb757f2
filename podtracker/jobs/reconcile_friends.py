"""
Repair job for friends lists.

Removes friends-list entries whose friend ID no longer resolves to a
profile, and entries the other side no longer reciprocates. Safe to run
repeatedly; a second run finds nothing to change.
"""

import argparse
import asyncio
import logging

from sqlalchemy.exc import SQLAlchemyError

from podtracker.db.database import async_session_factory, init_db
from podtracker.services.friends import ReconcileReport, reconcile_friendships

logger = logging.getLogger(__name__)


async def run_reconcile(dry_run: bool = False) -> ReconcileReport:
    """
    Sweep every user's friends list.

    Args:
        dry_run: Report what would be removed without committing

    Returns:
        What the sweep removed (or would have removed)
    """
    await init_db()

    async with async_session_factory() as session:
        try:
            report = await reconcile_friendships(session)
            if dry_run:
                await session.rollback()
            else:
                await session.commit()
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error("Reconciliation failed: %s", e)
            raise

    logger.info(
        "Checked %d users: %d orphan and %d one-sided entries %s",
        report.users_checked,
        len(report.orphans_removed),
        len(report.one_sided_removed),
        "found" if dry_run else "removed",
    )
    return report


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Remove broken friends-list entries")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report entries without removing them",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_reconcile(dry_run=args.dry_run))


if __name__ == "__main__":
    main()
