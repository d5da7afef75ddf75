import argparse
import logging
import time

from sqlalchemy.orm import Session

from jobhunter.config import settings
from jobhunter.database import SessionLocal, init_db
from jobhunter.logging_config import setup_logging
from jobhunter.services.alert_dispatch import run_dispatch

logger = logging.getLogger(__name__)
INTERVAL_SECONDS = settings.alert_interval_seconds


def run_once(db: Session) -> dict:
    result = run_dispatch(db)
    logger.info("Alert dispatch result: %s", result)
    return result


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(description="Send due job alert digests (once or on an interval)")
    parser.add_argument("--once", action="store_true", help="Run once and exit (no schedule)")
    args = parser.parse_args(argv)

    setup_logging()
    init_db()

    if args.once:
        db = SessionLocal()
        try:
            run_once(db)
        finally:
            db.close()
        return

    while True:
        db = SessionLocal()
        try:
            run_once(db)
        except Exception as e:
            logger.exception("Alert dispatch failed: %s", e)
        finally:
            db.close()
        logger.info("Sleeping %d seconds until next run", INTERVAL_SECONDS)
        time.sleep(INTERVAL_SECONDS)


if __name__ == "__main__":
    main()
