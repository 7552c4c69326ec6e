#!/usr/bin/env python3
"""
Database initialization script
Creates every configuration table and seeds the default master data.

Usage:
    python -m admissions_console.init_db
"""

import logging
import sys

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .core.config import settings
from .core.database import Base, SessionContext, engine
from .core.logging_config import configure_logging
from .seeds.master_data_seed import seed_master_data
# Import all models so every table is registered on Base.metadata
from . import models  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(seed: bool = True) -> bool:
    """Create all database tables and optionally seed defaults"""
    logger.info("Creating database tables...")
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")

        with SessionContext() as db:
            # Test database connection
            db.execute(text("SELECT 1"))
            logger.info("Database connection test successful")

            if seed:
                counts = seed_master_data(db)
                logger.info(f"Seeded master data: {counts}")
    except SQLAlchemyError as e:
        logger.error(f"Error initializing database: {str(e)}")
        return False

    return True


if __name__ == "__main__":
    configure_logging(settings.LOG_LEVEL)
    if init_db(seed="--no-seed" not in sys.argv):
        logger.info("Database initialization completed successfully!")
    else:
        logger.error("Database initialization failed!")
        sys.exit(1)
