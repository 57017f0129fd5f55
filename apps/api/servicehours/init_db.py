"""Create the servicehours tables if they don't exist.

Usage: ``python -m servicehours.init_db``
"""

import structlog

from servicehours.core.logging import configure_logging
from servicehours.db import engine
from servicehours.models import Base

logger = structlog.get_logger(__name__)


def create_database() -> None:
    Base.metadata.create_all(bind=engine)
    logger.info("schema_created", tables=sorted(Base.metadata.tables))


if __name__ == "__main__":
    configure_logging()
    create_database()
