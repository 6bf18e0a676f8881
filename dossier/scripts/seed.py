"""
Load the default world content (documents, terminals, personnel, starter credential)
into the configured database. Safe to run repeatedly:

  python -m dossier.scripts.seed
"""

import logging
import sys

from dossier.core.database import SessionLocal
from dossier.storage import SqlStorage
from dossier.storage.seed import load_world

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    db = SessionLocal()
    try:
        created = load_world(SqlStorage(db))
        logger.info("Seed completed: %s", created)
        return 0
    except Exception as e:
        logger.exception("Seed failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
