"""
CLI entrypoint that creates the default roles, permissions and grants:

  python -m app.scripts.seed_rbac

Safe to run repeatedly; existing rows are kept.
"""

import logging
import sys

from app.core.config import get_settings
from app.core.database import build_engine, build_session_factory
from app.services.permissions import seed_rbac

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main() -> int:
    session_factory = build_session_factory(build_engine(get_settings()))
    db = session_factory()
    try:
        roles_created, grants_created = seed_rbac(db)
        logger.info(
            "Seed completed: roles_created=%s grants_created=%s", roles_created, grants_created
        )
        return 0
    except Exception as e:
        logger.exception("Seed failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
