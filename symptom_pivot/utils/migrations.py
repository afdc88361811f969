import logging
import os

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

ADVISORY_LOCK_KEY = 7251024

ALEMBIC_INI = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "alembic.ini")


def _alembic_config(engine=None):
    from alembic.config import Config

    cfg = Config(ALEMBIC_INI)
    if engine is not None:
        cfg.set_main_option("sqlalchemy.url", engine.url.render_as_string(hide_password=False))
    return cfg


def _get_head_revision() -> str:
    from alembic.script import ScriptDirectory

    script = ScriptDirectory.from_config(_alembic_config())
    head = script.get_current_head()
    return head or "unknown"


def _get_current_revision(engine) -> str:
    try:
        with engine.connect() as conn:
            result = conn.execute(text("SELECT version_num FROM alembic_version LIMIT 1"))
            row = result.fetchone()
            return row[0] if row else "none"
    except SQLAlchemyError:
        return "unknown"


def get_migration_state(engine) -> dict:
    current = _get_current_revision(engine)
    head = _get_head_revision()
    return {
        "current_revision": current,
        "head_revision": head,
        "migration_pending": current != head,
    }


def _upgrade(engine) -> None:
    from alembic import command

    command.upgrade(_alembic_config(engine), "head")


def run_migrations_if_enabled(engine) -> None:
    from ..config import get_settings

    settings = get_settings()
    if settings.run_migrations_on_startup.lower() != "true":
        logger.info("RUN_MIGRATIONS_ON_STARTUP is not enabled; skipping auto-migration")
        return

    if engine.dialect.name != "postgresql":
        logger.info("Running alembic upgrade head on %s", engine.dialect.name)
        _upgrade(engine)
        logger.info("Migrations complete")
        return

    logger.info("RUN_MIGRATIONS_ON_STARTUP is enabled; acquiring advisory lock %d", ADVISORY_LOCK_KEY)
    raw_conn = engine.raw_connection()
    try:
        cursor = raw_conn.cursor()
        cursor.execute("SELECT pg_advisory_lock(%s)", (ADVISORY_LOCK_KEY,))
        logger.info("Advisory lock acquired; running alembic upgrade head")
        try:
            _upgrade(engine)
            logger.info("Migrations complete")
        finally:
            cursor.execute("SELECT pg_advisory_unlock(%s)", (ADVISORY_LOCK_KEY,))
            logger.info("Advisory lock released")
    except Exception as exc:
        logger.error("Migration failed: %s", exc)
        raise
    finally:
        raw_conn.close()
