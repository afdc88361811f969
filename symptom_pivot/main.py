import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .config import get_settings
from .database import engine, init_db
from .routers import patients_router, pivot_router
from .utils.migrations import get_migration_state, run_migrations_if_enabled

logger = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(title="Symptom Pivot API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(pivot_router)
app.include_router(patients_router)


@app.on_event("startup")
def _startup() -> None:
    logging.basicConfig(level=settings.log_level.upper())
    run_migrations_if_enabled(engine)
    init_db()
    logger.info("Symptom Pivot API started")


@app.get("/health")
def health() -> dict:
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        logger.error("Health check database query failed: %s", e)
        database = "unavailable"

    return {
        "status": "ok" if database == "ok" else "degraded",
        "database": database,
        "migrations": get_migration_state(engine),
    }
