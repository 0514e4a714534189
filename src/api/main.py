import logging
import os

from fastapi import FastAPI

from api import state
from api.routers import areas, chat, goals, ops, projects, tasks
from storage import db
from storage.memory_repository import InMemoryRepository
from storage.postgres_repository import PostgresRepository

# Logging configuration
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

USE_DATABASE = os.getenv("USE_DATABASE", "false").lower() in {"1", "true", "yes"}
SEED_SAMPLE_DATA = os.getenv("GTD_SEED_SAMPLE_DATA", "false").lower() in {"1", "true", "yes"}

app = FastAPI(title="GTD AI")

app.include_router(chat.router)
app.include_router(tasks.router)
app.include_router(projects.router)
app.include_router(areas.router)
app.include_router(goals.router)
app.include_router(ops.router)


@app.on_event("startup")
async def startup() -> None:
    if USE_DATABASE:
        await db.init_db_pool()
        await db.init_schema()
        state.repository = PostgresRepository()
        logger.info("Using PostgreSQL repository")
        return

    repository = InMemoryRepository()
    if SEED_SAMPLE_DATA:
        await repository.seed_sample_data()
    state.repository = repository
    logger.info("Using in-memory repository")


@app.on_event("shutdown")
async def shutdown() -> None:
    if USE_DATABASE:
        await db.close_db_pool()
