# app/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from app.api import api_router
from app.api.routers import health
from app.data.database import Base, engine, init_db
from app.utils.logging import get_logger
from app.utils.settings import API_PREFIX

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        init_db(engine)
        logger.info(f"Database ready, tables: {sorted(Base.metadata.tables.keys())}")
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    yield
    engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Shop Service",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.include_router(health.router)
    app.include_router(api_router, prefix=API_PREFIX)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
