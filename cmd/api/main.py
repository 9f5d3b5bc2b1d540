"""
FastAPI Application Entry Point.

REST API server for Catalog Service.
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import get_settings
from internal.transport.http.v1.handlers import router, system_router, set_dependencies
from internal.transport.http.middleware import MetricsMiddleware, RequestIdMiddleware
from internal.infrastructure.kafka.producer import KafkaEventNotifier
from internal.infrastructure.memory.store import InMemoryCatalogStore
from internal.infrastructure.postgres.repository import (
    PostgresCatalogStore,
    create_pool,
)
from internal.usecase.create_item import CreateItemUseCase
from internal.usecase.query_items import QueryItemsUseCase
from internal.usecase.update_item import UpdateItemUseCase
from pkg.logger.logger import setup_logging, get_logger


settings = get_settings()

setup_logging(
    level=settings.log_level,
    json_format=settings.json_logs,
    service=settings.app_name,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan manager.

    Handles startup and shutdown of resources.
    """
    logger.info("Starting Catalog Service API...", storage=settings.storage_backend)

    db_pool = None
    notifier = None

    if settings.storage_backend == "postgres":
        try:
            db_pool = await create_pool(
                settings.database_url,
                min_size=settings.db_pool_min_size,
                max_size=settings.db_pool_max_size,
            )
            logger.info("Database pool created")
        except Exception as e:
            logger.error("Failed to create database pool", error=str(e))
            raise
        store = PostgresCatalogStore(db_pool)
    else:
        logger.warning("Using in-memory catalog store, data is not persisted")
        store = InMemoryCatalogStore()

    # Events are best-effort: the API runs without Kafka.
    if settings.kafka_enabled:
        try:
            notifier = KafkaEventNotifier(
                bootstrap_servers=settings.kafka_bootstrap_servers,
                topic=settings.kafka_items_topic,
                client_id=settings.kafka_client_id,
            )
            await notifier.start()
        except Exception as e:
            logger.warning("Failed to start Kafka producer, events disabled", error=str(e))
            notifier = None
    else:
        logger.warning("Kafka disabled, item events will not be published")

    set_dependencies(
        create_use_case=CreateItemUseCase(store=store, notifier=notifier),
        update_use_case=UpdateItemUseCase(store=store, notifier=notifier),
        query_use_case=QueryItemsUseCase(store=store),
    )

    logger.info("Catalog Service API started successfully")

    yield

    logger.info("Shutting down Catalog Service API...")

    set_dependencies(None, None, None)

    if notifier:
        await notifier.stop()

    if db_pool:
        await db_pool.close()

    logger.info("Catalog Service API shutdown complete")


app = FastAPI(
    title="Catalog Service API",
    description="Catalog item management with best-effort change events",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIdMiddleware)

app.include_router(router)
app.include_router(system_router)


@app.get("/")
async def root() -> dict:
    """Root endpoint with service information."""
    return {
        "service": settings.app_name,
        "version": "1.0.0",
        "status": "running",
    }


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
    )
