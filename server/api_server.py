"""FastAPI application entry point for the content index bridge."""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.logging.logging_setup import setup_logging
from shared.helper.HelperConfig import HelperConfig
from shared.clients.ClientInterface import ClientInterface
from shared.clients.store.StoreClientManager import StoreClientManager
from shared.clients.index.IndexClientManager import IndexClientManager
from services.index_sync.DefaultSyncStrategy import DefaultSyncStrategy
from services.index_sync.SyncService import SyncService
from server.routers.WebhookRouter import router as webhook_router
from server.routers.HealthRouter import router as health_router

logging = setup_logging()
app_version = os.getenv("APP_VERSION", "unknown")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # when the app starts
    app.state.logging = logging
    app.state.helper_config = HelperConfig(logger=logging)

    store_client = StoreClientManager(helper_config=app.state.helper_config).get_client()
    type_index_map = IndexClientManager(helper_config=app.state.helper_config).get_type_index_map()
    clients: list[ClientInterface] = [store_client, *type_index_map.get_clients()]

    logging.info("Booting all clients...")
    for client in clients:
        await client.boot()
    logging.info("All clients booted successfully.")

    app.state.store_client = store_client
    app.state.type_index_map = type_index_map
    app.state.sync_service = SyncService(
        helper_config=app.state.helper_config,
        store_client=store_client,
        type_index_map=type_index_map,
        strategy=DefaultSyncStrategy(app.state.helper_config, type_index_map.get_types()),
    )

    await check_connections(clients)

    # while the app is running...
    yield

    # when the app shuts down, close all client connections
    logging.info("Shutting down — closing all clients...")
    for client in clients:
        await client.close()
    logging.info("All clients closed.")


app = FastAPI(
    title="content_index_bridge",
    description=(
        "Keeps per-type search indices in line with a content document store. "
        "Change notifications are accepted via POST /webhook/sync; documents that "
        "are visible get indexed, everything else declared in the notification is "
        "removed from every index."
    ),
    version=app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(webhook_router)
app.include_router(health_router)


async def check_connections(clients: list[ClientInterface]) -> None:
    """Check connectivity to all configured backends on startup.

    Failures are logged but not fatal: the server stays up and the affected
    synchronisation runs fail until the backend is reachable again.
    """
    for client in clients:
        try:
            await client.do_healthcheck()
        except Exception as exc:
            logging.warning(
                "%s client '%s' is not reachable: %s. Synchronisation may fail.",
                client.get_client_type().upper(),
                client.get_engine_name(),
                exc,
            )


if __name__ == "__main__":
    import uvicorn

    logging.info(
        "Starting content_index_bridge API Server v%s from root dir: %s on port 8000...",
        app_version,
        os.environ.get("ROOT_DIR", "unknown"),
    )
    uvicorn.run(app, host="0.0.0.0", port=8000)
