"""Sync runner entry point.

Re-indexes every document of the configured types, or replays a single
change notification saved as JSON (e.g. a webhook body captured from the
document store).

Usage:
    python -m sync.sync_runner
    python -m sync.sync_runner --notification body.json
"""

import asyncio
import json

import click
from pydantic import ValidationError

from services.index_sync.DefaultSyncStrategy import DefaultSyncStrategy
from services.index_sync.SyncService import SyncService
from services.index_sync.errors import SyncError
from shared.clients.ClientInterface import ClientInterface
from shared.clients.index.IndexClientManager import IndexClientManager
from shared.clients.store.StoreClientManager import StoreClientManager
from shared.helper.HelperConfig import HelperConfig
from shared.logging.logging_setup import setup_logging
from shared.models.sync import ChangeNotification


async def run_sync(helper_config: HelperConfig, notification: ChangeNotification | None = None) -> bool:
    """Boot all clients, run one synchronisation and close the clients again.

    Args:
        helper_config (HelperConfig): The application configuration.
        notification (ChangeNotification | None): Notification to replay. A full sync runs when None.

    Returns:
        bool: True if the run succeeded.
    """
    logger = helper_config.get_logger()
    store_client = StoreClientManager(helper_config=helper_config).get_client()
    type_index_map = IndexClientManager(helper_config=helper_config).get_type_index_map()
    clients: list[ClientInterface] = [store_client, *type_index_map.get_clients()]

    try:
        # every client is required: deletes are broadcast to all indices
        for client in clients:
            try:
                await client.boot()
                await client.do_healthcheck()
            except Exception as e:
                logger.error(f"Error booting {client.get_client_type().upper()} client {client.get_engine_name()}: {e}. Aborting.")
                return False

        sync_service = SyncService(
            helper_config=helper_config,
            store_client=store_client,
            type_index_map=type_index_map,
            strategy=DefaultSyncStrategy(helper_config, type_index_map.get_types()),
        )
        try:
            if notification is None:
                await sync_service.do_full_sync()
            else:
                await sync_service.do_webhook_sync(notification)
        except SyncError:
            return False
        return True
    finally:
        for client in clients:
            await client.close()


def load_notification(path: str) -> ChangeNotification:
    """Read a change notification from a JSON file.

    Raises:
        click.BadParameter: If the file is not a valid notification.
    """
    with open(path, encoding="utf-8") as handle:
        try:
            return ChangeNotification.model_validate(json.load(handle))
        except (json.JSONDecodeError, ValidationError) as e:
            raise click.BadParameter(f"'{path}' is not a valid change notification: {e}", param_hint="--notification")


@click.command()
@click.option(
    "--notification",
    "notification_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="JSON file with a change notification to apply instead of a full sync.",
)
def main(notification_path: str | None) -> None:
    """Synchronise the document store into the search indices."""
    logger = setup_logging()
    config = HelperConfig(logger=logger)
    notification = load_notification(notification_path) if notification_path else None
    if not asyncio.run(run_sync(config, notification)):
        raise click.ClickException("Synchronisation failed, see log for details.")


if __name__ == "__main__":
    main()
