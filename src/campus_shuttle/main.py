"""Main entry point for the campus shuttle service."""

import asyncio
import logging
import sys

from campus_shuttle.adapters.config import (
    AppConfig,
    StaticCampusLocationProvider,
    UserRosterLoader,
)
from campus_shuttle.adapters.memory import InMemoryUserDirectory
from campus_shuttle.adapters.mongo import MongoFleetStore
from campus_shuttle.adapters.system_clock import SystemClock
from campus_shuttle.adapters.web import ShuttleWebAdapter
from campus_shuttle.application.services import (
    AnnouncementFeed,
    AssignmentRegistry,
    BusDirectory,
    ChatLog,
    RouteBuilder,
)
from campus_shuttle.domain.errors import DependencyUnavailableError
from campus_shuttle.domain.models import UserRole

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Configure root logging for the process."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()
    configure_logging(config.log_level)

    # Load the user roster
    try:
        credentials = UserRosterLoader.load(config)
        user_directory = InMemoryUserDirectory(credentials)
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Invalid user configuration: {e}")
        sys.exit(1)

    users = user_directory.list_users()
    logger.info(f"Loaded {len(users)} user(s)")
    if not any(user.role is UserRole.ADMIN for user in users):
        logger.warning("No admin users configured; buses cannot be managed.")
        logger.warning("Copy config.example.toml to config.toml and add [[users]] entries.")

    campus = StaticCampusLocationProvider.from_config(config)
    store = MongoFleetStore.from_config(config)
    try:
        await store.ensure_indexes()
    except DependencyUnavailableError:
        logger.error("Cannot reach MongoDB at startup; check MONGODB_URI")
        sys.exit(1)
    clock = SystemClock()

    # Initialize services
    route_builder = RouteBuilder(campus)
    bus_directory = BusDirectory(store, route_builder, clock)
    assignment_registry = AssignmentRegistry(store, store, user_directory, clock)
    announcement_feed = AnnouncementFeed(store, store, user_directory, clock)
    chat_log = ChatLog(store, user_directory, clock)

    web_adapter = ShuttleWebAdapter(
        bus_directory,
        assignment_registry,
        announcement_feed,
        chat_log,
        user_directory,
        config,
        health_check=store.ping,
    )

    try:
        await web_adapter.start()
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        await web_adapter.stop()
    finally:
        await store.close()


def run() -> None:
    """Synchronous entry point for the server command."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
