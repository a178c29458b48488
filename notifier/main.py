import asyncio
import sys

import structlog

from .config import settings
from .domain import Event, NotifierError
from .infrastructure.adapters import AzureEventHubNotifier
from .infrastructure.logging import configure_logging

logger = structlog.get_logger()


def read_event(path: str | None = None) -> Event:
    """Read one event as JSON from a file, or from stdin when no path is given."""
    if path and path != "-":
        with open(path, "rb") as f:
            return Event.model_validate_json(f.read())
    return Event.model_validate_json(sys.stdin.buffer.read())


async def main(argv: list[str] | None = None) -> int:
    """Main entry point: post a single event to the configured event hub."""
    argv = sys.argv[1:] if argv is None else argv
    configure_logging(settings.service_name, settings.log_level)

    try:
        event = read_event(argv[0] if argv else None)
    except (OSError, ValueError) as e:
        logger.error("Invalid event", error=str(e))
        return 2

    try:
        notifier = await AzureEventHubNotifier.create(
            endpoint_url=settings.eventhub_address,
            token=settings.eventhub_token,
            namespace=settings.eventhub_namespace,
            timeout=settings.publish_timeout_seconds,
        )
        try:
            await notifier.post(event, timeout=settings.publish_timeout_seconds)
        finally:
            await notifier.aclose()
    except NotifierError as e:
        logger.error("Failed to post event", error=str(e), error_type=type(e).__name__)
        return 1

    logger.info("Event posted", reason=event.reason)
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
