import logging
import sys

import sentry_sdk

from gitfetch.settings import Settings

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str | int = logging.WARNING) -> None:
    """Send log records to stderr so they never mix with the report."""

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def init_sentry(app_settings: Settings) -> bool:
    """Start Sentry error reporting for this run.

    Returns False, leaving the SDK untouched, when no DSN is configured.
    """

    if not app_settings.sentry_dsn:
        logger.debug("Sentry disabled, no DSN configured")
        return False

    sentry_sdk.init(
        dsn=app_settings.sentry_dsn,
        environment=app_settings.environment,
        release=app_settings.release,
        traces_sample_rate=app_settings.sentry_traces_sample_rate,
        send_default_pii=False,
    )
    logger.debug("Sentry enabled for environment %s", app_settings.environment)
    return True
