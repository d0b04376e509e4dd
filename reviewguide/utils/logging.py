"""Logging and observability setup using Pydantic Logfire."""

import logging
import sys

from reviewguide.config.settings import settings


def setup_logging() -> None:
    """Configure application logging.

    Log records go to stderr so that reports written to stdout stay
    machine-readable.
    """
    log_level = getattr(logging, settings.log_level)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
        force=True,  # Reconfigure if already setup
    )

    # Reduce noise from verbose libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def setup_observability() -> None:
    """Setup logging and observability with Logfire instrumentation.

    Configures standard logging and optionally enables Logfire for
    tracing if a token is configured.
    """
    setup_logging()

    logger = logging.getLogger(__name__)

    if settings.logfire_token:
        try:
            import logfire

            logfire.configure(token=settings.logfire_token)
            logfire.instrument_pydantic()

            logger.info(
                f"Logfire observability enabled for {settings.environment} environment"
            )

        except ImportError:
            logger.warning(
                "Logfire package not installed. Install with: pip install 'review-guide[logfire]'"
            )
        except Exception as e:
            logger.error(f"Failed to setup Logfire observability: {e}")
    else:
        logger.debug("Logfire token not configured, skipping observability setup")
