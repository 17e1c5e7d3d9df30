import logging

logger = logging.getLogger("flatdesk.events")


def emit(event, **data):
    """Log a domain event (invoice generated, payment recorded, ...)."""
    details = " ".join(f"{k}={v}" for k, v in sorted(data.items()))
    logger.info("%s %s", event, details)
