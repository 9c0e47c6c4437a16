"""
logging_config.py — Log setup for the checkout integration service

Every request that reaches ToyyibPay or EasyParcel is traced through the log,
so log lines about one order share the `[Order: <id>]` prefix built by
`order_prefix`. Output goes to stdout for the container runtime and, unless
disabled, to a local file. httpx and httpcore only report warnings, since the
clients already log each outbound call with its order context.
"""

import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(levelname)s - [PID:%(process)d] - %(name)s - %(message)s'


def setup_logging(log_file="checkout_integration.log", level=logging.INFO):
    """
    Installs the root handlers once at process start.

    Args:
        log_file (str, optional): File to append to; None logs to stdout only.
        level (int): Root log level, INFO by default.
    """
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.insert(0, logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def order_prefix(order_id: Optional[str]) -> str:
    """Log prefix for an order; orders without an id show as `n/a`."""
    return f"[Order: {order_id or 'n/a'}]"


def get_logger(name):
    return logging.getLogger(name)
