"""
Logging setup for the relay service.
"""
import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger with a single stream handler.

    Calling this more than once replaces the handler rather than stacking
    duplicates, so the app factory can be invoked repeatedly in tests.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    for handler in list(root.handlers):
        if getattr(handler, "_voice_relay", False):
            root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._voice_relay = True
    root.addHandler(handler)

    # Azure and gRPC clients are chatty at INFO
    logging.getLogger("azure").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)
