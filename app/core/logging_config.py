import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Install one stream handler on the root logger. Safe to call repeatedly."""
    global _configured
    root = logging.getLogger()
    root.setLevel(level.upper())
    if _configured:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(handler)
    # httpx logs every request at INFO; the client logs its own calls at DEBUG
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _configured = True
