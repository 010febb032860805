"""
Structured logging utility for the bundle pipeline
"""
import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a stream handler to the root logger (scripts only)."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def log_bundle_event(
    logger: logging.Logger,
    step: str,
    serial_number: str,
    ok: bool,
    extra: Optional[Dict[str, Any]] = None
):
    """
    Log a pipeline stage with structured format:
    {"at":"pkpass","step":"...","serial":"...","ok":true/false,"extra":{...}}
    """
    log_data = {
        "at": "pkpass",
        "step": step,
        "serial": serial_number,
        "ok": ok,
        "ts": datetime.now(timezone.utc).isoformat()
    }
    if extra:
        log_data["extra"] = extra

    log_msg = json.dumps(log_data, separators=(',', ':'), default=str)

    if ok:
        logger.info(log_msg)
    else:
        logger.warning(log_msg)
