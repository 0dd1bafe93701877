import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)


def setup_logging(session_id: str, log_file: Optional[str] = "tabletally.log", level: int = logging.INFO) -> None:
    """
    Configure logging with UTF-8 encoding support and session management.

    Sets up a logging system that outputs to the console and, if a log file
    is given, to that file (overwritten each session).

    Args:
        session_id (str): Unique identifier for this session.
        log_file (Optional[str]): File to log to, or None for console only.
        level (int): Root log level.

    Side Effects:
        - Clears existing logging handlers
        - Creates/overwrites the log file
        - Logs session start information with timestamp
    """
    # Clear any existing handlers
    logging.getLogger().handlers = []

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8", mode="w"))

    logging.basicConfig(level=level, format="%(message)s", handlers=handlers)

    logging.info(f"\n{'='*70}")
    logging.info(f"New Session Started - ID: {session_id}")
    logging.info(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    logging.info(f"{'='*70}\n")


def load_script(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a JSON hand script.

    Raises:
        ValueError: If the file is not a JSON object
    """
    with open(path, encoding="utf-8") as f:
        script = json.load(f)
    if not isinstance(script, dict):
        raise ValueError(f"{path} must contain a JSON object")
    return script
