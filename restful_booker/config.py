import logging
import os
from typing import Dict, Optional

BASE_URL = os.environ.get("RESTFUL_BOOKER_BASE_URL", "http://localhost:3001")

USERNAME = os.environ.get("RESTFUL_BOOKER_USERNAME", "admin")
PASSWORD = os.environ.get("RESTFUL_BOOKER_PASSWORD", "password123")

DEFAULT_HEADERS: Dict[str, str] = {"Content-Type": "application/json"}

LOG_LEVEL = os.environ.get("RESTFUL_BOOKER_LOG_LEVEL", "WARNING")

# Mock service audit trail, disabled unless a path is given.
AUDIT_LOG_FILE: Optional[str] = os.environ.get("MOCK_BOOKER_AUDIT_LOG") or None

VALIDATION_FILE = os.environ.get("RESTFUL_BOOKER_VALIDATION_FILE", "validation-output.json")


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
