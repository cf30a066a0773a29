# student_registry/core/logging.py
import logging
import sys

from student_registry.core.config import settings


# Configure standard Python logging
def setup_logging(level: str = settings.LOG_LEVEL):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)  # Print logs to console
        ]
    )
    return logging.getLogger("student_registry")


logger = setup_logging()
