import logging
import os
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def configure_env(env_file_name: Optional[str] = None) -> bool:
    """
    Load validator configuration from environment files.

    Args:
        env_file_name: Optional environment file name. If None, tries `.env.<ENV>` then `.env`.

    Returns:
        True if a file was loaded.
    """
    if env_file_name is not None:
        return load_dotenv(env_file_name, override=True)

    environment = os.getenv("ENV", "debug")

    for env_file in [f".env.{environment}", ".env"]:
        if load_dotenv(env_file, override=True):
            logger.debug(f"☑️ Loaded {env_file} file successfully")
            return True

    logger.debug("No env file found, using process environment only")
    return False
