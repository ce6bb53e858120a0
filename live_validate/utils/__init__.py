from .env_utils import configure_env
from .logging import setup_logging, get_log_file_path, get_package_logger
from .serialisation import pascal_case_to_snake_case, clear_results

__all__ = [
    "configure_env",
    "setup_logging",
    "get_log_file_path",
    "get_package_logger",
    "pascal_case_to_snake_case",
    "clear_results",
]
