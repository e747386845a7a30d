from .logger import configure_logging, get_logger
