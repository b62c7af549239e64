import os
import logging
import sys
from logging.handlers import RotatingFileHandler

def setup_logger(name, log_level=None, log_dir=None):
    """
    Set up a logger with console and file handlers

    Args:
        name (str): Logger name
        log_level (str, optional): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
                                  Defaults to INFO or value from LOG_LEVEL env var
        log_dir (str, optional): Directory holding <name>.log.
                                 Defaults to logs

    Returns:
        logging.Logger: Configured logger
    """
    # Get log level from environment variable or use default
    if log_level is None:
        log_level = os.environ.get('LOG_LEVEL', 'INFO')

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    # Create logger
    logger = logging.getLogger(name)
    logger.setLevel(numeric_level)

    # Clear existing handlers to avoid duplicates
    if logger.handlers:
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # One file per logger name
    log_dir = log_dir or 'logs'
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, f'{name}.log')

    # File handler with rotation
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10*1024*1024,  # 10MB
        backupCount=5
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    return logger
