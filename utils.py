# utils.py
"""
Startup helpers for the particle field: reading `config.json` and wiring the
root logger to the console and a size-capped log file. Neither touches the
engine or pygame.
"""
import logging
import logging.handlers
import json
import os
from typing import Dict, Any

# --- Data Contracts ---
#
# setup_logging(config: Dict[str, Any]) -> None:
#   - Inputs:
#     - config: the full application config. Only its optional "logging"
#       section is read ("level", "format", "log_file").
#   - Side Effects: Replaces every handler on the root logger with a
#     stderr handler and, unless log_file is empty or null, a rotating file
#     handler whose directory is created on demand.
#
# load_config(path: str) -> Dict[str, Any]:
#   - Outputs: the parsed JSON object.
#   - Raises: FileNotFoundError, json.JSONDecodeError, ValueError when the
#     top level is not an object.

def setup_logging(config: Dict[str, Any]) -> None:
    """
    Points the root logger at stderr and, when configured, at a rotating
    log file. Safe to call again: previous handlers are dropped first.
    """
    log_config = config.get('logging', {})
    log_level = log_config.get('level', 'INFO').upper()
    log_format = log_config.get('format', '%(asctime)s - %(levelname)s - %(message)s')
    log_file_path = log_config.get('log_file', 'logs/particles.log')

    logger = logging.getLogger()
    logger.setLevel(log_level)

    # A second call must not double every message.
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(log_format)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file_path:
        log_dir = os.path.dirname(log_file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        # 1 MB per file, five old files kept.
        file_handler = logging.handlers.RotatingFileHandler(
            log_file_path, maxBytes=1024*1024, backupCount=5
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logging.info(f"Logging ready at {log_level}.")
    logging.debug(f"Writing log file to: {log_file_path or '(console only)'}")

def load_config(path: str) -> Dict[str, Any]:
    """Reads the application config; the top level must be a JSON object."""
    logging.info(f"Reading config from {path}.")
    try:
        with open(path, 'r') as f:
            config = json.load(f)
    except FileNotFoundError:
        logging.error(f"No config file at {path}.")
        raise
    except json.JSONDecodeError:
        logging.error(f"Config file {path} is not valid JSON.")
        raise

    if not isinstance(config, dict):
        msg = f"Configuration in {path} must be a JSON object, got {type(config).__name__}."
        logging.error(msg)
        raise ValueError(msg)

    logging.info(f"Config sections: {', '.join(sorted(config)) or '(none)'}.")
    return config
