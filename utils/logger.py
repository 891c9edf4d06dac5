# utils/logger.py
import logging
import os


def setup_logging(log_file: str = "", level=logging.INFO):
    """
    Configures the root logger.

    Args:
        log_file (str): Path of the log file, overwritten on each run.
                        Empty string logs to stderr instead; stdout is left
                        to the move log.
        level (int): Root logging level.
    """
    fmt = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        logging.basicConfig(filename=log_file, filemode='w', level=level, format=fmt, force=True)
    else:
        logging.basicConfig(level=level, format=fmt, force=True)

    logger = logging.getLogger(__name__)
    logger.debug("Logging initialized.")
