import sys
import copy
import logging as log
from memocurry.comfies.config import (
    Config,
    DictConfig,
    YAMLConfigPath,
    update,
)


DEFAULTS = {
    "example": {
        "offset": None,
        "values": [4, 6, 4],
    },
    "memoize": {
        "key": "join",
        "thread_safe": False,
    },
    "logging": {
        "level": "INFO",
        "file": None,
    },
}

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def create_logger(
    name: str,
    level: str = "INFO",
    log_file: str | None = None
) -> log.Logger:
    """Create a logger writing to stdout or to a file.

    Args:
        name (str): Name of the logger.
        level (str, optional): Logging level. Defaults to "INFO".
        log_file (str | None, optional): Path to a log file. Defaults to None,
            in which case records go to stdout.

    Returns:
        log.Logger: The configured logger.
    """
    logger = log.getLogger(name)
    logger.setLevel(level)

    if log_file:
        handler = log.FileHandler(log_file)
    else:
        handler = log.StreamHandler(sys.stdout)

    handler.setLevel(level)
    handler.setFormatter(log.Formatter(LOG_FORMAT))

    # Replace handlers left over from a previous call
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.addHandler(handler)

    return logger


def load_config(config_path: str | None = None) -> Config:
    """Load the configuration file on top of the defaults.

    Args:
        config_path (str | None, optional): Path to the YAML configuration
            file. Defaults to None, which returns the defaults only.

    Returns:
        Config: configuration object.

    Raises:
        ConfigNotFoundError: If the configuration file does not exist.
        ConfigLoadingError: If the configuration file cannot be parsed.
    """
    data = copy.deepcopy(DEFAULTS)
    if config_path is None:
        return Config(DictConfig(data))

    source = YAMLConfigPath(config_path)
    source.data = update(data, source.data)
    return Config(source)
