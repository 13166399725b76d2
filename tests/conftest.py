import logging
import pytest


@pytest.fixture(autouse=True)
def reset_memocurry_loggers():
    """Drop handlers added by create_logger so tests do not share streams."""
    yield
    names = ["memocurry"] + [
        name for name in logging.root.manager.loggerDict
        if name.startswith("memocurry.")
    ]
    for name in names:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
