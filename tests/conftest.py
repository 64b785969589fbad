import logging

import pytest

from i18nsync.logging_config import LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers bound to captured streams between tests."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def table():
    return {
        "app.title": {"en": "Welcome", "es": "Bienvenido", "fr": "Bienvenue"},
        "app.greeting": {"en": "Hello {{name}}", "es": "Hola {{name}}", "fr": ""},
        "nav.home": {"en": "Home", "es": "", "fr": ""},
    }
