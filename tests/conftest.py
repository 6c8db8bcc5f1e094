import pytest

from core.config import reset_extraction_config


@pytest.fixture(autouse=True)
def fresh_config():
    """Each test starts from the bundled extraction.yaml."""
    reset_extraction_config()
    yield
    reset_extraction_config()
