import os
import tempfile
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Points logging and local storage at a scratch directory and selects the
    fake bakery backend before any domain module is imported.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    scratch = Path(tempfile.mkdtemp(prefix="goldenmunch-tests-"))
    os.environ.setdefault("LOG_DIR", str(scratch / "logs"))
    os.environ.setdefault("KIOSK_STORAGE_PATH", str(scratch / "kiosk_storage.json"))
    os.environ["BAKERY_BACKEND"] = "fake"


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        # Get the test file path relative to the tests directory
        test_path = Path(item.fspath)

        # Mark tests based on their directory
        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def reset_bakery_backend():
    """Every test starts from a fresh backend singleton."""
    yield

    from shared.backend import reset_backend

    reset_backend()
