import pytest
import sys
import os
import logging; logging.basicConfig(level=logging.DEBUG)

# Ensure the project root is in the Python path for imports in tests
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from config_loader import default_config


@pytest.fixture(autouse=True)
def configure_logging(caplog):
    """Ensure logging is configured to capture DEBUG level messages for all tests."""
    caplog.set_level(logging.DEBUG, logger="root")


@pytest.fixture
def mirror_config(tmp_path):
    """Default configuration with the mirror tree rooted in a temp directory."""
    config = default_config()
    config['mirror_root'] = str(tmp_path / "mirror")
    return config
