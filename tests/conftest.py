import base64
import pytest

from onboarding.core.config import Settings

TEST_MASTER_KEY = base64.b64encode(b"k" * 32).decode("ascii")


@pytest.fixture
def master_key():
    return TEST_MASTER_KEY


@pytest.fixture
def key_settings(tmp_path):
    """Settings with no env key and a key file inside tmp_path."""
    return Settings(
        ENCRYPTION_KEY=None,
        ENCRYPTION_KEY_PATH=str(tmp_path / ".encryption-key"),
        APPLICATIONS_DIR=str(tmp_path / "applications"),
        CONFIG_DIR=str(tmp_path / "config"),
    )
