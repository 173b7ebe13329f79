"""Master Key Resolution and Per-Value Key Derivation.

Resolution order for the master key:
    1. ENCRYPTION_KEY from the environment, if long enough.
    2. The key file at ENCRYPTION_KEY_PATH.
    3. A freshly generated 32-byte key, base64-encoded and written to the
       key file with owner-only permissions.
"""
import os
import base64
import logging
import threading
from typing import Optional

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from onboarding.core.config import Settings, settings as default_settings
from onboarding.domain.encryption.errors import MasterKeyError

logger = logging.getLogger(__name__)

KEY_LENGTH = 32
PBKDF2_ITERATIONS = 100_000


def derive_key(master_key: str, salt: bytes) -> bytes:
    """Derive a 32-byte AES key from the master key and a per-value salt.

    PBKDF2-HMAC-SHA256, 100,000 iterations. The master key text is used as
    the password in its UTF-8 form, so the same (master_key, salt) pair always
    yields the same key.
    """
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=PBKDF2_ITERATIONS,
    )
    return kdf.derive(master_key.encode("utf-8"))


def _read_key_file(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            key = f.read().strip()
    except FileNotFoundError:
        raise
    except OSError as e:
        raise MasterKeyError(f"Unable to read encryption key file {path}: {e}") from e

    if not key:
        raise MasterKeyError(f"Encryption key file {path} is empty")
    return key


def _create_key_file(path: str) -> str:
    """Create the key file atomically; re-read it if another process won the race."""
    new_key = base64.b64encode(os.urandom(KEY_LENGTH)).decode("ascii")
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    except FileExistsError:
        logger.info(f"Encryption key file appeared at {path} during creation, re-reading")
        return _read_key_file(path)
    except OSError as e:
        raise MasterKeyError(f"Unable to create encryption key file {path}: {e}") from e

    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(new_key)

    logger.warning(f"New encryption key generated and saved to {path}")
    logger.warning("Back this key up securely and keep the key file out of version control")
    logger.warning("For production, set the ENCRYPTION_KEY environment variable instead")
    return new_key


def get_or_create_master_key(config: Optional[Settings] = None) -> str:
    """Return the master key, creating the key file on first use."""
    if config is None:
        config = default_settings

    env_key = (config.ENCRYPTION_KEY or "").strip()
    if env_key:
        if len(env_key) >= config.ENCRYPTION_KEY_MIN_LENGTH:
            return env_key
        logger.warning("ENCRYPTION_KEY environment variable is too short, falling back to file-based key")

    path = config.ENCRYPTION_KEY_PATH
    try:
        return _read_key_file(path)
    except FileNotFoundError:
        return _create_key_file(path)


class MasterKeyProvider:
    """Resolves the master key once and caches it for the process."""

    def __init__(self, config: Optional[Settings] = None):
        self._config = config
        self._key: Optional[str] = None
        self._lock = threading.Lock()

    def get(self) -> str:
        with self._lock:
            if self._key is None:
                self._key = get_or_create_master_key(self._config)
            return self._key

    def reset(self) -> None:
        with self._lock:
            self._key = None
