"""Field-Level Encryption for Onboarding Records.

Walks arbitrary JSON-like records and replaces the string value of every
sensitive key with an AES-256-GCM envelope (see ``EncryptedField``). The
inverse walk restores plaintext. Matching is on the bare key name at any
depth, so e.g. every ``street`` in a record is encrypted.
"""
import os
import base64
import asyncio
import binascii
import logging
from typing import Any, List, Optional, Sequence

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from onboarding.domain.encryption.errors import AuthenticationError
from onboarding.domain.encryption.key_provider import derive_key, get_or_create_master_key
from onboarding.domain.encryption.models import EncryptedField

logger = logging.getLogger(__name__)

ALGORITHM = "aes-256-gcm"
IV_LENGTH = 16
SALT_LENGTH = 32
TAG_LENGTH = 16

DECRYPTION_FAILED = "[DECRYPTION_FAILED]"

SENSITIVE_FIELDS = frozenset({
    "ssn",
    "socialSecurityNumber",
    "dateOfBirth",
    "phoneNumber",
    "email",
    "identificationNumber",
    "driverLicenseNumber",
    "driversLicenseNumber",
    "passportNumber",
    "stateIdNumber",
    "militaryIdNumber",
    "street",
    "address",
    "zipCode",
    "postalCode",
    "routingNumber",
    "accountNumber",
    "initialDepositAmount",
})


def get_sensitive_fields() -> List[str]:
    """Return a copy of the sensitive field table."""
    return sorted(SENSITIVE_FIELDS)


def _b64decode(value: str) -> bytes:
    return base64.b64decode(value.encode("ascii"), validate=True)


def _encrypt_sync(plaintext: str, master_key: str) -> EncryptedField:
    salt = os.urandom(SALT_LENGTH)
    iv = os.urandom(IV_LENGTH)
    key = derive_key(master_key, salt)

    ct_and_tag = AESGCM(key).encrypt(iv, plaintext.encode("utf-8"), None)
    ciphertext = ct_and_tag[:-TAG_LENGTH]
    tag = ct_and_tag[-TAG_LENGTH:]

    return EncryptedField(
        encrypted=base64.b64encode(ciphertext).decode("ascii"),
        iv=base64.b64encode(iv).decode("ascii"),
        tag=base64.b64encode(tag).decode("ascii"),
        salt=base64.b64encode(salt).decode("ascii"),
    )


def _decrypt_sync(envelope: EncryptedField, master_key: str) -> str:
    try:
        salt = _b64decode(envelope.salt)
        iv = _b64decode(envelope.iv)
        tag = _b64decode(envelope.tag)
        ciphertext = _b64decode(envelope.encrypted)
    except (binascii.Error, ValueError) as e:
        raise AuthenticationError(f"Corrupt envelope encoding: {e}") from e

    if len(tag) != TAG_LENGTH:
        raise AuthenticationError(f"Invalid tag length: expected {TAG_LENGTH}, got {len(tag)}")

    key = derive_key(master_key, salt)
    try:
        plaintext = AESGCM(key).decrypt(iv, ciphertext + tag, None)
    except InvalidTag as e:
        raise AuthenticationError("Envelope failed authentication (tampered data or wrong key)") from e
    except ValueError as e:
        raise AuthenticationError(f"Invalid IV: {e}") from e

    try:
        return plaintext.decode("utf-8")
    except UnicodeDecodeError as e:
        raise AuthenticationError("Decrypted value is not valid UTF-8") from e


async def encrypt_value(plaintext: str, master_key: Optional[str] = None) -> EncryptedField:
    """Encrypt one string under a fresh salt and IV.

    Two calls with the same plaintext and key never produce the same envelope.
    """
    key = master_key if master_key is not None else await asyncio.to_thread(get_or_create_master_key)
    return await asyncio.to_thread(_encrypt_sync, plaintext, key)


async def decrypt_value(envelope: EncryptedField, master_key: Optional[str] = None) -> str:
    """Decrypt one envelope.

    Raises:
        AuthenticationError: tag verification failed or the envelope is corrupt.
    """
    key = master_key if master_key is not None else await asyncio.to_thread(get_or_create_master_key)
    return await asyncio.to_thread(_decrypt_sync, envelope, key)


async def encrypt_sensitive_fields(
    value: Any,
    path: Optional[Sequence[str]] = None,
    master_key: Optional[str] = None,
) -> Any:
    """Return a copy of ``value`` with every sensitive string leaf encrypted.

    None, empty strings and non-string values under sensitive keys are left as
    they are. Arrays keep their order and length; objects keep their key set.
    """
    if value is None or not isinstance(value, (dict, list)):
        return value

    key = master_key if master_key is not None else await asyncio.to_thread(get_or_create_master_key)
    return await _encrypt_node(value, list(path or []), key)


async def _encrypt_node(value: Any, path: List[str], master_key: str) -> Any:
    if isinstance(value, list):
        return list(await asyncio.gather(*(
            _encrypt_node(item, path + [str(index)], master_key)
            for index, item in enumerate(value)
        )))

    if not isinstance(value, dict):
        return value

    async def _member(name: str, member: Any) -> Any:
        if name in SENSITIVE_FIELDS and isinstance(member, str) and member:
            logger.debug(f"Encrypting field at {'.'.join(path + [name])}")
            envelope = await encrypt_value(member, master_key)
            return envelope.to_dict()
        if isinstance(member, (dict, list)):
            return await _encrypt_node(member, path + [name], master_key)
        return member

    names = list(value.keys())
    results = await asyncio.gather(*(_member(name, value[name]) for name in names))
    return dict(zip(names, results))


async def decrypt_sensitive_fields(value: Any, master_key: Optional[str] = None) -> Any:
    """Return a copy of ``value`` with every envelope replaced by its plaintext.

    An envelope that fails to decrypt becomes ``DECRYPTION_FAILED``; the rest
    of the record is still decrypted.
    """
    if value is None or not isinstance(value, (dict, list)):
        return value

    key = master_key if master_key is not None else await asyncio.to_thread(get_or_create_master_key)
    return await _decrypt_node(value, [], key)


async def _decrypt_node(value: Any, path: List[str], master_key: str) -> Any:
    if isinstance(value, list):
        return list(await asyncio.gather(*(
            _decrypt_node(item, path + [str(index)], master_key)
            for index, item in enumerate(value)
        )))

    if not isinstance(value, dict):
        return value

    envelope = EncryptedField.parse(value)
    if envelope is not None:
        try:
            return await decrypt_value(envelope, master_key)
        except AuthenticationError as e:
            logger.error(f"Failed to decrypt value at {'.'.join(path) or '<root>'}: {e}")
            return DECRYPTION_FAILED

    names = list(value.keys())
    results = await asyncio.gather(*(_decrypt_node(value[name], path + [name], master_key) for name in names))
    return dict(zip(names, results))
