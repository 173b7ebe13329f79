"""Encryption Domain Errors."""


class EncryptionError(Exception):
    """Base class for field encryption failures."""


class AuthenticationError(EncryptionError):
    """Envelope failed AES-GCM verification.

    Raised for tampered ciphertext or tag, a wrong master key, or corrupt
    envelope components (invalid base64, bad IV/tag length). Never carries
    partial plaintext.
    """


class MasterKeyError(EncryptionError):
    """Master key could not be read from its key file."""
