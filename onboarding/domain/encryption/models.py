"""Encryption Domain Models."""
from typing import Any, Dict, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

ENVELOPE_MARKER = "_encrypted"
ENVELOPE_FIELDS = ("encrypted", "iv", "tag", "salt")


class EncryptedField(BaseModel):
    """
    Envelope substituted for an encrypted leaf value.

    Persisted shape (key order is part of the on-disk format):
        {"_encrypted": true, "encrypted": <b64>, "iv": <b64>, "tag": <b64>, "salt": <b64>}

    The salt feeds PBKDF2 so the per-value key can be re-derived from the
    master key at decryption time.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    marker: Literal[True] = Field(default=True, alias=ENVELOPE_MARKER)
    encrypted: str  # ciphertext, base64
    iv: str         # 16 bytes, base64
    tag: str        # 16 bytes, base64
    salt: str       # 32 bytes, base64

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)

    @classmethod
    def parse(cls, obj: Any) -> Optional["EncryptedField"]:
        """Return the envelope carried by ``obj``, or None if ``obj`` is not one.

        An object only counts as an envelope when its marker is literally
        ``True`` and all four components are present as strings. Anything else
        is an ordinary record node.
        """
        if not isinstance(obj, dict):
            return None
        if obj.get(ENVELOPE_MARKER) is not True:
            return None
        if not all(isinstance(obj.get(name), str) for name in ENVELOPE_FIELDS):
            return None
        return cls(**{name: obj[name] for name in ENVELOPE_FIELDS})
