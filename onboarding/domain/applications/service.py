"""Application Submission and Retrieval."""
import re
import asyncio
import uuid
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from onboarding.domain.interfaces import ApplicationStore
from onboarding.domain.encryption.field_encryption import encrypt_sensitive_fields, decrypt_sensitive_fields
from onboarding.domain.encryption.key_provider import MasterKeyProvider

logger = logging.getLogger(__name__)

SUBMISSION_SOURCE = "web-onboarding"
STATUS_SUBMITTED = "submitted"

def application_filename(application_id: str, data: Dict[str, Any]) -> str:
    customer_info = data.get("customerInfo") or {}
    last_name = customer_info.get("lastName") if isinstance(customer_info, dict) else None
    if not isinstance(last_name, str) or not last_name:
        last_name = "Unknown"
    return f"{application_id}-{re.sub(r'[^a-zA-Z0-9]', '', last_name)}.json"

class ApplicationService:
    """Encrypts applications before they are stored and decrypts them on the way out."""

    def __init__(self, store: ApplicationStore, key_provider: MasterKeyProvider):
        self.store = store
        self.key_provider = key_provider

    async def create_application(
        self,
        data: Dict[str, Any],
        user_agent: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> Dict[str, Any]:
        application_id = str(uuid.uuid4())
        filename = application_filename(application_id, data)

        master_key = await asyncio.to_thread(self.key_provider.get)
        encrypted_data = await encrypt_sensitive_fields(data, master_key=master_key)

        application = {
            "id": application_id,
            "submittedAt": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "status": STATUS_SUBMITTED,
            "data": encrypted_data,
            "metadata": {
                "userAgent": user_agent,
                "ipAddress": ip_address,
                "submissionSource": SUBMISSION_SOURCE,
            },
        }

        self.store.save(application_id, filename, application)
        logger.info(f"Mock confirmation email queued for application {application_id}")

        return {
            "applicationId": application_id,
            "status": STATUS_SUBMITTED,
            "message": "Application submitted successfully",
            "filename": filename,
        }

    async def get_application(self, application_id: str) -> Optional[Dict[str, Any]]:
        application = self.store.find(application_id)
        if application is None:
            return None
        if not isinstance(application, dict):
            raise ValueError(f"Stored application {application_id} is not a JSON object")

        if application.get("data"):
            master_key = await asyncio.to_thread(self.key_provider.get)
            application["data"] = await decrypt_sensitive_fields(application["data"], master_key=master_key)
        return application
