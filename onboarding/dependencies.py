"""Dependency Injection Module."""
import logging
from functools import lru_cache
from pathlib import Path

from onboarding.core.config import settings
from onboarding.domain.interfaces import ApplicationStore
from onboarding.adapters.json_store.stores import ApplicationJsonStore
from onboarding.domain.applications.service import ApplicationService
from onboarding.domain.applications.credit_check import CreditCheckService
from onboarding.domain.encryption.key_provider import MasterKeyProvider

logger = logging.getLogger(__name__)

@lru_cache()
def get_master_key_provider() -> MasterKeyProvider:
    return MasterKeyProvider(settings)

def get_application_store() -> ApplicationStore:
    return ApplicationJsonStore(settings.APPLICATIONS_DIR)

def get_application_service() -> ApplicationService:
    return ApplicationService(get_application_store(), get_master_key_provider())

def get_credit_check_service() -> CreditCheckService:
    return CreditCheckService(Path(settings.CONFIG_DIR) / settings.BAD_SSNS_FILE)
