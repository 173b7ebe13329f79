"""Onboarding API Router - Applications and Credit Check."""
import logging
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field

from onboarding.dependencies import get_application_service, get_credit_check_service
from onboarding.domain.applications.service import ApplicationService
from onboarding.domain.applications.credit_check import CreditCheckService, CreditCheckUnavailable
from onboarding.domain.encryption.errors import EncryptionError
from onboarding.errors import (
    APPLICATION_LOAD_FAILED,
    APPLICATION_NOT_FOUND,
    APPLICATION_SAVE_FAILED,
    CREDIT_CHECK_UNAVAILABLE,
    raise_onboarding_error,
)

router = APIRouter()
logger = logging.getLogger(__name__)

ProductType = Literal["checking", "savings", "money-market"]


# ============ Pydantic Models ============

class CreateApplicationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    selected_products: List[ProductType] = Field(..., alias="selectedProducts", min_length=1)
    customer_info: Dict[str, Any] = Field(..., alias="customerInfo")
    identification_info: Optional[Dict[str, Any]] = Field(default=None, alias="identificationInfo")
    document_acceptance: Optional[Dict[str, Any]] = Field(default=None, alias="documentAcceptance")
    metadata: Optional[Dict[str, Any]] = None


class CreditCheckRequest(BaseModel):
    ssn: str = Field(..., min_length=1)


# ============ Applications ============

@router.post("/applications")
async def create_application(
    body: CreateApplicationRequest,
    request: Request,
    service: ApplicationService = Depends(get_application_service),
):
    """Encrypt and persist a submitted application."""
    try:
        return await service.create_application(
            body.model_dump(by_alias=True, exclude_unset=True),
            user_agent=request.headers.get("user-agent"),
            ip_address=request.client.host if request.client else None,
        )
    except (EncryptionError, OSError) as e:
        logger.error(f"Error saving application: {e}")
        raise_onboarding_error(
            APPLICATION_SAVE_FAILED, "Failed to save application",
            details={"hint": "Please try again later"}
        )


@router.get("/applications/{application_id}")
async def get_application(
    application_id: str,
    service: ApplicationService = Depends(get_application_service),
):
    """Load a stored application and decrypt its sensitive fields."""
    try:
        application = await service.get_application(application_id)
    except (EncryptionError, OSError, ValueError) as e:
        logger.error(f"Error retrieving application {application_id}: {e}")
        raise_onboarding_error(APPLICATION_LOAD_FAILED, "Failed to retrieve application")

    if application is None:
        raise_onboarding_error(APPLICATION_NOT_FOUND, "Application not found")
    return application


# ============ Credit Check ============

@router.post("/credit-check")
async def perform_credit_check(
    body: CreditCheckRequest,
    service: CreditCheckService = Depends(get_credit_check_service),
):
    try:
        return service.perform_credit_check(body.ssn)
    except CreditCheckUnavailable as e:
        logger.error(f"Error performing credit check: {e}")
        raise_onboarding_error(
            CREDIT_CHECK_UNAVAILABLE, "Credit check failed",
            details={"hint": "Please try again later"}
        )
