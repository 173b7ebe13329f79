"""Standard error responses for the onboarding API."""
from fastapi import HTTPException
from typing import Optional, Dict, Any, NoReturn

APPLICATION_NOT_FOUND = "APPLICATION_NOT_FOUND"
APPLICATION_SAVE_FAILED = "APPLICATION_SAVE_FAILED"
APPLICATION_LOAD_FAILED = "APPLICATION_LOAD_FAILED"
CREDIT_CHECK_UNAVAILABLE = "CREDIT_CHECK_UNAVAILABLE"

ERROR_STATUS: Dict[str, int] = {
    APPLICATION_NOT_FOUND: 404,
    APPLICATION_SAVE_FAILED: 500,
    APPLICATION_LOAD_FAILED: 500,
    CREDIT_CHECK_UNAVAILABLE: 503,
}

def raise_onboarding_error(
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    status_code: Optional[int] = None,
) -> NoReturn:
    """Raise an HTTPException with body ``{"detail": {"error": {code, message, details?}}}``.

    The status comes from ERROR_STATUS unless given explicitly; unknown codes are 500.
    """
    error_body: Dict[str, Any] = {"code": code, "message": message}
    if details:
        error_body["details"] = details

    raise HTTPException(
        status_code=status_code or ERROR_STATUS.get(code, 500),
        detail={"error": error_body},
    )
