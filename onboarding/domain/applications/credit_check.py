"""Mock Credit Check against a configured list of flagged SSNs."""
import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List

logger = logging.getLogger(__name__)

STATUS_APPROVED = "approved"
STATUS_REQUIRES_VERIFICATION = "requires_verification"

class CreditCheckUnavailable(Exception):
    """The flagged-SSN list could not be loaded."""

def normalize_ssn(ssn: str) -> str:
    return re.sub(r"[^0-9]", "", ssn)

class CreditCheckService:
    def __init__(self, bad_ssns_path: Path):
        self.bad_ssns_path = Path(bad_ssns_path)

    def _load_bad_ssns(self) -> List[str]:
        try:
            with open(self.bad_ssns_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load bad SSN list from {self.bad_ssns_path}: {e}")
            raise CreditCheckUnavailable("Credit check service unavailable") from e

        bad_ssns = config.get("badSSNs") if isinstance(config, dict) else None
        if not isinstance(bad_ssns, list):
            raise CreditCheckUnavailable("Credit check service unavailable")
        return [normalize_ssn(str(s)) for s in bad_ssns]

    def perform_credit_check(self, ssn: str) -> Dict[str, Any]:
        flagged = normalize_ssn(ssn) in self._load_bad_ssns()

        logger.info(f"Credit check performed for SSN: {ssn[:3]}-XX-XXXX")
        logger.info(f"Credit check result: {'REQUIRES_VERIFICATION' if flagged else 'PASSED'}")

        return {
            "status": STATUS_REQUIRES_VERIFICATION if flagged else STATUS_APPROVED,
            "requiresVerification": flagged,
            "message": (
                "Additional verification required - a representative will contact you"
                if flagged else "Credit check passed"
            ),
        }
