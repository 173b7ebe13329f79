import json
import pytest

from onboarding.domain.applications.credit_check import CreditCheckService, CreditCheckUnavailable


@pytest.fixture
def bad_ssns_path(tmp_path):
    path = tmp_path / "bad-ssns.json"
    path.write_text(json.dumps({"badSSNs": ["111-11-1111", "222222222"]}))
    return path


def test_flagged_ssn_requires_verification(bad_ssns_path):
    result = CreditCheckService(bad_ssns_path).perform_credit_check("111111111")

    assert result == {
        "status": "requires_verification",
        "requiresVerification": True,
        "message": "Additional verification required - a representative will contact you",
    }


def test_formatting_is_ignored(bad_ssns_path):
    result = CreditCheckService(bad_ssns_path).perform_credit_check("222-22-2222")
    assert result["requiresVerification"] is True


def test_clean_ssn_is_approved(bad_ssns_path):
    result = CreditCheckService(bad_ssns_path).perform_credit_check("123-45-6789")

    assert result["status"] == "approved"
    assert result["requiresVerification"] is False
    assert result["message"] == "Credit check passed"


def test_missing_list_is_unavailable(tmp_path):
    with pytest.raises(CreditCheckUnavailable):
        CreditCheckService(tmp_path / "missing.json").perform_credit_check("123-45-6789")


def test_malformed_list_is_unavailable(tmp_path):
    path = tmp_path / "bad-ssns.json"
    path.write_text(json.dumps({"ssns": []}))

    with pytest.raises(CreditCheckUnavailable):
        CreditCheckService(path).perform_credit_check("123-45-6789")
