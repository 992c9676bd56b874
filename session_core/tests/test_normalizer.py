import pytest

from session_core.quick_actions.normalizer import NO_ANALYSIS, failure, normalize


def test_analysis_dialect():
    res = normalize({"analysis": "X"})
    assert res.analysis_text == "X"
    assert res.success is True
    assert res.error_message is None


def test_response_dialect():
    res = normalize({"response": "Y"})
    assert res.analysis_text == "Y"
    assert res.success is True


def test_analysis_wins_over_response():
    assert normalize({"analysis": "A", "response": "R"}).analysis_text == "A"


def test_empty_analysis_falls_through_to_response():
    assert normalize({"analysis": "", "response": "R"}).analysis_text == "R"


def test_empty_payload_uses_fallback_text():
    res = normalize({})
    assert res.analysis_text == NO_ANALYSIS
    assert res.success is False
    assert res.raw == {}


def test_none_payload():
    res = normalize(None)
    assert res.success is False
    assert res.analysis_text == ""
    assert res.raw == {}
    assert res.error_message == NO_ANALYSIS


def test_success_flag_is_mirrored():
    res = normalize({"success": False, "analysis": "partial", "error": "Quota exceeded", "details": "try later"})
    assert res.success is False
    assert res.analysis_text == "partial"
    assert res.error_message == "Quota exceeded: try later"

    assert normalize({"success": True}).success is True


def test_raw_is_kept_unmodified():
    payload = {"analysis": "X", "extra": {"nested": [1, 2]}}
    res = normalize(payload)
    assert res.raw is payload
    assert payload == {"analysis": "X", "extra": {"nested": [1, 2]}}


@pytest.mark.parametrize(
    "payload",
    [
        "just a string",
        ["analysis", "X"],
        42,
        {"analysis": None, "response": None},
        {"analysis": {"nested": None}, "response": 7},
        {"success": "yes", "error": None},
    ],
)
def test_malformed_payloads_never_raise(payload):
    res = normalize(payload)
    assert res.analysis_text == NO_ANALYSIS
    assert res.success is False
    assert res.raw is payload


def test_mapping_with_broken_get_never_raises():
    class Weird(dict):
        def get(self, *a, **kw):
            raise RuntimeError("broken mapping")

    res = normalize(Weird())
    assert res.success is False
    assert res.analysis_text == NO_ANALYSIS


def test_to_payload_uses_ui_field_names():
    assert normalize({"analysis": "X"}).to_payload() == {"success": True, "analysisText": "X", "raw": {"analysis": "X"}}
    assert normalize(None).to_payload()["errorMessage"] == NO_ANALYSIS


def test_failure_result():
    res = failure("Analyze Document failed: timeout")
    assert res.success is False
    assert res.error_message == "Analyze Document failed: timeout"
    assert res.raw == {}


def test_whitespace_text_counts_as_present():
    assert normalize({"analysis": "   ", "response": "R"}).analysis_text == "   "
    res = normalize({"analysis": "  "})
    assert res.analysis_text == "  "
    assert res.success is True
    assert normalize({"success": False, "error": " "}).error_message == " "
