"""
Property-based tests for the response classifier.

Uses Hypothesis to check the priority order of the availability cascade and
the consistency of explain() with is_available().
"""

import string

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from whois_checker import response_classifier
from whois_checker.config import ClassifierConfig
from whois_checker.response_classifier import (
    build_rule_set,
    contains_availability_keywords,
    contains_registration_indicators,
    contains_unavailability_indicators,
    explain,
    is_available,
    is_response_too_short,
    preview,
)
from whois_checker.rule_tables import REGISTRATION_INDICATORS


REGISTERED_COM_RESPONSE = (
    " ---Domain Name: EXAMPLE.COM\n"
    "Registry Domain ID: 2336799_DOMAIN_COM-VRSN\n"
    "Registrar WHOIS Server: whois.iana.org\n"
    "Updated Date: 2024-08-14T07:01:34Z\n"
    "Creation Date: 1995-08-14T04:00:00Z\n"
    "Registrar: RESERVED-Internet Assigned Numbers Authority\n"
    "Name Server: A.IANA-SERVERS.NET\n"
    "DNSSEC: signedDelegation\n"
)

arbitrary_text = st.text(max_size=300)
tld_strategy = st.sampled_from(
    [None, "", ".com", "com", ".de", ".ir", ".uk", ".it", ".jp", ".nl", ".zz"]
)


class TestBaseOverrideProperty:
    """A positive base verdict is never overridden."""

    @given(text=arbitrary_text, tld=tld_strategy)
    @settings(max_examples=100)
    def test_base_available_always_available(self, text: str, tld):
        assert is_available(text, tld, True) is True

    def test_base_available_beats_registration_fields(self):
        assert is_available(REGISTERED_COM_RESPONSE, ".com", True) is True


class TestUnavailabilityPriorityProperty:
    """Negative indicators win over every positive signal."""

    @given(
        prefix=st.text(alphabet=string.ascii_letters + " ", max_size=40),
        keyword=st.sampled_from(["no match", "not found", "is free", "status: available"]),
    )
    @settings(max_examples=100)
    def test_not_available_beats_availability_keywords(self, prefix: str, keyword: str):
        text = f"{prefix}\nDomain is not available\n{keyword}"
        assert is_available(text, ".com") is False

    @given(indicators=st.lists(
        st.sampled_from(REGISTRATION_INDICATORS), min_size=3, max_size=8, unique=True
    ))
    @settings(max_examples=100)
    def test_three_registration_labels_beat_keywords(self, indicators: list[str]):
        text = "\n".join(f"{label} value" for label in indicators) + "\nno match for this"
        assert contains_registration_indicators(text) is True
        assert is_available(text, ".com") is False

    def test_registered_com_response_unavailable(self):
        assert is_available(REGISTERED_COM_RESPONSE, ".com") is False

    def test_de_connect_status_unavailable(self):
        text = " ---Domain: test.de<br />\nStatus: connect<br />"
        assert is_available(text, ".de") is False
        assert is_available(text, "de") is False

    def test_ir_domain_and_nserver_unavailable(self):
        text = " ---domain: example.ir\nnserver: ns1.example.ir\n"
        assert contains_registration_indicators(text, ".ir") is True
        assert is_available(text, ".ir") is False

    def test_ir_override_is_tld_scoped(self):
        text = " ---domain: example.ir\nnserver: ns1.example.ir\n"
        # Only two labels, so other TLDs fall through to the short-response rule
        assert contains_registration_indicators(text, ".com") is False
        assert is_available(text, ".com") is True

    def test_tld_unavailability_pattern_is_tld_scoped(self):
        text = " ---[Status] Active"
        assert contains_unavailability_indicators(text, ".jp") is True
        assert contains_unavailability_indicators(text, ".com") is False


class TestAvailabilitySignalsProperty:
    """Positive rules fire when no negative signal is present."""

    def test_no_match_response_available(self):
        text = "No match for domain test123.com"
        assert contains_availability_keywords(text) is True
        assert is_available(text, ".com") is True

    @given(text=st.text(alphabet=string.digits + " ", min_size=1, max_size=99))
    @settings(max_examples=100)
    def test_short_response_available(self, text: str):
        assert is_response_too_short(text) is True
        assert is_available(text, ".com") is True

    def test_forty_char_response_without_fields_available(self):
        text = "x" * 40
        assert is_available(text, ".zz") is True

    def test_short_response_exemption(self):
        text = "unavailable"
        assert is_response_too_short(text) is False

    def test_comment_lines_do_not_count_as_keywords(self):
        text = "% no match in comments\n# not found either\n>>> no data found <<<"
        assert contains_availability_keywords(text) is False

    def test_terms_line_does_not_count_as_keyword(self):
        text = "Whois data available on web at example.org - not found here"
        assert contains_availability_keywords(text) is False

    def test_bare_free_is_not_a_keyword(self):
        assert contains_availability_keywords("free parking for registrants") is False

    def test_tab_status_keyword(self):
        assert contains_availability_keywords("Status:\tAVAILABLE") is True

    def test_tld_specific_pattern(self):
        long_text = "\n".join(f"line {i} of filler" for i in range(10))
        text = f" ---{long_text}\nNo Found\nRegistrar: x\nCreated: y"
        assert response_classifier.matches_tld_patterns(text, ".tw") is True
        assert response_classifier.matches_tld_patterns(text, ".com") is False

    def test_long_registered_response_without_signals_unavailable(self):
        lines = [
            "Registrar: Example Registrar",
            "Creation Date: 2001-01-01",
            "Expiry Date: 2030-01-01",
            "Registrant: Someone",
            "Name Server: ns1.example.net",
            "Admin Contact: Someone Else",
        ]
        text = " ---" + "\n".join(lines)
        evidence = explain(text, ".zz")
        assert evidence.contains_registration_indicators is True
        assert evidence.final_availability is False


class TestExplainConsistencyProperty:
    """explain() agrees with is_available() and is deterministic."""

    @given(text=arbitrary_text, tld=tld_strategy, base=st.booleans())
    @settings(max_examples=200)
    def test_explain_matches_is_available(self, text: str, tld, base: bool):
        evidence = explain(text, tld, base)
        assert evidence.final_availability == is_available(text, tld, base)
        assert evidence.original_library_result == base

    @given(text=arbitrary_text, tld=tld_strategy, base=st.booleans())
    @settings(max_examples=100)
    def test_explain_is_idempotent(self, text: str, tld, base: bool):
        assert explain(text, tld, base) == explain(text, tld, base)

    @given(text=arbitrary_text)
    @settings(max_examples=100)
    def test_length_and_preview(self, text: str):
        evidence = explain(text, ".com")
        assert evidence.whois_message_length == len(text)
        if len(text) > 200:
            assert evidence.whois_message_preview == text[:200] + "..."
        else:
            assert evidence.whois_message_preview == text

    def test_evidence_to_dict_keys(self):
        data = explain("No match for x.com", ".com").to_dict()
        assert set(data) == {
            "original_library_result",
            "contains_unavailability_indicators",
            "contains_registration_indicators",
            "contains_availability_keywords",
            "contains_no_match_patterns",
            "tld_specific_patterns",
            "is_response_too_short",
            "domain_status_indicators",
            "final_availability",
            "whois_message_length",
            "whois_message_preview",
        }


class TestRuleSetProperty:
    """Configured patterns extend the built-in tables."""

    def test_configured_unavailability_pattern(self):
        rules = build_rule_set(ClassifierConfig(
            unavailability_patterns={"zz": [r"held\s+by\s+registry"]},
        ))
        text = "Domain held by registry"
        assert contains_unavailability_indicators(text, ".zz", rules) is True
        assert is_available(text, ".zz", rules=rules) is False
        assert is_available(text, ".zz") is True

    def test_configured_availability_pattern_keeps_builtin(self):
        rules = build_rule_set(ClassifierConfig(
            availability_patterns={".de": [r"frei"]},
        ))
        assert response_classifier.matches_tld_patterns("Status: frei", ".de", rules)
        assert response_classifier.matches_tld_patterns("Status: free", ".de", rules)

    @pytest.mark.parametrize("length", [0, 1, 199, 200, 201, 1000])
    def test_preview_length(self, length: int):
        text = "a" * length
        result = preview(text)
        assert result.startswith(text[:200])
        assert result.endswith("...") == (length > 200)

    @given(text=st.text(alphabet=string.ascii_letters, min_size=1, max_size=50))
    @settings(max_examples=50)
    def test_unknown_tld_uses_generic_rules_only(self, text: str):
        assert (
            contains_unavailability_indicators(text, ".zz")
            == contains_unavailability_indicators(text, None)
        )


FILLER_LINES = [f"address line {i} of the holder record" for i in range(1, 6)]
TWO_FIELDS = ["Registrar: Example AG", "Created: 2001-01-01"]


def long_response(*lines: str) -> str:
    """Response with enough meaningful lines that the short-response rule stays off."""
    return " ---" + "\n".join(list(lines) + FILLER_LINES)


class TestCascadeDecidingRuleProperty:
    """Each later rule decides on its own when every earlier rule is negative."""

    def assert_only_later_rules(self, evidence, *expected_true: str):
        flags = {
            "contains_unavailability_indicators",
            "contains_registration_indicators",
            "contains_availability_keywords",
            "contains_no_match_patterns",
            "tld_specific_patterns",
            "is_response_too_short",
            "domain_status_indicators",
        }
        for flag in flags:
            assert getattr(evidence, flag) is (flag in expected_true), flag

    def test_default_is_unavailable(self):
        text = long_response(*TWO_FIELDS)
        evidence = explain(text, ".zz")
        self.assert_only_later_rules(evidence)
        assert evidence.final_availability is False

    @pytest.mark.parametrize("first_line", ["%error:103", "404"])
    def test_no_match_pattern_decides(self, first_line: str):
        # The leading "---" line is noise for the keyword rule
        text = long_response(first_line, *TWO_FIELDS)
        evidence = explain(text, ".zz")
        self.assert_only_later_rules(evidence, "contains_no_match_patterns")
        assert evidence.final_availability is True
        assert is_available(text, ".zz") is True

    def test_tld_pattern_decides(self):
        text = long_response("1: example.ch", *TWO_FIELDS)
        evidence = explain(text, ".ch")
        self.assert_only_later_rules(evidence, "tld_specific_patterns")
        assert is_available(text, ".ch") is True
        assert is_available(text, ".zz") is False

    def test_few_meaningful_lines_decide(self):
        comment = "% " + "terms of use apply to this record " * 4
        text = f"{comment}\nrecord one\nrecord two"
        assert len(text.strip()) >= 100
        evidence = explain(text, ".zz")
        assert evidence.is_response_too_short is True
        assert evidence.contains_availability_keywords is False
        assert evidence.contains_no_match_patterns is False
        assert evidence.tld_specific_patterns is False
        assert evidence.final_availability is True

    def test_status_indicator_decides(self):
        text = long_response(*TWO_FIELDS, "status=available")
        evidence = explain(text, ".zz")
        self.assert_only_later_rules(evidence, "domain_status_indicators")
        assert evidence.final_availability is True

    def test_missing_registration_fields_decide(self):
        text = long_response(TWO_FIELDS[0])
        evidence = explain(text, ".zz")
        self.assert_only_later_rules(evidence, "domain_status_indicators")
        assert is_available(text, ".zz") is True
