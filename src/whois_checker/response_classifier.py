"""
Response classifier for WHOIS availability.

WHOIS has no machine-readable status field, so the final verdict is reached
by a fixed cascade of heuristics over the response text. The rules run in
strict priority order and the first rule that fires decides:

1. base verdict from the registry match string -> available
2. explicit unavailability indicators (generic + TLD) -> unavailable
3. registration field labels (3 or more, plus .ir/.de overrides) -> unavailable
4. availability keywords in noise-filtered text -> available
5. "no match" regex library -> available
6. TLD-specific availability patterns -> available
7. short response (unless an exemption phrase is present) -> available
8. explicit status indicators / near-absence of registration fields -> available
9. otherwise -> unavailable

Negative signals are checked before positive ones so a registered domain
whose response mentions "available" in a disclaimer stays unavailable.

All functions are pure. explain() evaluates every rule without
short-circuiting so callers can audit which signals fired.
"""

import re
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from . import rule_tables
from .config import ClassifierConfig, normalize_tld
from .models import ClassificationEvidence

PatternList = tuple[re.Pattern, ...]


def _compile(patterns: Iterable[str]) -> PatternList:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


def _compile_table(table: Mapping[str, Iterable[str]]) -> dict[str, PatternList]:
    return {normalize_tld(tld): _compile(patterns) for tld, patterns in table.items()}


@dataclass(frozen=True)
class RuleSet:
    """Compiled regex tables used by the classifier."""

    generic_unavailability: PatternList
    no_match: PatternList
    tld_unavailability: dict[str, PatternList] = field(default_factory=dict)
    tld_availability: dict[str, PatternList] = field(default_factory=dict)


def build_rule_set(config: Optional[ClassifierConfig] = None) -> RuleSet:
    """
    Compile the built-in tables, extended by any configured TLD patterns.

    Configured patterns are added to the built-in ones for the same TLD.
    """
    tld_unavailability = _compile_table(rule_tables.TLD_UNAVAILABILITY_PATTERNS)
    tld_availability = _compile_table(rule_tables.TLD_AVAILABILITY_PATTERNS)

    if config is not None:
        for tld, patterns in _compile_table(config.unavailability_patterns).items():
            tld_unavailability[tld] = tld_unavailability.get(tld, ()) + patterns
        for tld, patterns in _compile_table(config.availability_patterns).items():
            tld_availability[tld] = tld_availability.get(tld, ()) + patterns

    return RuleSet(
        generic_unavailability=_compile(rule_tables.GENERIC_UNAVAILABILITY_PATTERNS),
        no_match=_compile(rule_tables.NO_MATCH_PATTERNS),
        tld_unavailability=tld_unavailability,
        tld_availability=tld_availability,
    )


DEFAULT_RULES = build_rule_set()


def _tld_key(tld: Optional[str]) -> str:
    return normalize_tld(tld) if tld else ""


def _any_search(patterns: Iterable[re.Pattern], text: str) -> bool:
    return any(pattern.search(text) for pattern in patterns)


def _is_noise_line(line: str) -> bool:
    return not line or line.startswith(rule_tables.NOISE_LINE_PREFIXES)


def contains_unavailability_indicators(
    text: str, tld: Optional[str] = None, rules: RuleSet = DEFAULT_RULES
) -> bool:
    """Rule 2: generic and TLD-specific "this domain is taken" phrases."""
    if _any_search(rules.generic_unavailability, text):
        return True
    return _any_search(rules.tld_unavailability.get(_tld_key(tld), ()), text)


def contains_registration_indicators(text: str, tld: Optional[str] = None) -> bool:
    """Rule 3: registration field labels, with .ir and .de overrides."""
    lowered = text.lower()
    tld = _tld_key(tld)

    # domain: together with nserver: only appears in registered .ir records
    if tld == ".ir" and "domain:" in lowered and "nserver:" in lowered:
        return True

    if tld == ".de" and "status: connect" in lowered:
        return True

    found = sum(1 for indicator in rule_tables.REGISTRATION_INDICATORS if indicator in lowered)
    return found >= rule_tables.REGISTRATION_INDICATOR_THRESHOLD


def contains_availability_keywords(text: str) -> bool:
    """Rule 4: keyword search over the text with comment and banner lines removed."""
    relevant = []
    for line in text.split("\n"):
        line = line.strip()
        if _is_noise_line(line):
            continue
        lowered = line.lower()
        if any(phrase in lowered for phrase in rule_tables.NOISE_LINE_PHRASES):
            continue
        relevant.append(lowered)

    filtered = " ".join(relevant)
    return any(keyword in filtered for keyword in rule_tables.AVAILABILITY_KEYWORDS)


def contains_no_match_patterns(text: str, rules: RuleSet = DEFAULT_RULES) -> bool:
    """Rule 5: whitespace-tolerant "no match" regexes."""
    return _any_search(rules.no_match, text)


def matches_tld_patterns(
    text: str, tld: Optional[str] = None, rules: RuleSet = DEFAULT_RULES
) -> bool:
    """Rule 6: how a particular registry phrases availability."""
    return _any_search(rules.tld_availability.get(_tld_key(tld), ()), text)


def is_response_too_short(text: str) -> bool:
    """Rule 7: very short or nearly empty responses."""
    lowered = text.lower()
    if any(phrase in lowered for phrase in rule_tables.SHORT_RESPONSE_EXEMPTIONS):
        return False

    trimmed = text.strip()
    if len(trimmed) < rule_tables.SHORT_RESPONSE_MAX_LENGTH:
        return True

    meaningful = sum(1 for line in trimmed.split("\n") if not _is_noise_line(line.strip()))
    return meaningful < rule_tables.SHORT_RESPONSE_MIN_MEANINGFUL_LINES


def has_status_indicators(text: str) -> bool:
    """Rule 8: explicit availability status, or almost no registration fields."""
    lowered = text.lower()
    if any(indicator in lowered for indicator in rule_tables.STATUS_INDICATORS):
        return True

    found = sum(1 for f in rule_tables.REGISTRATION_FIELDS if f in lowered)
    return found < rule_tables.REGISTRATION_FIELD_THRESHOLD


def is_available(
    text: str,
    tld: Optional[str] = None,
    base_available: bool = False,
    rules: RuleSet = DEFAULT_RULES,
) -> bool:
    """
    Decide availability from a WHOIS response.

    Args:
        text: Response text (sentinel-prefixed, possibly HTML-escaped)
        tld: TLD with or without the leading dot; unknown TLDs only narrow
            the rule set
        base_available: Verdict of the registry's own match string
        rules: Compiled rule tables

    Returns:
        True if the domain should be reported as available
    """
    if base_available:
        return True
    if contains_unavailability_indicators(text, tld, rules):
        return False
    if contains_registration_indicators(text, tld):
        return False
    if contains_availability_keywords(text):
        return True
    if contains_no_match_patterns(text, rules):
        return True
    if matches_tld_patterns(text, tld, rules):
        return True
    if is_response_too_short(text):
        return True
    if has_status_indicators(text):
        return True
    return False


def preview(text: str, length: int = rule_tables.PREVIEW_LENGTH) -> str:
    """First characters of a response, with an ellipsis when truncated."""
    if len(text) > length:
        return text[:length] + "..."
    return text


def explain(
    text: str,
    tld: Optional[str] = None,
    base_available: bool = False,
    rules: RuleSet = DEFAULT_RULES,
) -> ClassificationEvidence:
    """Evaluate every rule individually and report the final verdict."""
    return ClassificationEvidence(
        original_library_result=base_available,
        contains_unavailability_indicators=contains_unavailability_indicators(text, tld, rules),
        contains_registration_indicators=contains_registration_indicators(text, tld),
        contains_availability_keywords=contains_availability_keywords(text),
        contains_no_match_patterns=contains_no_match_patterns(text, rules),
        tld_specific_patterns=matches_tld_patterns(text, tld, rules),
        is_response_too_short=is_response_too_short(text),
        domain_status_indicators=has_status_indicators(text),
        final_availability=is_available(text, tld, base_available, rules),
        whois_message_length=len(text),
        whois_message_preview=preview(text),
    )
