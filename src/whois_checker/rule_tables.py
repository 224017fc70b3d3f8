"""
Rule tables for the response classifier.

Plain data only: substring lists and regex source strings, some keyed by TLD
(with leading dot). The classifier compiles the regexes once at import time;
every regex is matched case-insensitively.

Responses reach the classifier with the " ---" sentinel prepended and, for
unavailable base verdicts, HTML-escaped with "<br />" line markers.
"""

# ============================================================================
# RULE 2: explicit unavailability indicators
# ============================================================================
GENERIC_UNAVAILABILITY_PATTERNS = [
    r"not\s+available",
    r"status:\s*(?:registered|active|client)",
    r"already\s+registered",
    r"domain\s+registered",
    r"registration\s+status:\s*registered",
    r"domain\s+status:\s*ok\b",
    r"status:\s*reserved",
]

TLD_UNAVAILABILITY_PATTERNS = {
    ".de": [r"status:\s*(?:connect|active|registered)"],
    ".uk": [
        r"this\s+domain\s+has\s+been\s+registered",
        r"registration\s+status:\s*registered\s+until",
    ],
    ".nl": [r"status:\s*in\s+quarantine"],
    ".it": [r"status:\s*ok\b"],
    ".jp": [r"\[status\]\s*active", r"\[状態\]\s*active"],
    ".be": [r"status:\s*not\s+available"],
    ".eu": [r"status:\s*not\s+available"],
}

# ============================================================================
# RULE 3: registration indicators (counted, lower-cased substrings)
# ============================================================================
REGISTRATION_INDICATORS = [
    "domain:",
    "ascii:",
    "nserver:",
    "nameserver:",
    "name server:",
    "registrar:",
    "registrant:",
    "creation date:",
    "created:",
    "expiry date:",
    "expires:",
    "updated:",
    "last updated:",
    "admin contact:",
    "technical contact:",
    "billing contact:",
    "registry domain id:",
    "registrar whois server:",
    "domain status: client",
    "dnssec:",
]

REGISTRATION_INDICATOR_THRESHOLD = 3

# ============================================================================
# RULE 4: availability keywords (searched in noise-filtered, lower-cased text)
# ============================================================================
AVAILABILITY_KEYWORDS = [
    "no match",
    "not found",
    "no data found",
    "no entries found",
    "available for registration",
    "domain status: available",
    "no matching record",
    "not registered",
    "no object found",
    "no such domain",
    "object does not exist",
    "nothing found",
    "no domain",
    "domain not found",
    "status: available",
    "registration status: available",
    "status:\tavailable",
    "status:\t\tavailable",
    "status: free",
    "is free",
    "domain name not known",
    "domain has not been registered",
    "domain name has not been registered",
    "is available for purchase",
    "no se encontro el objeto",
    "object_not_found",
    "el dominio no se encuentra registrado",
    "domain is available",
    "domain does not exist",
    "does not exist in database",
    "was not found",
    "not exist",
    "no está registrado",
    "is available for registration",
    "not found...",
]

# Lines starting with these are comments or banners, not registry data
NOISE_LINE_PREFIXES = ("%", "#", ";", ">>>", "---")

NOISE_LINE_PHRASES = [
    "available on web at",
    "find the terms and conditions",
]

# ============================================================================
# RULE 5: "no match" regex library
# ============================================================================
NO_MATCH_PATTERNS = [
    r"no\s+match",
    r"not\s+found",
    r"no\s+data\s+found",
    r"no\s+entries\s+found",
    r"no\s+matching\s+record",
    r"object\s+does\s+not\s+exist",
    r"no\s+such\s+domain",
    r"domain\s+not\s+found",
    r"status:\s*available",
    r"registration\s+status:\s*available",
    r"status:\s*free",
    r"\bis\s+free\b",
    r"domain\s+name\s+not\s+known",
    r"domain\s+has\s+not\s+been\s+registered",
    r"domain\s+name\s+has\s+not\s+been\s+registered",
    r"\bis\s+available\s+for",
    r"no\s+se\s+encontro\s+el\s+objeto",
    r"object_not_found",
    r"el\s+dominio\s+no\s+se\s+encuentra\s+registrado",
    r"domain\s+is\s+available",
    r"domain\s+does\s+not\s+exist",
    r"does\s+not\s+exist\s+in\s+database",
    r"was\s+not\s+found",
    r"not\s+exist",
    r"no\s+está\s+registrado",
    r"---available",
    r"---not\s+found",
    r"---domain\s+not\s+found",
    r"%error:103",
    r"404",  # RDAP-style HTTP 404 bodies
]

# ============================================================================
# RULE 6: TLD-specific availability patterns
# ============================================================================
TLD_AVAILABILITY_PATTERNS = {
    ".com": [r"no\s+match\s+for"],
    ".net": [r"no\s+match\s+for"],
    ".org": [r"domain\s+not\s+found"],
    ".uk": [r"no\s+match"],
    ".de": [r"status:\s*free", r"is\s+available\s+for\s+registration"],
    ".fr": [r"not\s+found"],
    ".it": [r"available"],
    ".au": [r"---available"],
    ".be": [r"status:\s*available"],
    ".ca": [r"not\s+found"],
    ".ch": [r"---1:"],
    ".eu": [r"status:\s*available"],
    ".jp": [r"no\s+match!!"],
    ".nl": [r"\bis\s+free"],
    ".ru": [r"no\s+entries\s+found"],
    ".br": [r"no\s+match\s+for"],
    ".mx": [r"no_se_encontro_el_objeto"],
    ".ar": [r"el\s+dominio\s+no\s+se\s+encuentra\s+registrado"],
    ".gr": [r"not\s+exist"],
    ".ph": [r"domain\s+is\s+available"],
    ".my": [r"does\s+not\s+exist\s+in\s+database"],
    ".tw": [r"no\s+found"],
    ".hk": [r"the\s+domain\s+has\s+not\s+been\s+registered"],
    ".im": [r"was\s+not\s+found"],
    ".ec": [r"404"],  # RDAP server
    ".ir": [r"no\s+entries\s+found"],
}

# ============================================================================
# RULE 7: short-response heuristic
# ============================================================================
SHORT_RESPONSE_EXEMPTIONS = [
    "not available",
    "unavailable",
    "domain not found",
    "no match",
    "no entries found",
    "---not available",
    "---not found",
]

SHORT_RESPONSE_MAX_LENGTH = 100
SHORT_RESPONSE_MIN_MEANINGFUL_LINES = 5

# ============================================================================
# RULE 8: domain status indicators
# ============================================================================
STATUS_INDICATORS = [
    "status: available",
    "status:\tavailable",
    "status: free",
    "registration status: available",
    "domain status: available",
    "availability: available",
    "state: available",
    "status = available",
    "status=available",
]

REGISTRATION_FIELDS = [
    "registrar:",
    "creation date:",
    "created:",
    "expiry date:",
    "expires:",
    "name server:",
    "nameserver:",
    "registrant:",
    "admin contact:",
    "technical contact:",
]

REGISTRATION_FIELD_THRESHOLD = 2

PREVIEW_LENGTH = 200
