"""
Base classification from the registry's own match strings.

Each registry entry declares the phrase its server prints for an available
domain and, optionally, for a premium one. This module applies those phrases
and renders the response for display when neither matches.
"""

import html
import re

from bs4 import BeautifulSoup

from .enums import TransportKind, Verdict
from .models import BaseClassification, RawResponse, ServerDescriptor

_LINE_BREAK = re.compile(r"(\r\n|\n\r|\n|\r)")


def nl2br(text: str) -> str:
    """Insert an HTML line break before every newline sequence."""
    return _LINE_BREAK.sub(r"<br />\1", text)


def strip_tags(text: str) -> str:
    """Remove markup, keeping the text content of every node."""
    return BeautifulSoup(text, "html.parser").get_text()


def render_evidence(raw: RawResponse) -> str:
    """
    Render a raw response for display and further classification.

    Socket responses keep any markup as escaped literals; HTTP responses
    have their tags stripped before escaping.
    """
    text = raw.text
    if raw.transport == TransportKind.HTTP:
        text = strip_tags(text)
    return nl2br(html.escape(text))


def classify(raw: RawResponse, descriptor: ServerDescriptor) -> BaseClassification:
    """
    Classify a response by case-insensitive substring match.

    Returns:
        AVAILABLE without evidence when the available phrase is present,
        PREMIUM when the premium phrase is present, otherwise UNAVAILABLE
        with the rendered response as evidence
    """
    lowered = raw.text.lower()

    available = descriptor.available_match
    if available and available.lower() in lowered:
        return BaseClassification(verdict=Verdict.AVAILABLE)

    premium = descriptor.premium_match
    if premium and premium.lower() in lowered:
        return BaseClassification(verdict=Verdict.PREMIUM)

    return BaseClassification(
        verdict=Verdict.UNAVAILABLE,
        evidence_text=render_evidence(raw),
    )
