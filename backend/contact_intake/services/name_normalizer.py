"""
Organization name normalization for duplicate detection.

The normalized key is only ever used for comparison. Display names are stored
exactly as submitted.
"""
from __future__ import annotations

from types import MappingProxyType
import re

STATE_ABBREVIATIONS = MappingProxyType({
    "ny": "new york",
    "nys": "new york state",
    "nyc": "new york city",
    "ca": "california",
    "tx": "texas",
    "fl": "florida",
    "il": "illinois",
    "pa": "pennsylvania",
    "oh": "ohio",
    "ga": "georgia",
    "nc": "north carolina",
    "mi": "michigan",
    "nj": "new jersey",
    "va": "virginia",
    "wa": "washington",
    "az": "arizona",
    "ma": "massachusetts",
    "tn": "tennessee",
    "in": "indiana",
    "mo": "missouri",
    "md": "maryland",
    "wi": "wisconsin",
    # "co" is left out: it is stripped below as a corporate suffix
    "mn": "minnesota",
    "sc": "south carolina",
    "al": "alabama",
    "la": "louisiana",
    "ky": "kentucky",
    "or": "oregon",
    "ok": "oklahoma",
    "ct": "connecticut",
    "ut": "utah",
    "ia": "iowa",
    "nv": "nevada",
    "ar": "arkansas",
    "ms": "mississippi",
    "ks": "kansas",
    "nm": "new mexico",
    "ne": "nebraska",
    "wv": "west virginia",
    "id": "idaho",
    "hi": "hawaii",
    "nh": "new hampshire",
    "me": "maine",
    "ri": "rhode island",
    "mt": "montana",
    "de": "delaware",
    "sd": "south dakota",
    "nd": "north dakota",
    "ak": "alaska",
    "vt": "vermont",
    "wy": "wyoming",
    "dc": "district of columbia",
})

# Regex fragments, matched as whole words with an optional trailing period
CORPORATE_SUFFIXES = (
    r"inc",
    r"incorporated",
    r"llc",
    r"l\.l\.c",
    r"corp",
    r"corporation",
    r"ltd",
    r"limited",
    r"co",
    r"company",
    r"pllc",
    r"p\.l\.l\.c",
)

# Applied in order, after state expansion and suffix stripping
ORGANIZATION_ABBREVIATIONS = (
    (r"state\s+senate", "senate"),
    (r"state\s+assembly", "assembly"),
    (r"dept", "department"),
    (r"div", "division"),
    (r"govt", "government"),
    (r"univ", "university"),
    (r"ctr", "center"),
    (r"assoc", "association"),
    (r"intl", "international"),
)

_STATE_RE = re.compile(
    r"\b(" + "|".join(sorted(STATE_ABBREVIATIONS, key=len, reverse=True)) + r")\b"
)
_SUFFIX_RE = re.compile(r"\b(?:" + "|".join(CORPORATE_SUFFIXES) + r")\b\.?")
_ORG_ABBREVIATION_RES = tuple(
    (re.compile(r"\b" + pattern + r"\b"), replacement)
    for pattern, replacement in ORGANIZATION_ABBREVIATIONS
)
_GENERIC_WORDS = frozenset({
    "the", "and", "for",
    "new", "york", "state", "city", "county",
    "inc", "llc", "corp", "corporation", "company", "ltd", "limited", "pllc",
    "department", "dept", "division", "government", "govt", "university", "univ",
    "center", "association", "assoc", "international", "intl", "senate", "assembly",
})

_PUNCTUATION_RE = re.compile(r"[.,/#!$%^&*;:{}=\-_`~()]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_org_name(name: str | None) -> str:
    """
    Canonical comparison key for an organization name.

    "NY Dept. of Health, Inc." -> "new york department of health"
    """
    if not name:
        return ""

    s = name.strip().lower()
    s = _STATE_RE.sub(lambda m: STATE_ABBREVIATIONS[m.group(1)], s)
    s = _SUFFIX_RE.sub("", s)
    for pattern, replacement in _ORG_ABBREVIATION_RES:
        s = pattern.sub(replacement, s)

    s = s.replace("&", "and")
    s = _PUNCTUATION_RE.sub("", s)
    s = _WHITESPACE_RE.sub(" ", s)
    return s.strip()


def squash(value: str) -> str:
    """Lowercase and drop everything but ASCII letters and digits."""
    return re.sub(r"[^a-z0-9]", "", (value or "").lower())


def match_tokens(raw_name: str, key: str) -> list[str]:
    """
    Squashed words of the submitted name and its key, used to narrow the
    candidate scan. Generic organizational words are skipped unless nothing
    else is left.
    """
    words: list[str] = []
    for text in (raw_name, key):
        for word in (text or "").split():
            token = squash(word)
            if len(token) >= 3 and token not in words:
                words.append(token)

    distinctive = [w for w in words if w not in _GENERIC_WORDS]
    return distinctive or words
