"""
Default value-pool profile.

This module re-exports the active default profile's data.
Change the import source to switch profiles.

Usage:
    from synth_datagen.sourcedata.default import CHARACTER_POOLS, CITIES
"""

# Default profile: standard
# To switch profiles, change this import to a different profile module
from synth_datagen.sourcedata.standard import (
    ADDRESS_STREETS,
    CHARACTER_POOLS,
    CHINESE_CHARACTERS,
    CHINESE_COMPANY_PREFIXES,
    CHINESE_COMPANY_SUFFIXES,
    CHINESE_GIVEN_NAMES,
    CHINESE_SURNAMES,
    CITIES,
    COLOR_NAMES,
    DISTRICTS,
    EMAIL_DOMAINS,
    EMOJI,
    EMOTICONS,
    ENGLISH_CITIES,
    ENGLISH_COMPANY_PREFIXES,
    ENGLISH_COMPANY_SUFFIXES,
    ENGLISH_FIRST_NAMES,
    ENGLISH_FULL_NAMES,
    ENGLISH_LAST_NAMES,
    ENGLISH_STREETS,
    JAPANESE_CHARACTERS,
    LATIN_LETTERS,
    LOWERCASE_LETTERS,
    MIXED_CHARACTERS,
    MOBILE_PREFIXES_CN,
    NUMBERS,
    SPECIAL_CHARACTERS,
    US_STATES,
    URL_DOMAINS,
    URL_PATHS,
    URL_PROTOCOLS,
)

__all__ = [
    "ADDRESS_STREETS",
    "CHARACTER_POOLS",
    "CHINESE_CHARACTERS",
    "CHINESE_COMPANY_PREFIXES",
    "CHINESE_COMPANY_SUFFIXES",
    "CHINESE_GIVEN_NAMES",
    "CHINESE_SURNAMES",
    "CITIES",
    "COLOR_NAMES",
    "DISTRICTS",
    "EMAIL_DOMAINS",
    "EMOJI",
    "EMOTICONS",
    "ENGLISH_CITIES",
    "ENGLISH_COMPANY_PREFIXES",
    "ENGLISH_COMPANY_SUFFIXES",
    "ENGLISH_FIRST_NAMES",
    "ENGLISH_FULL_NAMES",
    "ENGLISH_LAST_NAMES",
    "ENGLISH_STREETS",
    "JAPANESE_CHARACTERS",
    "LATIN_LETTERS",
    "LOWERCASE_LETTERS",
    "MIXED_CHARACTERS",
    "MOBILE_PREFIXES_CN",
    "NUMBERS",
    "SPECIAL_CHARACTERS",
    "US_STATES",
    "URL_DOMAINS",
    "URL_PATHS",
    "URL_PROTOCOLS",
]
