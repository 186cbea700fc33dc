"""
Standard value-pool profile.

Sample literal pools mixing Chinese and English data. All values are
synthetic and safe for demo purposes.
"""

from synth_datagen.sourcedata.standard.characters import (
    CHARACTER_POOLS,
    CHINESE_CHARACTERS,
    EMOJI,
    EMOTICONS,
    JAPANESE_CHARACTERS,
    LATIN_LETTERS,
    LOWERCASE_LETTERS,
    MIXED_CHARACTERS,
    NUMBERS,
    SPECIAL_CHARACTERS,
)
from synth_datagen.sourcedata.standard.companies import (
    CHINESE_COMPANY_PREFIXES,
    CHINESE_COMPANY_SUFFIXES,
    ENGLISH_COMPANY_PREFIXES,
    ENGLISH_COMPANY_SUFFIXES,
)
from synth_datagen.sourcedata.standard.internet import (
    COLOR_NAMES,
    EMAIL_DOMAINS,
    MOBILE_PREFIXES_CN,
    URL_DOMAINS,
    URL_PATHS,
    URL_PROTOCOLS,
)
from synth_datagen.sourcedata.standard.people import (
    CHINESE_GIVEN_NAMES,
    CHINESE_SURNAMES,
    ENGLISH_FIRST_NAMES,
    ENGLISH_FULL_NAMES,
    ENGLISH_LAST_NAMES,
)
from synth_datagen.sourcedata.standard.places import (
    ADDRESS_STREETS,
    CITIES,
    DISTRICTS,
    ENGLISH_CITIES,
    ENGLISH_STREETS,
    US_STATES,
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
