"""
Literal value pools for synthetic data generation.

Pools are organized by profile. Each profile is a Python package of data
modules holding UPPERCASE constants (tuples of strings or plain strings).
Generators never import a profile directly; they go through ``default``.

## Usage

Import from the default profile (recommended):
    from synth_datagen.sourcedata.default import CITIES, EMAIL_DOMAINS

Import from a specific profile:
    from synth_datagen.sourcedata import standard
    cities = standard.CITIES

## Profile Structure

    sourcedata/
    ├── __init__.py          # Package init, exports available profiles
    ├── default.py           # Re-exports from active default profile
    └── standard/            # Mixed Chinese/English sample profile
        ├── __init__.py      # Exports all data constants
        ├── characters.py    # Character alphabets used by text fields
        ├── people.py        # Name parts and full-name pick lists
        ├── places.py        # Cities, districts, streets, states
        ├── companies.py     # Company prefixes and legal suffixes
        └── internet.py      # Domains, URL parts, color names, phone prefixes

## Data Format

- Character alphabets are plain strings; each code point is one draw.
- The emoji pool is a tuple because several emoji span more than one
  code point and must be drawn whole.
- Everything else is a tuple of strings drawn uniformly.

Pools are immutable so a run can never leak state into the next one.
"""

from synth_datagen.sourcedata import standard

__all__ = ["standard"]
