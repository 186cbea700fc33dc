"""
Generators module for synthetic data generation.

This module contains the generation engine: per-type field generators and
their catalog, record assembly, request validation, delimited serialization,
the run controller, named presets and text token generation.
"""

from .catalog import (
    FIELD_TYPES,
    FieldTypeInfo,
    generate,
    known_types,
    list_field_types,
)
from .config_validator import validate_request, validate_token_request
from .controller import GenerationController, GenerationState, GenerationStrategy
from .field_generators import GenerationContext, SequenceState
from .presets import get_preset, list_presets
from .row_assembler import RowAssembler
from .serializer import join_lines, parse_record, serialize_header, serialize_record
from .tokens import generate_tokens, preview_tokens

__all__ = [
    "FIELD_TYPES",
    "FieldTypeInfo",
    "generate",
    "known_types",
    "list_field_types",
    "validate_request",
    "validate_token_request",
    "GenerationController",
    "GenerationState",
    "GenerationStrategy",
    "GenerationContext",
    "SequenceState",
    "get_preset",
    "list_presets",
    "RowAssembler",
    "join_lines",
    "parse_record",
    "serialize_header",
    "serialize_record",
    "generate_tokens",
    "preview_tokens",
]
