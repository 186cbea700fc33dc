"""Shared models, exceptions, and utilities for the synthetic data generator."""

from synth_datagen.shared.exceptions import DatagenError, GenerationValidationError
from synth_datagen.shared.models import FieldSpec, GenerationRequest, TokenRequest

__all__ = [
    "DatagenError",
    "GenerationValidationError",
    "FieldSpec",
    "GenerationRequest",
    "TokenRequest",
]
