"""
Record assembly.

A ``RowAssembler`` turns an ordered list of field specifications into records,
one ordered list of values per row. It owns the sequence counters of every
identifier field for the duration of one run; a new assembler starts every
counter from its configured ``start``.
"""

import logging
import random
from typing import Any, Sequence

from synth_datagen.shared.exceptions import DatagenError, FieldGenerationError
from synth_datagen.shared.models import FieldSpec

from . import catalog
from .field_generators import GenerationContext, new_sequence_state

logger = logging.getLogger(__name__)


class RowAssembler:
    """
    Assemble records for one generation run.

    Fields are visited in declaration order and no field depends on another.
    Each identifier field owns an independent ``SequenceState`` keyed by its
    position, so two id columns never share a counter.
    """

    def __init__(
        self,
        fields: Sequence[FieldSpec],
        rng: random.Random,
        fallback_unknown: bool = False,
    ):
        """
        Initialize the assembler and its per-field state.

        Args:
            fields: Ordered field specifications
            rng: Random source owned by the run
            fallback_unknown: Generate default text for unknown types instead of failing
        """
        self.fields = list(fields)
        self.rng = rng
        self.fallback_unknown = fallback_unknown

        self._configs: list[dict[str, Any]] = []
        self._contexts: list[GenerationContext] = []
        for field_spec in self.fields:
            config = dict(field_spec.config)
            sequence = None
            if catalog.is_known_type(field_spec.type):
                info, config = catalog.effective_config(field_spec.type, config)
                if info.name == "id":
                    sequence = new_sequence_state(config)
            self._configs.append(config)
            self._contexts.append(GenerationContext(0, rng, sequence))

        logger.debug(f"RowAssembler initialized with {len(self.fields)} fields")

    @property
    def field_names(self) -> list[str]:
        return [field_spec.name for field_spec in self.fields]

    def assemble_row(self, row_index: int) -> list[Any]:
        """
        Produce one record.

        Args:
            row_index: 0-based index of the record

        Returns:
            Values positionally aligned with the field list

        Raises:
            UnsupportedFieldTypeError: If a type is unknown and fallback is off
            FieldGenerationError: If a generator fails for any other reason
        """
        values: list[Any] = []
        for position, field_spec in enumerate(self.fields):
            context = self._contexts[position]
            context.row_index = row_index
            try:
                value = catalog.generate(
                    field_spec.type,
                    self._configs[position],
                    context,
                    fallback_unknown=self.fallback_unknown,
                )
            except DatagenError:
                raise
            except Exception as e:
                raise FieldGenerationError(field_spec.name, row_index, e) from e
            values.append(value)
        return values

    def assemble_rows(self, start: int, stop: int) -> list[list[Any]]:
        """Produce records ``start`` through ``stop - 1`` in index order."""
        return [self.assemble_row(index) for index in range(start, stop)]
