"""
Onboarding Answer Store

Mutable accumulator of per-field answers for one wizard session.
"""

from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional

from medtrackr.onboarding.catalog import Field


class AnswerStore:
    """Answers keyed by field.

    Setting a field that already has a value replaces it, so revisiting a
    step overwrites earlier input. There is no delete: abandoning the wizard
    discards the whole store.
    """

    def __init__(self, initial: Optional[Mapping[Field, Any]] = None):
        self._values: Dict[Field, Any] = dict(initial or {})

    def set(self, answer_field: Field, value: Any):
        """Store a value, replacing any previous one."""
        self._values[Field(answer_field)] = value

    def get(self, answer_field: Field, default: Any = None) -> Any:
        """Get a stored value, or ``default`` when the field was never set."""
        return self._values.get(answer_field, default)

    def snapshot(self) -> Mapping[Field, Any]:
        """Read-only copy of the current answers."""
        return MappingProxyType(dict(self._values))

    def __contains__(self, answer_field: object) -> bool:
        return answer_field in self._values

    def __iter__(self) -> Iterator[Field]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"AnswerStore({len(self._values)} answers)"
