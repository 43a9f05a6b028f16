"""Model-qualified field resolution for multi-model hourly payloads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence


@dataclass(frozen=True)
class ModelFields:
    """Hourly columns of a multi-model payload sharing one time axis.

    Columns are keyed ``<variable>`` or ``<variable>_<model>``; each holds one
    value per entry of ``time``.
    """

    time: tuple[str, ...]
    columns: Mapping[str, Sequence[Any]]

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any] | None) -> "ModelFields | None":
        """Wrap the ``hourly`` block of an Open-Meteo document."""

        if not payload:
            return None
        hourly = payload.get("hourly")
        if not isinstance(hourly, Mapping) or not hourly.get("time"):
            return None
        return cls(time=tuple(hourly["time"]), columns=hourly)

    def __len__(self) -> int:
        return len(self.time)

    def value(self, key: str, index: int) -> Any:
        column = self.columns.get(key)
        if column is None or index >= len(column):
            return None
        return column[index]


def resolve(fields: ModelFields, variable: str, index: int, priority: Sequence[str]) -> Any:
    """
    Return the first non-null ``variable`` value following ``priority``.

    Falls back to the unqualified column, then None.
    """

    for model in priority:
        value = fields.value(f"{variable}_{model}", index)
        if value is not None:
            return value
    return fields.value(variable, index)
