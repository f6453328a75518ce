"""Sparse hourly series shared by every weather datasource.

A series maps a time key (an hour epoch, or a local wall-clock string before
the UTC offset is known) to an ``HourlyValues`` record.  Missing hours are
absent keys, and missing fields are ``None``; nothing is defaulted to zero.
"""

from __future__ import annotations

import math
from collections.abc import Hashable, Mapping, Sequence
from dataclasses import dataclass
from typing import Literal, TypeVar

Field = Literal["wind", "gust", "precip"]
FIELDS: tuple[Field, ...] = ("wind", "gust", "precip")

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


@dataclass(frozen=True)
class HourlyValues:
    """Optional wind (km/h), gust (km/h) and precipitation (mm) for one hour."""

    wind: float | None = None
    gust: float | None = None
    precip: float | None = None

    def get(self, field: Field) -> float | None:
        return getattr(self, field)

    @property
    def is_empty(self) -> bool:
        return all(self.get(f) is None for f in FIELDS)


#: Epoch-indexed sparse series.
RawSeries = dict[int, HourlyValues]


def sanitize_number(value: object) -> float | None:
    """Finite float or None; unparseable, NaN and infinite values become None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def first_available(
    ranked: Sequence[tuple[T, Mapping[K, HourlyValues]]],
    key: K,
    field: Field,
) -> tuple[float, T] | None:
    """
    First non-null ``field`` at ``key`` across sources in priority order.

    Returns ``(value, source_label)`` or None when no source has a value.
    """
    for label, series in ranked:
        values = series.get(key)
        if values is None:
            continue
        value = values.get(field)
        if value is not None:
            return value, label
    return None


def merge_series(ranked: Sequence[Mapping[K, HourlyValues]]) -> dict[K, HourlyValues]:
    """
    Combine series per key and per field, first-available-wins.

    ``ranked`` is in priority order (e.g. stations sorted by distance).
    Keys absent from every series stay absent.
    """
    labelled = list(enumerate(ranked))
    keys = sorted({k for series in ranked for k in series})  # type: ignore[type-var]
    merged: dict[K, HourlyValues] = {}
    for key in keys:
        picked = {f: first_available(labelled, key, f) for f in FIELDS}
        merged[key] = HourlyValues(**{f: (p[0] if p else None) for f, p in picked.items()})
    return merged
