from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional

log = logging.getLogger(__name__)


class InvalidRecordError(ValueError):
    """A record is missing a required field or carries an unusable value."""

    def __init__(self, index: Optional[int], field: str, reason: str) -> None:
        prefix = f"record {index}: " if index is not None else ""
        super().__init__(f"{prefix}{field} {reason}")
        self.index = index
        self.field = field


@dataclass(frozen=True)
class ForecastSample:
    date: date
    premise_index: float


@dataclass(frozen=True)
class Prediction:
    id: str
    timestamp: datetime
    premise_index: float
    risk_level: str
    temperature: Optional[float] = None
    rainfall: Optional[float] = None


def _require(record: Mapping[str, Any], index: int, field: str) -> Any:
    value = record.get(field)
    if value is None:
        raise InvalidRecordError(index, field, "is required")
    return value


def _to_float(value: Any, index: int, field: str) -> float:
    if isinstance(value, bool):
        raise InvalidRecordError(index, field, "must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidRecordError(index, field, f"must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise InvalidRecordError(index, field, "must be a finite number")
    return number


def _optional_float(record: Mapping[str, Any], index: int, field: str) -> Optional[float]:
    value = record.get(field)
    if value is None:
        return None
    return _to_float(value, index, field)


def _parse_date(value: Any, index: int) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise InvalidRecordError(index, "date", f"is not a calendar date: {value!r}") from None


def _parse_timestamp(value: Any, index: int) -> datetime:
    if isinstance(value, datetime):
        return value
    raw = str(value).strip()
    # fromisoformat only learned the "Z" suffix in 3.11.
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        raise InvalidRecordError(index, "timestamp", f"is not ISO-8601: {value!r}") from None


def _premise_index(record: Mapping[str, Any], index: int) -> float:
    value = _to_float(_require(record, index, "premiseIndex"), index, "premiseIndex")
    if not 0 <= value <= 100:
        log.warning("Record %d has premiseIndex %.2f outside 0-100", index, value)
    return value


def parse_forecast(records: Iterable[Mapping[str, Any]]) -> list[ForecastSample]:
    samples: list[ForecastSample] = []
    for index, record in enumerate(records):
        samples.append(
            ForecastSample(
                date=_parse_date(_require(record, index, "date"), index),
                premise_index=_premise_index(record, index),
            )
        )
    return samples


def parse_predictions(records: Iterable[Mapping[str, Any]]) -> list[Prediction]:
    """Validate history records; sensor readings are optional on older entries."""
    predictions: list[Prediction] = []
    for index, record in enumerate(records):
        predictions.append(
            Prediction(
                id=str(_require(record, index, "id")),
                timestamp=_parse_timestamp(_require(record, index, "timestamp"), index),
                premise_index=_premise_index(record, index),
                risk_level=str(_require(record, index, "riskLevel")),
                temperature=_optional_float(record, index, "temperature"),
                rainfall=_optional_float(record, index, "rainfall"),
            )
        )
    return predictions
