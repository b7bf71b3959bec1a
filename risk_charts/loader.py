from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from typer.models import OptionInfo

from .models import (
    ForecastSample,
    InvalidRecordError,
    Prediction,
    parse_forecast,
    parse_predictions,
)

log = logging.getLogger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".local" / "share" / "risk-charts"
ENV_VARS = {
    "forecast": "RISK_CHARTS_FORECAST",
    "history": "RISK_CHARTS_HISTORY",
}
# Keys a wrapping JSON object may use for the record list.
ENVELOPE_KEYS = ("forecast", "predictions", "history")


def resolve_data_path(path: Optional[Path | os.PathLike | str], kind: str) -> Path:
    if kind not in ENV_VARS:
        raise ValueError(f"unknown data kind: {kind}")

    if isinstance(path, OptionInfo):
        path = path.default

    if isinstance(path, (str, os.PathLike)):
        path = Path(path)

    if isinstance(path, Path):
        return path
    env = os.environ.get(ENV_VARS[kind])
    if env:
        return Path(env).expanduser()
    return DEFAULT_DATA_DIR / f"{kind}.json"


def load_records(path: Path) -> list[dict[str, Any]]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidRecordError(None, "document", f"is not valid JSON ({exc.msg})") from exc
    except UnicodeDecodeError as exc:
        raise InvalidRecordError(None, "document", "is not UTF-8 text") from exc

    if isinstance(payload, dict):
        for key in ENVELOPE_KEYS:
            if isinstance(payload.get(key), list):
                payload = payload[key]
                break
    if not isinstance(payload, list):
        raise InvalidRecordError(None, "document", "must be a list of records")
    for index, record in enumerate(payload):
        if not isinstance(record, dict):
            raise InvalidRecordError(index, "record", "must be an object")
    log.debug("Loaded %d records from %s", len(payload), path)
    return payload


def load_forecast(path: Path) -> list[ForecastSample]:
    return parse_forecast(load_records(path))


def load_predictions(path: Path) -> list[Prediction]:
    return parse_predictions(load_records(path))
