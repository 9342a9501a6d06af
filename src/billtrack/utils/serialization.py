"""JSON serialization for domain entities."""

import dataclasses
import json
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from billtrack.utils.amount_parser import quantize_amount


def to_json_dict(value: Any) -> Any:
    """Convert entities and containers into JSON-compatible structures.

    Decimals become strings with exactly two fractional digits, dates and
    datetimes become ISO-8601 strings and enums become their values. Nested
    invoice joins are flattened the way an API would expose them.
    """
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return f"{quantize_amount(value):.2f}"
    if isinstance(value, float):
        return round(value, 2)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        data = {
            field.name: to_json_dict(getattr(value, field.name))
            for field in dataclasses.fields(value)
        }
        # InvoiceWithRelations: lift invoice fields to the top level
        invoice = data.pop("invoice", None)
        if isinstance(invoice, dict):
            data = {**invoice, **data}
        return data
    if isinstance(value, dict):
        return {str(k): to_json_dict(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_dict(v) for v in value]
    return value


def dumps(value: Any) -> str:
    """Serialize entities to an indented JSON string."""
    return json.dumps(to_json_dict(value), indent=2, ensure_ascii=False)
