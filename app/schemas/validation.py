# app/schemas/validation.py

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from jsonschema import Draft7Validator, FormatChecker

from app.errors import ValidationError

SCHEMA_DIR = Path(__file__).resolve().parent / "json"


def _load(name: str) -> Draft7Validator:
    with (SCHEMA_DIR / f"{name}.json").open("r", encoding="utf-8") as f:
        schema = json.load(f)
    Draft7Validator.check_schema(schema)
    return Draft7Validator(schema, format_checker=FormatChecker())


# Load and prepare schemas once at import time
VALIDATORS: Dict[str, Draft7Validator] = {
    name: _load(name) for name in ("cookie_consent", "question", "answer", "complaint")
}


def _field_of(error) -> Optional[str]:
    if error.path:
        return str(error.path[0])
    if error.validator == "required" and isinstance(error.instance, dict):
        missing = [f for f in error.validator_value if f not in error.instance]
        return missing[0] if missing else None
    if error.validator == "additionalProperties" and isinstance(error.instance, dict):
        allowed = set(error.schema.get("properties", {}))
        extra = [k for k in error.instance if k not in allowed]
        return extra[0] if extra else None
    return None


def validate_payload(schema_name: str, payload: Any) -> Dict[str, Any]:
    """
    Validate a decoded JSON body; raise ValidationError naming the first offending field.
    All messages are returned under details.validationErrors.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object", field="body")

    validator = VALIDATORS[schema_name]
    errors: List = sorted(validator.iter_errors(payload), key=lambda e: (list(e.path), e.validator))
    if errors:
        first = errors[0]
        field = _field_of(first)
        message = f"Invalid {field}: {first.message}" if field else first.message
        raise ValidationError(message, field=field, validationErrors=[e.message for e in errors])
    return payload
