"""Validation of agent payloads against their declared schemas."""

from __future__ import annotations

import json
import logging
from typing import Any

from jsonschema import SchemaError, ValidationError, validate

from ayo.errors import InputValidationError, OutputValidationError, PayloadValidationError
from ayo.models.agent_record import AgentRecord
from ayo.models.schema import Schema

logger = logging.getLogger(__name__)


def validate_against_schema(value: Any, schema: Schema) -> None:
    """Raises jsonschema.ValidationError (or SchemaError) when value does not conform."""
    validate(instance=value, schema=schema.to_json_schema())


def _validate_payload(
    payload: str,
    schema: Schema | None,
    error_type: type[PayloadValidationError],
) -> Any:
    if schema is None:
        return None
    try:
        value = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise error_type(payload, exc, schema) from exc
    try:
        validate_against_schema(value, schema)
    except (ValidationError, SchemaError) as exc:
        logger.debug("%s payload rejected: %s", error_type.direction, exc.message)
        raise error_type(payload, exc, schema) from exc
    return value


def validate_input(agent: AgentRecord, payload: str) -> Any:
    """
    Checks a payload against the agent's input schema.
    Returns the decoded value, or None when the agent declares no input schema.
    """
    return _validate_payload(payload, agent.input_schema, InputValidationError)


def validate_output(agent: AgentRecord, payload: str) -> Any:
    return _validate_payload(payload, agent.output_schema, OutputValidationError)


def generate_example(schema: Schema | None) -> Any:
    """Builds a placeholder value shaped like the schema."""
    if schema is None:
        return None
    if schema.type == "object":
        return {name: generate_example(prop) for name, prop in schema.properties.items()}
    if schema.type == "array":
        return [generate_example(schema.items)] if schema.items is not None else []
    if schema.type == "string":
        if schema.enum:
            return schema.enum[0]
        if schema.description:
            return f"<{schema.description}>"
        return "example"
    if schema.type == "integer":
        return 0
    if schema.type == "number":
        return 0.0
    if schema.type == "boolean":
        return False
    return None


def expected_shape(schema: Schema | None) -> str:
    """Example JSON for error messages."""
    return json.dumps(generate_example(schema), indent=2)
