"""Schema compatibility between one agent's output and another's input."""

from __future__ import annotations

from typing import Optional

from ayo.models.agent_record import AgentRecord
from ayo.models.chainable_agent import CompatibilityTier
from ayo.models.schema import Schema


def schemas_equal(a: Optional[Schema], b: Optional[Schema]) -> bool:
    """
    Structural equality over type, required names and property trees.
    Enum, description, items and unknown keywords are not compared.
    """
    if a is None or b is None:
        return a is None and b is None
    if a.type != b.type:
        return False
    if set(a.required) != set(b.required):
        return False
    if a.properties.keys() != b.properties.keys():
        return False
    return all(schemas_equal(prop, b.properties[name]) for name, prop in a.properties.items())


def check_compatibility(output_schema: Optional[Schema], input_schema: Optional[Schema]) -> CompatibilityTier:
    if output_schema is None:
        return CompatibilityTier.NONE
    if input_schema is None:
        return CompatibilityTier.FREEFORM

    # Only object schemas get field-level matching.
    if output_schema.type != "object" or input_schema.type != "object":
        return CompatibilityTier.EXACT if schemas_equal(output_schema, input_schema) else CompatibilityTier.NONE

    if not input_schema.required:
        return CompatibilityTier.EXACT
    if not output_schema.properties:
        return CompatibilityTier.NONE

    for name in input_schema.required:
        produced = output_schema.properties.get(name)
        if produced is None:
            return CompatibilityTier.NONE
        expected = input_schema.properties.get(name)
        if expected is not None and produced.type != expected.type:
            return CompatibilityTier.NONE

    return CompatibilityTier.EXACT if schemas_equal(output_schema, input_schema) else CompatibilityTier.STRUCTURAL


def can_chain_to(source: AgentRecord, target: AgentRecord) -> CompatibilityTier:
    return check_compatibility(source.output_schema, target.input_schema)
