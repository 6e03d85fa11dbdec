"""Parsing of `name=value` assignments given on the command line.

This module translates repeated `--param name=value` options into parameter
values or definitions, centralizing the validation so every command reports
malformed input the same way.
"""

from typing import Iterable

from paramset.core.models import ParameterDefinition, ParameterValue


def parse_assignments(items: Iterable[str]) -> dict[str, str]:
    """
    Parse `name=value` strings into an ordered mapping.

    Only the first `=` separates name from value, so values may contain `=`.
    A name given twice keeps its last value.

    Raises:
        ValueError: If an item has no `=` or an empty name.
    """
    parsed: dict[str, str] = {}
    for item in items:
        if "=" not in item:
            raise ValueError(f"Invalid assignment: '{item}' (expected name=value)")
        name, value = item.split("=", 1)
        name = name.strip()
        if not name:
            raise ValueError(f"Invalid assignment: '{item}' (empty name)")
        parsed[name] = value
    return parsed


def to_parameter_values(items: Iterable[str]) -> list[ParameterValue]:
    return [ParameterValue(name=k, value=v) for k, v in parse_assignments(items).items()]


def to_definitions(items: Iterable[str]) -> list[ParameterDefinition]:
    """Parse `name=default` strings into job parameter definitions."""
    return [
        ParameterDefinition(name=k, default=v) for k, v in parse_assignments(items).items()
    ]
