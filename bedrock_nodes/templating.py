# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: MIT-0

"""
Template resolution for node configuration fields.

Template fields reference node inputs with double-brace placeholders such as
``{{input.fieldName}}``, ``{{text}}`` or ``{{signal.items.0.name}}``.
"""

import json
import logging
import re
from typing import Any, Dict, Iterable, Mapping

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*([\w\-]+(?:\.[\w\-]+)*)\s*\}\}")

_MISSING = object()


def lookup_path(data: Any, path: str) -> Any:
    """
    Follow a dotted path through nested mappings and sequences.

    Returns:
        The value at path, or None when any segment is missing
    """
    current = data
    for segment in path.split("."):
        if isinstance(current, Mapping):
            current = current.get(segment, _MISSING)
        elif isinstance(current, (list, tuple)) and segment.isdigit():
            index = int(segment)
            current = current[index] if index < len(current) else _MISSING
        else:
            current = _MISSING
        if current is _MISSING:
            return None
    return current


def to_text(value: Any) -> str:
    """Render a template value as text; objects are JSON-encoded."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, default=str)


def resolve_template(template: Any, data: Mapping[str, Any]) -> Any:
    """
    Replace ``{{path}}`` placeholders in template with values from data.

    A template consisting of exactly one placeholder resolves to the raw value,
    so objects (e.g. a tool schema passed through an input) keep their type.
    Missing paths resolve to an empty string.

    Args:
        template: The template text; non-string values are returned unchanged
        data: Values available to placeholders

    Returns:
        The resolved value
    """
    if not isinstance(template, str) or "{{" not in template:
        return template

    whole = PLACEHOLDER_PATTERN.fullmatch(template.strip())
    if whole:
        value = lookup_path(data, whole.group(1))
        return "" if value is None else value

    def substitute(match: "re.Match[str]") -> str:
        value = lookup_path(data, match.group(1))
        if value is None:
            logger.debug(f"Template placeholder '{match.group(1)}' has no value")
        return to_text(value)

    return PLACEHOLDER_PATTERN.sub(substitute, template)


def build_template_data(inputs: Mapping[str, Any]) -> Dict[str, Any]:
    """Expose inputs both under ``input`` and at the top level."""
    data = dict(inputs or {})
    data["input"] = dict(inputs or {})
    return data


def resolve_config_templates(
    config: Mapping[str, Any], inputs: Mapping[str, Any], fields: Iterable[str]
) -> Dict[str, Any]:
    """Return a copy of config with the named template fields resolved."""
    resolved = dict(config or {})
    data = build_template_data(inputs)
    for name in fields:
        if name in resolved:
            resolved[name] = resolve_template(resolved[name], data)
    return resolved
