# chatreader/data/validation.py
"""
Schema inference for store values that match neither known transcript layout.
"""

from typing import Any, Dict

from genson import SchemaBuilder


def infer_schema(value: Any) -> Dict[str, Any]:
    """Infer a JSON schema for a single decoded value."""
    builder = SchemaBuilder()
    builder.add_object(value)
    return builder.to_schema()


def _type_name(schema: Dict[str, Any], default: str) -> str:
    kind = schema.get('type', default)
    if isinstance(kind, list):
        kind = '|'.join(kind)
    return kind


def describe_shape(value: Any, max_keys: int = 8) -> str:
    """Short human-readable outline of a value's shape for log messages."""
    try:
        schema = infer_schema(value)
    except RecursionError:
        return 'deeply nested value'
    kind = _type_name(schema, 'unknown')

    if kind == 'object':
        keys = sorted(schema.get('properties', {}))
        shown = ', '.join(keys[:max_keys])
        if len(keys) > max_keys:
            shown += f", ... ({len(keys)} keys)"
        return f"object{{{shown}}}"

    if kind == 'array':
        items = schema.get('items')
        if not items:
            return 'array[]'
        return f"array[{_type_name(items, 'mixed')}]"

    return kind
