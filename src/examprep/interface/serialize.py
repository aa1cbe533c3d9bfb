"""JSON-ready rendering of result dataclasses (camelCase keys)."""

from dataclasses import fields, is_dataclass
from typing import Any

from pydantic import TypeAdapter
from pydantic.alias_generators import to_camel


def to_camel_dict(value: Any) -> Any:
    """
    Dump a result dataclass to plain JSON data with camelCase field names.

    pydantic does the value conversion (dates to ISO strings, tuples to
    lists, dict keys to strings). Only dataclass field names are renamed;
    dict keys such as paper tags and ratings are kept as they are.
    """
    data = TypeAdapter(type(value)).dump_python(value, mode="json")
    return _camelize(value, data)


def _camelize(value: Any, data: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return {
            to_camel(f.name): _camelize(getattr(value, f.name), data[f.name])
            for f in fields(value)
        }
    if isinstance(value, dict):
        return {
            str(key): _camelize(item, dumped)
            for (key, item), dumped in zip(value.items(), data.values())
        }
    if isinstance(value, list | tuple):
        return [_camelize(item, dumped) for item, dumped in zip(value, data)]
    return data
