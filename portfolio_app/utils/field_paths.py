"""Helpers for dotted-path updates of nested JSON-like data."""

from typing import Any, List, Type, Union, get_args, get_origin

from pydantic import BaseModel

from portfolio_app.exceptions import FieldUpdateError


PathKey = Union[str, int]


def parse_path(path: str) -> List[PathKey]:
    """
    Split a dotted path into keys.

    Numeric segments become list indexes: ``"experience.0.title"`` gives
    ``["experience", 0, "title"]``.

    Raises:
        FieldUpdateError: If the path or one of its segments is empty
    """
    if not path or not path.strip():
        raise FieldUpdateError("Field path cannot be empty")
    keys: List[PathKey] = []
    for segment in path.split("."):
        segment = segment.strip()
        if not segment:
            raise FieldUpdateError(f"Invalid field path '{path}'")
        # ASCII digits only; "²".isdigit() is true but int() rejects it
        keys.append(int(segment) if segment.isascii() and segment.isdigit() else segment)
    return keys


def apply_path(data: Any, keys: List[PathKey], value: Any) -> Any:
    """
    Return a copy of ``data`` with ``value`` set at ``keys``.

    Only the containers along the path are copied. An index equal to the
    list length appends; any other out-of-range index is an error.

    Raises:
        FieldUpdateError: If a key does not fit the container it addresses
    """
    if not keys:
        return value

    key, rest = keys[0], keys[1:]
    if isinstance(key, int):
        if not isinstance(data, list):
            raise FieldUpdateError(f"Cannot index into {type(data).__name__} with {key}")
        items = list(data)
        if key == len(items):
            items.append(apply_path(_empty_container(rest), rest, value))
        elif key < len(items):
            items[key] = apply_path(items[key], rest, value)
        else:
            raise FieldUpdateError(f"Index {key} is out of range (length {len(items)})")
        return items

    if not isinstance(data, dict):
        raise FieldUpdateError(f"Cannot set '{key}' on {type(data).__name__}")
    updated = dict(data)
    child = updated.get(key)
    if child is None:
        child = _empty_container(rest)
    updated[key] = apply_path(child, rest, value)
    return updated


def _empty_container(rest: List[PathKey]) -> Any:
    if not rest:
        return None
    return [] if isinstance(rest[0], int) else {}


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) is Union:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def check_model_path(model: Type[BaseModel], keys: List[PathKey]) -> None:
    """
    Check that ``keys`` addresses a declared field of ``model``.

    Raises:
        FieldUpdateError: If a key names an unknown field or indexes a non-list
    """
    annotation: Any = model
    for key in keys:
        annotation = _unwrap_optional(annotation)
        if isinstance(key, int):
            if get_origin(annotation) is not list:
                raise FieldUpdateError(f"Field at index {key} is not a list")
            annotation = get_args(annotation)[0]
        else:
            if not (isinstance(annotation, type) and issubclass(annotation, BaseModel)):
                raise FieldUpdateError(f"Cannot set '{key}' on a plain value")
            if key not in annotation.model_fields:
                raise FieldUpdateError(f"Unknown field '{key}'")
            annotation = annotation.model_fields[key].annotation
