# src/pageio/structure.py
from __future__ import annotations

"""
Conversion between structured values and plain data trees.

Dataclasses act as the schema of a value:

- fields are encoded in declaration order;
- the wire name of a field can be overridden per format through field
  metadata, e.g. ``field(metadata={"json": "groupName"})``, or for all
  formats with ``metadata={"name": ...}``; ``"-"`` drops the field;
- without an override JSON and XML use the field name as-is and YAML
  lower-cases it.

Decoding goes the other way using the dataclass type hints. Missing fields
fall back to their default or to the zero value of their type, and unknown
keys are ignored.
"""

import dataclasses
import enum
import types
import typing
from collections import abc
from typing import Any, Dict, Mapping, Optional

_SKIP = "-"

_SCALARS = (bool, int, float, str)


def field_name(f: dataclasses.Field, fmt: str) -> Optional[str]:
    """
    Return the wire name of dataclass field `f` for format `fmt`,
    or None if the field is excluded.
    """
    meta = f.metadata or {}
    name = meta.get(fmt, meta.get("name"))
    if name == _SKIP:
        return None
    if name:
        return name
    if fmt == "yaml":
        return f.name.lower()
    return f.name


def iter_fields(obj: Any, fmt: str):
    """Yield ``(wire_name, value)`` for each encoded field of a dataclass instance."""
    for f in dataclasses.fields(obj):
        name = field_name(f, fmt)
        if name is None:
            continue
        yield name, getattr(obj, f.name)


def is_dataclass_instance(obj: Any) -> bool:
    return dataclasses.is_dataclass(obj) and not isinstance(obj, type)


def to_plain(obj: Any, fmt: str) -> Any:
    """
    Convert `obj` into dicts, lists and scalars suitable for `fmt`.

    Values the target codec cannot represent (sets, arbitrary objects)
    are passed through untouched so that the codec reports them.
    """
    if is_dataclass_instance(obj):
        return {name: to_plain(value, fmt) for name, value in iter_fields(obj, fmt)}
    if isinstance(obj, enum.Enum):
        return to_plain(obj.value, fmt)
    if isinstance(obj, Mapping):
        return {key: to_plain(value, fmt) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_plain(value, fmt) for value in obj]
    return obj


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def _is_union(tp: Any) -> bool:
    origin = typing.get_origin(tp)
    return origin is typing.Union or origin is types.UnionType


def zero_value(tp: Any) -> Any:
    """
    Return the zero value for a type hint: "", 0, 0.0, False, [], {},
    a zero dataclass, or None for anything else.
    """
    if _is_union(tp):
        return None
    origin = typing.get_origin(tp) or tp
    if origin in (list, abc.Sequence, abc.MutableSequence):
        return []
    if origin is tuple:
        return ()
    if origin in (dict, abc.Mapping, abc.MutableMapping):
        return {}
    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return _to_dataclass({}, tp, "")
    if tp in _SCALARS:
        return tp()
    return None


def _coerce_text(text: str, tp: type) -> Any:
    """Coerce XML leaf text into a scalar type."""
    if tp is str:
        return text
    if tp is bool:
        lowered = text.strip().lower()
        if lowered in ("true", "1"):
            return True
        if lowered in ("false", "0"):
            return False
        raise ValueError(f"cannot decode {text!r} as bool")
    return tp(text.strip())


def _to_scalar(data: Any, tp: type, fmt: str) -> Any:
    if fmt == "xml" and isinstance(data, str):
        return _coerce_text(data, tp)
    if tp is float and isinstance(data, int) and not isinstance(data, bool):
        return float(data)
    if isinstance(data, tp) and (tp is bool or not isinstance(data, bool)):
        return data
    raise TypeError(f"cannot decode {type(data).__name__} into {tp.__name__}")


def _to_dataclass(data: Any, cls: type, fmt: str) -> Any:
    if data is None or (fmt == "xml" and data == ""):
        data = {}
    if not isinstance(data, Mapping):
        raise TypeError(f"cannot decode {type(data).__name__} into {cls.__name__}")

    folded: Dict[str, Any] = {}
    if fmt == "json":
        folded = {str(key).lower(): value for key, value in data.items()}

    hints = typing.get_type_hints(cls)
    kwargs: Dict[str, Any] = {}
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        tp = hints.get(f.name, Any)
        name = field_name(f, fmt) if fmt else None
        if name is not None and name in data:
            kwargs[f.name] = from_plain(data[name], tp, fmt)
        elif name is not None and name.lower() in folded:
            kwargs[f.name] = from_plain(folded[name.lower()], tp, fmt)
        elif f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            kwargs[f.name] = zero_value(tp)
    return cls(**kwargs)


def from_plain(data: Any, tp: Any, fmt: str) -> Any:
    """
    Convert a plain data tree into an instance of the type hint `tp`.

    Supports dataclasses, ``list``/``tuple``/``dict`` generics, ``Optional``,
    enums and the scalar types. Anything else is returned unchanged.
    ``Tuple[X, Y]`` is decoded per position, ``Tuple[X, ...]`` item by item.

    Dataclass annotations are resolved with ``typing.get_type_hints``, so a
    dataclass whose fields refer to other classes must be defined at module
    level; classes local to a function cannot be resolved and raise
    NameError.

    Raises
    ------
    TypeError
        If the data shape does not match the requested type.
    """
    if tp is None or tp is Any:
        return data

    if _is_union(tp):
        if data is None:
            return None
        args = [arg for arg in typing.get_args(tp) if arg is not type(None)]
        if len(args) == 1:
            return from_plain(data, args[0], fmt)
        return data

    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return _to_dataclass(data, tp, fmt)

    if data is None:
        return zero_value(tp)

    origin = typing.get_origin(tp) or tp
    args = typing.get_args(tp)

    if origin in (list, tuple, abc.Sequence, abc.MutableSequence):
        if fmt == "xml" and not isinstance(data, list):
            # a single repeated element decodes as one item
            data = [data]
        if not isinstance(data, list):
            raise TypeError(f"cannot decode {type(data).__name__} into a sequence")
        if origin is tuple and args and args[-1] is not Ellipsis:
            if len(data) != len(args):
                raise TypeError(f"cannot decode {len(data)} items into a {len(args)}-tuple")
            return tuple(from_plain(item, item_tp, fmt) for item, item_tp in zip(data, args))
        item_tp = args[0] if args else Any
        items = [from_plain(item, item_tp, fmt) for item in data]
        return tuple(items) if origin is tuple else items

    if origin in (dict, abc.Mapping, abc.MutableMapping):
        if fmt == "xml" and data == "":
            return {}
        if not isinstance(data, Mapping):
            raise TypeError(f"cannot decode {type(data).__name__} into a mapping")
        value_tp = args[1] if len(args) == 2 else Any
        return {key: from_plain(value, value_tp, fmt) for key, value in data.items()}

    if isinstance(tp, type) and issubclass(tp, enum.Enum):
        if fmt == "xml" and isinstance(data, str):
            for member in tp:
                if str(to_plain(member, fmt)) == data:
                    return member
        return tp(data)

    if tp in _SCALARS:
        return _to_scalar(data, tp, fmt)

    return data
