from __future__ import annotations

"""
Top-level package for pageio.

Write structured values to JSON, XML or YAML files and read them back,
with the format inferred from the filename extension or given explicitly.

Typical usage
-------------

    from dataclasses import dataclass, field
    import pageio

    @dataclass
    class Person:
        name: str = ""
        age: int = 0

    path = pageio.write("people", [Person("Alice", 19)], "yaml")  # people.yaml
    people = pageio.read(path, list[Person])

Lower-level pieces:

- :func:`pageio.formats.resolve_target` (filename/format reconciliation)
- :func:`pageio.codecs.get_codec` (JSON, XML and YAML codecs)
- :func:`pageio.config.load_options` (codec options)
"""

import logging
from importlib.metadata import PackageNotFoundError, version

from .api import (
    read,
    read_json,
    read_xml,
    read_yaml,
    write,
    write_json,
    write_xml,
    write_yaml,
)
from .codecs import get_codec
from .config import CodecOptions, load_options
from .exceptions import (
    ConfigLoadError,
    InvalidArgumentError,
    PageioError,
    UnresolvableFormatError,
    UnsupportedFormatError,
)
from .formats import JSON, SUPPORTED_FORMATS, XML, YAML, Target, resolve_target

# ---------------------------------------------------------------------------
# Package version
# ---------------------------------------------------------------------------

try:
    __version__ = version("pageio")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())


__all__ = [
    "write",
    "read",
    "write_json",
    "read_json",
    "write_yaml",
    "read_yaml",
    "write_xml",
    "read_xml",
    "resolve_target",
    "get_codec",
    "load_options",
    "CodecOptions",
    "Target",
    "JSON",
    "XML",
    "YAML",
    "SUPPORTED_FORMATS",
    "PageioError",
    "InvalidArgumentError",
    "UnresolvableFormatError",
    "UnsupportedFormatError",
    "ConfigLoadError",
    "__version__",
]
