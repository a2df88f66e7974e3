# src/pageio/config.py
from __future__ import annotations

"""
Codec options and their loading.

The defaults reproduce the canonical encodings exactly:

- JSON compact, no trailing newline
- YAML block style with 4-space indentation
- XML without declaration or pretty printing

Options can be given as:
    * None          -> defaults
    * CodecOptions  -> used as-is
    * Mapping       -> validated keyword arguments
    * Path / str    -> JSON or YAML file holding such a mapping
"""

import dataclasses
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

from .exceptions import ConfigLoadError

OptionsLike = Union["CodecOptions", str, Path, Mapping[str, Any], None]


@dataclass(frozen=True)
class CodecOptions:
    """
    Tunables shared by the codecs.

    Attributes
    ----------
    json_indent:
        Indentation for JSON output. None (default) writes compact JSON.
    json_ensure_ascii:
        Escape non-ASCII characters in JSON output.
    yaml_indent:
        Indentation width for YAML block mappings and sequences.
    xml_pretty_print:
        Indent XML output.
    xml_declaration:
        Emit an ``<?xml ...?>`` declaration.
    encoding:
        Text encoding of the written bytes.
    """

    json_indent: Optional[int] = None
    json_ensure_ascii: bool = False
    yaml_indent: int = 4
    xml_pretty_print: bool = False
    xml_declaration: bool = False
    encoding: str = "utf-8"


DEFAULT_OPTIONS = CodecOptions()


def _from_mapping(data: Mapping[str, Any], source: str) -> CodecOptions:
    known = {f.name for f in dataclasses.fields(CodecOptions)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigLoadError(f"Unknown codec option(s) in {source}: {', '.join(unknown)}")
    try:
        return CodecOptions(**data)
    except TypeError as e:
        raise ConfigLoadError(f"Invalid codec options in {source}") from e


def load_options(options: OptionsLike = None) -> CodecOptions:
    """
    Load codec options from various possible inputs.

    Returns
    -------
    CodecOptions

    Raises
    ------
    ConfigLoadError
        If the file cannot be found or parsed, or names unknown options.
    """
    if options is None:
        return DEFAULT_OPTIONS

    if isinstance(options, CodecOptions):
        return options

    if isinstance(options, Mapping):
        return _from_mapping(options, "mapping")

    path = Path(options)
    if not path.exists():
        raise ConfigLoadError(f"Options file not found: {path}")

    suffix = path.suffix.lower()
    try:
        with path.open("r", encoding="utf-8") as f:
            if suffix in {".yaml", ".yml"}:
                data = yaml.safe_load(f) or {}
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise ConfigLoadError(f"Options file must be JSON or YAML: {path}")
        if not isinstance(data, Mapping):
            raise ConfigLoadError(f"Options file must map to an object: {path}")
        return _from_mapping(data, str(path))

    except ConfigLoadError:
        raise
    except Exception as e:
        raise ConfigLoadError(f"Failed to load options: {path}") from e
