# src/pageio/api.py
from __future__ import annotations

"""
Public-facing read/write API.

Core functions:
- write(filename, obj, fmt=None) -> Path
- read(filename, cls=None) -> Any

Per-format functions skip format resolution entirely:
- write_json / read_json
- write_yaml / read_yaml
- write_xml  / read_xml

Design principles:
- One linear attempt per call: no retries, no locking, no atomic rename.
- Codec and I/O errors propagate unchanged to the caller.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional, Type

from .codecs import BaseCodec, JsonCodec, XmlCodec, YamlCodec, get_codec
from .config import OptionsLike
from .formats import PathLike, format_from_extension, require_filename, resolve_target

logger = logging.getLogger(__name__)

# Permission bits for newly created files, before the umask is applied.
FILE_MODE = 0o666


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------


def _write_bytes(path: Path, data: bytes) -> None:
    """
    Write `data` to `path`, creating it with FILE_MODE or truncating it.

    Existing files keep their permission bits.
    """
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, FILE_MODE)
    with os.fdopen(fd, "wb") as f:
        f.write(data)
    logger.debug("wrote %d bytes to %s", len(data), path)


def _read_bytes(path: Path) -> bytes:
    data = path.read_bytes()
    logger.debug("read %d bytes from %s", len(data), path)
    return data


def _write_with(codec: BaseCodec, filename: Optional[PathLike], obj: Any) -> Path:
    path = Path(require_filename(filename))
    _write_bytes(path, codec.encode(obj))
    return path


def _read_with(codec: BaseCodec, filename: PathLike, cls: Optional[Type[Any]]) -> Any:
    return codec.decode(_read_bytes(Path(filename)), cls)


# ---------------------------------------------------------------------------
# Format-resolving API
# ---------------------------------------------------------------------------


def write(
    filename: Optional[PathLike],
    obj: Any,
    fmt: Optional[str] = None,
    *,
    options: OptionsLike = None,
) -> Path:
    """
    Encode `obj` and write it to `filename`.

    The format is taken from `fmt` when given, otherwise from the
    filename extension. When the two disagree (or the filename has no
    extension) the format is appended as an extra suffix, so
    ``write("data.config", obj, "json")`` writes ``data.config.json``.

    If the file does not exist it is created with permissions 0666
    (minus the umask). An existing file is truncated without changing
    its permissions.

    Parameters
    ----------
    filename:
        Destination path. Must not be empty.
    obj:
        Value to encode: a dataclass instance, mapping, sequence or scalar.
    fmt:
        Optional format hint ("json", "xml" or "yaml", case-insensitive).
    options:
        Codec options, see :func:`pageio.config.load_options`.

    Returns
    -------
    Path
        The path actually written.

    Raises
    ------
    InvalidArgumentError
        If the filename is empty.
    UnresolvableFormatError
        If neither the extension nor `fmt` names a format.
    UnsupportedFormatError
        If the resolved format is not supported.
    """
    target = resolve_target(filename, fmt)
    logger.debug("resolved %s as %s", target.path, target.format)
    codec = get_codec(target.format, options)
    _write_bytes(target.path, codec.encode(obj))
    return target.path


def read(
    filename: Optional[PathLike],
    cls: Optional[Type[Any]] = None,
    *,
    options: OptionsLike = None,
) -> Any:
    """
    Read `filename` and decode it according to its extension.

    The extension is checked before the file is opened, so a missing
    file with an unsupported extension reports the format error.

    Parameters
    ----------
    filename:
        Source path; its extension selects the codec.
    cls:
        Optional target type (a dataclass or a typing hint such as
        ``list[Person]``). Without it the plain data tree is returned.
    options:
        Codec options, see :func:`pageio.config.load_options`.

    Raises
    ------
    InvalidArgumentError
        If the filename is empty.
    UnsupportedFormatError
        If the extension is missing or not supported.
    """
    name = require_filename(filename)
    codec = get_codec(format_from_extension(name), options)
    return _read_with(codec, name, cls)


# ---------------------------------------------------------------------------
# Per-format API
# ---------------------------------------------------------------------------


def write_json(filename: Optional[PathLike], obj: Any, *, options: OptionsLike = None) -> Path:
    """Write the JSON encoding of `obj` to `filename` as-is."""
    return _write_with(JsonCodec(options), filename, obj)


def read_json(filename: PathLike, cls: Optional[Type[Any]] = None, *, options: OptionsLike = None) -> Any:
    """Read `filename` and decode it as JSON."""
    return _read_with(JsonCodec(options), filename, cls)


def write_yaml(filename: Optional[PathLike], obj: Any, *, options: OptionsLike = None) -> Path:
    """Write the YAML encoding of `obj` to `filename` as-is."""
    return _write_with(YamlCodec(options), filename, obj)


def read_yaml(filename: PathLike, cls: Optional[Type[Any]] = None, *, options: OptionsLike = None) -> Any:
    """Read `filename` and decode it as YAML."""
    return _read_with(YamlCodec(options), filename, cls)


def write_xml(filename: Optional[PathLike], obj: Any, *, options: OptionsLike = None) -> Path:
    """Write the XML encoding of `obj` to `filename` as-is."""
    return _write_with(XmlCodec(options), filename, obj)


def read_xml(filename: PathLike, cls: Optional[Type[Any]] = None, *, options: OptionsLike = None) -> Any:
    """Read `filename` and decode it as XML."""
    return _read_with(XmlCodec(options), filename, cls)
