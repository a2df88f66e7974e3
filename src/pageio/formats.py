# src/pageio/formats.py
from __future__ import annotations

"""
Format tokens and filename/format reconciliation.

Everything here is pure string logic: nothing touches the filesystem, so
the rules can be exercised without creating files.

Resolution rules for a filename and an optional format hint:

- no extension, no hint   -> UnresolvableFormatError
- no extension, hint      -> "<filename>.<hint>"
- extension, no hint      -> extension becomes the format
- extension == hint       -> filename unchanged
- extension != hint       -> "<filename>.<hint>" (original suffix is kept)

Hints and extensions are compared case-insensitively and the resolved
format is always lower case.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import FrozenSet, Optional, Union

from .exceptions import (
    InvalidArgumentError,
    UnresolvableFormatError,
    UnsupportedFormatError,
)

PathLike = Union[str, os.PathLike]

JSON = "json"
XML = "xml"
YAML = "yaml"

SUPPORTED_FORMATS: FrozenSet[str] = frozenset({JSON, XML, YAML})


@dataclass(frozen=True)
class Target:
    """
    Where and how a value is written.

    Attributes
    ----------
    path:
        Effective output path, possibly with the format appended as an
        extra suffix.
    format:
        Effective format token, one of :data:`SUPPORTED_FORMATS`.
    """

    path: Path
    format: str


def require_filename(filename: Optional[PathLike]) -> str:
    """
    Return `filename` as a string, or raise if it is empty.

    Raises
    ------
    InvalidArgumentError
        If the filename is None or empty.
    """
    if filename is None:
        raise InvalidArgumentError("filename is undefined")
    name = os.fspath(filename)
    if not name:
        raise InvalidArgumentError("filename is undefined")
    return name


def extension(filename: PathLike) -> str:
    """
    Return the extension of `filename` including the leading dot.

    The extension starts at the last dot of the final path element, so a
    dotfile such as ".json" is all extension and a trailing dot counts as
    an (empty) extension, e.g. "data." -> ".".
    """
    base = os.path.basename(os.fspath(filename))
    idx = base.rfind(".")
    return base[idx:] if idx >= 0 else ""


def normalize_format(fmt: Optional[str]) -> str:
    """Lower-case a format hint; None becomes the empty string."""
    return (fmt or "").strip().lower()


def ensure_supported(fmt: str) -> str:
    """
    Return `fmt` unchanged if it is a supported format token.

    Raises
    ------
    UnsupportedFormatError
        If the token is empty or unknown.
    """
    if fmt not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(fmt)
    return fmt


def format_from_extension(filename: PathLike) -> str:
    """
    Derive the format from the extension of `filename` alone.

    Raises
    ------
    UnsupportedFormatError
        If the extension is missing or not a supported format.
    """
    return ensure_supported(extension(filename).lstrip(".").lower())


def resolve_target(filename: Optional[PathLike], fmt: Optional[str] = None) -> Target:
    """
    Reconcile a filename with an optional format hint.

    Parameters
    ----------
    filename:
        Destination path. Must not be empty.
    fmt:
        Optional format hint (case-insensitive). Empty or None means
        "derive it from the extension".

    Returns
    -------
    Target
        Effective path and format.

    Raises
    ------
    InvalidArgumentError
        If the filename is empty.
    UnresolvableFormatError
        If the filename has no extension and no hint is given.
    UnsupportedFormatError
        If the effective format is not supported.
    """
    name = require_filename(filename)
    hint = normalize_format(fmt)
    ext = extension(name)

    if not ext:
        if not hint:
            raise UnresolvableFormatError(
                f"cannot determine format of {name!r}: no extension and no format given"
            )
        name = f"{name}.{hint}"
    else:
        ext_format = ext.lstrip(".").lower()
        if not hint:
            hint = ext_format
        elif hint != ext_format:
            name = f"{name}.{hint}"

    return Target(path=Path(name), format=ensure_supported(hint))
