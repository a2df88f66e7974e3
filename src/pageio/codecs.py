# src/pageio/codecs.py
from __future__ import annotations

"""
Codecs for the supported formats.

Every codec converts between a structured value and bytes:

- `encode` : value -> bytes
- `decode` : bytes -> plain data, or an instance of `cls` when given

Codec errors (json.JSONDecodeError, yaml.YAMLError, lxml's XMLSyntaxError,
TypeError, ValueError) are raised as they come from the underlying
library; nothing here wraps or reinterprets them.
"""

import datetime
import enum
import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Type

import yaml
from lxml import etree

from .config import CodecOptions, OptionsLike, load_options
from .exceptions import UnsupportedFormatError
from .formats import JSON, XML, YAML, normalize_format
from .structure import from_plain, is_dataclass_instance, iter_fields, to_plain


class BaseCodec(ABC):
    """
    Abstract base class for all codecs.

    Subclasses set `name` to their format token.
    """

    name: str = ""

    def __init__(self, options: OptionsLike = None):
        self.options: CodecOptions = load_options(options)

    @abstractmethod
    def encode(self, obj: Any) -> bytes:
        """Encode `obj` into bytes."""

    @abstractmethod
    def decode(self, data: bytes, cls: Optional[Type[Any]] = None) -> Any:
        """Decode `data`, converting it to `cls` if given."""


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


class JsonCodec(BaseCodec):
    """
    JSON codec on top of the standard library.

    Output is compact (no whitespace, no trailing newline) unless
    `json_indent` is set. Keys follow dataclass declaration order.
    """

    name = JSON

    def encode(self, obj: Any) -> bytes:
        opts = self.options
        separators = (",", ":") if opts.json_indent is None else (",", ": ")
        text = json.dumps(
            to_plain(obj, JSON),
            indent=opts.json_indent,
            separators=separators,
            ensure_ascii=opts.json_ensure_ascii,
        )
        return text.encode(opts.encoding)

    def decode(self, data: bytes, cls: Optional[Type[Any]] = None) -> Any:
        plain = json.loads(data.decode(self.options.encoding))
        return from_plain(plain, cls, JSON)


# ---------------------------------------------------------------------------
# YAML
# ---------------------------------------------------------------------------


class _BlockDumper(yaml.SafeDumper):
    """
    SafeDumper producing the canonical block layout.

    Sequences inside a mapping are indented like mappings, and a mapping
    that starts on a "- " line continues two columns after the dash:

        members:
            - name: Alice
              age: 19
    """

    def increase_indent(self, flow=False, indentless=False):
        if not flow and self.sequence_context and self.indent is not None:
            self.indents.append(self.indent)
            self.indent += 2
            return
        super().increase_indent(flow=flow, indentless=False)


def _represent_str(dumper: yaml.SafeDumper, data: str):
    tag = "tag:yaml.org,2002:str"
    if data == "":
        return dumper.represent_scalar(tag, data, style='"')
    if "\n" in data:
        return dumper.represent_scalar(tag, data, style="|")
    return dumper.represent_scalar(tag, data)


_BlockDumper.add_representer(str, _represent_str)


class YamlCodec(BaseCodec):
    """
    YAML codec on top of PyYAML.

    Field names are lower-cased unless overridden in field metadata, and
    the document always ends with a newline.
    """

    name = YAML

    def encode(self, obj: Any) -> bytes:
        opts = self.options
        return yaml.dump(
            to_plain(obj, YAML),
            Dumper=_BlockDumper,
            indent=opts.yaml_indent,
            width=float("inf"),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
            encoding=opts.encoding,
        )

    def decode(self, data: bytes, cls: Optional[Type[Any]] = None) -> Any:
        plain = yaml.safe_load(data)
        return from_plain(plain, cls, YAML)


# ---------------------------------------------------------------------------
# XML
# ---------------------------------------------------------------------------


def _xml_text(value: Any) -> str:
    if isinstance(value, enum.Enum):
        return _xml_text(value.value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    raise TypeError(f"xml: unsupported type: {type(value).__name__}")


def _xml_fill(element: etree._Element, value: Any) -> None:
    if is_dataclass_instance(value):
        for name, item in iter_fields(value, XML):
            _xml_append(element, name, item)
    elif isinstance(value, dict):
        for key, item in value.items():
            _xml_append(element, str(key), item)
    else:
        element.text = _xml_text(value)
        return
    if len(element) == 0:
        element.text = ""


def _xml_append(parent: etree._Element, tag: str, value: Any) -> None:
    if value is None:
        return
    if isinstance(value, (list, tuple)):
        for item in value:
            _xml_append(parent, tag, item)
        return
    _xml_fill(etree.SubElement(parent, tag), value)


def _xml_to_plain(element: etree._Element) -> Any:
    children = [child for child in element if isinstance(child.tag, str)]
    if not children:
        return element.text or ""

    grouped: Dict[str, List[Any]] = {}
    for child in children:
        tag = etree.QName(child).localname
        grouped.setdefault(tag, []).append(_xml_to_plain(child))
    return {tag: values[0] if len(values) == 1 else values for tag, values in grouped.items()}


class XmlCodec(BaseCodec):
    """
    XML codec on top of lxml.

    The root element is named after the value's type and every field
    becomes a child element; sequences become repeated elements.
    """

    name = XML

    def encode(self, obj: Any) -> bytes:
        if isinstance(obj, (list, tuple)):
            raise TypeError("xml: cannot encode a top-level sequence")
        opts = self.options
        root = etree.Element(type(obj).__name__)
        _xml_fill(root, obj)
        return etree.tostring(
            root,
            encoding=opts.encoding,
            xml_declaration=opts.xml_declaration,
            pretty_print=opts.xml_pretty_print,
        )

    def decode(self, data: bytes, cls: Optional[Type[Any]] = None) -> Any:
        parser = etree.XMLParser(
            remove_blank_text=True,
            resolve_entities=False,
            load_dtd=False,
            no_network=True,
        )
        root = etree.fromstring(data, parser)
        return from_plain(_xml_to_plain(root), cls, XML)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

CODECS: Dict[str, Type[BaseCodec]] = {
    JSON: JsonCodec,
    XML: XmlCodec,
    YAML: YamlCodec,
}


def get_codec(fmt: str, options: OptionsLike = None) -> BaseCodec:
    """
    Construct the codec for a format token (case-insensitive).

    Raises
    ------
    UnsupportedFormatError
        If no codec exists for `fmt`.
    """
    name = normalize_format(fmt)
    try:
        codec_cls = CODECS[name]
    except KeyError:
        raise UnsupportedFormatError(name) from None
    return codec_cls(options)
