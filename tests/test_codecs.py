# tests/test_codecs.py
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import pytest
import yaml
from lxml import etree

from pageio import (
    InvalidArgumentError,
    UnsupportedFormatError,
    get_codec,
    read_json,
    read_xml,
    read_yaml,
    write_json,
    write_xml,
    write_yaml,
)
from pageio.codecs import JsonCodec, XmlCodec, YamlCodec


def wire(name: str) -> dict:
    return {"name": name, "yaml": name.lower()}


@dataclass
class Person:
    name: str = field(default="", metadata=wire("Name"))
    age: int = field(default=0, metadata=wire("Age"))


@dataclass
class Group:
    group_name: str = field(default="", metadata=wire("GroupName"))
    members: List[Person] = field(default_factory=list, metadata=wire("Members"))


@dataclass
class Empty:
    pass


class Color(enum.Enum):
    RED = "red"
    BLUE = "blue"


@dataclass
class Settings:
    title: str = ""
    enabled: bool = False
    ratio: float = 0.0
    color: Color = Color.RED
    note: Optional[str] = None
    tags: Dict[str, str] = field(default_factory=dict)


THE_GOPHERS = Group(
    group_name="TheGophers",
    members=[Person("Alice", 19), Person("Bob", 52)],
)


def test_get_codec() -> None:
    assert isinstance(get_codec("json"), JsonCodec)
    assert isinstance(get_codec("YAML"), YamlCodec)
    assert isinstance(get_codec("Xml"), XmlCodec)

    with pytest.raises(UnsupportedFormatError):
        get_codec("toml")


# ####
# JSON
# ####


def test_write_json_filename_is_required() -> None:
    with pytest.raises(InvalidArgumentError):
        write_json("", Empty())


@pytest.mark.parametrize(
    "value, expected",
    [
        (Empty(), b"{}"),
        ({}, b"{}"),
        (
            THE_GOPHERS,
            b'{"GroupName":"TheGophers","Members":'
            b'[{"Name":"Alice","Age":19},{"Name":"Bob","Age":52}]}',
        ),
    ],
)
def test_write_json(tmp_path: Path, value, expected: bytes) -> None:
    filename = tmp_path / "data.json"
    write_json(filename, value)
    assert filename.read_bytes() == expected


def test_write_json_keeps_filename(tmp_path: Path) -> None:
    written = write_json(tmp_path / "data.config", Empty())
    assert written == tmp_path / "data.config"
    assert written.read_bytes() == b"{}"


def test_read_json_filename_is_required() -> None:
    with pytest.raises(OSError):
        read_json("", Group)


def test_read_json(tmp_path: Path) -> None:
    filename = tmp_path / "data.json"
    for group in (Group(), Group(group_name="TheGophers"), THE_GOPHERS):
        write_json(filename, group)
        assert read_json(filename, Group) == group


def test_read_json_ignores_extension(tmp_path: Path) -> None:
    filename = tmp_path / "data.txt"
    write_json(filename, THE_GOPHERS)
    assert read_json(filename, Group) == THE_GOPHERS


def test_json_decode_matches_keys_case_insensitively() -> None:
    codec = JsonCodec()
    group = codec.decode(b'{"groupname":"x","MEMBERS":[{"name":"Alice","AGE":3}]}', Group)
    assert group == Group("x", [Person("Alice", 3)])


def test_json_decode_type_mismatch() -> None:
    with pytest.raises(TypeError):
        JsonCodec().decode(b'{"Name":"Alice","Age":"old"}', Person)


def test_json_options() -> None:
    codec = JsonCodec({"json_indent": 2})
    assert codec.encode(Person("Alice", 19)) == b'{\n  "Name": "Alice",\n  "Age": 19\n}'

    assert JsonCodec().encode({"name": "Zoë"}) == '{"name":"Zoë"}'.encode("utf-8")
    assert JsonCodec({"json_ensure_ascii": True}).encode({"name": "Zoë"}) == b'{"name":"Zo\\u00eb"}'


# ####
# YAML
# ####


def test_write_yaml_filename_is_required() -> None:
    with pytest.raises(InvalidArgumentError):
        write_yaml("", Empty())


@pytest.mark.parametrize(
    "value, expected",
    [
        (Group(), 'groupname: ""\nmembers: []\n'),
        (
            THE_GOPHERS,
            "groupname: TheGophers\n"
            "members:\n"
            "    - name: Alice\n"
            "      age: 19\n"
            "    - name: Bob\n"
            "      age: 52\n",
        ),
    ],
)
def test_write_yaml(tmp_path: Path, value, expected: str) -> None:
    filename = tmp_path / "data.yaml"
    write_yaml(filename, value)
    assert filename.read_text(encoding="utf-8") == expected


def test_yaml_lowercases_field_names() -> None:
    @dataclass
    class Server:
        HostName: str = "localhost"
        Port: int = 8080

    assert YamlCodec().encode(Server()) == b"hostname: localhost\nport: 8080\n"


def test_yaml_nested_mapping_indent() -> None:
    data = {"server": {"host": "localhost", "ports": [80, 443]}}
    assert YamlCodec().encode(data) == (
        b"server:\n"
        b"    host: localhost\n"
        b"    ports:\n"
        b"        - 80\n"
        b"        - 443\n"
    )


def test_read_yaml_filename_is_required() -> None:
    with pytest.raises(OSError):
        read_yaml("", Group)


def test_read_yaml(tmp_path: Path) -> None:
    filename = tmp_path / "data.yaml"
    for group in (Group(), Group(group_name="TheGophers"), THE_GOPHERS):
        write_yaml(filename, group)
        assert read_yaml(filename, Group) == group


def test_read_yaml_empty_document(tmp_path: Path) -> None:
    filename = tmp_path / "data.yaml"
    filename.write_bytes(b"")
    assert read_yaml(filename, Group) == Group()
    assert read_yaml(filename) is None


def test_read_yaml_malformed(tmp_path: Path) -> None:
    filename = tmp_path / "data.yaml"
    filename.write_text("groupname: [unclosed\n", encoding="utf-8")
    with pytest.raises(yaml.YAMLError):
        read_yaml(filename, Group)


def test_yaml_round_trip_settings() -> None:
    codec = YamlCodec()
    settings = Settings(
        title="multi\nline",
        enabled=True,
        ratio=0.5,
        color=Color.BLUE,
        note="n",
        tags={"a": "b"},
    )
    assert codec.decode(codec.encode(settings), Settings) == settings


# ###
# XML
# ###


def test_write_xml_filename_is_required() -> None:
    with pytest.raises(InvalidArgumentError):
        write_xml("", Empty())


@pytest.mark.parametrize(
    "value, expected",
    [
        (Empty(), b"<Empty></Empty>"),
        (
            THE_GOPHERS,
            b"<Group><GroupName>TheGophers</GroupName>"
            b"<Members><Name>Alice</Name><Age>19</Age></Members>"
            b"<Members><Name>Bob</Name><Age>52</Age></Members></Group>",
        ),
    ],
)
def test_write_xml(tmp_path: Path, value, expected: bytes) -> None:
    filename = tmp_path / "data.xml"
    write_xml(filename, value)
    assert filename.read_bytes() == expected


def test_xml_rejects_top_level_sequence() -> None:
    with pytest.raises(TypeError):
        XmlCodec().encode([Person("Alice", 19)])


def test_xml_rejects_unsupported_values() -> None:
    with pytest.raises(TypeError):
        XmlCodec().encode({"members": {1, 2}})


def test_xml_declaration_option() -> None:
    data = XmlCodec({"xml_declaration": True}).encode(Person("Alice", 19))
    assert data.startswith(b"<?xml")
    assert data.endswith(b"<Person><Name>Alice</Name><Age>19</Age></Person>")


def test_read_xml(tmp_path: Path) -> None:
    filename = tmp_path / "data.xml"
    for group in (Group(), Group(group_name="TheGophers"), THE_GOPHERS):
        write_xml(filename, group)
        assert read_xml(filename, Group) == group


def test_read_xml_plain(tmp_path: Path) -> None:
    filename = tmp_path / "data.xml"
    write_xml(filename, THE_GOPHERS)
    assert read_xml(filename) == {
        "GroupName": "TheGophers",
        "Members": [{"Name": "Alice", "Age": "19"}, {"Name": "Bob", "Age": "52"}],
    }


def test_read_xml_pretty_printed(tmp_path: Path) -> None:
    filename = tmp_path / "data.xml"
    write_xml(filename, THE_GOPHERS, options={"xml_pretty_print": True})
    assert b"\n  <GroupName>" in filename.read_bytes()
    assert read_xml(filename, Group) == THE_GOPHERS


def test_read_xml_malformed(tmp_path: Path) -> None:
    filename = tmp_path / "data.xml"
    filename.write_bytes(b"")
    with pytest.raises(etree.XMLSyntaxError):
        read_xml(filename, Group)


def test_xml_round_trip_settings() -> None:
    codec = XmlCodec()
    settings = Settings(title="t", enabled=True, ratio=0.5, color=Color.BLUE, tags={"a": "b"})
    assert codec.decode(codec.encode(settings), Settings) == settings
