"""Tests for manifest library."""

from dataclasses import dataclass, field

from mashumaro import field_options
import pytest

from agent_manifests.exceptions import DecodeError, InputException
from agent_manifests.manifest import (
    BaseManifest,
    LabelSelector,
    ObjectMeta,
    read_document,
)


@dataclass
class Widget(BaseManifest):
    metadata: ObjectMeta
    selector: LabelSelector = field(default_factory=LabelSelector)
    display_name: str | None = field(
        metadata=field_options(alias="displayName"), default=None
    )


def test_compact_dict_uses_aliases() -> None:
    """Test that serialized names are camelCase and None values are omitted."""
    widget = Widget(
        metadata=ObjectMeta(name="w"),
        selector=LabelSelector(match_labels={"a": "b"}),
        display_name="Widget",
    )
    assert widget.compact_dict() == {
        "metadata": {"name": "w"},
        "selector": {"matchLabels": {"a": "b"}},
        "displayName": "Widget",
    }


def test_yaml() -> None:
    """Test the YAML representation preserves field order."""
    widget = Widget(metadata=ObjectMeta(name="w", namespace="ns"))
    assert widget.yaml() == "---\nmetadata:\n  name: w\n  namespace: ns\nselector: {}\n"


def test_parse_yaml() -> None:
    """Test parsing a serialized manifest."""
    widget = Widget.parse_yaml(
        """\
metadata:
  name: w
  labels:
    app: demo
displayName: Widget
"""
    )
    assert widget == Widget(
        metadata=ObjectMeta(name="w", labels={"app": "demo"}),
        display_name="Widget",
    )


def test_parse_yaml_bytes() -> None:
    """Test parsing serialized bytes."""
    assert Widget.parse_yaml(b"metadata: {name: w}\n").metadata.name == "w"


def test_parse_yaml_unknown_field() -> None:
    """Test that unknown top level fields are rejected."""
    with pytest.raises(DecodeError, match="Invalid Widget"):
        Widget.parse_yaml("metadata: {name: w}\ncolor: blue\n")


def test_parse_yaml_unknown_nested_field() -> None:
    """Test that unknown nested fields are rejected."""
    with pytest.raises(DecodeError, match="Invalid Widget"):
        Widget.parse_yaml("metadata: {name: w, creationTimestamp: null}\n")


def test_parse_yaml_missing_field() -> None:
    """Test that required fields must be present."""
    with pytest.raises(DecodeError, match="Invalid Widget"):
        Widget.parse_yaml("displayName: Widget\n")


@pytest.mark.parametrize(
    "content",
    [
        "metadata: {name: 5}\n",
        "metadata: {name: w}\ndisplayName: true\n",
        "metadata: {name: w, labels: {app: [demo]}}\n",
        "metadata: {name: w}\nselector: app\n",
        "metadata: {name: w}\nselector: {matchLabels: app}\n",
    ],
)
def test_parse_yaml_wrong_type(content: str) -> None:
    """Test that values of the wrong type are rejected instead of coerced."""
    with pytest.raises(DecodeError, match="Invalid Widget"):
        Widget.parse_yaml(content)


def test_parse_yaml_scalar_for_object() -> None:
    """Test that a scalar is not accepted where an object is expected."""
    with pytest.raises(DecodeError, match="field 'metadata' expected a dict"):
        Widget.parse_yaml("metadata: w\n")


def test_parse_yaml_invalid_yaml() -> None:
    """Test that malformed YAML is reported as a decode error."""
    with pytest.raises(DecodeError, match="Invalid YAML"):
        Widget.parse_yaml("metadata: [name\n")


@pytest.mark.parametrize("content", ["", "- a\n- b\n", "just a string\n"])
def test_parse_yaml_not_a_mapping(content: str) -> None:
    """Test that documents must be mappings."""
    with pytest.raises(DecodeError, match="Expected a mapping for Widget"):
        Widget.parse_yaml(content)


def test_read_document() -> None:
    """Test reading a document without a schema."""
    assert read_document("f.yaml", b"a: 1\nb: [x]\n") == {"a": 1, "b": ["x"]}


@pytest.mark.parametrize(
    ("content", "match"),
    [
        ("", "File f.yaml is empty"),
        ("- a\n", "does not contain a mapping"),
        ("a: [b\n", "Invalid YAML in file f.yaml"),
    ],
)
def test_read_document_invalid(content: str, match: str) -> None:
    """Test reading documents that are not mappings."""
    with pytest.raises(InputException, match=match):
        read_document("f.yaml", content)
