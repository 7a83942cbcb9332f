"""Tests for common.serialization module."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from common.serialization import serialize_dataclass


class Color(str, Enum):
    RED = "red"


@dataclass
class SampleData:
    name: str
    value: int


@dataclass
class SampleWithDatetime:
    name: str
    created_at: datetime


@dataclass
class SampleNested:
    name: str
    metadata: dict
    colors: list = field(default_factory=list)
    tags: frozenset = frozenset()


class TestSerializeDataclass:
    def test_basic_dataclass_to_dict(self) -> None:
        assert serialize_dataclass(SampleData(name="test", value=42)) == {"name": "test", "value": 42}

    def test_datetime_field_to_iso_string(self) -> None:
        dt = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        result = serialize_dataclass(SampleWithDatetime(name="test", created_at=dt))
        assert result["created_at"] == "2024-01-01T12:00:00+00:00"

    def test_nested_values(self) -> None:
        dt = datetime(2024, 6, 15, 8, 30, 0, tzinfo=timezone.utc)
        obj = SampleNested(
            name="test",
            metadata={"updated_at": dt},
            colors=[Color.RED],
            tags=frozenset({"b", "a"}),
        )
        result = serialize_dataclass(obj)
        assert result["metadata"]["updated_at"] == "2024-06-15T08:30:00+00:00"
        assert result["colors"] == ["red"]
        assert result["tags"] == ["a", "b"]
