"""Pydantic data models for elkalert."""

import logging
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from elkalert.errors import MalformedResponseError
from elkalert.utils import format_count

logger = logging.getLogger(__name__)


# Location of the bucket list inside a search response
BUCKETS_PATH = ("aggregations", "aggs_data", "buckets")


class Bucket(BaseModel):
    """Single aggregation bucket: event count for one client address."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(ge=0)
    key: str


class AggregationResult(BaseModel):
    """Buckets in the order returned by the backend."""

    model_config = ConfigDict(frozen=True)

    buckets: tuple[Bucket, ...] = ()


class AlertLine(BaseModel):
    """Bucket that exceeded the threshold."""

    model_config = ConfigDict(frozen=True)

    count: int = Field(ge=0)
    key: str

    def render(self) -> str:
        return f"{format_count(self.count)} {self.key}"

    @classmethod
    def parse(cls, line: str) -> "AlertLine":
        """Parse a rendered line back into an AlertLine.

        Args:
            line: Line like "150 10.0.0.1"

        Returns:
            AlertLine object
        """
        count, _, key = line.rstrip("\n").partition(" ")
        return cls(count=int(count), key=key)


def _exact_count(value: Any, path: str) -> int:
    """Convert a decoded doc_count to an exact non-negative integer."""
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponseError(path, f"expected number, got {type(value).__name__}")

    if isinstance(value, float):
        if not math.isfinite(value):
            raise MalformedResponseError(path, f"count is not finite: {value}")
        if not value.is_integer():
            raise MalformedResponseError(path, f"fractional count: {value}")
        value = int(value)

    if value < 0:
        raise MalformedResponseError(path, f"negative count: {value}")

    return value


def _descend(tree: Any, keys: tuple[str, ...]) -> Any:
    node = tree
    walked = []
    for key in keys:
        where = ".".join(walked) or "<root>"
        if not isinstance(node, dict):
            raise MalformedResponseError(where, f"expected object, got {type(node).__name__}")
        walked.append(key)
        if key not in node:
            raise MalformedResponseError(".".join(walked), "missing")
        node = node[key]
    return node


def parse_aggregation(tree: Any) -> AggregationResult:
    """Decode the bucket list out of a search response.

    Expects ``aggregations.aggs_data.buckets`` to be a list of objects
    with a numeric ``doc_count`` and a string ``key``.

    Args:
        tree: Decoded JSON search response

    Returns:
        AggregationResult object

    Raises:
        MalformedResponseError: Any part of the expected shape is missing
            or has the wrong type
    """
    raw_buckets = _descend(tree, BUCKETS_PATH)
    base = ".".join(BUCKETS_PATH)

    if not isinstance(raw_buckets, list):
        raise MalformedResponseError(base, f"expected list, got {type(raw_buckets).__name__}")

    buckets = []
    for i, item in enumerate(raw_buckets):
        item_path = f"{base}[{i}]"
        if not isinstance(item, dict):
            raise MalformedResponseError(item_path, f"expected object, got {type(item).__name__}")

        if "doc_count" not in item:
            raise MalformedResponseError(f"{item_path}.doc_count", "missing")
        if "key" not in item:
            raise MalformedResponseError(f"{item_path}.key", "missing")

        count = _exact_count(item["doc_count"], f"{item_path}.doc_count")
        key = item["key"]
        if not isinstance(key, str):
            raise MalformedResponseError(f"{item_path}.key", f"expected string, got {type(key).__name__}")

        buckets.append(Bucket(count=count, key=key))

    logger.debug(f"Decoded {len(buckets)} buckets")
    return AggregationResult(buckets=tuple(buckets))
