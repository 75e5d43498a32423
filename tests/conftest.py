"""Shared fixtures for elkalert tests."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from elkalert.config import AlertConfig

# ── Helpers ──────────────────────────────────────────────────────────────


def make_config(**overrides: Any) -> AlertConfig:
    data: dict[str, Any] = {
        "elk_host": "http://es.test:9200",
        "elk_username": "elastic",
        "elk_password": "secret",
        "elk_index": "access-*",
        "elk_threshold": 100,
        "elk_query": '{"size": 0}',
        "whitelist": [],
        "slack_webhook": None,
        "slack_message_title": None,
    }
    data.update(overrides)
    return AlertConfig(**data)


def make_response(*buckets: tuple[Any, Any]) -> dict[str, Any]:
    """Search response with (doc_count, key) buckets."""
    return {
        "took": 3,
        "timed_out": False,
        "aggregations": {
            "aggs_data": {
                "doc_count_error_upper_bound": 0,
                "sum_other_doc_count": 0,
                "buckets": [{"key": key, "doc_count": count} for count, key in buckets],
            }
        },
    }


class Recorder:
    """MockTransport handler that records requests."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)

    def json_bodies(self) -> list[Any]:
        return [json.loads(r.content) for r in self.requests]


# ── Fixtures ─────────────────────────────────────────────────────────────


@pytest.fixture
def config() -> AlertConfig:
    return make_config()


@pytest.fixture
def config_file(tmp_path):
    """Write a YAML config and return its path."""

    def _write(text: str):
        path = tmp_path / "alert.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write
