"""Tests for configuration loading."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from elkalert.config import AlertConfig, load_config
from elkalert.errors import ConfigError
from tests.conftest import make_config

FULL_CONFIG = """\
elk_host: "http://localhost:9200"
elk_username: "elastic"
elk_password: "secret"
elk_index: "nginx-*"
elk_threshold: 1000
elk_query: '{"size": 0, "aggs": {"aggs_data": {"terms": {"field": "client.ip"}}}}'
whitelist:
  - "10.0.0.1"
  - "::1"
slack_webhook: "https://hooks.slack.com/services/T/B/X"
slack_message_title: "*Top clients*"
"""


class TestLoadConfig:
    def test_full_config(self, config_file):
        config = load_config(config_file(FULL_CONFIG))
        assert config.elk_host == "http://localhost:9200"
        assert config.elk_threshold == 1000
        assert config.whitelist == ("10.0.0.1", "::1")
        assert config.elk_query.startswith('{"size": 0')
        assert config.has_webhook
        assert config.title == "*Top clients*"

    def test_optional_fields_absent(self, config_file):
        text = "\n".join(
            line for line in FULL_CONFIG.splitlines()
            if not line.startswith(("whitelist", "  -", "slack_"))
        )
        config = load_config(config_file(text))
        assert config.whitelist == ()
        assert not config.has_webhook
        assert config.title is None

    def test_empty_whitelist_key(self, config_file):
        text = FULL_CONFIG.replace('  - "10.0.0.1"\n  - "::1"\n', "")
        config = load_config(config_file(text))
        assert config.whitelist == ()

    def test_env_var_path(self, config_file, monkeypatch):
        path = config_file(FULL_CONFIG)
        monkeypatch.setenv("ELKALERT_CONFIG", str(path))
        assert load_config().elk_index == "nginx-*"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="Error reading file"):
            load_config(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, config_file):
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(config_file("elk_host: [unclosed\n"))

    def test_not_a_mapping(self, config_file):
        with pytest.raises(ConfigError, match="mapping"):
            load_config(config_file("- a\n- b\n"))

    def test_negative_threshold(self, config_file):
        with pytest.raises(ConfigError):
            load_config(config_file(FULL_CONFIG.replace("1000", "-1")))

    def test_missing_required_field(self, config_file):
        text = FULL_CONFIG.replace('elk_index: "nginx-*"\n', "")
        with pytest.raises(ConfigError, match="elk_index"):
            load_config(config_file(text))


class TestAlertConfig:
    def test_frozen(self):
        config = make_config()
        with pytest.raises(ValidationError):
            config.elk_threshold = 5

    @pytest.mark.parametrize("url, expected", [
        (None, False),
        ("", False),
        ("http", False),
        ("http:", True),
        ("https://hooks.slack.com/services/T/B/X", True),
    ])
    def test_has_webhook(self, url, expected):
        assert make_config(slack_webhook=url).has_webhook is expected

    def test_empty_title_is_none(self):
        assert make_config(slack_message_title="").title is None
