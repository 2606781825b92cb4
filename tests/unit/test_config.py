"""Unit tests for settings validation."""

import pytest

from core.config import RoutingSettings, Settings


class TestRoutingSettings:

    def test_defaults(self, monkeypatch):
        for name in ("SHARE_GRAPH", "SELECTION_STRATEGY", "TRANSFER_METRIC", "MAX_GRAPH_VERTICES", "SEARCH_TIMEOUT_MS"):
            monkeypatch.delenv(f"ROUTING_{name}", raising=False)
        routing = RoutingSettings(_env_file=None)
        assert routing.SHARE_GRAPH is True
        assert routing.SELECTION_STRATEGY == "linear"
        assert routing.TRANSFER_METRIC == "lines"
        assert routing.MAX_GRAPH_VERTICES == 0
        assert routing.SEARCH_TIMEOUT_MS == 0

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("ROUTING_SELECTION_STRATEGY", "heap")
        monkeypatch.setenv("ROUTING_SHARE_GRAPH", "false")
        routing = RoutingSettings(_env_file=None)
        assert routing.SELECTION_STRATEGY == "heap"
        assert routing.SHARE_GRAPH is False


class TestValidateSettings:

    def test_development_accepts_defaults(self):
        Settings(ENVIRONMENT="development", routing=RoutingSettings(_env_file=None)).validate_settings()

    def test_production_requires_search_guard(self):
        settings = Settings(ENVIRONMENT="production", DEBUG=False, routing=RoutingSettings(_env_file=None))
        with pytest.raises(ValueError) as exc_info:
            settings.validate_settings()
        assert "ROUTING_MAX_GRAPH_VERTICES or ROUTING_SEARCH_TIMEOUT_MS" in str(exc_info.value)

    def test_production_with_timeout(self):
        settings = Settings(
            ENVIRONMENT="production",
            DEBUG=False,
            routing=RoutingSettings(SEARCH_TIMEOUT_MS=200, _env_file=None),
        )
        settings.validate_settings()

    def test_production_rejects_debug(self):
        settings = Settings(
            ENVIRONMENT="production",
            DEBUG=True,
            routing=RoutingSettings(MAX_GRAPH_VERTICES=5000, _env_file=None),
        )
        with pytest.raises(ValueError, match="DEBUG must be False in production"):
            settings.validate_settings()

    @pytest.mark.parametrize("field,value", [
        ("SELECTION_STRATEGY", "fibonacci"),
        ("TRANSFER_METRIC", "hops"),
    ])
    def test_rejects_unknown_choices(self, field, value):
        settings = Settings(routing=RoutingSettings(**{field: value}, _env_file=None))
        with pytest.raises(ValueError, match=f"ROUTING_{field}"):
            settings.validate_settings()
