"""Tests for workspace snapshot swapping, configuration and cancellation."""

import threading

import pytest

from codesight.analysis_server.cancellation import CancellationToken
from codesight.analysis_server.config import AnalysisServerConfig, get_config, set_config
from codesight.analysis_server.errors import AnalysisTimeoutError, BackendUnavailableError, InvalidInputError
from codesight.analysis_server.semantic.workspace import WorkspaceHost, get_workspace_host, set_workspace_host


class TestWorkspaceHost:
    """Test the holder of the active snapshot."""

    def test_empty_host_is_unavailable(self):
        with pytest.raises(BackendUnavailableError, match="load_workspace"):
            WorkspaceHost().require_snapshot()

    def test_load_swaps_and_counts_generations(self, sample_index_path, example_index_path):
        host = WorkspaceHost()

        first = host.load(str(sample_index_path))
        second = host.load(str(example_index_path))

        assert host.generation == 2
        assert host.require_snapshot() is second
        assert first.name == "SampleApp"
        assert second.name == "SampleShop"

    def test_captured_snapshot_survives_swap(self, host, example_index_path):
        """Test that a request keeps answering from the snapshot it started with."""
        captured = host.require_snapshot()

        host.load(str(example_index_path))

        assert captured.find_type_by_qualified_name("Sample.Foo") is not None
        assert host.require_snapshot().find_type_by_qualified_name("Sample.Foo") is None

    def test_failed_load_keeps_previous_snapshot(self, host, tmp_path):
        previous = host.require_snapshot()

        with pytest.raises(InvalidInputError):
            host.load(str(tmp_path / "missing.yaml"))

        assert host.require_snapshot() is previous
        assert host.generation == 1

    def test_concurrent_readers_see_whole_snapshots(self, host, example_index_path):
        seen = []

        def read():
            for _ in range(50):
                snapshot = host.require_snapshot()
                seen.append(snapshot.name in ("SampleApp", "SampleShop"))

        readers = [threading.Thread(target=read) for _ in range(4)]
        for reader in readers:
            reader.start()
        host.load(str(example_index_path))
        for reader in readers:
            reader.join()

        assert all(seen)

    def test_clear(self, host):
        host.clear()

        assert host.snapshot is None

    def test_global_host(self, host):
        set_workspace_host(host)

        assert get_workspace_host() is host


class TestAnalysisServerConfig:
    """Test configuration defaults, environment and clamping."""

    def test_defaults(self):
        config = AnalysisServerConfig()

        assert config.default_page_size == 200
        assert config.max_page_size == 500
        assert config.default_timeout_ms == 60000
        assert config.default_dependency_depth == 1

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("CODESIGHT_WORKSPACE", "/tmp/index.yaml")
        monkeypatch.setenv("CODESIGHT_DEFAULT_PAGE_SIZE", "50")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = get_config()

        assert config.workspace_index_path == "/tmp/index.yaml"
        assert config.default_page_size == 50
        assert config.log_level == "DEBUG"

    def test_invalid_configuration(self):
        with pytest.raises(ValueError, match="default_page_size"):
            AnalysisServerConfig(default_page_size=900)
        with pytest.raises(ValueError, match="log_level"):
            AnalysisServerConfig(log_level="LOUD")
        with pytest.raises(ValueError, match="transport"):
            AnalysisServerConfig(transport="carrier-pigeon")

    @pytest.mark.parametrize(
        "value, expected",
        [(None, 60000), (10, 1000), (5000, 5000), (10_000_000, 300000)],
    )
    def test_clamp_timeout(self, value, expected):
        assert AnalysisServerConfig().clamp_timeout(value) == expected

    def test_clamp_depths_and_page_size(self):
        config = AnalysisServerConfig()

        assert config.clamp_dependency_depth(None) == 1
        assert config.clamp_dependency_depth(50) == 10
        assert config.clamp_dependency_depth(0) == 1
        assert config.clamp_tree_depth(None) == 10
        assert config.clamp_tree_depth(1000) == 100
        assert config.clamp_page_size(None) == 200
        assert config.clamp_page_size(5000) == 500

    def test_set_config(self):
        config = AnalysisServerConfig(default_page_size=10)
        set_config(config)

        assert get_config() is config


class TestCancellationToken:
    """Test deadlines and explicit cancellation."""

    def test_unbounded_token_never_expires(self):
        token = CancellationToken.none()

        token.check()
        assert not token.is_cancelled

    def test_cancel(self):
        token = CancellationToken(timeout_ms=60000)
        token.cancel()

        with pytest.raises(AnalysisTimeoutError, match="external cancellation"):
            token.check()

    def test_parent_cancellation_propagates(self):
        parent = CancellationToken()
        child = CancellationToken(timeout_ms=60000, parent=parent)
        parent.cancel()

        assert child.is_cancelled

    def test_deadline_reports_timeout(self):
        token = CancellationToken(timeout_ms=0)

        with pytest.raises(AnalysisTimeoutError) as exc_info:
            token.check()

        assert exc_info.value.details == {"timeout_ms": 0}
