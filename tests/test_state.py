from unittest.mock import patch

from vulnera_adapter.binaries.state import LocalState
from vulnera_adapter.types import CachedVersion


def test_missing_files_read_as_absent(state):
    assert state.read_installed_version() is None
    assert state.read_latest_cache() is None


def test_installed_version_round_trip(state, install_root):
    assert state.write_installed_version("0.2.0")
    assert install_root.is_dir()
    assert state.read_installed_version() == "0.2.0"


def test_installed_version_is_trimmed(state, install_root):
    install_root.mkdir(parents=True)
    state.installed_version_path.write_text("  0.3.1\n")
    assert state.read_installed_version() == "0.3.1"


def test_blank_installed_version_is_absent(state, install_root):
    install_root.mkdir(parents=True)
    state.installed_version_path.write_text(" \n")
    assert state.read_installed_version() is None


def test_undecodable_marker_is_absent(state, install_root):
    install_root.mkdir(parents=True)
    state.installed_version_path.write_bytes(b"\xff\xfe")
    assert state.read_installed_version() is None


def test_latest_cache_round_trip(state):
    state.write_latest_cache("0.2.0", fetched_at=1_700_000_000)
    assert state.read_latest_cache() == CachedVersion("0.2.0", 1_700_000_000)


def test_latest_cache_defaults_to_now(state):
    with patch("vulnera_adapter.binaries.state.now_secs", return_value=42):
        state.write_latest_cache("0.2.0")
    assert state.read_latest_cache() == CachedVersion("0.2.0", 42)


def test_cache_without_timestamp_is_maximally_stale(state, install_root):
    install_root.mkdir(parents=True)
    state.cached_version_path.write_text("0.2.0")
    assert state.read_latest_cache() == CachedVersion("0.2.0", 0)


def test_cache_with_garbage_timestamp_is_maximally_stale(state, install_root):
    install_root.mkdir(parents=True)
    state.cached_version_path.write_text("0.2.0")
    state.cached_timestamp_path.write_text("yesterday")
    assert state.read_latest_cache().fetched_at == 0

    state.cached_timestamp_path.write_text("-5")
    assert state.read_latest_cache().fetched_at == 0


def test_timestamp_without_version_is_absent(state, install_root):
    install_root.mkdir(parents=True)
    state.cached_timestamp_path.write_text("1700000000")
    assert state.read_latest_cache() is None


def test_writes_overwrite(state):
    state.write_installed_version("0.1.0")
    state.write_installed_version("0.2.0")
    assert state.installed_version_path.read_text() == "0.2.0"
    assert sorted(p.name for p in state.root.iterdir()) == ["installed-version.txt"]


def test_write_failure_is_swallowed(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way")
    state = LocalState(blocker / "server")

    with patch("vulnera_adapter.binaries.state.log_error") as log_error:
        assert state.write_installed_version("0.2.0") is False
        assert state.write_latest_cache("0.2.0", fetched_at=1) is False

    assert log_error.call_count == 3
    error = log_error.call_args_list[0].args[0]
    assert error.is_advisory
    assert state.read_installed_version() is None


def test_cached_version_age():
    cached = CachedVersion("0.2.0", fetched_at=100)
    assert cached.age(150) == 50
    assert cached.age(50) == 0
