from __future__ import annotations

import logging

import pytest

from movemax.app import main as cli
from movemax.app.state import Store
from movemax.shared.core.configuration import SystemConfig, UIConfig
from movemax.shared.core.event_bus import EventBus
from movemax.shared.infrastructure.persistence import LocalStorage


@pytest.fixture
def store(storage, clock):
    Store.reset()
    instance = Store.initialize(EventBus(), SystemConfig(ui=UIConfig(search_result_limit=3)), storage, clock)
    yield instance
    Store.reset()


def test_store_is_a_singleton(store, storage):
    assert Store.get() is store
    with pytest.raises(RuntimeError, match="already initialized"):
        Store.initialize(EventBus(), SystemConfig(), storage)


def test_get_before_initialize_fails():
    Store.reset()
    with pytest.raises(RuntimeError, match="not initialized"):
        Store.get()


def test_auditor_is_mocked_without_api_key(store):
    assert store.auditor.is_mocked


def test_controllers_share_one_domain_store(store):
    store.auth.login("1")
    store.projects.generate_tasks("P-2024-003")
    assert len(store.domain.get_project("P-2024-003").tasks) == 2
    assert store.dispatch.domain is store.domain
    assert store.field.domain is store.domain


def test_reset_store_rebuilds_state(store, storage):
    store.auth.login("1")
    old_domain = store.domain
    store.domain.delete_project("P-2024-001")

    store.domain.reset_store()

    assert store.domain is not old_domain
    assert store.domain.get_project("P-2024-001") is not None
    assert not store.auth.is_authenticated
    assert storage.keys() == []


def test_search_uses_configured_limit(store):
    assert len(store.search("e")) == 3


def test_recent_activity_is_capped(store):
    for n in range(7):
        store.domain.log_activity("P-2024-001", "1", "Sarah Jenkins", f"Action {n}")
    recent = store.recent_activity()
    assert len(recent) == 5
    assert recent[0].action == "Action 6"


# --- CLI ---


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "configure_logging", lambda logs_dir=None: tmp_path / "movemax.log")
    Store.reset()
    return ["--db", str(tmp_path / "data" / "store.duckdb")]


def test_cli_status_and_reset(cli_env, tmp_path):
    assert cli.main([*cli_env, "status"]) == 0
    assert cli.main([*cli_env, "reset"]) == 0
    assert (tmp_path / "data" / "store.duckdb").exists()


def test_cli_login_as(cli_env):
    assert cli.main([*cli_env, "login-as", "4"]) == 0
    assert cli.main([*cli_env, "login-as", "404"]) == 1


def test_cli_report(cli_env):
    assert cli.main([*cli_env, "report"]) == 0


def test_cli_reset_clears_persisted_keys(cli_env, tmp_path):
    db_path = str(tmp_path / "data" / "store.duckdb")
    storage = LocalStorage(db_path).open()
    storage.set_item("movemax_logs", "[]")
    storage.close()

    assert cli.main([*cli_env, "reset"]) == 0

    storage = LocalStorage(db_path).open()
    assert storage.keys() == []
    storage.close()


def test_configure_logging_writes_rotating_file(tmp_path):
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        log_file = cli.configure_logging(tmp_path / "logs")
        logging.getLogger("movemax.test").info("hello")
        assert log_file == tmp_path / "logs" / "movemax.log"
        assert log_file.exists()
    finally:
        for handler in root.handlers:
            handler.close()
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
