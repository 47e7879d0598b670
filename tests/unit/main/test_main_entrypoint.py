from __future__ import annotations

import runpy


def test_main_module_invokes_server(monkeypatch):
    executed = {}

    def fake_main() -> None:
        executed["called"] = True

    monkeypatch.setattr("cdnrelay.main.server.main", fake_main)

    runpy.run_module("cdnrelay.main.__main__", run_name="__main__")

    assert executed["called"] is True


def test_server_main_runs_uvicorn_with_settings(monkeypatch):
    from cdnrelay.main import server

    calls = {}

    def fake_run(app: str, **kwargs) -> None:
        calls["app"] = app
        calls.update(kwargs)

    monkeypatch.setenv("SERVER_PORT", "3100")
    monkeypatch.setattr(server.uvicorn, "run", fake_run)

    server.main()

    assert calls["app"] == "cdnrelay.main.app:app"
    assert calls["port"] == 3100
    assert calls["log_config"] is None
