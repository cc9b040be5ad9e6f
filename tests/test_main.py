import logging
from types import SimpleNamespace

import uvicorn
from fastapi import FastAPI, Response
from fastapi.testclient import TestClient

from retail_dashboard import server
from retail_dashboard.core.response_interceptor import SuccessResponseInterceptor
from retail_dashboard.main import check_settings


def test_check_settings_warns_about_missing_jwt_secret(caplog):
    with caplog.at_level(logging.WARNING, logger="retail_dashboard.main"):
        check_settings(SimpleNamespace(secret_key=""))

    assert "JWT_SECRET is not set" in caplog.text


def test_check_settings_is_quiet_when_secret_is_set(caplog):
    with caplog.at_level(logging.WARNING, logger="retail_dashboard.main"):
        check_settings(SimpleNamespace(secret_key="s3cret"))

    assert caplog.records == []


def test_run_serves_the_app_on_configured_address(monkeypatch):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    monkeypatch.setattr(server.config, "host", "0.0.0.0")
    monkeypatch.setattr(server.config, "port", 9100)

    server.run()

    assert calls == [("retail_dashboard.main:app", {"host": "0.0.0.0", "port": 9100})]


def test_interceptor_keeps_repeated_headers():
    app = FastAPI()
    app.add_middleware(SuccessResponseInterceptor)

    @app.get("/api/session")
    async def session(response: Response) -> dict:
        response.set_cookie("first", "1")
        response.set_cookie("second", "2")
        return {"ok": True}

    with TestClient(app) as client:
        response = client.get("/api/session")

    assert response.json() == {"success": True, "data": {"ok": True}}
    assert len(response.headers.get_list("set-cookie")) == 2
    assert response.cookies["first"] == "1"
    assert response.cookies["second"] == "2"
