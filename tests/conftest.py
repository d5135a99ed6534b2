from __future__ import annotations

from pathlib import Path
import sys

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient


# Ensure `import httpfail` works when pytest chooses an import mode that
# doesn't automatically add the project root to sys.path.
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))


def _build_app() -> FastAPI:
    import httpfail
    from httpfail.handlers import register_fail_handlers

    app = FastAPI(title="httpfail test app")
    register_fail_handlers(app)

    @app.get("/ok")
    def ok() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/users")
    def create_user(name: str = "") -> dict[str, str]:
        if not name:
            raise httpfail.bad_request("missing name", "name is required")
        if name == "taken":
            raise httpfail.conflict("name already taken")
        return {"name": name}

    @app.get("/users/{user_id}")
    def get_user(user_id: int) -> dict[str, int]:
        try:
            {}[user_id]
        except KeyError as exc:
            raise httpfail.cause(exc).not_found()
        return {"user_id": user_id}

    @app.get("/admin")
    def admin() -> None:
        raise httpfail.forbidden("admins only")

    @app.get("/me")
    def me() -> None:
        raise httpfail.unauthorized("missing bearer token")

    @app.get("/crash")
    def crash() -> None:
        try:
            raise RuntimeError("database password is hunter2")
        except RuntimeError as exc:
            raise httpfail.cause(exc).unexpected()

    @app.get("/unclassified")
    def unclassified() -> None:
        raise httpfail.cause(RuntimeError("forgot to classify"))

    @app.get("/boom")
    def boom() -> None:
        raise RuntimeError("secret internal state")

    return app


@pytest.fixture()
def make_client(monkeypatch: pytest.MonkeyPatch):
    from httpfail.settings import get_settings

    def _make(response_format: str = "text") -> TestClient:
        monkeypatch.setenv("HTTPFAIL_RESPONSE_FORMAT", response_format)
        get_settings.cache_clear()
        # Unhandled exceptions are re-raised by TestClient unless told otherwise.
        return TestClient(_build_app(), raise_server_exceptions=False)

    yield _make
    get_settings.cache_clear()


@pytest.fixture()
def client(make_client) -> TestClient:
    return make_client("text")


@pytest.fixture()
def json_client(make_client) -> TestClient:
    return make_client("json")
