from unittest.mock import patch

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from slumbering_ancients.server.middleware import LogfireMiddleware

pytestmark = pytest.mark.asyncio


def _build_app() -> FastAPI:
    app = FastAPI()
    app.add_middleware(LogfireMiddleware)

    @app.get("/ping")
    async def ping():
        return {"pong": True}

    @app.get("/fail")
    async def fail():
        raise RuntimeError("broken")

    return app


async def test_request_is_recorded():
    with patch("slumbering_ancients.server.middleware.logfire_middleware.log_api_request") as log_api_request:
        async with AsyncClient(transport=ASGITransport(app=_build_app()), base_url="http://test") as client:
            response = await client.get("/ping")

    assert response.status_code == 200
    assert float(response.headers["X-Process-Time"]) >= 0
    kwargs = log_api_request.call_args.kwargs
    assert kwargs["method"] == "GET"
    assert kwargs["path"] == "/ping"
    assert kwargs["status_code"] == 200


async def test_failure_is_recorded_as_500():
    with patch("slumbering_ancients.server.middleware.logfire_middleware.log_api_request") as log_api_request:
        transport = ASGITransport(app=_build_app(), raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/fail")

    assert response.status_code == 500
    assert log_api_request.call_args.kwargs["status_code"] == 500
