"""Testes do middleware de tempo de resposta"""
import logging

from fastapi import FastAPI
from fastapi.testclient import TestClient

from simpleval.core.config import settings
from simpleval.core.middleware import RequestTimingMiddleware


def make_app(slow_after):
    app = FastAPI()
    app.add_middleware(RequestTimingMiddleware, slow_after=slow_after)

    @app.get("/matches/{match_id}")
    def get_match(match_id: int):
        return {"id": match_id}

    return app


def test_headers_on_every_response(client):
    """Testa cabeçalhos de tempo, request id e versão"""
    response = client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.status_code == 200
    assert response.headers["X-Request-ID"] == "abc123"
    assert response.headers["X-API-Version"] == settings.APP_VERSION
    assert float(response.headers["X-Process-Time"]) >= 0


def test_request_id_generated_when_missing():
    """Testa geração do request id quando o cliente não envia"""
    response = TestClient(make_app(slow_after=60)).get("/matches/7")
    assert len(response.headers["X-Request-ID"]) == 32


def test_slow_request_logs_route_and_params(caplog):
    """Testa log de requisição lenta com template da rota e parâmetros"""
    with caplog.at_level(logging.WARNING, logger="simpleval.core.middleware"):
        TestClient(make_app(slow_after=0)).get("/matches/7")

    message = caplog.records[-1].getMessage()
    assert "GET /matches/{match_id} match_id=7 -> 200" in message
