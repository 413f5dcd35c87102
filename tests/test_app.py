import time

import pytest
from fastapi.testclient import TestClient

import web.app as web_app
from tictactoe.search import PerformanceMetrics

client = TestClient(web_app.app)


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_move_completes_a_line():
    response = client.post("/api/move", json={"board": "XX.OO....", "player": "X"})
    assert response.status_code == 200
    body = response.json()
    assert body["move"] == [0, 2]
    assert body["board"] == "XXXOO...."
    assert body["result"] == "X"
    assert body["metrics"]["immediate_move"] is True


def test_move_on_open_board_continues_the_game():
    response = client.post("/api/move", json={"board": "X_______O", "player": "X", "time_limit": 5})
    assert response.status_code == 200
    body = response.json()
    row, col = body["move"]
    assert body["board"][row * 3 + col] == "X"
    assert body["board"].count(".") == 6
    assert body["result"] == "continues"
    assert body["metrics"]["search_depth"] > 0


@pytest.mark.parametrize(
    "payload",
    [
        {"board": "XX.OO", "player": "X"},
        {"board": "XX.OO...Q", "player": "X"},
        {"board": "XX.OO....", "player": "Z"},
    ],
)
def test_malformed_requests_are_rejected(payload):
    assert client.post("/api/move", json=payload).status_code == 422


def test_game_over_is_a_client_error():
    response = client.post("/api/move", json={"board": "XXXOO....", "player": "O"})
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["error_type"] == "GameOver"
    assert detail["recoverable"] is True


def test_unbalanced_board_is_a_client_error():
    response = client.post("/api/move", json={"board": "XXX.O....", "player": "O"})
    assert response.status_code == 400
    assert response.json()["detail"]["error_type"] == "InvalidBoard"


def test_time_limit_is_clamped():
    assert web_app.MoveRequest(board=".........", player="X", time_limit=0).time_limit == 0.1
    assert web_app.MoveRequest(board=".........", player="X", time_limit=99).time_limit == 10.0


def test_slow_search_times_out(monkeypatch):
    def slow_search(player, board):
        time.sleep(1.0)
        return None, PerformanceMetrics()

    monkeypatch.setattr(web_app, "find_best_move_with_metrics", slow_search)
    response = client.post("/api/move", json={"board": ".........", "player": "X", "time_limit": 0.1})
    assert response.status_code == 504
    detail = response.json()["detail"]
    assert detail["error_type"] == "SearchTimeout"
    assert detail["recoverable"] is True


def test_engine_failure_is_reported(monkeypatch):
    def broken_search(player, board):
        raise RuntimeError("boom")

    monkeypatch.setattr(web_app, "find_best_move_with_metrics", broken_search)
    response = client.post("/api/move", json={"board": ".........", "player": "X"})
    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail["error_type"] == "EngineError"
    assert detail["recoverable"] is False
