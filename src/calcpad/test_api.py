"""
Tests for the HTTP API.
"""

import time

import structlog
from fastapi.testclient import TestClient

from calcpad.api import create_app
from calcpad.config import Settings, settings
from calcpad.engine import CalculatorEngine
from calcpad.scheduler import PollingScheduler
from calcpad.test_scheduler import FakeClock


class TestCalculatorAPI:
    """Test the API against an engine with a fake clock."""

    def setup_method(self):
        self.clock = FakeClock()
        self.scheduler = PollingScheduler(clock=self.clock)
        self.engine = CalculatorEngine(
            scheduler=self.scheduler,
            config=Settings(error_recovery_delay=1.0),
        )
        self.app = create_app(self.engine)

    def press(self, client: TestClient, *keys: str):
        response = None
        for key in keys:
            response = client.post("/api/v1/keys", json={"key": key})
            assert response.status_code == 200
        return response.json()

    def test_health(self):
        with TestClient(self.app) as client:
            response = client.get("/health")
            assert response.status_code == 200
            assert response.json()["status"] == "healthy"

    def test_initial_display(self):
        with TestClient(self.app) as client:
            assert client.get("/api/v1/display").json() == {"primary": "0", "secondary": ""}

    def test_input_event(self):
        with TestClient(self.app) as client:
            response = client.post("/api/v1/input", json={"kind": "digit", "digit": 7})
            assert response.status_code == 200
            assert response.json()["primary"] == "7"

    def test_operator_event(self):
        with TestClient(self.app) as client:
            client.post("/api/v1/input", json={"kind": "digit", "digit": 4})
            response = client.post("/api/v1/input", json={"kind": "operator", "operator": "*"})
            assert response.json() == {"primary": "4", "secondary": "4*"}

    def test_invalid_events_rejected(self):
        with TestClient(self.app) as client:
            assert client.post("/api/v1/input", json={"kind": "digit"}).status_code == 422
            assert client.post("/api/v1/input", json={"kind": "digit", "digit": 12}).status_code == 422
            assert client.post("/api/v1/input", json={"kind": "evaluate", "digit": 1}).status_code == 422
            assert client.post("/api/v1/input", json={"kind": "launch"}).status_code == 422

    def test_keys_and_history(self):
        with TestClient(self.app) as client:
            snapshot = self.press(client, "1", "2", "+", "3", "Enter")
            assert snapshot == {"primary": "15", "secondary": ""}
            assert client.get("/api/v1/history").json() == ["12+3 = 15"]

    def test_grouped_display(self):
        with TestClient(self.app) as client:
            snapshot = self.press(client, "9", "9", "9", "9", "*", "1", "0", "=")
            assert snapshot["primary"] == "99,990"

    def test_unknown_key(self):
        with TestClient(self.app) as client:
            response = client.post("/api/v1/keys", json={"key": "q"})
            assert response.status_code == 404

    def test_error_recovery(self):
        with TestClient(self.app) as client:
            snapshot = self.press(client, "1", "/", "0", "Enter")
            assert snapshot == {"primary": "Error", "secondary": "1/0"}

            self.clock.now = 1.0
            self.scheduler.run_pending()
            assert client.get("/api/v1/display").json() == {"primary": "0", "secondary": ""}


class TestDefaultApp:
    """Test the app with its own engine and event-loop timer."""

    def test_error_recovers_on_event_loop(self):
        with TestClient(create_app()) as client:
            for key in ("5", "/", "0", "Enter"):
                client.post("/api/v1/keys", json={"key": key})
            assert client.get("/api/v1/display").json()["primary"] == "Error"

            time.sleep(settings.error_recovery_delay + 0.5)
            assert client.get("/api/v1/display").json() == {"primary": "0", "secondary": ""}

    def test_startup_configures_logging(self):
        structlog.reset_defaults()
        assert not structlog.is_configured()
        with TestClient(create_app(CalculatorEngine(scheduler=PollingScheduler()))):
            assert structlog.is_configured()
