import asyncio
import json
from datetime import datetime

import httpx
import pytest
from fastapi.testclient import TestClient

from business_survey.main import app
from business_survey.routes.submit import get_dispatcher
from business_survey.services.dispatcher import SubmissionDispatcher

WEBHOOK_URL = "https://script.google.com/macros/s/test-deployment/exec"
FIXED_NOW = datetime(2026, 10, 19, 18, 23, 5)


class FakeSink:
    """Records every row posted to it; can be told to fail at a given row."""

    def __init__(self):
        self.rows = []
        self.fail_at = None
        self.fail_status = 500
        self.raise_at = None
        self.in_flight = 0
        self.max_in_flight = 0

    async def handler(self, request: httpx.Request) -> httpx.Response:
        index = len(self.rows)
        self.rows.append(json.loads(request.content))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            if index == self.raise_at:
                raise httpx.ConnectError("connection refused", request=request)
            if index == self.fail_at:
                return httpx.Response(self.fail_status, json={"result": "error"})
            return httpx.Response(200, json={"result": "success"})
        finally:
            self.in_flight -= 1

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def sink():
    return FakeSink()


@pytest.fixture
def make_dispatcher(sink):
    def _make(url=WEBHOOK_URL, clock=lambda: FIXED_NOW):
        return SubmissionDispatcher(url, transport=sink.transport(), clock=clock)
    return _make


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def use_sink(make_dispatcher):
    """Route /api/submit to the fake sink."""
    def _use(url=WEBHOOK_URL):
        app.dependency_overrides[get_dispatcher] = lambda: make_dispatcher(url=url)
    return _use


@pytest.fixture
def business():
    def _business(**overrides):
        data = {
            "business_name": "Cafe X",
            "business_number": "09123456789",
            "business_address": "Tehran",
            "business_owner_name": "Ali",
        }
        data.update(overrides)
        return data
    return _business
