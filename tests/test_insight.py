from __future__ import annotations

import json

import httpx
import pytest

from picopos.insight import (
    ANALYSIS_FALLBACK,
    GeminiInsightProvider,
    InsightDesk,
    InsufficientCredits,
    UnavailableInsightProvider,
    parse_forecast,
)
from picopos.models import ForecastPoint


class StubProvider:
    def __init__(self, report: str = "All good", forecast: str = '[{"day": "Sat", "revenue": 120}]') -> None:
        self.report = report
        self.forecast_text = forecast
        self.calls: list[str] = []

    def analyze(self, orders, menu):
        self.calls.append("analyze")
        return self.report

    def forecast(self, orders):
        self.calls.append("forecast")
        return self.forecast_text


class BrokenProvider:
    def analyze(self, orders, menu):
        raise httpx.ConnectError("offline")

    def forecast(self, orders):
        raise httpx.ConnectError("offline")


def test_desk_passes_through_and_spends_credits(menu):
    provider = StubProvider()
    desk = InsightDesk(provider, credits=5)
    assert desk.analyze([], menu) == "All good"
    assert desk.forecast([]) == [ForecastPoint(day="Sat", revenue=120.0)]
    assert desk.credits == 3
    assert provider.calls == ["analyze", "forecast"]


def test_desk_keeps_credit_spent_on_failure(menu):
    desk = InsightDesk(BrokenProvider(), credits=2)
    assert desk.analyze([], menu) == ANALYSIS_FALLBACK
    assert desk.forecast([]) == []
    assert desk.credits == 0


def test_desk_refuses_without_credits(menu):
    provider = StubProvider()
    desk = InsightDesk(provider, credits=0)
    with pytest.raises(InsufficientCredits):
        desk.analyze([], menu)
    assert provider.calls == []


def test_unavailable_provider_falls_back(menu):
    desk = InsightDesk(UnavailableInsightProvider(), credits=1)
    assert desk.analyze([], menu) == ANALYSIS_FALLBACK


@pytest.mark.parametrize(
    "text, expected",
    [
        ("[]", []),
        ("not json", []),
        ('{"day": "Sat"}', []),
        ('[{"day": "Sun", "revenue": "99.5"}, {"revenue": 3}, "junk"]', [ForecastPoint("Sun", 99.5)]),
    ],
)
def test_parse_forecast(text, expected):
    assert parse_forecast(text) == expected


def _gemini_reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def test_gemini_provider_posts_generate_content(menu):
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_gemini_reply("## Report"))

    client = httpx.Client(base_url="https://ai.test/v1beta", transport=httpx.MockTransport(handler))
    provider = GeminiInsightProvider("secret", store_name="Pico Cafe", client=client)

    assert provider.analyze([], menu) == "## Report"
    request = seen[0]
    assert request.url.path == "/v1beta/models/gemini-2.5-flash:generateContent"
    assert request.headers["x-goog-api-key"] == "secret"
    body = json.loads(request.content)
    assert "Pico Cafe" in body["contents"][0]["parts"][0]["text"]


def test_gemini_forecast_requests_json(menu):
    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        assert body["generationConfig"]["responseMimeType"] == "application/json"
        return httpx.Response(200, json=_gemini_reply('[{"day": "Sat", "revenue": 10}]'))

    client = httpx.Client(base_url="https://ai.test/v1beta", transport=httpx.MockTransport(handler))
    desk = InsightDesk(GeminiInsightProvider("secret", client=client), credits=1)
    assert desk.forecast([]) == [ForecastPoint("Sat", 10.0)]


def test_gemini_http_error_becomes_fallback(menu):
    client = httpx.Client(
        base_url="https://ai.test/v1beta",
        transport=httpx.MockTransport(lambda request: httpx.Response(503)),
    )
    desk = InsightDesk(GeminiInsightProvider("secret", client=client), credits=2)
    assert desk.analyze([], menu) == ANALYSIS_FALLBACK
    assert desk.forecast([]) == []
