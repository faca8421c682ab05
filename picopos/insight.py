"""AI business insight and revenue forecast, behind a per-session credit counter."""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any, Protocol, Sequence

import httpx

from picopos.config import AI_CREDITS, GEMINI_API_KEY, GEMINI_BASE_URL, GEMINI_MODEL, GEMINI_TIMEOUT_SECONDS
from picopos.models import ForecastPoint, MenuItem, Order
from picopos.reporting import summarize

logger = logging.getLogger(__name__)

ANALYSIS_FALLBACK = "AI Analysis service is currently unavailable."
FORECAST_FALLBACK = "[]"


class InsufficientCredits(Exception):
    """Raised when a call is attempted with no credits left."""


class InsightUnavailable(RuntimeError):
    """Raised by providers that cannot reach an AI backend."""


class InsightProvider(Protocol):
    def analyze(self, orders: Sequence[Order], menu: Sequence[MenuItem]) -> str: ...

    def forecast(self, orders: Sequence[Order]) -> str: ...


class UnavailableInsightProvider:
    """Provider used when no API key is configured."""

    def analyze(self, orders: Sequence[Order], menu: Sequence[MenuItem]) -> str:
        raise InsightUnavailable("No AI API key configured")

    def forecast(self, orders: Sequence[Order]) -> str:
        raise InsightUnavailable("No AI API key configured")


def _sales_stats(orders: Sequence[Order], menu: Sequence[MenuItem]) -> dict[str, Any]:
    summary = summarize(orders, menu)
    return {
        "totalRevenue": float(summary.revenue),
        "totalCost": float(summary.cost),
        "netProfit": float(summary.profit),
        "itemCounts": dict(summary.best_sellers),
        "orderCount": summary.count,
    }


class GeminiInsightProvider:
    """Calls the Gemini ``generateContent`` REST endpoint over httpx."""

    def __init__(
        self,
        api_key: str,
        store_name: str = "Pico Cafe",
        model: str = GEMINI_MODEL,
        client: httpx.Client | None = None,
    ) -> None:
        self.api_key = api_key
        self.store_name = store_name
        self.model = model
        self.client = client or httpx.Client(base_url=GEMINI_BASE_URL, timeout=GEMINI_TIMEOUT_SECONDS)

    def _generate(self, payload: dict[str, Any]) -> str:
        response = self.client.post(
            f"/models/{self.model}:generateContent",
            headers={"x-goog-api-key": self.api_key},
            json=payload,
        )
        response.raise_for_status()
        body = response.json()
        try:
            return body["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            raise InsightUnavailable(f"Unexpected response shape: {exc!r}") from exc

    def analyze(self, orders: Sequence[Order], menu: Sequence[MenuItem]) -> str:
        prompt = (
            f'Analyze the following cafe sales data for "{self.store_name}".\n'
            f"Data: {json.dumps(_sales_stats(orders, menu))}\n\n"
            "Provide a professional business insight report in ENGLISH.\n"
            "Include:\n"
            "1. Overall performance summary (Revenue, Cost, Net Profit, Margin).\n"
            "2. Best selling items.\n"
            "3. Actionable advice to improve sales and reduce costs.\n\n"
            "Format the response using Markdown. Keep it professional and executive-summary style."
        )
        return self._generate(
            {
                "systemInstruction": {
                    "parts": [
                        {
                            "text": "You are an expert Restaurant Business Analyst. "
                            "You provide critical insights to maximize profit in English."
                        }
                    ]
                },
                "contents": [{"parts": [{"text": prompt}]}],
            }
        )

    def forecast(self, orders: Sequence[Order]) -> str:
        revenue = sum((order.total for order in orders), Decimal("0"))
        prompt = (
            f"Based on the current sales patterns (Total orders today: {len(orders)}, Revenue: {revenue}),\n"
            "predict the sales revenue for the NEXT 7 DAYS.\n\n"
            "Assume today is Friday. Weekends usually see 20% higher traffic.\n\n"
            "Return ONLY a JSON array of objects with 'day' (string, e.g., 'Sat') and 'revenue' (number)."
        )
        return self._generate(
            {
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": {
                    "responseMimeType": "application/json",
                    "responseSchema": {
                        "type": "ARRAY",
                        "items": {
                            "type": "OBJECT",
                            "properties": {"day": {"type": "STRING"}, "revenue": {"type": "NUMBER"}},
                        },
                    },
                },
            }
        )


def parse_forecast(text: str) -> list[ForecastPoint]:
    """Parse the forecast JSON array; anything malformed is dropped."""
    try:
        raw = json.loads(text)
    except (TypeError, ValueError):
        return []
    if not isinstance(raw, list):
        return []

    points: list[ForecastPoint] = []
    for entry in raw:
        if not isinstance(entry, dict) or "day" not in entry:
            continue
        try:
            points.append(ForecastPoint(day=str(entry["day"]), revenue=float(entry.get("revenue", 0))))
        except (TypeError, ValueError):
            continue
    return points


class InsightDesk:
    """
    Credit-metered front for an :class:`InsightProvider`.

    A credit is spent before each call and kept even if the call fails.
    Provider failures never reach the caller; they turn into fallback values.
    """

    def __init__(self, provider: InsightProvider, credits: int = AI_CREDITS) -> None:
        self.provider = provider
        self.credits = credits

    def _spend_credit(self) -> None:
        if self.credits <= 0:
            raise InsufficientCredits("Insufficient AI Credits. Please upgrade your plan in Settings.")
        self.credits -= 1

    def analyze(self, orders: Sequence[Order], menu: Sequence[MenuItem]) -> str:
        self._spend_credit()
        try:
            return self.provider.analyze(list(orders), list(menu))
        except Exception as exc:
            logger.warning("analysis_failed error=%r", exc)
            return ANALYSIS_FALLBACK

    def forecast(self, orders: Sequence[Order]) -> list[ForecastPoint]:
        self._spend_credit()
        try:
            text = self.provider.forecast(list(orders))
        except Exception as exc:
            logger.warning("forecast_failed error=%r", exc)
            text = FORECAST_FALLBACK
        return parse_forecast(text)


def default_provider(store_name: str) -> InsightProvider:
    if GEMINI_API_KEY:
        return GeminiInsightProvider(GEMINI_API_KEY, store_name=store_name)
    return UnavailableInsightProvider()
