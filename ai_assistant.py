"""Portfolio chat assistant grounded in the parsed series, with offline fallback."""

from __future__ import annotations

import logging
from typing import Any, Iterator, Optional, Sequence, Tuple

from openai import OpenAI

from analytics import headline_metrics, index_comparison
from config import DEFAULT_MODEL
from formatting import format_currency
from models import DataPoint, MonthlyGrowth

logger = logging.getLogger(__name__)

GREETING = "Hello! I analyzed your portfolio data. Ask me about trends, growth, or specific dates."
CONNECTION_ERROR = "I'm having trouble connecting right now."

ANSWER_RULES = [
    "1. Be concise, professional, and helpful.",
    "2. Use the provided data to answer questions accurately.",
    "3. Format currency properly (e.g., $35,000,000).",
    "4. If the user asks for future predictions, give a standard disclaimer that past performance "
    "is not indicative of future results, but you can analyze trends.",
    "5. Keep responses short and easy to read.",
]


def _monthly_lines(records: Sequence[MonthlyGrowth], symbol: str) -> list[str]:
    return [
        f"{record.month}: {record.growth_percent:.2f}% growth ({format_currency(record.growth, symbol)})"
        for record in records
    ]


def build_portfolio_context(
    points: Sequence[DataPoint], records: Sequence[MonthlyGrowth], symbol: str = "$"
) -> str:
    """Build the system instruction describing the series for the model."""
    if not points:
        raise ValueError("Cannot build assistant context for an empty series.")

    metrics = headline_metrics(points, records)
    lines = [
        "You are an expert financial analyst assistant. You are analyzing a user's stock investment portfolio.",
        "",
        "Here is the summary of the data:",
        f"- Current Portfolio Value: {format_currency(metrics['current_value'], symbol)}",
        f"- Starting Value: {format_currency(metrics['start_value'], symbol)}",
        f"- Total Gain/Loss: {format_currency(metrics['total_change'], symbol)} "
        f"({metrics['total_change_percent']:.2f}%)",
        f"- Date Range: {metrics['first_date']} to {metrics['last_date']}",
    ]

    comparison = index_comparison(points)
    if comparison is not None:
        lines += [
            "",
            "Market Index Analysis:",
            f"- Start Index: {comparison['start_index']:,.2f}",
            f"- Current Index: {comparison['current_index']:,.2f}",
            f"- Index Growth: {comparison['index_growth_percent']:.2f}%",
            "",
            f"Compare the user's portfolio growth ({metrics['total_change_percent']:.2f}%) against the "
            f"market index growth ({comparison['index_growth_percent']:.2f}%).",
        ]

    lines += ["", "Monthly Performance:", *_monthly_lines(records, symbol), "", "Rules:", *ANSWER_RULES]
    return "\n".join(lines)


def build_offline_answer(
    points: Sequence[DataPoint],
    records: Sequence[MonthlyGrowth],
    question: str = "",
    symbol: str = "$",
) -> str:
    """Deterministic portfolio summary used when the API is unavailable."""
    if not points:
        return "No portfolio data loaded yet. Upload a CSV to get started."

    metrics = headline_metrics(points, records)
    lines = ["Offline Portfolio Brief", ""]
    if question.strip():
        lines += [f"Question: {question.strip()}", ""]

    lines += [
        f"- Current value: {format_currency(metrics['current_value'], symbol)}",
        f"- Total gain/loss: {format_currency(metrics['total_change'], symbol)} "
        f"({metrics['total_change_percent']:.2f}%)",
        f"- All-time high: {format_currency(metrics['all_time_high'], symbol)}",
        f"- Date range: {metrics['first_date']} to {metrics['last_date']}",
    ]

    comparison = index_comparison(points)
    if comparison is not None:
        lines.append(f"- Market index growth: {comparison['index_growth_percent']:.2f}%")

    if records:
        best = max(records, key=lambda record: record.growth_percent)
        worst = min(records, key=lambda record: record.growth_percent)
        latest = records[-1]
        lines += [
            "",
            "Monthly highlights:",
            f"- Latest month {latest.month}: {latest.growth_percent:.2f}% "
            f"({format_currency(latest.growth, symbol)})",
            f"- Best month {best.month}: {best.growth_percent:.2f}%",
            f"- Weakest month {worst.month}: {worst.growth_percent:.2f}%",
        ]

    lines += ["", "Note: set OPENAI_API_KEY for conversational answers."]
    return "\n".join(lines)


class PortfolioAssistant:
    """Chat session over one snapshot of the series.

    Construct it explicitly and pass it where needed; ``client`` may be any
    object exposing ``chat.completions.create`` (an ``openai.OpenAI``
    instance is created from ``api_key`` when omitted).
    """

    def __init__(
        self,
        api_key: str = "",
        model: str = DEFAULT_MODEL,
        client: Optional[Any] = None,
        temperature: float = 0.25,
        symbol: str = "$",
    ) -> None:
        self.api_key = api_key.strip()
        self.model = model
        self.temperature = temperature
        self.symbol = symbol
        self._client = client
        self._points: tuple[DataPoint, ...] = ()
        self._records: tuple[MonthlyGrowth, ...] = ()
        self.system_instruction = ""
        self.messages: list[dict[str, str]] = []

    @property
    def online(self) -> bool:
        return self._client is not None or bool(self.api_key)

    @property
    def has_session(self) -> bool:
        return bool(self.system_instruction)

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = OpenAI(api_key=self.api_key)
        return self._client

    def start_session(self, points: Sequence[DataPoint], records: Sequence[MonthlyGrowth]) -> None:
        """Snapshot the series and reset the conversation."""
        self._points = tuple(points)
        self._records = tuple(records)
        self.system_instruction = build_portfolio_context(self._points, self._records, self.symbol)
        self.messages = [{"role": "assistant", "content": GREETING}]

    def _request_messages(self) -> list[dict[str, str]]:
        return [{"role": "system", "content": self.system_instruction}, *self.messages]

    def _require_session(self, question: str) -> str:
        if not self.has_session:
            raise RuntimeError("start_session() must be called before asking questions.")
        question = question.strip()
        if not question:
            raise ValueError("Question must not be empty.")
        return question

    def ask(self, question: str) -> Tuple[str, str]:
        """Return (mode, answer). Falls back to the offline brief when needed."""
        question = self._require_session(question)
        self.messages.append({"role": "user", "content": question})

        if not self.online:
            answer = build_offline_answer(self._points, self._records, question, self.symbol)
            self.messages.append({"role": "assistant", "content": answer})
            return "offline", answer

        try:
            response = self._get_client().chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                messages=self._request_messages(),
            )
            content = response.choices[0].message.content if response.choices else ""
            content = (content or "").strip()
        except Exception:
            logger.warning("Assistant request failed", exc_info=True)
            self.messages.append({"role": "assistant", "content": CONNECTION_ERROR})
            return "offline", CONNECTION_ERROR

        if not content:
            logger.warning("Assistant returned an empty answer; using offline brief")
            content = build_offline_answer(self._points, self._records, question, self.symbol)
            self.messages.append({"role": "assistant", "content": content})
            return "offline", content

        self.messages.append({"role": "assistant", "content": content})
        return "online", content

    def stream(self, question: str) -> Iterator[str]:
        """Yield answer text chunks as they arrive and record the full reply."""
        question = self._require_session(question)
        self.messages.append({"role": "user", "content": question})

        if not self.online:
            answer = build_offline_answer(self._points, self._records, question, self.symbol)
            self.messages.append({"role": "assistant", "content": answer})
            yield answer
            return

        full_text = ""
        try:
            chunks = self._get_client().chat.completions.create(
                model=self.model,
                temperature=self.temperature,
                messages=self._request_messages(),
                stream=True,
            )
            for chunk in chunks:
                if not chunk.choices:
                    continue
                text = chunk.choices[0].delta.content or ""
                if text:
                    full_text += text
                    yield text
        except Exception:
            logger.warning("Assistant stream failed", exc_info=True)
            if full_text:
                self.messages.append({"role": "assistant", "content": full_text})
            self.messages.append({"role": "assistant", "content": CONNECTION_ERROR})
            yield ("\n\n" if full_text else "") + CONNECTION_ERROR
            return

        self.messages.append({"role": "assistant", "content": full_text})
