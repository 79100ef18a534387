"""
IBM Watson Natural Language Understanding client.

Sends one ``/v1/analyze`` request per text block and converts the JSON
response into a ``SemanticResult``. Responses can be cached on disk keyed on
the request fingerprint; the cache only saves round trips and never changes
results.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from transcript_analyzer.config import NLUConfig
from transcript_analyzer.domain import Concept, Keyword, SemanticResult, Sentiment
from transcript_analyzer.semantic.contracts import (
    AnalysisOptions,
    ExternalServiceFailure,
)
from transcript_analyzer.semantic.response_cache import ResponseCache
from transcript_analyzer.utils.logger import get_logger

logger: logging.Logger = get_logger(__name__)

ANALYZE_PATH = "/v1/analyze"


class WatsonAnalyzer:
    """Semantic analyzer backed by Watson NLU."""

    def __init__(
        self,
        config: NLUConfig,
        cache: ResponseCache | None = None,
        session: requests.Session | None = None,
    ) -> None:
        if not config.api_key:
            raise ValueError("An NLU API key is required.")
        self.config = config
        self.cache = cache
        self.session = session or requests.Session()
        self.session.auth = ("apikey", config.api_key)
        self.session.headers.update({"Content-Type": "application/json"})

    @property
    def endpoint(self) -> str:
        return f"{self.config.url.rstrip('/')}{ANALYZE_PATH}"

    def analyze(self, text: str, options: AnalysisOptions) -> SemanticResult:
        """Analyzes one block of text.

        Raises:
            ExternalServiceFailure: If the request fails or the response is
                not a valid analysis payload.
        """
        body: dict[str, Any] = {"text": text, "features": options.to_features()}
        if self.cache is None:
            payload = self._post(body)
        else:
            entry = self.cache.get_or_compute(
                request={
                    "url": self.endpoint,
                    "version": self.config.version,
                    "body": body,
                },
                compute=lambda: self._post_validated(body),
            )
            payload = entry.payload
        return parse_analysis(payload)

    def _post_validated(self, body: dict[str, Any]) -> dict[str, Any]:
        """Posts, rejecting payloads that do not parse before they are cached."""
        payload = self._post(body)
        parse_analysis(payload)
        return payload

    def _post(self, body: dict[str, Any]) -> dict[str, Any]:
        logger.debug("POST %s (%s characters)", self.endpoint, len(body["text"]))
        try:
            response = self.session.post(
                self.endpoint,
                params={"version": self.config.version},
                json=body,
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as err:
            raise ExternalServiceFailure(
                f"Semantic analysis request failed: {err}"
            ) from err

        if response.status_code >= 400:
            raise ExternalServiceFailure(
                "Semantic analysis request failed with status "
                f"{response.status_code}: {_error_detail(response)}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as err:
            raise ExternalServiceFailure(
                "Semantic analysis returned a non-JSON response."
            ) from err
        if not isinstance(payload, dict):
            raise ExternalServiceFailure(
                "Semantic analysis returned an unexpected response."
            )
        return payload


def _error_detail(response: requests.Response) -> str:
    try:
        detail = response.json().get("error")
    except (ValueError, AttributeError):
        detail = None
    return str(detail or response.reason or "unknown error")


def parse_analysis(payload: dict[str, Any]) -> SemanticResult:
    """
    Converts an ``/v1/analyze`` response into a ``SemanticResult``.

    Facets missing from the response (not requested) become empty values;
    sentiment is required.

    Raises:
        ExternalServiceFailure: If required fields are missing or malformed.
    """
    try:
        document = payload["sentiment"]["document"]
        sentiment = Sentiment(
            label=str(document["label"]), score=float(document["score"])
        )

        emotions: dict[str, float] = {}
        if "emotion" in payload:
            raw_emotions = payload["emotion"]["document"]["emotion"]
            emotions = {
                str(name): float(value) for name, value in raw_emotions.items()
            }

        keywords = tuple(
            Keyword(text=str(item["text"]), relevance=float(item["relevance"]))
            for item in payload.get("keywords", [])
        )
        concepts = tuple(
            Concept(
                text=str(item["text"]),
                relevance=float(item["relevance"]),
                dbpedia_resource=item.get("dbpedia_resource"),
            )
            for item in payload.get("concepts", [])
        )
    except (KeyError, TypeError, ValueError, AttributeError) as err:
        raise ExternalServiceFailure(
            f"Semantic analysis response is missing or has invalid fields: {err!r}"
        ) from err

    return SemanticResult(
        sentiment=sentiment,
        emotions=emotions,
        keywords=keywords,
        concepts=concepts,
        language=payload.get("language"),
    )
