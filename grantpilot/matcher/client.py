"""Gemini-backed matching client.

The model is an untrusted boundary: every response is validated against
MatchVerdict before it becomes an AnalysisResult. analyze_grant_match is the
entry point callers should use; it never raises and turns any failure into a
degraded result for that grant.
"""

import logging
import time
from typing import Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..config import Config, require_api_key
from ..exceptions import MatchingError, MissingCredentialError
from ..models import AnalysisResult, BusinessProfile, EligibilityStatus, Grant
from .prompts import ANALYSIS_RESPONSE_SCHEMA, build_match_prompt

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-3-flash-preview"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class MatchVerdict(BaseModel):
    """Wire shape of the model's JSON verdict."""

    model_config = ConfigDict(strict=True, extra="ignore")

    match_score: float = Field(..., alias="matchScore", ge=0, le=100)
    eligibility_status: EligibilityStatus = Field(..., alias="eligibilityStatus")
    hard_disqualifiers: list[str] = Field(..., alias="hardDisqualifiers")
    suitability_reasoning: str = Field(..., alias="suitabilityReasoning")
    required_documents: list[str] = Field(..., alias="requiredDocuments")
    citation: str

    def to_result(self, grant_id: str) -> AnalysisResult:
        return AnalysisResult(
            grant_id=grant_id,
            match_score=round(self.match_score),
            eligibility_status=self.eligibility_status,
            hard_disqualifiers=self.hard_disqualifiers,
            suitability_reasoning=self.suitability_reasoning,
            required_documents=self.required_documents,
            citation=self.citation,
        )


class GeminiMatchingClient:
    """Calls generateContent once per (profile, grant) pair."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_MODEL,
        temperature: float = 0.1,
        timeout: Optional[float] = None,
        base_url: str = DEFAULT_BASE_URL,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if not api_key:
            raise MissingCredentialError("Matching service API key is not set")
        self._api_key = api_key
        self.model = model
        self.temperature = temperature
        self.url = f"{base_url.rstrip('/')}/models/{model}:generateContent"
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    @classmethod
    def from_config(cls, config: Config, http_client: Optional[httpx.AsyncClient] = None) -> "GeminiMatchingClient":
        return cls(
            api_key=require_api_key(config),
            model=config.gemini_model,
            temperature=config.temperature,
            timeout=config.request_timeout_seconds,
            base_url=config.gemini_base_url,
            http_client=http_client,
        )

    async def __aenter__(self) -> "GeminiMatchingClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def analyze_grant_match(self, profile: BusinessProfile, grant: Grant) -> AnalysisResult:
        """Analyze one grant, degrading to a score-0 Ineligible result on any failure."""
        start = time.monotonic()
        try:
            result = await self.analyze(profile, grant)
        except Exception as exc:
            duration_ms = (time.monotonic() - start) * 1000
            logger.error(
                "match_grant grant=%s result=degraded error=%s duration_ms=%.0f",
                grant.id,
                exc,
                duration_ms,
            )
            return AnalysisResult.degraded(grant.id)

        duration_ms = (time.monotonic() - start) * 1000
        logger.info(
            "match_grant grant=%s result=success score=%d status=%s duration_ms=%.0f",
            grant.id,
            result.match_score,
            result.eligibility_status.value,
            duration_ms,
        )
        return result

    async def analyze(self, profile: BusinessProfile, grant: Grant) -> AnalysisResult:
        """Call the model and validate its verdict.

        Raises:
            MatchingError: On transport errors, non-2xx status, empty or invalid output
        """
        payload = {
            "contents": [{"role": "user", "parts": [{"text": build_match_prompt(profile, grant)}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": ANALYSIS_RESPONSE_SCHEMA,
                "temperature": self.temperature,
            },
        }

        try:
            response = await self._client.post(
                self.url,
                json=payload,
                headers={"x-goog-api-key": self._api_key},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            raise MatchingError(grant.id, f"status={exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise MatchingError(grant.id, f"transport error: {exc!r}") from exc
        except ValueError as exc:
            raise MatchingError(grant.id, "response body is not JSON") from exc

        text = _extract_text(data)
        if not text:
            raise MatchingError(grant.id, "no response from model")

        try:
            verdict = MatchVerdict.model_validate_json(text)
        except ValidationError as exc:
            raise MatchingError(grant.id, f"verdict failed validation: {exc.error_count()} error(s)") from exc

        return verdict.to_result(grant.id)


def _extract_text(data) -> str:
    """Concatenate the text parts of the first candidate; '' when absent."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts if isinstance(part, dict)).strip()
