import logging
from typing import Any, Dict, Optional

import httpx

from guidance.config import Settings
from guidance.exceptions import InvalidRequest, UpstreamError

logger = logging.getLogger(__name__)


class GeminiService:
    """Proxy to the Gemini generateContent endpoint.

    The API key stays on the server: it is only ever placed into the outbound
    URL and is redacted from anything that gets logged.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = settings.gemini_api_key
        self.api_url = settings.gemini_api_url
        self.model = settings.gemini_model
        self.timeout = settings.upstream_timeout
        self._transport = transport

    def _endpoint(self) -> str:
        # the key travels in a header only; URLs end up in httpx request logs
        return self.api_url.format(model=self.model)

    def _redact(self, value: str) -> str:
        if self.api_key:
            return value.replace(self.api_key, "***")
        return value

    async def generate(self, prompt: Any) -> Dict[str, Any]:
        """
        Send a single-turn prompt and return the upstream payload as-is.

        The payload is the raw generateContent response (a list of
        candidates, each with content parts); no text cleaning happens here.
        """
        if not isinstance(prompt, str) or not prompt:
            raise InvalidRequest("Prompt is required.")

        if not self.api_key:
            logger.error("GEMINI_API_KEY is not configured; refusing to call upstream")
            raise UpstreamError("Gemini API key is not configured")

        body = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self._endpoint(),
                    headers={
                        "Content-Type": "application/json",
                        "x-goog-api-key": self.api_key,
                    },
                    json=body,
                )
        except httpx.HTTPError as e:
            logger.error("Gemini API unreachable: %s", self._redact(str(e)))
            raise UpstreamError("Gemini API unreachable", body=self._redact(str(e))) from e

        if not response.is_success:
            error_body = self._redact(response.text)
            logger.error("Gemini API Error: status=%s body=%s", response.status_code, error_body)
            raise UpstreamError("Gemini API failed", status_code=response.status_code, body=error_body)

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Gemini API returned non-JSON body (status=%s)", response.status_code)
            raise UpstreamError("Gemini API returned invalid JSON", status_code=response.status_code) from e

        logger.info(
            "Gemini completion ok: prompt_len=%s candidates=%s",
            len(prompt),
            len(data.get("candidates") or []) if isinstance(data, dict) else "n/a",
        )
        return data
