from __future__ import annotations
import logging
import httpx
from typing import Any, Dict, Optional
from .settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class GeminiResponseError(RuntimeError):
	"""The service answered, but the body carried no usable text candidate."""


class GeminiClient:
	def __init__(
		self,
		api_key: Optional[str] = None,
		*,
		config: Optional[Settings] = None,
		base_url: Optional[str] = None,
		model: Optional[str] = None,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		config = config or default_settings
		self.api_key = api_key or config.gemini_api_key
		if not self.api_key:
			raise ValueError("GEMINI_API_KEY is not configured")
		self.model = model or config.gemini_model
		self.provider = config.gemini_provider
		self.max_output_tokens = config.gemini_max_output_tokens
		self.thinking_budget = config.gemini_thinking_budget
		if self.provider == "vertex":
			region = config.vertex_region
			project = config.vertex_project or "placeholder-project"
			# Vertex AI Generative REST endpoint (API key via header)
			self.base_url = base_url or (
				f"https://{region}-aiplatform.googleapis.com/v1/projects/{project}/locations/{region}/publishers/google/models/{self.model}:generateContent"
			)
			self._auth_in_query = False
		else:
			# Google AI Studio (Generative Language API)
			self.base_url = base_url or f"https://generativelanguage.googleapis.com/v1beta/models/{self.model}:generateContent"
			self._auth_in_query = True
		self._client = httpx.AsyncClient(timeout=config.gemini_timeout_seconds, transport=transport)

	async def generate_json(
		self,
		user_prompt: str,
		*,
		system_prompt: Optional[str] = None,
		temperature: float = 0.7,
		max_output_tokens: Optional[int] = None,
	) -> str:
		"""Request a JSON-only reply and return the raw text of the first candidate.

		Network and HTTP errors propagate as httpx exceptions; a body without a
		text candidate raises GeminiResponseError. No retry is attempted.
		"""
		payload: Dict[str, Any] = {
			"contents": [{"role": "user", "parts": [{"text": user_prompt}]}],
			"generationConfig": {
				"temperature": temperature,
				"maxOutputTokens": max_output_tokens or self.max_output_tokens,
				"responseMimeType": "application/json",
			},
		}
		if self.thinking_budget is not None:
			payload["generationConfig"]["thinkingConfig"] = {"thinkingBudget": self.thinking_budget}
		if system_prompt:
			payload["systemInstruction"] = {"parts": [{"text": system_prompt}]}
		return await self._post_payload(payload)

	async def _post_payload(self, payload: Dict[str, Any]) -> str:
		params: Dict[str, Any] = {}
		headers: Dict[str, str] = {}
		if self._auth_in_query:
			params["key"] = self.api_key
		else:
			headers["x-goog-api-key"] = self.api_key
		r = await self._client.post(self.base_url, params=params, headers=headers, json=payload)
		r.raise_for_status()
		try:
			data = r.json()
			return data["candidates"][0]["content"]["parts"][0]["text"]
		except (ValueError, KeyError, IndexError, TypeError) as err:
			logger.debug("Unexpected Gemini body: %s", r.text[:500])
			raise GeminiResponseError(f"Unexpected Gemini response: {r.text[:200]}") from err

	async def aclose(self) -> None:
		await self._client.aclose()
