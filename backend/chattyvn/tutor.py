"""
Response Generation
===================

Turns a learner's utterance plus lesson context into a ``FeedbackResult``.

The generation service is asked for a JSON reply with a fixed field set. Two
fallback tiers keep the learner supplied with usable feedback:

1. Field level: the reply arrived but is not valid JSON or lacks fields. Each
   missing field gets its default; the call still succeeds.
2. Whole response: the call failed (network, timeout, HTTP status, empty body).
   A fixed canned ``FeedbackResult`` is returned.

Without a configured credential the generator never calls out and uses the
deterministic heuristics from ``scoring`` instead.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from . import scoring
from .gemini_client import GeminiClient, GeminiResponseError
from .generation import GenerationResult, GenerationStatus, extract_json_block
from .prompts import (
	build_lesson_prompt,
	build_pronunciation_prompt,
	build_system_prompt,
	build_user_prompt,
)
from .rewards import stars
from .schemas import (
	Feedback,
	FeedbackResult,
	LessonContext,
	LessonDefinition,
	PronunciationResult,
)
from .settings import Settings


logger = logging.getLogger(__name__)

CONVERSATION_TEMPERATURE = 0.7
PRONUNCIATION_TEMPERATURE = 0.3
LESSON_TEMPERATURE = 0.8
CONVERSATION_MAX_TOKENS = 500
LESSON_MAX_TOKENS = 1200
MAX_LESSON_PHRASES = 5

# Field-level defaults when the reply is unparseable or incomplete
DEFAULT_RESPONSE_VI = "Tốt lắm! Hãy tiếp tục luyện tập!"
DEFAULT_RESPONSE_EN = "Good job!"
DEFAULT_ACCURACY = 75
DEFAULT_PRONUNCIATION_SCORE = 70
DEFAULT_PRONUNCIATION_FEEDBACK = "Tốt! Hãy thử lại để cải thiện thêm nhé!"

# Whole-response fallbacks when the call itself fails
FALLBACK_ACCURACY = 70
FALLBACK_RESPONSE_VI = "Tốt lắm! Hãy tiếp tục luyện tập nhé! 💪"
FALLBACK_RESPONSE_EN = "Keep practicing!"
FALLBACK_TIPS = ["Hãy nói chậm và rõ ràng", "Chú ý phát âm từng từ một"]
FALLBACK_PRONUNCIATION_TIPS = ["Nói chậm và rõ ràng từng từ"]


class PersonalizationUnavailable(RuntimeError):
	"""Lesson generation needs the generation service and none is configured."""


def fallback_feedback() -> FeedbackResult:
	return FeedbackResult(
		response_vi=FALLBACK_RESPONSE_VI,
		response_en=FALLBACK_RESPONSE_EN,
		feedback=Feedback(
			accuracy=FALLBACK_ACCURACY,
			pronunciation_tips=list(FALLBACK_TIPS),
			stars_earned=stars(FALLBACK_ACCURACY),
		),
	)


def fallback_pronunciation_result() -> PronunciationResult:
	return PronunciationResult(
		score=DEFAULT_PRONUNCIATION_SCORE,
		feedback_vi=DEFAULT_PRONUNCIATION_FEEDBACK,
		tips=list(FALLBACK_PRONUNCIATION_TIPS),
	)


# ============================================================================
# FIELD NORMALIZATION
# ============================================================================

def _clamp_score(value: Any, default: int) -> int:
	"""Coerce a model-provided score to an int in 0-100, or ``default``."""
	if isinstance(value, bool) or value is None:
		return default
	try:
		number = float(str(value).strip().rstrip("%"))
	except (TypeError, ValueError):
		return default
	if number != number:  # NaN
		return default
	return int(round(max(0.0, min(number, 100.0))))


def _text(value: Any) -> Optional[str]:
	if not isinstance(value, str):
		return None
	return value.strip() or None


def _text_list(value: Any) -> List[str]:
	if isinstance(value, str):
		value = [value]
	if not isinstance(value, list):
		return []
	return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def normalize_feedback(data: Dict[str, Any]) -> FeedbackResult:
	accuracy = _clamp_score(data.get("accuracy"), DEFAULT_ACCURACY)
	return FeedbackResult(
		response_vi=_text(data.get("response_vi")) or DEFAULT_RESPONSE_VI,
		response_en=_text(data.get("response_en")) or DEFAULT_RESPONSE_EN,
		feedback=Feedback(
			accuracy=accuracy,
			pronunciation_tips=_text_list(data.get("pronunciation_tips")),
			# Always derived locally; a star count in the reply is ignored
			stars_earned=stars(accuracy),
			grammar_correction=_text(data.get("grammar_correction")),
			cultural_note=_text(data.get("cultural_note")),
		),
	)


def normalize_pronunciation(data: Dict[str, Any]) -> PronunciationResult:
	return PronunciationResult(
		score=_clamp_score(data.get("score"), DEFAULT_PRONUNCIATION_SCORE),
		feedback_vi=_text(data.get("feedback_vi")) or DEFAULT_PRONUNCIATION_FEEDBACK,
		tips=_text_list(data.get("tips")),
	)


def normalize_lesson(data: Dict[str, Any], level: str) -> LessonDefinition:
	"""Validate a generated lesson; raises ValidationError when unusable."""
	phrases = data.get("target_phrases")
	if isinstance(phrases, list):
		phrases = phrases[:MAX_LESSON_PHRASES]
	lesson_id = _text(data.get("lesson_id"))
	if not lesson_id or not lesson_id.startswith("personalized_"):
		lesson_id = f"personalized_{uuid.uuid4().hex[:8]}"
	return LessonDefinition(
		lesson_id=lesson_id,
		level=level,
		topic=_text(data.get("topic")) or "",
		intro_vi=_text(data.get("intro_vi")) or "",
		target_phrases=phrases if phrases is not None else [],
		cultural_context=_text(data.get("cultural_context")),
	)


# ============================================================================
# GENERATOR
# ============================================================================

class ResponseGenerator:
	def __init__(self, client: Optional[GeminiClient] = None) -> None:
		self._client = client

	@classmethod
	def from_settings(cls, config: Settings) -> "ResponseGenerator":
		if not config.gemini_api_key:
			logger.warning("GEMINI_API_KEY not set; tutor runs in heuristic fallback mode")
			return cls(client=None)
		logger.info("Tutor using Gemini model %s via %s", config.gemini_model, config.gemini_provider)
		return cls(client=GeminiClient(config=config))

	@property
	def ready(self) -> bool:
		return self._client is not None

	async def aclose(self) -> None:
		if self._client is not None:
			await self._client.aclose()

	async def _request(
		self,
		user_prompt: str,
		*,
		system_prompt: Optional[str] = None,
		temperature: float,
		max_output_tokens: Optional[int] = None,
	) -> GenerationResult:
		if self._client is None:
			raise RuntimeError("generation service is not configured")
		try:
			raw = await self._client.generate_json(
				user_prompt,
				system_prompt=system_prompt,
				temperature=temperature,
				max_output_tokens=max_output_tokens,
			)
		except (httpx.HTTPError, GeminiResponseError) as err:
			logger.warning("Gemini call failed: %s", err)
			return GenerationResult.transport_failure(str(err))
		try:
			return GenerationResult.ok(extract_json_block(raw))
		except ValueError as err:
			logger.info("Gemini reply was not a JSON object: %s", err)
			return GenerationResult.parse_failure(str(err))

	async def handle_conversation(
		self,
		message: str,
		lesson_context: LessonContext,
		level: str = "A2",
	) -> FeedbackResult:
		if not self.ready:
			return scoring.generate_fallback_feedback(message, lesson_context)
		result = await self._request(
			build_user_prompt(message, lesson_context),
			system_prompt=build_system_prompt(level, lesson_context),
			temperature=CONVERSATION_TEMPERATURE,
			max_output_tokens=CONVERSATION_MAX_TOKENS,
		)
		if result.transport_failed:
			return fallback_feedback()
		# Parse failures carry an empty record, so every field takes its default
		return normalize_feedback(result.data)

	async def evaluate_pronunciation(
		self,
		target: str,
		attempt: str,
		difficulty: str = "easy",
	) -> PronunciationResult:
		if not self.ready:
			return scoring.fallback_pronunciation(target, attempt)
		result = await self._request(
			build_pronunciation_prompt(target, attempt, difficulty),
			temperature=PRONUNCIATION_TEMPERATURE,
		)
		if result.transport_failed:
			return fallback_pronunciation_result()
		return normalize_pronunciation(result.data)

	async def generate_personalized_lesson(
		self,
		weaknesses: List[str],
		completed_lessons: List[str],
		level: str,
	) -> Optional[LessonDefinition]:
		"""Ask the model for a new lesson targeting ``weaknesses``.

		Returns None when the call fails or the reply is not a usable lesson.

		Raises:
			PersonalizationUnavailable: If no generation service is configured
		"""
		if not self.ready:
			raise PersonalizationUnavailable("lesson generation requires GEMINI_API_KEY")
		result = await self._request(
			build_lesson_prompt(weaknesses, completed_lessons, level),
			temperature=LESSON_TEMPERATURE,
			max_output_tokens=LESSON_MAX_TOKENS,
		)
		if result.status is not GenerationStatus.OK:
			return None
		try:
			return normalize_lesson(result.data, level)
		except ValidationError as err:
			logger.info("Generated lesson rejected: %s", err.errors()[:3])
			return None
