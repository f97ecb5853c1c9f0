"""
Heuristic Scoring
=================

Deterministic scoring used when the generation service is not configured.
Nothing here calls out of the process, so results are stable across runs.

Two independent heuristics live here:
- ``score`` compares a target sentence with a learner's attempt token by token
  (pronunciation practice).
- ``generate_fallback_feedback`` picks one of three canned replies for the
  conversational flow from a keyword check and a length check.
"""

from __future__ import annotations

import string
from typing import Dict, List, Optional

from .rewards import stars
from .schemas import Feedback, FeedbackResult, LessonContext, PronunciationResult


SCORE_FLOOR = 40
SCORE_CEILING = 90
# Messages shorter than this (after stripping) are treated as too short to judge
SHORT_MESSAGE_CHARS = 5

_FALLBACK_REPLIES: Dict[str, Dict[str, object]] = {
	"matched": {
		"accuracy": 85,
		"response_vi": "Tuyệt vời! Bạn đã dùng đúng từ khóa của câu mẫu! ⭐",
		"tips": [
			"Nhớ phát âm rõ âm cuối của từng từ",
			"Thử nói cả câu với nhịp điệu tự nhiên hơn",
		],
	},
	"unmatched": {
		"accuracy": 70,
		"response_vi": "Tốt lắm! Hãy thử nói theo câu mẫu của bài học nhé!",
		"tips": [
			"Nghe lại câu mẫu và nhắc lại từng cụm từ",
			"Chú ý phát âm từng từ một",
		],
	},
	"too_short": {
		"accuracy": 60,
		"response_vi": "Bạn nói hơi ngắn! Hãy thử nói một câu đầy đủ hơn nhé!",
		"tips": [
			"Hãy nói trọn câu thay vì một từ",
			"Nói chậm và rõ ràng",
		],
	},
}

_DEFAULT_RESPONSE_EN = "Keep practicing!"


def _tokens(text: str) -> List[str]:
	return (text or "").lower().split()


def score(target: str, attempt: str) -> int:
	"""Approximate accuracy of ``attempt`` against ``target``.

	A target token counts as matched when some attempt token is a substring of
	it or contains it, regardless of order. The ratio is clamped to 40-90 so a
	fallback never claims a perfect or a failed attempt. An empty target scores
	the floor.
	"""
	target_tokens = _tokens(target)
	if not target_tokens:
		return SCORE_FLOOR
	attempt_tokens = set(_tokens(attempt))
	matches = 0
	for t in target_tokens:
		if any(a in t or t in a for a in attempt_tokens):
			matches += 1
	raw = matches / len(target_tokens) * 100
	return int(max(SCORE_FLOOR, min(raw, SCORE_CEILING)))


def _first_word(sentence: str) -> Optional[str]:
	words = (sentence or "").split()
	if not words:
		return None
	word = words[0].strip(string.punctuation).lower()
	return word or None


def _model_sentence(lesson_context: LessonContext) -> str:
	if lesson_context.current_target is not None and lesson_context.current_target.english:
		return lesson_context.current_target.english
	for phrase in lesson_context.target_phrases:
		if phrase.english:
			return phrase.english
	return _DEFAULT_RESPONSE_EN


def generate_fallback_feedback(message: str, lesson_context: LessonContext) -> FeedbackResult:
	text = (message or "").strip()
	lowered = text.lower()
	keyword_hit = False
	for phrase in lesson_context.target_phrases:
		word = _first_word(phrase.english)
		if word and word in lowered:
			keyword_hit = True
			break
	outcome = "matched" if keyword_hit else "unmatched"
	# Length check runs last and wins over the keyword check
	if len(text) < SHORT_MESSAGE_CHARS:
		outcome = "too_short"
	reply = _FALLBACK_REPLIES[outcome]
	accuracy = int(reply["accuracy"])
	return FeedbackResult(
		response_vi=str(reply["response_vi"]),
		response_en=_model_sentence(lesson_context),
		feedback=Feedback(
			accuracy=accuracy,
			pronunciation_tips=list(reply["tips"]),
			stars_earned=stars(accuracy),
		),
	)


def fallback_pronunciation(target: str, attempt: str) -> PronunciationResult:
	value = score(target, attempt)
	if value >= 80:
		feedback_vi = "Rất tốt! Bạn đã nói gần đúng toàn bộ câu!"
		tips = ["Giữ nhịp điệu và trọng âm tự nhiên"]
	elif value >= 60:
		feedback_vi = "Khá tốt! Một vài từ còn thiếu, hãy thử lại nhé!"
		tips = ["Nghe lại câu mẫu và chú ý các từ bị thiếu", "Phát âm rõ âm cuối"]
	else:
		feedback_vi = "Cố gắng lên! Hãy nghe câu mẫu rồi nhắc lại từng từ."
		tips = ["Nói chậm và rõ ràng từng từ", "Chia câu thành từng cụm ngắn để luyện"]
	return PronunciationResult(score=value, feedback_vi=feedback_vi, tips=tips)
