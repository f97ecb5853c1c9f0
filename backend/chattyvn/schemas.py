from __future__ import annotations
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


LEVELS: List[str] = ["A1", "A2", "B1", "B2", "C1", "C2"]

Difficulty = Literal["easy", "medium", "hard"]


class Phrase(BaseModel):
	model_config = ConfigDict(frozen=True)

	id: Union[int, str]
	english: str
	vietnamese: str = ""
	phonetic: str = ""
	difficulty: Difficulty = "easy"
	common_mistakes: List[str] = Field(default_factory=list)


class LessonContext(BaseModel):
	"""What the tutor knows about the lesson a learner is practising.

	Supplied by the lesson catalog or by the caller; never mutated.
	"""
	model_config = ConfigDict(frozen=True)

	topic: Optional[str] = None
	target_phrases: List[Phrase] = Field(default_factory=list)
	stage: str = "practice"
	current_target: Optional[Phrase] = None


class Feedback(BaseModel):
	accuracy: int = Field(ge=0, le=100)
	pronunciation_tips: List[str] = Field(default_factory=list)
	stars_earned: int = Field(ge=0, le=3)
	grammar_correction: Optional[str] = None
	cultural_note: Optional[str] = None


class FeedbackResult(BaseModel):
	response_vi: str = Field(min_length=1)
	response_en: str
	feedback: Feedback


class PronunciationResult(BaseModel):
	score: int = Field(ge=0, le=100)
	feedback_vi: str
	tips: List[str] = Field(default_factory=list)


class Lesson(BaseModel):
	model_config = ConfigDict(frozen=True)

	lesson_id: str
	level: Literal["A1", "A2", "B1", "B2"]
	topic: str
	intro_vi: str
	target_phrases: List[Phrase]
	cultural_context: Optional[str] = None
	vietnamese_challenges: List[str] = Field(default_factory=list)


class GeneratedPhrase(BaseModel):
	english: str = Field(min_length=1)
	vietnamese: str = ""
	phonetic: str = ""
	difficulty: Difficulty = "medium"

	@field_validator("difficulty", mode="before")
	@classmethod
	def _coerce_difficulty(cls, value):
		# Models often answer "easy/medium" or "Hard"
		text = str(value or "").strip().lower()
		return text if text in ("easy", "medium", "hard") else "medium"


class LessonDefinition(BaseModel):
	lesson_id: str
	level: str
	topic: str = Field(min_length=1)
	intro_vi: str = ""
	target_phrases: List[GeneratedPhrase] = Field(min_length=3, max_length=5)
	cultural_context: Optional[str] = None
