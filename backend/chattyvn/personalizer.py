from __future__ import annotations
from typing import Iterable, List, Optional

from .schemas import LEVELS, LessonDefinition
from .tutor import ResponseGenerator


def _clean(items: Optional[Iterable[str]]) -> List[str]:
	seen: List[str] = []
	for item in items or []:
		text = str(item or "").strip()
		if text and text not in seen:
			seen.append(text)
	return seen


async def personalize_lesson(
	generator: ResponseGenerator,
	weaknesses: Optional[Iterable[str]],
	completed_lessons: Optional[Iterable[str]],
	level: Optional[str] = None,
) -> Optional[LessonDefinition]:
	# PersonalizationUnavailable from the generator propagates to the caller
	level = (level or "A2").strip().upper()
	if level not in LEVELS:
		level = "A2"
	return await generator.generate_personalized_lesson(
		_clean(weaknesses),
		_clean(completed_lessons),
		level,
	)
