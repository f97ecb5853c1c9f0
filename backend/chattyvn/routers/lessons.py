from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from ..deps import get_generator
from ..lessons import LESSONS, get_daily_lesson, get_lesson_by_id, get_lessons_by_level, search_lessons_by_topic
from ..personalizer import personalize_lesson
from ..schemas import Lesson, LessonDefinition
from ..tutor import PersonalizationUnavailable, ResponseGenerator


router = APIRouter(prefix="/api", tags=["lessons"])


class PersonalizedLessonRequest(BaseModel):
	weaknesses: List[str] = Field(default_factory=list)
	completed_lessons: List[str] = Field(default_factory=list)
	level: Optional[str] = "A2"


@router.get("/lesson/daily", response_model=Lesson)
def daily_lesson(day: int = Query(default=1)):
	lesson = get_daily_lesson(day)
	if lesson is None:
		raise HTTPException(status_code=404, detail="No lessons available")
	return lesson


@router.get("/lessons", response_model=List[Lesson])
def list_lessons(level: Optional[str] = None, topic: Optional[str] = None):
	lessons = list(LESSONS.values())
	if level:
		by_level = {l.lesson_id for l in get_lessons_by_level(level.strip().upper())}
		lessons = [l for l in lessons if l.lesson_id in by_level]
	if topic:
		by_topic = {l.lesson_id for l in search_lessons_by_topic(topic)}
		lessons = [l for l in lessons if l.lesson_id in by_topic]
	return lessons


@router.get("/lessons/{lesson_id}", response_model=Lesson)
def lesson_detail(lesson_id: str):
	lesson = get_lesson_by_id(lesson_id)
	if lesson is None:
		raise HTTPException(status_code=404, detail="Lesson not found")
	return lesson


@router.post("/lessons/personalized", response_model=LessonDefinition)
async def personalized_lesson(req: PersonalizedLessonRequest, generator: ResponseGenerator = Depends(get_generator)):
	try:
		lesson = await personalize_lesson(generator, req.weaknesses, req.completed_lessons, req.level)
	except PersonalizationUnavailable as e:
		raise HTTPException(status_code=503, detail=str(e))
	if lesson is None:
		raise HTTPException(status_code=502, detail="Personalized lesson could not be generated")
	return lesson
