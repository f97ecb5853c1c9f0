from __future__ import annotations
from typing import Optional, Union

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..deps import get_generator
from ..lessons import build_lesson_context, get_lesson_by_id
from ..schemas import FeedbackResult, LessonContext, PronunciationResult
from ..tutor import ResponseGenerator


router = APIRouter(prefix="/api", tags=["chat"])

# Guard against oversized prompts
MAX_MESSAGE_CHARS = 2000


class ChatRequest(BaseModel):
	message: str = ""
	# Either a full context, or a catalog lesson id to build one from
	lesson_context: Optional[LessonContext] = None
	lesson_id: Optional[str] = None
	phrase_id: Optional[Union[int, str]] = None
	stage: str = "practice"
	level: str = "A2"


class PronunciationRequest(BaseModel):
	target: str = ""
	attempt: str = ""
	difficulty: str = Field(default="easy")


def _resolve_context(req: ChatRequest) -> LessonContext:
	if req.lesson_context is not None:
		return req.lesson_context
	if not req.lesson_id:
		raise HTTPException(status_code=400, detail="lesson_context or lesson_id is required")
	lesson = get_lesson_by_id(req.lesson_id)
	if lesson is None:
		raise HTTPException(status_code=404, detail="Lesson not found")
	return build_lesson_context(lesson, req.phrase_id, req.stage)


@router.post("/chat", response_model=FeedbackResult)
async def chat(req: ChatRequest, generator: ResponseGenerator = Depends(get_generator)):
	message = (req.message or "").strip()
	if not message:
		raise HTTPException(status_code=400, detail="message is required")
	context = _resolve_context(req)
	level = (req.level or "A2").strip().upper()
	return await generator.handle_conversation(message[:MAX_MESSAGE_CHARS], context, level)


@router.post("/pronunciation", response_model=PronunciationResult)
async def pronunciation(req: PronunciationRequest, generator: ResponseGenerator = Depends(get_generator)):
	target = (req.target or "").strip()
	attempt = (req.attempt or "").strip()
	if not target or not attempt:
		raise HTTPException(status_code=400, detail="target and attempt are required")
	return await generator.evaluate_pronunciation(
		target,
		attempt[:MAX_MESSAGE_CHARS],
		(req.difficulty or "easy").strip().lower(),
	)
