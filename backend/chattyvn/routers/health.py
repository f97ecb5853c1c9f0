from typing import Optional

from fastapi import APIRouter, Depends

from ..deps import get_optional_generator
from ..settings import settings
from ..tutor import ResponseGenerator

router = APIRouter(tags=["health"])


@router.get("/api/hello")
def hello():
	return {"message": "Hello from ChattyVN AI English Tutor!"}


@router.get("/info")
def info(generator: Optional[ResponseGenerator] = Depends(get_optional_generator)):
	if generator is None:
		# Before startup, report what the configuration will give
		return {"status": "starting", "gemini_configured": bool(settings.gemini_api_key)}
	return {"status": "ok", "gemini_configured": generator.ready}
