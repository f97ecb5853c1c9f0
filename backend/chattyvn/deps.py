from typing import Optional

from fastapi import HTTPException, Request

from .tutor import ResponseGenerator


def get_optional_generator(request: Request) -> Optional[ResponseGenerator]:
	return getattr(request.app.state, "generator", None)


def get_generator(request: Request) -> ResponseGenerator:
	generator = get_optional_generator(request)
	if generator is None:
		raise HTTPException(status_code=503, detail="tutor is not initialized")
	return generator
