import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .settings import settings
from .tutor import ResponseGenerator
from .routers import health, chat
from .routers import lessons

logging.basicConfig(
	level=settings.log_level.upper(),
	format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="ChattyVN Tutor API")
app.include_router(health.router)
app.include_router(chat.router)
app.include_router(lessons.router)

app.add_middleware(
	CORSMiddleware,
	allow_origins=settings.cors_origin_list,
	allow_methods=["*"],
	allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
	# Readiness is decided once; a missing key keeps the process in fallback mode
	app.state.generator = ResponseGenerator.from_settings(settings)


@app.on_event("shutdown")
async def shutdown_event():
	generator = getattr(app.state, "generator", None)
	if generator is not None:
		await generator.aclose()
