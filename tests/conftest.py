import asyncio
import json

import httpx
import pytest

from chattyvn.gemini_client import GeminiClient
from chattyvn.lessons import build_lesson_context, get_lesson_by_id
from chattyvn.settings import Settings
from chattyvn.tutor import ResponseGenerator


def gemini_body(payload) -> dict:
	text = payload if isinstance(payload, str) else json.dumps(payload, ensure_ascii=False)
	return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class RecordingHandler:
	"""httpx.MockTransport handler that replays one canned response and keeps requests."""

	def __init__(self, status_code=200, body=None, exc=None):
		self.status_code = status_code
		self.body = body
		self.exc = exc
		self.requests = []

	def __call__(self, request: httpx.Request) -> httpx.Response:
		self.requests.append(request)
		if self.exc is not None:
			raise self.exc
		if isinstance(self.body, str):
			return httpx.Response(self.status_code, text=self.body)
		return httpx.Response(self.status_code, json=self.body)

	@property
	def last_payload(self) -> dict:
		return json.loads(self.requests[-1].content)


@pytest.fixture
def test_settings():
	return Settings(GEMINI_API_KEY="test-key", _env_file=None)


@pytest.fixture
def make_generator(test_settings):
	generators = []

	def _make(handler):
		client = GeminiClient(config=test_settings, transport=httpx.MockTransport(handler))
		generator = ResponseGenerator(client=client)
		generators.append(generator)
		return generator

	yield _make

	async def _close_all():
		for generator in generators:
			await generator.aclose()

	asyncio.run(_close_all())


@pytest.fixture
def greetings_context():
	return build_lesson_context(get_lesson_by_id("day_1_greetings"))
