import pytest
from fastapi.testclient import TestClient

from chattyvn.deps import get_generator, get_optional_generator
from chattyvn.lessons import get_daily_lesson
from chattyvn.main import app
from chattyvn.tutor import ResponseGenerator

from conftest import RecordingHandler, gemini_body


@pytest.fixture
def client():
	fallback_only = ResponseGenerator(client=None)
	app.dependency_overrides[get_generator] = lambda: fallback_only
	app.dependency_overrides[get_optional_generator] = lambda: fallback_only
	try:
		yield TestClient(app)
	finally:
		app.dependency_overrides.clear()


@pytest.fixture
def gemini_api(make_generator):
	def _install(handler):
		generator = make_generator(handler)
		app.dependency_overrides[get_generator] = lambda: generator
		return TestClient(app)
	try:
		yield _install
	finally:
		app.dependency_overrides.clear()


def test_hello_and_info(client):
	assert client.get("/api/hello").json()["message"].startswith("Hello from ChattyVN")
	assert client.get("/info").json() == {"status": "ok", "gemini_configured": False}


def test_daily_lesson_cycles(client):
	assert client.get("/api/lesson/daily").json()["lesson_id"] == "day_1_greetings"
	assert client.get("/api/lesson/daily", params={"day": 3}).json()["lesson_id"] == "day_3_food_ordering"
	assert client.get("/api/lesson/daily", params={"day": 4}).json()["lesson_id"] == "day_1_greetings"


def test_lesson_listing_and_lookup(client):
	assert len(client.get("/api/lessons", params={"level": "a2"}).json()) == 3
	assert client.get("/api/lessons", params={"level": "B2"}).json() == []
	food = client.get("/api/lessons", params={"topic": "food"}).json()
	assert [l["lesson_id"] for l in food] == ["day_3_food_ordering"]
	detail = client.get("/api/lessons/day_2_daily_activities").json()
	assert detail["topic"] == "Daily Activities"
	assert client.get("/api/lessons/nope").status_code == 404


def test_chat_with_lesson_id_in_fallback_mode(client):
	r = client.post("/api/chat", json={"message": "Where do you live?", "lesson_id": "day_1_greetings", "phrase_id": 3})
	assert r.status_code == 200
	body = r.json()
	assert body["response_en"] == "Where are you from?"
	assert body["feedback"]["accuracy"] == 85
	assert body["feedback"]["stars_earned"] == 2
	assert body["response_vi"]


def test_chat_with_inline_context(client):
	context = {
		"topic": "Ordering Food",
		"target_phrases": [{"id": 14, "english": "The bill, please."}],
		"stage": "practice",
	}
	r = client.post("/api/chat", json={"message": "ok", "lesson_context": context})
	assert r.status_code == 200
	assert r.json()["feedback"]["accuracy"] == 60


def test_chat_validation_errors(client):
	assert client.post("/api/chat", json={"message": "  ", "lesson_id": "day_1_greetings"}).status_code == 400
	assert client.post("/api/chat", json={"message": "hello"}).status_code == 400
	assert client.post("/api/chat", json={"message": "hello", "lesson_id": "missing"}).status_code == 404


def test_pronunciation_endpoint(client):
	r = client.post("/api/pronunciation", json={"target": "Hello, nice to meet you!", "attempt": "hello meet you"})
	assert r.status_code == 200
	assert r.json()["score"] == 60
	assert client.post("/api/pronunciation", json={"target": "Hi", "attempt": ""}).status_code == 400


def test_personalized_lesson_unavailable_without_key(client):
	r = client.post("/api/lessons/personalized", json={"weaknesses": ["th sound"], "completed_lessons": []})
	assert r.status_code == 503


def test_personalized_lesson_generation_failed(gemini_api):
	api = gemini_api(RecordingHandler(status_code=500, body={"error": "boom"}))
	r = api.post("/api/lessons/personalized", json={"weaknesses": ["th sound"]})
	assert r.status_code == 502


def test_chat_with_gemini_reply(gemini_api):
	api = gemini_api(RecordingHandler(body=gemini_body({
		"response_vi": "Gần đúng! Chú ý âm 'th' nhé",
		"response_en": "Thank you very much.",
		"accuracy": 78,
		"pronunciation_tips": ["Đặt lưỡi giữa răng"],
	})))
	r = api.post("/api/chat", json={"message": "tank you", "lesson_id": "day_1_greetings", "level": "a2"})
	assert r.status_code == 200
	body = r.json()
	assert body["feedback"]["accuracy"] == 78
	assert body["feedback"]["stars_earned"] == 2
	assert body["feedback"]["grammar_correction"] is None


def test_info_before_startup_reports_status():
	# No generator on app.state yet: /info must not fail
	r = TestClient(app).get("/info")
	assert r.status_code == 200
	body = r.json()
	assert body["status"] == "starting"
	assert isinstance(body["gemini_configured"], bool)


def test_daily_lesson_wraps_for_non_positive_days(client):
	assert get_daily_lesson(0).lesson_id == "day_3_food_ordering"
	assert get_daily_lesson(-1).lesson_id == "day_2_daily_activities"
	assert client.get("/api/lesson/daily", params={"day": 0}).json()["lesson_id"] == "day_3_food_ordering"


def test_personalized_lesson_success(gemini_api):
	api = gemini_api(RecordingHandler(body=gemini_body({
		"lesson_id": "personalized_th01",
		"topic": "The TH sound",
		"intro_vi": "Hôm nay luyện âm 'th'.",
		"target_phrases": [
			{"english": "Thank you.", "vietnamese": "Cảm ơn.", "phonetic": "/θæŋk ju/", "difficulty": "easy"},
			{"english": "I think so.", "vietnamese": "Tôi nghĩ vậy.", "phonetic": "/aɪ θɪŋk soʊ/", "difficulty": "medium"},
			{"english": "This is my brother.", "vietnamese": "Đây là anh trai tôi.", "phonetic": "/ðɪs ɪz maɪ ˈbrʌðər/", "difficulty": "hard"},
		],
	})))
	r = api.post("/api/lessons/personalized", json={"weaknesses": ["th sound"], "completed_lessons": ["day_1_greetings"], "level": "b1"})
	assert r.status_code == 200
	body = r.json()
	assert body["level"] == "B1"
	assert body["lesson_id"] == "personalized_th01"
	assert len(body["target_phrases"]) == 3


def test_cors_preflight_on_api_routes(client):
	r = client.options(
		"/api/chat",
		headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"},
	)
	assert r.status_code == 200
	assert r.headers["access-control-allow-origin"] in ("*", "http://localhost:5173")


def test_cors_header_on_simple_request(client):
	r = client.get("/api/hello", headers={"Origin": "http://localhost:5173"})
	assert r.headers["access-control-allow-origin"] in ("*", "http://localhost:5173")
