"""Read-only lesson catalog for Vietnamese learners of English."""

from __future__ import annotations
from typing import Dict, List, Optional, Union

from .schemas import Lesson, LessonContext, Phrase


def _phrase(id: int, english: str, vietnamese: str, phonetic: str, difficulty: str, mistakes: List[str]) -> Phrase:
	return Phrase(
		id=id,
		english=english,
		vietnamese=vietnamese,
		phonetic=phonetic,
		difficulty=difficulty,
		common_mistakes=mistakes,
	)


LESSONS: Dict[str, Lesson] = {
	"day_1_greetings": Lesson(
		lesson_id="day_1_greetings",
		level="A2",
		topic="Greetings & Introductions",
		intro_vi="Chào mừng đến với ChattyVN! Hôm nay chúng ta sẽ học cách chào hỏi và giới thiệu bản thân một cách tự nhiên. Đây là những câu bạn sẽ dùng hàng ngày!",
		target_phrases=[
			_phrase(1, "Hello, nice to meet you!", "Xin chào, rất vui được gặp bạn!", "/həˈloʊ naɪs tu mit yu/", "easy",
				["Phát âm 'nice' thành /naɪt/", "Quên âm cuối 'you'"]),
			_phrase(2, "My name is John.", "Tên tôi là John.", "/maɪ neɪm ɪz dʒɑn/", "easy",
				["Nhấn sai trọng âm trong 'name'"]),
			_phrase(3, "Where are you from?", "Bạn đến từ đâu?", "/wɛr ɑr yu frʌm/", "medium",
				["Phát âm 'where' thành 'were'", "Quên âm /r/ cuối 'are'"]),
			_phrase(4, "I'm from Vietnam.", "Tôi đến từ Việt Nam.", "/aɪm frʌm viˈɛtnɑm/", "easy",
				["Nhấn trọng âm sai ở 'Vietnam'"]),
			_phrase(5, "Have a great day!", "Chúc bạn một ngày tuyệt vời!", "/hæv ə greɪt deɪ/", "medium",
				["Phát âm 'have' thành /həv/", "Nối âm giữa các từ"]),
		],
		cultural_context="Trong văn hóa phương Tây, việc chào hỏi thường ngắn gọn hơn Việt Nam. Không cần hỏi 'ăn cơm chưa?' mà chỉ cần 'How are you?' là đủ.",
		vietnamese_challenges=[
			"Âm /θ/ trong 'thank' - đặt lưỡi giữa răng",
			"Âm cuối trong tiếng Anh phải phát âm rõ",
			"Trọng âm từ khác với tiếng Việt",
		],
	),
	"day_2_daily_activities": Lesson(
		lesson_id="day_2_daily_activities",
		level="A2",
		topic="Daily Activities",
		intro_vi="Hôm nay chúng ta học cách nói về các hoạt động hàng ngày. Đây là những câu bạn sẽ dùng để kể về cuộc sống của mình!",
		target_phrases=[
			_phrase(6, "I wake up at 7 AM.", "Tôi thức dậy lúc 7 giờ sáng.", "/aɪ weɪk ʌp æt ˈsɛvən eɪ ɛm/", "easy",
				["Phát âm 'wake' thành 'work'"]),
			_phrase(7, "I have breakfast with my family.", "Tôi ăn sáng cùng gia đình.", "/aɪ hæv ˈbrɛkfəst wɪθ maɪ ˈfæməli/", "medium",
				["Âm /θ/ trong 'with'", "Phát âm 'breakfast'"]),
			_phrase(8, "I go to work by motorbike.", "Tôi đi làm bằng xe máy.", "/aɪ goʊ tu wɜrk baɪ ˈmoʊtərˌbaɪk/", "medium",
				["Nối âm 'go to'", "Trọng âm 'motorbike'"]),
			_phrase(9, "I finish work at 5 PM.", "Tôi tan làm lúc 5 giờ chiều.", "/aɪ ˈfɪnɪʃ wɜrk æt faɪv pi ɛm/", "easy",
				["Âm /ʃ/ cuối 'finish'"]),
			_phrase(10, "I watch TV after dinner.", "Tôi xem TV sau bữa tối.", "/aɪ wɑtʃ ti vi ˈæftər ˈdɪnər/", "medium",
				["Phát âm 'watch' vs 'wash'", "Âm /r/ cuối 'after'"]),
		],
		cultural_context="Người phương Tây thường có lịch trình cố định và đúng giờ hơn. Việc nói về thời gian cụ thể rất quan trọng trong giao tiếp.",
		vietnamese_challenges=[
			"Thì hiện tại đơn với 'I' không cần chia động từ",
			"Giới từ thời gian: 'at' cho giờ, 'on' cho ngày",
			"Âm cuối phải phát âm rõ ràng",
		],
	),
	"day_3_food_ordering": Lesson(
		lesson_id="day_3_food_ordering",
		level="A2",
		topic="Ordering Food",
		intro_vi="Học cách gọi món ăn tại nhà hàng! Những câu này rất hữu ích khi bạn du lịch hoặc ăn tại các nhà hàng quốc tế.",
		target_phrases=[
			_phrase(11, "Can I see the menu, please?", "Cho tôi xem thực đơn được không?", "/kæn aɪ si ðə ˈmɛnju pliz/", "medium",
				["Âm /θ/ trong 'the'", "Intonation câu hỏi"]),
			_phrase(12, "I'd like to order pho.", "Tôi muốn gọi phở.", "/aɪd laɪk tu ˈɔrdər foʊ/", "easy",
				["Rút gọn 'I would'", "Phát âm 'pho'"]),
			_phrase(13, "How spicy is this dish?", "Món này cay cỡ nào?", "/haʊ ˈspaɪsi ɪz ðɪs dɪʃ/", "medium",
				["Âm /aɪ/ trong 'spicy'", "Âm /ʃ/ cuối 'dish'"]),
			_phrase(14, "The bill, please.", "Tính tiền, xin lỗi.", "/ðə bɪl pliz/", "easy",
				["Âm /θ/ trong 'the'"]),
			_phrase(15, "This food is delicious!", "Món ăn này ngon quá!", "/ðɪs fud ɪz dɪˈlɪʃəs/", "medium",
				["Trọng âm 'delicious'", "Âm /ʃ/ trong 'delicious'"]),
		],
		cultural_context="Ở phương Tây, khách hàng thường được phục vụ nhanh chóng và không cần gọi 'anh chị ơi' như ở Việt Nam. Chỉ cần nói 'excuse me' là đủ.",
		vietnamese_challenges=[
			"Câu hỏi lịch sự với 'Can I...?' 'Could you...?'",
			"Cách rút gọn 'I would' thành 'I'd'",
			"Intonation đi lên ở cuối câu hỏi",
		],
	),
}


def get_lesson_by_id(lesson_id: str) -> Optional[Lesson]:
	return LESSONS.get(lesson_id)


def get_daily_lesson(day: int) -> Optional[Lesson]:
	"""Lesson for a 1-based day number; the catalog repeats once exhausted."""
	lesson_ids = list(LESSONS)
	if not lesson_ids:
		return None
	return LESSONS[lesson_ids[(day - 1) % len(lesson_ids)]]


def get_lessons_by_level(level: str) -> List[Lesson]:
	return [lesson for lesson in LESSONS.values() if lesson.level == level]


def search_lessons_by_topic(topic: str) -> List[Lesson]:
	needle = (topic or "").lower()
	return [lesson for lesson in LESSONS.values() if needle in lesson.topic.lower()]


def build_lesson_context(
	lesson: Lesson,
	phrase_id: Optional[Union[int, str]] = None,
	stage: str = "practice",
) -> LessonContext:
	# Defaults to the first phrase when no (or an unknown) phrase id is given
	current = None
	if phrase_id is not None:
		current = next((p for p in lesson.target_phrases if str(p.id) == str(phrase_id)), None)
	if current is None and lesson.target_phrases:
		current = lesson.target_phrases[0]
	return LessonContext(
		topic=lesson.topic,
		target_phrases=list(lesson.target_phrases),
		stage=stage or "practice",
		current_target=current,
	)
