from __future__ import annotations

import json
from typing import List

from .schemas import LessonContext


# Vietnamese→English transfer errors every prompt asks the model to watch for
VIETNAMESE_CHALLENGES: List[str] = [
	"/th/ sound (đặt lưỡi giữa răng) - often replaced by /t/, /d/ or /f/",
	"/r/ vs /l/ confusion",
	"Final consonants (Vietnamese drops many)",
	"/v/ vs /w/ distinction",
	"Stress patterns (Vietnamese is syllable-timed, English is stress-timed)",
]

# Fields handle_conversation reads back from the model reply
RESPONSE_FIELDS: List[str] = [
	"response_vi",
	"response_en",
	"accuracy",
	"pronunciation_tips",
	"grammar_correction",
	"cultural_note",
]


def _bullets(items: List[str]) -> str:
	return "\n".join(f"- {item}" for item in items)


def _target_phrases_json(lesson_context: LessonContext) -> str:
	return json.dumps(
		[p.model_dump(mode="json") for p in lesson_context.target_phrases],
		ensure_ascii=False,
	)


def build_system_prompt(level: str, lesson_context: LessonContext) -> str:
	topic = lesson_context.topic or "General Practice"
	return f"""
You are ChattyVN, an AI English tutor specifically designed for Vietnamese learners. Your role is to help Vietnamese speakers learn English through interactive conversation.

CRITICAL REQUIREMENTS:
- ALWAYS respond in JSON format with required fields
- Give feedback primarily in Vietnamese (response_vi)
- Provide English model sentences (response_en)
- Address common Vietnamese→English pronunciation challenges
- Be encouraging but honest about mistakes
- Cultural sensitivity: understand Vietnamese learning context

USER LEVEL: {level}
CURRENT LESSON: {topic}
TARGET PHRASES: {_target_phrases_json(lesson_context)}

VIETNAMESE PRONUNCIATION CHALLENGES TO ADDRESS:
{_bullets(VIETNAMESE_CHALLENGES)}

RESPONSE FORMAT (JSON only, exactly these keys):
{{
  "response_vi": "Vietnamese feedback/encouragement",
  "response_en": "Correct English model sentence",
  "accuracy": 0-100,
  "pronunciation_tips": ["specific tip 1", "tip 2"],
  "grammar_correction": "if needed",
  "cultural_note": "if relevant"
}}

EXAMPLES OF GOOD VIETNAMESE FEEDBACK:
- "Tuyệt vời! Giọng của bạn rõ ràng hơn rồi! ⭐"
- "Gần đúng! Hãy chú ý âm 'th' - đặt lưỡi giữa răng nhé"
- "Perfect! Bạn đã nắm được nhịp điệu của câu rồi!"
- "Tốt! Nhưng nhớ phát âm cuối từ rõ hơn nha"

Be like a patient Vietnamese teacher who understands the cultural context and learning challenges.
""".strip()


def build_user_prompt(message: str, lesson_context: LessonContext) -> str:
	target = lesson_context.current_target.english if lesson_context.current_target else "None"
	return f"""
STUDENT INPUT: "{message}"

LESSON CONTEXT:
- Topic: {lesson_context.topic or "General"}
- Target phrase: {target}
- Lesson stage: {lesson_context.stage or "practice"}

ANALYZE THE STUDENT'S INPUT:
1. Is it attempting the target phrase correctly?
2. What pronunciation challenges does it show?
3. Are there grammar issues?
4. How can I encourage them in Vietnamese while correcting mistakes?
5. What specific tips will help this Vietnamese learner?

Provide a JSON response with keys {", ".join(RESPONSE_FIELDS)}.
""".strip()


def build_pronunciation_prompt(target: str, attempt: str, difficulty: str) -> str:
	return f"""
Evaluate this Vietnamese learner's English pronunciation attempt (text transcript):

TARGET: "{target}"
ATTEMPT: "{attempt}"
DIFFICULTY: {difficulty}

Focus on Vietnamese→English pronunciation challenges:
{_bullets(VIETNAMESE_CHALLENGES)}

Return STRICT JSON only:
{{
  "score": 0-100,
  "feedback_vi": "Vietnamese feedback",
  "tips": ["specific pronunciation tips in Vietnamese"]
}}
""".strip()


def build_lesson_prompt(weaknesses: List[str], completed_lessons: List[str], level: str) -> str:
	return f"""
Create a personalized English lesson for a Vietnamese learner:

USER LEVEL: {level}
WEAKNESSES: {", ".join(weaknesses) or "none recorded"}
COMPLETED: {", ".join(completed_lessons) or "none"}

Focus on Vietnamese learning context. Create 3-5 target phrases addressing their weaknesses.

Return STRICT JSON only, following exactly this schema:
{{
  "lesson_id": "personalized_xxx",
  "topic": "lesson topic in English",
  "intro_vi": "Vietnamese introduction",
  "target_phrases": [
    {{
      "english": "phrase",
      "vietnamese": "translation",
      "phonetic": "IPA",
      "difficulty": "easy|medium|hard"
    }}
  ],
  "cultural_context": "helpful cultural note in Vietnamese"
}}
""".strip()
