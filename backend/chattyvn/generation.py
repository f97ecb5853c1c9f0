from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class GenerationStatus(str, Enum):
	OK = "ok"
	# The call itself failed: network, timeout, HTTP status, body without text
	TRANSPORT_FAILURE = "transport_failure"
	# The call succeeded but the text is not a JSON object
	PARSE_FAILURE = "parse_failure"


@dataclass(frozen=True)
class GenerationResult:
	status: GenerationStatus
	data: Dict[str, Any] = field(default_factory=dict)
	error: Optional[str] = None

	@classmethod
	def ok(cls, data: Dict[str, Any]) -> "GenerationResult":
		return cls(GenerationStatus.OK, data)

	@classmethod
	def transport_failure(cls, error: str) -> "GenerationResult":
		return cls(GenerationStatus.TRANSPORT_FAILURE, error=error)

	@classmethod
	def parse_failure(cls, error: str) -> "GenerationResult":
		return cls(GenerationStatus.PARSE_FAILURE, error=error)

	@property
	def transport_failed(self) -> bool:
		return self.status is GenerationStatus.TRANSPORT_FAILURE


def extract_json_block(text: str) -> Dict[str, Any]:
	"""Extract a JSON object from model output text.

	Tries the whole text first, then the first ``{...}`` span (models sometimes
	wrap the object in markdown fences or prose).

	Raises:
		ValueError: If no JSON object can be extracted from the text
	"""
	try:
		data = json.loads(text)
	except Exception:
		data = None
		match = re.search(r"\{[\s\S]*\}", text or "")
		if match:
			try:
				data = json.loads(match.group(0))
			except Exception:
				data = None
	if not isinstance(data, dict):
		raise ValueError("Failed to parse JSON object from Gemini output")
	return data
