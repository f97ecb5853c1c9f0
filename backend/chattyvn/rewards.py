from __future__ import annotations
from typing import List, Tuple


# (minimum accuracy, stars), checked from the top
STAR_THRESHOLDS: List[Tuple[int, int]] = [(90, 3), (75, 2), (60, 1)]


def stars(accuracy: int) -> int:
	"""Map an accuracy score (0-100) to the 0-3 star reward tier."""
	for minimum, earned in STAR_THRESHOLDS:
		if accuracy >= minimum:
			return earned
	return 0
