# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: objinvokers maintainers; created: 2026-10-17
"""
Scoring weights.

An omitted optional parameter must cost more than converting every parameter
of any realistic signature, so that a match that binds all arguments always
beats one that relies on a default.
"""

from __future__ import annotations

from dataclasses import dataclass

MAX_REALISTIC_PARAMETER_COUNT = 64


@dataclass(frozen=True)
class DeviancyWeights:
	"""Per-parameter costs added to a deviancy score."""

	conversion_score: int = 1
	optional_score: int = 1000

	def __post_init__(self) -> None:
		if self.conversion_score < 0:
			raise ValueError(f"conversion_score must be non-negative, got {self.conversion_score}")
		if self.optional_score <= self.conversion_score * MAX_REALISTIC_PARAMETER_COUNT:
			raise ValueError(
				f"optional_score ({self.optional_score}) must exceed "
				f"conversion_score * {MAX_REALISTIC_PARAMETER_COUNT} ({self.conversion_score * MAX_REALISTIC_PARAMETER_COUNT})"
			)


DEFAULT_WEIGHTS = DeviancyWeights()

__all__ = ["DeviancyWeights", "DEFAULT_WEIGHTS", "MAX_REALISTIC_PARAMETER_COUNT"]
