# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: objinvokers maintainers; created: 2026-10-17
"""
Invoke members of an object by name.

ObjectInvoker holds an immutable list of candidate members bound to one
target instance. For every call it scores all candidates (see `deviancy`),
keeps the ones that can serve the call and:
- raises MemberNotFoundError when none survive,
- invokes the single lowest-scoring candidate,
- raises AmbiguousMemberError carrying every tied candidate otherwise.

The invoker holds no mutable state, so concurrent calls are safe whenever the
underlying members are.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Iterable, List, Optional, Sequence, Tuple

from objinvokers.config import DEFAULT_WEIGHTS, DeviancyWeights
from objinvokers.core.types_core import TypeId, TypeTable
from objinvokers.deviancy import calculate_deviancy_score
from objinvokers.errors import AmbiguousMemberError, MemberNotFoundError
from objinvokers.members import InvokableMember, ObjectField, ObjectMethod, ObjectProperty
from objinvokers.signature import NO_MATCH_SCORE

if TYPE_CHECKING:
	from objinvokers.contract.builder import Contract

logger = logging.getLogger(__name__)


class ObjectInvoker:
	"""Dispatch by-name calls to the best-matching member of `target_instance`."""

	@classmethod
	def bind(
		cls, contract: "Contract", target_instance: Any, *, weights: DeviancyWeights = DEFAULT_WEIGHTS
	) -> "ObjectInvoker":
		"""Build an invoker over the members declared by `contract`."""
		return cls(contract.members, target_instance, types=contract.types, weights=weights)

	def __init__(
		self,
		members: Iterable[InvokableMember],
		target_instance: Any,
		*,
		types: TypeTable,
		weights: DeviancyWeights = DEFAULT_WEIGHTS,
	) -> None:
		if members is None:
			raise TypeError("members must not be None")
		self._members: Tuple[InvokableMember, ...] = tuple(members)
		self.target_instance = target_instance
		self.types = types
		self.weights = weights

	@property
	def members(self) -> Tuple[InvokableMember, ...]:
		return self._members

	@property
	def methods(self) -> Tuple[ObjectMethod, ...]:
		return tuple(m for m in self._members if isinstance(m, ObjectMethod))

	@property
	def properties(self) -> Tuple[ObjectProperty, ...]:
		return tuple(m for m in self._members if isinstance(m, ObjectProperty))

	@property
	def fields(self) -> Tuple[ObjectField, ...]:
		return tuple(m for m in self._members if isinstance(m, ObjectField))

	def rank(
		self,
		member_name: str,
		generic_types: Optional[Sequence[TypeId]] = None,
		arguments: Optional[Sequence[Any]] = None,
	) -> List[Tuple[InvokableMember, int]]:
		"""
		Viable candidates with their scores, best first.

		The sort is stable, so candidates with equal scores keep their
		registration order.
		"""
		generic_count = len(generic_types) if generic_types else 0
		scored: List[Tuple[InvokableMember, int]] = []
		for member in self._members:
			score = calculate_deviancy_score(
				member, member_name, generic_count, arguments, types=self.types, weights=self.weights
			)
			if score != NO_MATCH_SCORE:
				scored.append((member, score))
		scored.sort(key=lambda item: item[1])
		logger.debug("%s: %d viable of %d candidate(s), scores %s", member_name, len(scored), len(self._members), [s for _, s in scored])
		return scored

	def resolve(
		self,
		member_name: str,
		generic_types: Optional[Sequence[TypeId]] = None,
		arguments: Optional[Sequence[Any]] = None,
	) -> InvokableMember:
		"""Select the single best candidate for a call without invoking it."""
		ranked = self.rank(member_name, generic_types, arguments)
		if not ranked:
			logger.debug("no candidate for %s", member_name)
			raise MemberNotFoundError(member_name)
		best_score = ranked[0][1]
		winners = [member for member, score in ranked if score == best_score]
		if len(winners) > 1:
			logger.debug("%d candidates tied at %d for %s", len(winners), best_score, member_name)
			raise AmbiguousMemberError(member_name, winners)
		logger.debug("selected %r for %s (score %d)", winners[0].signature, member_name, best_score)
		return winners[0]

	def invoke(
		self,
		member_name: str,
		generic_types: Optional[Sequence[TypeId]] = None,
		arguments: Optional[Sequence[Any]] = None,
	) -> Any:
		"""
		Find the best overload of `member_name` for the arguments and invoke it.

		Returns whatever the member returns (None when it intends no result).
		"""
		winner = self.resolve(member_name, generic_types, arguments)
		return winner.invoke(self.target_instance, generic_types, arguments)

	def call(self, member_name: str, *arguments: Any, generic_types: Optional[Sequence[TypeId]] = None) -> Any:
		"""`invoke` with positional arguments."""
		return self.invoke(member_name, generic_types, arguments)


__all__ = ["ObjectInvoker"]
