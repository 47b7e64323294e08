# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: objinvokers maintainers; created: 2026-10-17
"""
Signature deviancy scoring.

A deviancy score measures how far a call's arguments are from a member's
declared signature: 0 is a perfect match, every implicit conversion (or null
passed to a nullable parameter) costs `conversion_score`, every omitted
optional parameter costs `optional_score`, and NO_MATCH_SCORE means the
member cannot serve the call at all.

Scoring is a pure function of (member, call). It never breaks ties; picking
the single winner is the invoker's job.

Generic placeholders are scored against their constraint and never pay the
conversion cost: the concrete type is substituted when the member runs, so
binding is treated as free even if the argument only converts to the
constraint.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence, Tuple

from objinvokers.config import DEFAULT_WEIGHTS, DeviancyWeights
from objinvokers.core.type_compat import can_convert, is_nullable
from objinvokers.core.types_core import TypeTable, unwrap
from objinvokers.signature import NO_MATCH_SCORE, MemberParameter, MemberSignature


class ScoredMember(Protocol):
	"""What the scorer needs from a candidate."""

	signature: MemberSignature
	preferred_name: str


def calculate_deviancy_score(
	member: ScoredMember,
	member_name: str,
	generic_type_count: int,
	arguments: Optional[Sequence[Any]],
	*,
	types: TypeTable,
	weights: DeviancyWeights = DEFAULT_WEIGHTS,
) -> int:
	"""Score one candidate against a call; NO_MATCH_SCORE when it cannot serve it."""
	signature = member.signature
	if member_name != member.preferred_name or generic_type_count != signature.generic_type_count:
		return NO_MATCH_SCORE
	args = tuple(arguments) if arguments is not None else ()
	if len(args) > len(signature.parameters) and not signature.has_variadic_tail:
		return NO_MATCH_SCORE
	return calculate_parameters_deviancy_score(signature.parameters, args, types=types, weights=weights)


def calculate_parameters_deviancy_score(
	parameters: Sequence[MemberParameter],
	arguments: Optional[Sequence[Any]],
	*,
	types: TypeTable,
	weights: DeviancyWeights = DEFAULT_WEIGHTS,
) -> int:
	"""Score a parameter list against positional arguments, ignoring name and generic arity."""
	params: Tuple[MemberParameter, ...] = tuple(parameters)
	args = tuple(arguments) if arguments is not None else ()
	if len(args) > len(params) and not (params and params[-1].is_variadic):
		return NO_MATCH_SCORE

	score = 0
	for index, param in enumerate(params):
		if param.is_variadic:
			# Binds every remaining argument; nothing may follow it.
			for value in args[index:]:
				step = _score_provided(param, value, types, weights)
				if step == NO_MATCH_SCORE:
					return NO_MATCH_SCORE
				score += step
			break
		if index < len(args):
			step = _score_provided(param, args[index], types, weights)
		else:
			step = _score_missing(param, weights)
		if step == NO_MATCH_SCORE:
			return NO_MATCH_SCORE
		score += step
	return score


def _score_provided(param: MemberParameter, value: Any, types: TypeTable, weights: DeviancyWeights) -> int:
	is_generic = param.is_generic(types)
	effective = types.constraint_of(param.type) if is_generic else param.type

	if unwrap(value) is None:
		if is_nullable(types, effective):
			return weights.conversion_score
		return NO_MATCH_SCORE

	provided = types.type_of(value)
	if provided == effective:
		return 0
	if not can_convert(types, provided, effective):
		return NO_MATCH_SCORE
	if is_generic:
		return 0
	return weights.conversion_score


def _score_missing(param: MemberParameter, weights: DeviancyWeights) -> int:
	if param.is_optional:
		return weights.optional_score
	return NO_MATCH_SCORE


__all__ = ["calculate_deviancy_score", "calculate_parameters_deviancy_score", "ScoredMember"]
