# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: objinvokers maintainers; created: 2026-10-17
"""
objinvokers: invoke members of an object by name.

Modules:
  core       TypeTable and the type compatibility oracle
  signature  member signatures and the NO_MATCH_SCORE sentinel
  deviancy   overload scoring
  members    method/property/field variants that perform the call
  invoker    ObjectInvoker, which picks the best-scoring member and calls it
  contract   explicit member/event declaration (builder and text form)
  events     Event slots and forwarding of raised events to notifiers
  tool       diagnostic CLI (`python -m objinvokers`)
"""

from objinvokers.config import DEFAULT_WEIGHTS, DeviancyWeights
from objinvokers.contract import Contract, ContractBuilder, load_contract, parse_contract
from objinvokers.core import Typed, TypeTable, can_convert, is_nullable
from objinvokers.deviancy import calculate_deviancy_score, calculate_parameters_deviancy_score
from objinvokers.errors import (
	AmbiguousMemberError,
	ContractError,
	IncompatibleVariadicArgumentError,
	MemberAccessError,
	MemberNotFoundError,
	ObjectInvokerError,
)
from objinvokers.events import Event, EventBroadcaster, EventListener, EventNotifier
from objinvokers.invoker import ObjectInvoker
from objinvokers.members import ObjectField, ObjectMethod, ObjectProperty
from objinvokers.signature import NO_MATCH_SCORE, MemberParameter, MemberSignature

__all__ = [
	"DEFAULT_WEIGHTS",
	"DeviancyWeights",
	"Contract",
	"ContractBuilder",
	"load_contract",
	"parse_contract",
	"Typed",
	"TypeTable",
	"can_convert",
	"is_nullable",
	"calculate_deviancy_score",
	"calculate_parameters_deviancy_score",
	"AmbiguousMemberError",
	"ContractError",
	"IncompatibleVariadicArgumentError",
	"MemberAccessError",
	"MemberNotFoundError",
	"ObjectInvokerError",
	"Event",
	"EventBroadcaster",
	"EventListener",
	"EventNotifier",
	"ObjectInvoker",
	"ObjectField",
	"ObjectMethod",
	"ObjectProperty",
	"NO_MATCH_SCORE",
	"MemberParameter",
	"MemberSignature",
]
