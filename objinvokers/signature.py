# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: objinvokers maintainers; created: 2026-10-17
"""
Member signature model.

A signature is the declarative description of one invocable member: its name,
how many generic type slots it declares, and its ordered parameters. Each
parameter carries a TypeId plus optional/variadic flags; a variadic parameter
stores its element type and may only appear last.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Tuple

from objinvokers.core.types_core import TypeId, TypeTable

# Reserved deviancy score meaning "this member cannot serve the call".
NO_MATCH_SCORE = sys.maxsize


@dataclass(frozen=True)
class MemberParameter:
	"""One declared input parameter of a member."""

	type: TypeId
	is_optional: bool = False
	is_variadic: bool = False

	def is_generic(self, types: TypeTable) -> bool:
		"""True when the parameter type is a generic placeholder of the member itself."""
		return types.is_generic_param(self.type)


@dataclass(frozen=True)
class MemberSignature:
	"""Name, generic arity and ordered parameters of a member."""

	name: str
	generic_type_count: int = 0
	parameters: Tuple[MemberParameter, ...] = ()

	def __post_init__(self) -> None:
		# Accept any sequence but store a tuple so signatures stay hashable.
		object.__setattr__(self, "parameters", tuple(self.parameters))
		if self.generic_type_count < 0:
			raise ValueError(f"generic_type_count must be non-negative, got {self.generic_type_count}")
		for param in self.parameters[:-1]:
			if param.is_variadic:
				raise ValueError(f"only the last parameter of '{self.name}' may be variadic")

	@property
	def has_variadic_tail(self) -> bool:
		return bool(self.parameters) and self.parameters[-1].is_variadic


def format_parameter(param: MemberParameter, types: TypeTable) -> str:
	"""Render a parameter in the contract literal notation (`Int32`, `[Int32]`, `@Int32`)."""
	text = types.name_of(param.type)
	if param.is_variadic:
		return f"@{text}"
	if param.is_optional:
		return f"[{text}]"
	return text


def format_signature(signature: MemberSignature, types: TypeTable) -> str:
	generics = f"<{signature.generic_type_count}>" if signature.generic_type_count else ""
	params = ", ".join(format_parameter(p, types) for p in signature.parameters)
	return f"{signature.name}{generics}({params})"


__all__ = [
	"NO_MATCH_SCORE",
	"MemberParameter",
	"MemberSignature",
	"format_parameter",
	"format_signature",
]
