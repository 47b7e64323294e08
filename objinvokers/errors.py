# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: objinvokers maintainers; created: 2026-10-17
"""Exceptions raised by the invoker, its members and contract declarations."""

from __future__ import annotations

from typing import Any, Optional, Sequence, Tuple


class ObjectInvokerError(Exception):
	"""Base class for every error raised by objinvokers."""


class MemberNotFoundError(ObjectInvokerError, LookupError):
	"""No member or member overload matches the provided arguments."""

	def __init__(self, member_name: str) -> None:
		super().__init__(f"object member '{member_name}' for the provided arguments was not found")
		self.member_name = member_name


class AmbiguousMemberError(ObjectInvokerError, LookupError):
	"""More than one member overload tied for the best deviancy score."""

	def __init__(self, member_name: str, ambiguous_members: Sequence[Any]) -> None:
		super().__init__(
			f"ambiguous invoke of '{member_name}': {len(ambiguous_members)} overloads match the provided arguments equally well"
		)
		self.member_name = member_name
		self.ambiguous_members: Tuple[Any, ...] = tuple(ambiguous_members)


class IncompatibleVariadicArgumentError(ObjectInvokerError, TypeError):
	"""A trailing argument cannot be packed into the variadic parameter."""

	def __init__(self, message: str, *, position: int) -> None:
		super().__init__(message)
		self.position = position


class MemberAccessError(ObjectInvokerError, AttributeError):
	"""Reading a write-only or writing a read-only property or field."""


class ContractError(ObjectInvokerError, ValueError):
	"""
	Invalid contract declaration.

	Parse failures carry a best-effort `line`/`column` so the CLI can report a
	pinned diagnostic instead of a raw lark exception.
	"""

	def __init__(self, message: str, *, line: Optional[int] = None, column: Optional[int] = None) -> None:
		super().__init__(message)
		self.line = line
		self.column = column


__all__ = [
	"ObjectInvokerError",
	"MemberNotFoundError",
	"AmbiguousMemberError",
	"IncompatibleVariadicArgumentError",
	"MemberAccessError",
	"ContractError",
]
