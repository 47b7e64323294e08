# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: objinvokers maintainers; created: 2026-10-17
"""
Invokable members: the execution side of dispatch.

Three flat variants share one capability, `invoke(instance, generic_types,
arguments)`:
- ObjectMethod calls `getattr(instance, name)` with the bound arguments,
- ObjectProperty and ObjectField read with zero arguments and write with one.

Each variant exposes the MemberSignature the scorer sees. A property or field
that can be written declares a single parameter of its value type, optional
when the member can also be read, so that a zero-argument call scores as a
read and a one-argument call as a write.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, Sequence, Tuple, Union

from objinvokers.core.type_compat import can_convert, is_nullable
from objinvokers.core.types_core import TypeId, TypeTable, unwrap
from objinvokers.errors import IncompatibleVariadicArgumentError, MemberAccessError
from objinvokers.signature import MemberParameter, MemberSignature

logger = logging.getLogger(__name__)

# Keyword through which generic methods receive their type arguments.
TYPE_ARGS_KEYWORD = "type_args"


class InvokableMember(Protocol):
	"""Capability shared by every member variant."""

	signature: MemberSignature
	preferred_name: str

	def invoke(
		self,
		instance: Any,
		generic_types: Optional[Sequence[TypeId]] = None,
		arguments: Optional[Sequence[Any]] = None,
	) -> Any: ...


@dataclass(frozen=True)
class ObjectMethod:
	"""A method of the target object, looked up by `signature.name` at invoke time."""

	signature: MemberSignature
	types: TypeTable = field(compare=False, repr=False)
	preferred_name: Optional[str] = None

	def __post_init__(self) -> None:
		if self.preferred_name is None:
			object.__setattr__(self, "preferred_name", self.signature.name)

	@property
	def name(self) -> str:
		return self.signature.name

	def invoke(
		self,
		instance: Any,
		generic_types: Optional[Sequence[TypeId]] = None,
		arguments: Optional[Sequence[Any]] = None,
	) -> Any:
		type_args = tuple(generic_types or ())
		if len(type_args) != self.signature.generic_type_count:
			raise ValueError(
				f"method '{self.name}' declares {self.signature.generic_type_count} generic type(s), got {len(type_args)}"
			)
		call_args = self._normalize_arguments(tuple(arguments or ()))
		target = getattr(instance, self.name)
		logger.debug("invoking method %s with %d argument(s)", self.name, len(call_args))
		if type_args:
			return target(*call_args, **{TYPE_ARGS_KEYWORD: type_args})
		return target(*call_args)

	def _normalize_arguments(self, arguments: Tuple[Any, ...]) -> List[Any]:
		"""
		Bind call arguments to the Python callable's positional parameters.

		Missing optionals are left out so the callable's own defaults apply;
		they can only ever be trailing since arguments are positional.
		"""
		normalized: List[Any] = []
		params = self.signature.parameters
		for index, param in enumerate(params):
			if param.is_variadic:
				normalized.extend(self._pack_variadic(param, arguments, index))
				return normalized
			if index < len(arguments):
				normalized.append(unwrap(arguments[index]))
		normalized.extend(unwrap(value) for value in arguments[len(params):])
		return normalized

	def _pack_variadic(self, param: MemberParameter, arguments: Tuple[Any, ...], start: int) -> List[Any]:
		elem = self.types.constraint_of(param.type) if param.is_generic(self.types) else param.type
		packed: List[Any] = []
		for position in range(start, len(arguments)):
			value = arguments[position]
			raw = unwrap(value)
			if raw is None:
				compatible = is_nullable(self.types, elem)
			else:
				provided = self.types.type_of(value)
				compatible = provided == elem or can_convert(self.types, provided, elem)
			if not compatible:
				raise IncompatibleVariadicArgumentError(
					f"argument {position} ({raw!r}) is not compatible with the parameter '@{self.types.name_of(param.type)}' of '{self.name}'",
					position=position,
				)
			packed.append(raw)
		return packed


def _accessor_signature(name: str, value_type: TypeId, readable: bool, writable: bool) -> MemberSignature:
	params: Tuple[MemberParameter, ...] = ()
	if writable:
		params = (MemberParameter(value_type, is_optional=readable),)
	return MemberSignature(name, 0, params)


def _invoke_accessor(
	member: Union["ObjectProperty", "ObjectField"],
	instance: Any,
	generic_types: Optional[Sequence[TypeId]],
	arguments: Optional[Sequence[Any]],
) -> Any:
	if generic_types:
		raise ValueError(f"{member.kind} invoke cannot accept generic types")
	args = tuple(arguments or ())
	if not args:
		return member.get_value(instance)
	if len(args) == 1:
		member.set_value(instance, args[0])
		return None
	raise ValueError(f"setting the {member.kind} '{member.name}' accepts exactly 1 argument, got {len(args)}")


@dataclass(frozen=True)
class ObjectProperty:
	"""A property of the target object."""

	name: str
	value_type: TypeId
	readable: bool = True
	writable: bool = True
	preferred_name: Optional[str] = None
	signature: MemberSignature = field(init=False)

	kind = "property"

	def __post_init__(self) -> None:
		if not self.readable and not self.writable:
			raise ValueError(f"property '{self.name}' must be readable, writable or both")
		object.__setattr__(self, "signature", _accessor_signature(self.name, self.value_type, self.readable, self.writable))
		if self.preferred_name is None:
			object.__setattr__(self, "preferred_name", self.name)

	def get_value(self, instance: Any) -> Any:
		if not self.readable:
			raise MemberAccessError(f"property '{self.name}' is write only")
		return getattr(instance, self.name)

	def set_value(self, instance: Any, value: Any) -> None:
		if not self.writable:
			raise MemberAccessError(f"property '{self.name}' is read only")
		setattr(instance, self.name, unwrap(value))

	def invoke(
		self,
		instance: Any,
		generic_types: Optional[Sequence[TypeId]] = None,
		arguments: Optional[Sequence[Any]] = None,
	) -> Any:
		return _invoke_accessor(self, instance, generic_types, arguments)


@dataclass(frozen=True)
class ObjectField:
	"""A plain attribute of the target object; always readable."""

	name: str
	value_type: TypeId
	readonly: bool = False
	preferred_name: Optional[str] = None
	signature: MemberSignature = field(init=False)

	kind = "field"

	def __post_init__(self) -> None:
		object.__setattr__(self, "signature", _accessor_signature(self.name, self.value_type, True, not self.readonly))
		if self.preferred_name is None:
			object.__setattr__(self, "preferred_name", self.name)

	@property
	def writable(self) -> bool:
		return not self.readonly

	def get_value(self, instance: Any) -> Any:
		return getattr(instance, self.name)

	def set_value(self, instance: Any, value: Any) -> None:
		if self.readonly:
			raise MemberAccessError(f"field '{self.name}' is read only")
		setattr(instance, self.name, unwrap(value))

	def invoke(
		self,
		instance: Any,
		generic_types: Optional[Sequence[TypeId]] = None,
		arguments: Optional[Sequence[Any]] = None,
	) -> Any:
		return _invoke_accessor(self, instance, generic_types, arguments)


ObjectMember = Union[ObjectMethod, ObjectProperty, ObjectField]

__all__ = [
	"InvokableMember",
	"ObjectMember",
	"ObjectMethod",
	"ObjectProperty",
	"ObjectField",
	"TYPE_ARGS_KEYWORD",
]
