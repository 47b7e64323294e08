# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: objinvokers maintainers; created: 2026-10-17
"""
Explicit contract registration.

A Contract lists which members of a target object may be invoked by name and
which events may be listened to. The embedding application declares it in
code through ContractBuilder (or in text, see `loader.parse_contract`); no
attribute scanning or introspection of the target class takes place.

Parameters may be given as MemberParameter values or as literals:

  builder.method("add", "Int32", "[Int32]")
  builder.method("log", "String", "@Object")
  builder.method("echo", "T", generics=["T: Shape"])

The builder rejects declarations that could never be told apart by the
scorer: two members with the same preferred name, generic arity and parameter
list would always tie.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional, Sequence, Set, Tuple, Union

from objinvokers.contract.parser import EventDecl, GenericScope, parse_generic_param, parse_parameter, parse_type
from objinvokers.core.types_core import TypeId, TypeKind, TypeTable
from objinvokers.errors import ContractError
from objinvokers.members import ObjectField, ObjectMember, ObjectMethod, ObjectProperty
from objinvokers.signature import MemberParameter, MemberSignature

logger = logging.getLogger(__name__)

ParameterSpec = Union[MemberParameter, str]
TypeSpec = Union[TypeId, str]


@dataclass(frozen=True)
class Contract:
	"""Immutable set of invokable members and listenable events."""

	types: TypeTable = field(compare=False, repr=False)
	members: Tuple[ObjectMember, ...] = ()
	events: Tuple[EventDecl, ...] = ()

	def find_members(self, preferred_name: str) -> Tuple[ObjectMember, ...]:
		return tuple(m for m in self.members if m.preferred_name == preferred_name)


class ContractBuilder:
	"""Collect member and event declarations into a Contract."""

	def __init__(self, types: Optional[TypeTable] = None) -> None:
		self.types = types if types is not None else TypeTable()
		self._members: List[ObjectMember] = []
		self._events: List[EventDecl] = []
		self._member_keys: Set[Tuple[str, int, Tuple[Hashable, ...]]] = set()
		self._event_names: Set[str] = set()
		self._event_attrs: Dict[str, str] = {}

	def method(
		self,
		name: str,
		*params: ParameterSpec,
		generics: Union[None, int, Sequence[str]] = None,
		preferred_name: Optional[str] = None,
	) -> "ContractBuilder":
		"""
		Declare a method.

		`generics` is either the number of generic type slots, or their names
		(optionally constrained, `"T: Shape"`) which then resolve inside the
		parameter literals. Every anonymous `?` placeholder in the parameters
		takes a slot of its own: with names the arity is the names plus the
		anonymous placeholders, with a number it must cover them, and when
		omitted it is their count.
		"""
		scope: GenericScope = {}
		if generics is not None and not isinstance(generics, int):
			for literal in generics:
				gp_name, gp_ty = self._wrap(parse_generic_param, literal, scope)
				scope[gp_name] = gp_ty
		parameters = tuple(self._coerce_param(p, scope) for p in params)
		named = set(scope.values())
		anonymous = {g for p in parameters for g in self.types.generic_params_in(p.type) if g not in named}
		if generics is None:
			generic_count = len(anonymous)
		elif isinstance(generics, int):
			if generics < len(anonymous):
				raise ContractError(
					f"method '{name}' declares {generics} generic type(s) but its parameters use {len(anonymous)} placeholder(s)"
				)
			generic_count = generics
		else:
			generic_count = len(scope) + len(anonymous)
		try:
			signature = MemberSignature(name, generic_count, parameters)
		except ValueError as exc:
			raise ContractError(str(exc)) from None
		return self._add(ObjectMethod(signature, self.types, preferred_name))

	def property(
		self,
		name: str,
		value_type: TypeSpec,
		*,
		readable: bool = True,
		writable: bool = True,
		preferred_name: Optional[str] = None,
	) -> "ContractBuilder":
		"""Declare a property; reading takes no argument and writing takes one."""
		ty = self._coerce_type(value_type)
		try:
			member = ObjectProperty(name, ty, readable, writable, preferred_name)
		except ValueError as exc:
			raise ContractError(str(exc)) from None
		return self._add(member)

	def field(
		self,
		name: str,
		value_type: TypeSpec,
		*,
		readonly: bool = False,
		preferred_name: Optional[str] = None,
	) -> "ContractBuilder":
		"""Declare a plain attribute."""
		return self._add(ObjectField(name, self._coerce_type(value_type), readonly, preferred_name))

	def event(self, name: str, *, preferred_name: Optional[str] = None) -> "ContractBuilder":
		"""Declare an `Event` attribute that an EventListener may subscribe to."""
		decl = EventDecl(name=name, preferred_name=preferred_name or name)
		if name in self._event_attrs:
			raise ContractError(f"event attribute '{name}' is already declared as '{self._event_attrs[name]}'")
		if decl.preferred_name in self._event_names:
			raise ContractError(f"duplicate event '{decl.preferred_name}'")
		self._event_attrs[name] = decl.preferred_name
		self._event_names.add(decl.preferred_name)
		self._events.append(decl)
		logger.debug("declared event %s as %s", name, decl.preferred_name)
		return self

	def build(self) -> Contract:
		return Contract(types=self.types, members=tuple(self._members), events=tuple(self._events))

	def _add(self, member: ObjectMember) -> "ContractBuilder":
		signature = member.signature
		key = (member.preferred_name, signature.generic_type_count, self._parameters_key(signature.parameters))
		if key in self._member_keys:
			raise ContractError(
				f"duplicate declaration of '{member.preferred_name}' with the same signature"
			)
		self._member_keys.add(key)
		self._members.append(member)
		logger.debug("declared %s %s as %s", type(member).__name__, signature.name, member.preferred_name)
		return self

	def _parameters_key(self, parameters: Tuple[MemberParameter, ...]) -> Tuple[Hashable, ...]:
		"""
		Comparable form of a parameter list.

		Placeholders are fresh TypeIds per declaration, so each one is replaced
		by its position among the member's placeholders (allocation order, which
		is declaration order) and its constraint.
		"""
		placeholders = sorted({g for p in parameters for g in self.types.generic_params_in(p.type)})
		slots = {g: index for index, g in enumerate(placeholders)}
		return tuple((self._type_key(p.type, slots), p.is_optional, p.is_variadic) for p in parameters)

	def _type_key(self, ty: TypeId, slots: Dict[TypeId, int]) -> Hashable:
		td = self.types.get(ty)
		if td.kind is TypeKind.GENERIC_PARAM:
			return ("generic", slots.get(ty), self._type_key(td.param_types[0], slots))
		if td.kind in (TypeKind.ARRAY, TypeKind.NULLABLE):
			return (td.kind, self._type_key(td.param_types[0], slots))
		return ty

	def _coerce_param(self, spec: ParameterSpec, scope: GenericScope) -> MemberParameter:
		if isinstance(spec, MemberParameter):
			self.types.get(spec.type)
			return spec
		return self._wrap(parse_parameter, spec, scope)

	def _coerce_type(self, spec: TypeSpec) -> TypeId:
		if isinstance(spec, str):
			return self._wrap(parse_type, spec, {})
		self.types.get(spec)
		return spec

	def _wrap(self, parse, literal: str, scope: Dict[str, TypeId]):
		try:
			return parse(literal, self.types, scope)
		except ContractError as exc:
			raise ContractError(f"in literal {literal!r}: {exc}") from None


__all__ = ["Contract", "ContractBuilder", "ParameterSpec", "TypeSpec"]
