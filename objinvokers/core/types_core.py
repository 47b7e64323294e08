# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: objinvokers maintainers; created: 2026-10-17
"""
Type core shared by the compatibility oracle, the scorer and member packing.

TypeIds are opaque ints indexing into a TypeTable. TypeKind keeps the universe
small: the top type, the primitive value kinds, strings, nominal classes,
interfaces, structs and enums, plus the three constructed kinds (nullable
wrappers, arrays and generic placeholders).

Python values do not carry these types, so the table also owns the mapping
from a run-time value to its TypeId (`type_of`). Values whose Python type is
ambiguous (a Python `int` may stand for any integral kind) can be pinned to an
exact type with the `Typed` wrapper.
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, Iterable, Optional, Set, Tuple


TypeId = int  # opaque handle into the TypeTable


class TypeKind(Enum):
	"""Kinds of types understood by the type core."""

	OBJECT = auto()
	BOOLEAN = auto()
	CHAR = auto()
	NUMERIC = auto()
	STRING = auto()
	CLASS = auto()
	INTERFACE = auto()
	STRUCT = auto()
	ENUM = auto()
	NULLABLE = auto()
	ARRAY = auto()
	GENERIC_PARAM = auto()


# Kinds whose values cannot be null unless wrapped in a NULLABLE.
VALUE_KINDS = frozenset(
	{TypeKind.BOOLEAN, TypeKind.CHAR, TypeKind.NUMERIC, TypeKind.STRUCT, TypeKind.ENUM}
)

NUMERIC_TYPE_NAMES: Tuple[str, ...] = (
	"SByte",
	"Byte",
	"Int16",
	"UInt16",
	"Int32",
	"UInt32",
	"Int64",
	"UInt64",
	"Single",
	"Double",
	"Decimal",
)

# Python ints take the first integral kind whose range holds them.
_INT_RANGES: Tuple[Tuple[str, int, int], ...] = (
	("Int32", -(2**31), 2**31 - 1),
	("UInt32", 0, 2**32 - 1),
	("Int64", -(2**63), 2**63 - 1),
	("UInt64", 0, 2**64 - 1),
)


@dataclass(frozen=True)
class TypeDef:
	"""Definition of a type stored in the TypeTable."""

	kind: TypeKind
	name: str
	# NULLABLE/ARRAY: (inner,); GENERIC_PARAM: (constraint,)
	param_types: Tuple[TypeId, ...] = ()
	base: Optional[TypeId] = None  # only meaningful for TypeKind.CLASS
	interfaces: Tuple[TypeId, ...] = ()

	@property
	def is_value_type(self) -> bool:
		return self.kind in VALUE_KINDS


@dataclass(frozen=True)
class Typed:
	"""A run-time value pinned to an explicit TypeId (e.g. Int16 or Char)."""

	value: Any
	type_id: TypeId


def unwrap(value: Any) -> Any:
	"""Strip a `Typed` wrapper, returning plain values unchanged."""
	if isinstance(value, Typed):
		return value.value
	return value


class TypeTable:
	"""
	Type table that owns TypeIds.

	The well-known types are seeded on construction and can be fetched by name
	with `lookup`. Nominal types registered by the embedding application may be
	bound to a Python class so that `type_of` recognises their instances.
	Constructed types (nullable, array) are cached so their ids stay stable;
	generic placeholders are always fresh since every member owns its own.
	"""

	def __init__(self) -> None:
		self._defs: Dict[TypeId, TypeDef] = {}
		self._next_id: TypeId = 1  # reserve 0 for "invalid"
		self._by_name: Dict[str, TypeId] = {}
		self._py_bindings: Dict[type, TypeId] = {}
		self._nullable_cache: Dict[TypeId, TypeId] = {}
		self._array_cache: Dict[TypeId, TypeId] = {}
		self._implicit: Set[Tuple[TypeId, TypeId]] = set()
		self.object_type = self._add_named(TypeKind.OBJECT, "Object")
		self.bool_type = self._add_named(TypeKind.BOOLEAN, "Boolean")
		self.char_type = self._add_named(TypeKind.CHAR, "Char")
		for name in NUMERIC_TYPE_NAMES:
			self._add_named(TypeKind.NUMERIC, name)
		self.string_type = self._add_named(TypeKind.STRING, "String")

	def new_class(
		self,
		name: str,
		*,
		base: Optional[TypeId] = None,
		interfaces: Iterable[TypeId] = (),
		py_class: Optional[type] = None,
	) -> TypeId:
		"""Register a nominal reference type deriving from `base` (Object when omitted)."""
		if base is not None and self.get(base).kind is not TypeKind.CLASS:
			raise ValueError(f"base of '{name}' must be a class, got {self.name_of(base)}")
		ifaces = self._check_interfaces(name, interfaces)
		ty = self._add_named(TypeKind.CLASS, name, base=base, interfaces=ifaces)
		return self._bind(ty, py_class)

	def new_interface(
		self, name: str, *, extends: Iterable[TypeId] = (), py_class: Optional[type] = None
	) -> TypeId:
		"""Register an interface; `extends` lists the interfaces it inherits."""
		ifaces = self._check_interfaces(name, extends)
		ty = self._add_named(TypeKind.INTERFACE, name, interfaces=ifaces)
		return self._bind(ty, py_class)

	def new_struct(
		self, name: str, *, interfaces: Iterable[TypeId] = (), py_class: Optional[type] = None
	) -> TypeId:
		"""Register a user value type."""
		ifaces = self._check_interfaces(name, interfaces)
		ty = self._add_named(TypeKind.STRUCT, name, interfaces=ifaces)
		return self._bind(ty, py_class)

	def new_enum(self, name: str, *, py_class: Optional[type] = None) -> TypeId:
		"""Register an enum value type (never convertible to or from integers)."""
		ty = self._add_named(TypeKind.ENUM, name)
		return self._bind(ty, py_class)

	def ensure_nullable(self, inner: TypeId) -> TypeId:
		"""Return a stable nullable wrapper of the value type `inner`, creating it once."""
		inner_def = self.get(inner)
		if not inner_def.is_value_type:
			raise ValueError(f"only value types can be wrapped as nullable, got {inner_def.name}")
		if inner not in self._nullable_cache:
			self._nullable_cache[inner] = self._add(TypeKind.NULLABLE, f"{inner_def.name}?", (inner,))
		return self._nullable_cache[inner]

	def ensure_array(self, elem: TypeId) -> TypeId:
		"""Return a stable Array<elem> TypeId, creating it once."""
		if elem not in self._array_cache:
			self._array_cache[elem] = self._add(TypeKind.ARRAY, f"{self.name_of(elem)}[]", (elem,))
		return self._array_cache[elem]

	def new_generic_param(self, name: str = "T", constraint: Optional[TypeId] = None) -> TypeId:
		"""Register a generic placeholder constrained to `constraint` (Object by default)."""
		if constraint is None:
			constraint = self.object_type
		self.get(constraint)
		return self._add(TypeKind.GENERIC_PARAM, name, (constraint,))

	def declare_implicit(self, source: TypeId, target: TypeId) -> None:
		"""Declare a user-defined implicit conversion from `source` to `target`."""
		self.get(source)
		self.get(target)
		self._implicit.add((source, target))

	def has_implicit(self, source: TypeId, target: TypeId) -> bool:
		return (source, target) in self._implicit

	def lookup(self, name: str) -> TypeId:
		"""Fetch a named type; raises KeyError for unknown names."""
		try:
			return self._by_name[name]
		except KeyError:
			raise KeyError(f"unknown type '{name}'") from None

	def has_name(self, name: str) -> bool:
		return name in self._by_name

	def name_of(self, ty: TypeId) -> str:
		return self.get(ty).name

	def get(self, ty: TypeId) -> TypeDef:
		"""Fetch the TypeDef for a given TypeId."""
		try:
			return self._defs[ty]
		except KeyError:
			raise KeyError(f"unknown TypeId {ty}") from None

	def is_generic_param(self, ty: TypeId) -> bool:
		return self.get(ty).kind is TypeKind.GENERIC_PARAM

	def constraint_of(self, ty: TypeId) -> TypeId:
		"""Declared constraint of a generic placeholder."""
		td = self.get(ty)
		if td.kind is not TypeKind.GENERIC_PARAM:
			raise ValueError(f"{td.name} is not a generic placeholder")
		return td.param_types[0]

	def underlying_of(self, ty: TypeId) -> Optional[TypeId]:
		"""Inner value type of a nullable wrapper, None for anything else."""
		td = self.get(ty)
		if td.kind is TypeKind.NULLABLE:
			return td.param_types[0]
		return None

	def is_subtype(self, source: TypeId, target: TypeId) -> bool:
		"""
		True when a `source` value is-a `target`: identity, the class base chain,
		or an implemented/extended interface anywhere along it.
		"""
		if source == target:
			return True
		seen: Set[TypeId] = set()
		pending = [source]
		while pending:
			ty = pending.pop()
			if ty in seen:
				continue
			seen.add(ty)
			if ty == target:
				return True
			td = self.get(ty)
			if td.base is not None:
				pending.append(td.base)
			pending.extend(td.interfaces)
		return False

	def type_of(self, value: Any) -> TypeId:
		"""Run-time TypeId of a non-null value."""
		if isinstance(value, Typed):
			return value.type_id
		if value is None:
			raise TypeError("None has no run-time type")
		for klass in type(value).__mro__:
			bound = self._py_bindings.get(klass)
			if bound is not None:
				return bound
		if isinstance(value, bool):
			return self.bool_type
		if isinstance(value, int):
			for name, low, high in _INT_RANGES:
				if low <= value <= high:
					return self._by_name[name]
			return self.object_type
		if isinstance(value, float):
			return self._by_name["Double"]
		if isinstance(value, decimal.Decimal):
			return self._by_name["Decimal"]
		if isinstance(value, str):
			return self.string_type
		if isinstance(value, (list, tuple)):
			return self._sequence_type(value)
		return self.object_type

	def generic_params_in(self, ty: TypeId) -> Tuple[TypeId, ...]:
		"""Generic placeholders `ty` is built from (itself, or the element of an array/nullable)."""
		td = self.get(ty)
		if td.kind is TypeKind.GENERIC_PARAM:
			return (ty,)
		if td.kind in (TypeKind.ARRAY, TypeKind.NULLABLE):
			return self.generic_params_in(td.param_types[0])
		return ()

	def _sequence_type(self, value: Any) -> TypeId:
		# Homogeneous sequences are arrays; empty, all-null or mixed ones stay Object.
		elem_types = {self.type_of(item) for item in value if unwrap(item) is not None}
		if len(elem_types) != 1:
			return self.object_type
		return self.ensure_array(elem_types.pop())

	def _check_interfaces(self, name: str, interfaces: Iterable[TypeId]) -> Tuple[TypeId, ...]:
		ifaces = tuple(interfaces)
		for iface in ifaces:
			if self.get(iface).kind is not TypeKind.INTERFACE:
				raise ValueError(f"'{name}' can only implement interfaces, got {self.name_of(iface)}")
		return ifaces

	def _bind(self, ty: TypeId, py_class: Optional[type]) -> TypeId:
		if py_class is not None:
			if py_class in self._py_bindings:
				raise ValueError(f"Python class {py_class.__name__} is already bound to {self.name_of(self._py_bindings[py_class])}")
			self._py_bindings[py_class] = ty
		return ty

	def _add_named(
		self,
		kind: TypeKind,
		name: str,
		*,
		base: Optional[TypeId] = None,
		interfaces: Tuple[TypeId, ...] = (),
	) -> TypeId:
		if name in self._by_name:
			raise ValueError(f"duplicate type name '{name}'")
		ty = self._add(kind, name, (), base=base, interfaces=interfaces)
		self._by_name[name] = ty
		return ty

	def _add(
		self,
		kind: TypeKind,
		name: str,
		params: Tuple[TypeId, ...],
		*,
		base: Optional[TypeId] = None,
		interfaces: Tuple[TypeId, ...] = (),
	) -> TypeId:
		ty_id = self._next_id
		self._next_id += 1
		self._defs[ty_id] = TypeDef(
			kind=kind,
			name=name,
			param_types=tuple(params),
			base=base if kind is TypeKind.CLASS else None,
			interfaces=interfaces,
		)
		return ty_id


__all__ = [
	"TypeId",
	"TypeKind",
	"TypeDef",
	"TypeTable",
	"Typed",
	"unwrap",
	"VALUE_KINDS",
	"NUMERIC_TYPE_NAMES",
]
