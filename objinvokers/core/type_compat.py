# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: objinvokers maintainers; created: 2026-10-17
"""
Type compatibility oracle used by the deviancy scorer.

`can_convert` answers whether a value of one type may be used where another is
declared. The rules are a practical subset of the implicit conversions of
mainstream statically typed languages:
- anything converts to Object,
- is-a relationships (class base chain, implemented interfaces),
- conversions the embedding application declared with `declare_implicit`,
- the closed numeric widening table below,
- a single nullable indirection on the target side.

No chains: a conversion that would need two user-declared steps, or a
user-declared step followed by widening, is rejected.
"""

from __future__ import annotations

from typing import Dict, FrozenSet

from objinvokers.core.types_core import TypeId, TypeKind, TypeTable


# source name -> names it implicitly widens to (closed relation, not a promotion algorithm).
IMPLICIT_NUMERIC_CONVERSIONS: Dict[str, FrozenSet[str]] = {
	"SByte": frozenset({"Int16", "Int32", "Int64", "Single", "Double", "Decimal"}),
	"Byte": frozenset({"Int16", "UInt16", "Int32", "UInt32", "Int64", "UInt64", "Single", "Double", "Decimal"}),
	"Int16": frozenset({"Int32", "Int64", "Single", "Double", "Decimal"}),
	"UInt16": frozenset({"Int32", "UInt32", "Int64", "UInt64", "Single", "Double", "Decimal"}),
	"Int32": frozenset({"Int64", "Single", "Double", "Decimal"}),
	"UInt32": frozenset({"Int64", "UInt64", "Single", "Double", "Decimal"}),
	"Int64": frozenset({"Single", "Double", "Decimal"}),
	"Char": frozenset({"UInt16", "Int32", "UInt32", "Int64", "UInt64", "Single", "Double", "Decimal"}),
	"Single": frozenset({"Double"}),
	"UInt64": frozenset({"Single", "Double", "Decimal"}),
}

_PRIMITIVE_KINDS = frozenset({TypeKind.NUMERIC, TypeKind.CHAR})


def is_nullable(table: TypeTable, ty: TypeId) -> bool:
	"""True for reference-like types and nullable wrappers, False for plain value types."""
	return not table.get(ty).is_value_type


def _widens(table: TypeTable, source: TypeId, target: TypeId) -> bool:
	src_def = table.get(source)
	dst_def = table.get(target)
	if src_def.kind not in _PRIMITIVE_KINDS or dst_def.kind not in _PRIMITIVE_KINDS:
		return False
	return dst_def.name in IMPLICIT_NUMERIC_CONVERSIONS.get(src_def.name, frozenset())


def can_convert(table: TypeTable, source: TypeId, target: TypeId) -> bool:
	"""Whether a value of type `source` may be passed where `target` is declared."""
	if target == table.object_type:
		return True
	if table.is_subtype(source, target):
		return True
	if table.has_implicit(source, target):
		return True
	if _widens(table, source, target):
		return True
	underlying = table.underlying_of(target)
	if underlying is not None:
		return can_convert(table, source, underlying)
	return False


__all__ = ["can_convert", "is_nullable", "IMPLICIT_NUMERIC_CONVERSIONS"]
