# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: objinvokers maintainers; created: 2026-10-17
"""
Type core: the TypeTable that owns type descriptors and the compatibility
oracle the scorer consults.
"""

from objinvokers.core.type_compat import can_convert, is_nullable
from objinvokers.core.types_core import Typed, TypeDef, TypeId, TypeKind, TypeTable, unwrap

__all__ = [
	"TypeId",
	"TypeKind",
	"TypeDef",
	"TypeTable",
	"Typed",
	"unwrap",
	"can_convert",
	"is_nullable",
]
