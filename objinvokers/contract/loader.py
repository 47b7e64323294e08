# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: objinvokers maintainers; created: 2026-10-17
"""Build Contracts from contract text or files."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from objinvokers.contract.builder import Contract, ContractBuilder
from objinvokers.contract.parser import EventDecl, FieldDecl, MethodDecl, PropertyDecl, parse_declarations
from objinvokers.core.types_core import TypeTable
from objinvokers.errors import ContractError


def parse_contract(source: str, types: Optional[TypeTable] = None) -> Contract:
	"""
	Parse contract text into a Contract.

	Type names resolve against `types`, so nominal types the contract refers to
	must be registered on the table first.
	"""
	builder = ContractBuilder(types)
	for decl in parse_declarations(source, builder.types):
		try:
			if isinstance(decl, MethodDecl):
				builder.method(
					decl.name,
					*decl.parameters,
					generics=decl.generic_type_count,
					preferred_name=decl.preferred_name,
				)
			elif isinstance(decl, PropertyDecl):
				builder.property(
					decl.name,
					decl.value_type,
					readable=decl.readable,
					writable=decl.writable,
					preferred_name=decl.preferred_name,
				)
			elif isinstance(decl, FieldDecl):
				builder.field(decl.name, decl.value_type, readonly=decl.readonly, preferred_name=decl.preferred_name)
			elif isinstance(decl, EventDecl):
				builder.event(decl.name, preferred_name=decl.preferred_name)
		except ContractError as exc:
			if decl.line is None or exc.line is not None:
				raise
			raise ContractError(f"{decl.line}: {exc}", line=decl.line) from None
	return builder.build()


def load_contract(path: Union[str, Path], types: Optional[TypeTable] = None) -> Contract:
	"""Read and parse a contract file."""
	return parse_contract(Path(path).read_text(), types)


__all__ = ["parse_contract", "load_contract"]
