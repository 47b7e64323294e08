# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: objinvokers maintainers; created: 2026-10-17
"""
Parser for the contract language (see grammar.lark).

The parser turns contract text into plain declaration records, resolving type
names against a TypeTable as it goes. It does not build invokable members;
the loader feeds the records into a ContractBuilder, which owns validation of
the contract as a whole (duplicates, preferred names).

Two entry points share the grammar:
- `parse_declarations` for whole contracts,
- `parse_parameter` / `parse_type` / `parse_generic_param` for single
  fragments, which ContractBuilder uses for its literal shorthand.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedEOF, UnexpectedInput

from objinvokers.core.types_core import TypeId, TypeTable
from objinvokers.errors import ContractError
from objinvokers.signature import MemberParameter

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

# Generic placeholders visible while resolving one method's parameter types.
GenericScope = Dict[str, TypeId]


@dataclass(frozen=True)
class MethodDecl:
	name: str
	generic_type_count: int
	parameters: Tuple[MemberParameter, ...]
	preferred_name: Optional[str] = None
	line: Optional[int] = None


@dataclass(frozen=True)
class PropertyDecl:
	name: str
	value_type: TypeId
	readable: bool = True
	writable: bool = True
	preferred_name: Optional[str] = None
	line: Optional[int] = None


@dataclass(frozen=True)
class FieldDecl:
	name: str
	value_type: TypeId
	readonly: bool = False
	preferred_name: Optional[str] = None
	line: Optional[int] = None


@dataclass(frozen=True)
class EventDecl:
	name: str
	preferred_name: Optional[str] = None
	line: Optional[int] = None


Declaration = Union[MethodDecl, PropertyDecl, FieldDecl, EventDecl]


_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start="contract",
	propagate_positions=True,
	maybe_placeholders=False,
)

_FRAGMENT_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="lalr",
	lexer="basic",
	start=["param", "type", "generic_param"],
	propagate_positions=True,
	maybe_placeholders=False,
)


def _name(node: Tree) -> str:
	return str(node.data)


def _line(node: Tree) -> Optional[int]:
	return getattr(node.meta, "line", None)


def _error(message: str, node: Optional[Tree] = None) -> ContractError:
	if node is None:
		return ContractError(message)
	line = getattr(node.meta, "line", None)
	column = getattr(node.meta, "column", None)
	prefix = f"{line}:{column}: " if line is not None else ""
	return ContractError(f"{prefix}{message}", line=line, column=column)


def _parse(parser: Lark, source: str, start: Optional[str] = None) -> Tree:
	try:
		if start is None:
			return parser.parse(source)
		return parser.parse(source, start=start)
	except UnexpectedInput as exc:
		line = getattr(exc, "line", None)
		column = getattr(exc, "column", None)
		token = getattr(exc, "token", None)
		at_end = isinstance(exc, UnexpectedEOF) or (token is not None and token.type == "$END")
		if at_end or line is None or line < 1:
			raise ContractError("unexpected end of contract input") from exc
		context = exc.get_context(source).rstrip()
		raise ContractError(f"{line}:{column}: unexpected input in contract\n{context}", line=line, column=column) from exc


def _build_type(node: Tree, types: TypeTable, scope: GenericScope) -> TypeId:
	head, *suffixes = node.children
	if _name(head) == "anon_generic":
		ty = types.new_generic_param("?")
	else:
		dotted = head.children[0]
		name = ".".join(str(tok) for tok in dotted.children)
		if name in scope:
			ty = scope[name]
		elif types.has_name(name):
			ty = types.lookup(name)
		else:
			raise _error(f"unknown type '{name}'", node)
	for suffix in suffixes:
		try:
			if _name(suffix) == "nullable_suffix":
				ty = types.ensure_nullable(ty)
			else:
				ty = types.ensure_array(ty)
		except ValueError as exc:
			raise _error(str(exc), node) from None
	return ty


def _build_param(node: Tree, types: TypeTable, scope: GenericScope) -> MemberParameter:
	ty = _build_type(node.children[0], types, scope)
	kind = _name(node)
	if kind == "optional_param":
		return MemberParameter(ty, is_optional=True)
	if kind == "variadic_param":
		return MemberParameter(ty, is_variadic=True)
	return MemberParameter(ty)


def _build_generic_param(node: Tree, types: TypeTable, scope: GenericScope) -> Tuple[str, TypeId]:
	name_tok, *rest = node.children
	name = str(name_tok)
	if name in scope:
		raise _error(f"duplicate generic parameter '{name}'", node)
	constraint = _build_type(rest[0], types, scope) if rest else None
	return name, types.new_generic_param(name, constraint)


def _alias(node: Tree) -> str:
	return ast.literal_eval(str(node.children[0]))


def _build_method(node: Tree, types: TypeTable) -> MethodDecl:
	name = str(node.children[0])
	scope: GenericScope = {}
	params: List[MemberParameter] = []
	preferred: Optional[str] = None
	for child in node.children[1:]:
		kind = _name(child)
		if kind == "generic_params":
			for gp in child.children:
				gp_name, gp_ty = _build_generic_param(gp, types, scope)
				scope[gp_name] = gp_ty
		elif kind == "alias":
			preferred = _alias(child)
		else:
			params.append(_build_param(child, types, scope))
	for param in params[:-1]:
		if param.is_variadic:
			raise _error(f"only the last parameter of '{name}' may be variadic", node)
	# Each anonymous `?` is a generic slot of its own.
	named = set(scope.values())
	anonymous = {g for p in params for g in types.generic_params_in(p.type) if g not in named}
	return MethodDecl(
		name=name,
		generic_type_count=len(scope) + len(anonymous),
		parameters=tuple(params),
		preferred_name=preferred,
		line=_line(node),
	)


def _build_property(node: Tree, types: TypeTable) -> PropertyDecl:
	name = str(node.children[0])
	value_type = _build_type(node.children[1], types, {})
	accessors = set()
	preferred: Optional[str] = None
	for child in node.children[2:]:
		if _name(child) == "accessor":
			accessors.add(str(child.children[0]))
		else:
			preferred = _alias(child)
	readable = not accessors or "get" in accessors
	writable = not accessors or "set" in accessors
	return PropertyDecl(
		name=name,
		value_type=value_type,
		readable=readable,
		writable=writable,
		preferred_name=preferred,
		line=_line(node),
	)


def _build_field(node: Tree, types: TypeTable) -> FieldDecl:
	name = str(node.children[0])
	value_type = _build_type(node.children[1], types, {})
	readonly = False
	preferred: Optional[str] = None
	for child in node.children[2:]:
		if isinstance(child, Token):
			readonly = True
		else:
			preferred = _alias(child)
	return FieldDecl(
		name=name,
		value_type=value_type,
		readonly=readonly,
		preferred_name=preferred,
		line=_line(node),
	)


def _build_event(node: Tree) -> EventDecl:
	name = str(node.children[0])
	preferred = _alias(node.children[1]) if len(node.children) > 1 else None
	return EventDecl(name=name, preferred_name=preferred, line=_line(node))


def parse_declarations(source: str, types: TypeTable) -> List[Declaration]:
	"""Parse contract text into declaration records, in source order."""
	tree = _parse(_PARSER, source)
	decls: List[Declaration] = []
	for child in tree.children:
		kind = _name(child)
		if kind == "method_decl":
			decls.append(_build_method(child, types))
		elif kind == "property_decl":
			decls.append(_build_property(child, types))
		elif kind == "field_decl":
			decls.append(_build_field(child, types))
		elif kind == "event_decl":
			decls.append(_build_event(child))
		else:
			raise _error(f"unexpected declaration '{kind}'", child)
	return decls


def parse_parameter(literal: str, types: TypeTable, scope: Optional[GenericScope] = None) -> MemberParameter:
	"""
	Parse one parameter literal.

	  "Int32"     a parameter of the Int32 type
	  "[Int32]"   an optional Int32 parameter
	  "@Int32"    a variadic parameter whose elements are Int32
	  "?"         a parameter typed by a fresh generic placeholder
	  "Int32?"    a nullable Int32 parameter
	"""
	tree = _parse(_FRAGMENT_PARSER, literal, start="param")
	return _build_param(tree, types, scope or {})


def parse_type(literal: str, types: TypeTable, scope: Optional[GenericScope] = None) -> TypeId:
	"""Parse a type literal such as `Int32?` or `Shape[]`."""
	tree = _parse(_FRAGMENT_PARSER, literal, start="type")
	return _build_type(tree, types, scope or {})


def parse_generic_param(literal: str, types: TypeTable, scope: Optional[GenericScope] = None) -> Tuple[str, TypeId]:
	"""Parse `T` or `T: Constraint` into a fresh named generic placeholder."""
	tree = _parse(_FRAGMENT_PARSER, literal, start="generic_param")
	return _build_generic_param(tree, types, scope or {})


__all__ = [
	"MethodDecl",
	"PropertyDecl",
	"FieldDecl",
	"EventDecl",
	"Declaration",
	"GenericScope",
	"parse_declarations",
	"parse_parameter",
	"parse_type",
	"parse_generic_param",
]
