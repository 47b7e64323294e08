# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from objinvokers.contract.loader import load_contract, parse_contract
from objinvokers.contract.parser import (
	EventDecl,
	FieldDecl,
	MethodDecl,
	PropertyDecl,
	parse_declarations,
	parse_parameter,
	parse_type,
)
from objinvokers.core.types_core import TypeKind, TypeTable
from objinvokers.errors import ContractError
from objinvokers.members import ObjectField, ObjectMethod, ObjectProperty
from objinvokers.signature import MemberParameter

SHAPES = """
# shapes contract
method area(Int32, [Int32]) as "Area";
method log(String, @Object)
method echo<T: Shape, U>(T, U[], Int32?)
property name: String get set
property id: Int64 get as "Id"
field count: Int32 readonly
field tags: String[]
event changed as "Changed"
event closed
"""


def _shapes_table() -> TypeTable:
	types = TypeTable()
	types.new_class("Shape")
	return types


def test_parse_declarations_in_source_order():
	types = _shapes_table()

	decls = parse_declarations(SHAPES, types)

	assert [type(d) for d in decls] == [
		MethodDecl,
		MethodDecl,
		MethodDecl,
		PropertyDecl,
		PropertyDecl,
		FieldDecl,
		FieldDecl,
		EventDecl,
		EventDecl,
	]
	assert decls[0].line == 3
	assert decls[0].preferred_name == "Area"


def test_method_parameters_and_generics():
	types = _shapes_table()
	area, log, echo = parse_declarations(SHAPES, types)[:3]
	int_ty = types.lookup("Int32")

	assert area.parameters == (MemberParameter(int_ty), MemberParameter(int_ty, is_optional=True))
	assert log.parameters[1] == MemberParameter(types.object_type, is_variadic=True)
	assert echo.generic_type_count == 2
	t_param, u_param, opt_int = echo.parameters
	assert types.constraint_of(t_param.type) == types.lookup("Shape")
	assert types.get(u_param.type).kind is TypeKind.ARRAY
	assert types.constraint_of(types.get(u_param.type).param_types[0]) == types.object_type
	assert opt_int.type == types.ensure_nullable(int_ty)


def test_property_and_field_flags():
	types = _shapes_table()
	decls = parse_declarations(SHAPES, types)
	name, ident, count, tags = decls[3:7]

	assert (name.readable, name.writable) == (True, True)
	assert (ident.readable, ident.writable, ident.preferred_name) == (True, False, "Id")
	assert count.readonly
	assert not tags.readonly
	assert tags.value_type == types.ensure_array(types.string_type)


def test_property_without_accessors_is_read_write():
	decl = parse_declarations("property name: String", TypeTable())[0]

	assert decl.readable and decl.writable


def test_parse_contract_builds_members_and_events():
	contract = parse_contract(SHAPES, _shapes_table())

	assert [type(m) for m in contract.members] == [
		ObjectMethod,
		ObjectMethod,
		ObjectMethod,
		ObjectProperty,
		ObjectProperty,
		ObjectField,
		ObjectField,
	]
	assert [m.name for m in contract.find_members("Area")] == ["area"]
	assert [e.preferred_name for e in contract.events] == ["Changed", "closed"]


@pytest.mark.parametrize(
	"literal, optional, variadic",
	[
		("Int32", False, False),
		("[Int32]", True, False),
		("@Int32", False, True),
	],
)
def test_parse_parameter_literals(literal, optional, variadic):
	types = TypeTable()

	param = parse_parameter(literal, types)

	assert param == MemberParameter(types.lookup("Int32"), is_optional=optional, is_variadic=variadic)


def test_anonymous_generic_literal_is_a_fresh_placeholder():
	types = TypeTable()

	first = parse_parameter("?", types)
	second = parse_parameter("?", types)

	assert first.is_generic(types)
	assert first.type != second.type


def test_parse_type_suffixes():
	types = TypeTable()

	assert parse_type("Int32?[]", types) == types.ensure_array(types.ensure_nullable(types.lookup("Int32")))


@pytest.mark.parametrize(
	"source",
	[
		"method area(Missing)",
		"property p: String?",
		"field f: Int32??",
		"method f<T, T>(T)",
	],
)
def test_semantic_errors_carry_line(source):
	with pytest.raises(ContractError) as excinfo:
		parse_contract("\n" + source)

	assert excinfo.value.line == 2
	assert str(excinfo.value).startswith("2:")


def test_syntax_error_carries_line_and_column():
	with pytest.raises(ContractError) as excinfo:
		parse_contract("method ok()\nmethod bad(Int32,,)\n")

	assert excinfo.value.line == 2
	assert excinfo.value.column is not None
	assert isinstance(excinfo.value, ValueError)


def test_truncated_contract_is_reported():
	with pytest.raises(ContractError, match="end of contract input"):
		parse_contract("method area(Int32")


def test_variadic_must_be_last_in_text():
	with pytest.raises(ContractError, match="variadic"):
		parse_contract("method f(@Int32, String)")


def test_duplicate_declaration_reports_its_line():
	with pytest.raises(ContractError) as excinfo:
		parse_contract("method f(Int32)\n\nmethod f(Int32)")

	assert excinfo.value.line == 3


def test_reserved_words_are_not_member_names():
	with pytest.raises(ContractError):
		parse_contract("method get()")


def test_load_contract_reads_file(tmp_path):
	path = tmp_path / "shapes.contract"
	path.write_text("method area(Int32)\nevent changed\n")

	contract = load_contract(path)

	assert len(contract.members) == 1
	assert contract.events[0].name == "changed"


def test_identical_generic_methods_in_text_are_rejected():
	with pytest.raises(ContractError, match="duplicate") as excinfo:
		parse_contract("method echo<T>(T)\nmethod echo<U>(U)\n")

	assert excinfo.value.line == 2


def test_anonymous_placeholders_count_toward_arity_in_text():
	types = TypeTable()
	plain, named = parse_declarations("method first(?, [?])\nmethod second<T>(T, ?[])", types)

	assert plain.generic_type_count == 2
	assert named.generic_type_count == 2


def test_event_attribute_declared_twice_in_text():
	with pytest.raises(ContractError) as excinfo:
		parse_contract('event opened as "A"\nevent opened as "B"\n')

	assert excinfo.value.line == 2
