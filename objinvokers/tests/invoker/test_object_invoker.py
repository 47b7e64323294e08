# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from objinvokers.contract.builder import ContractBuilder
from objinvokers.core.types_core import TypeTable, Typed
from objinvokers.errors import AmbiguousMemberError, MemberNotFoundError
from objinvokers.invoker import ObjectInvoker
from objinvokers.members import ObjectField, ObjectMethod, ObjectProperty


class Target:
	def __init__(self):
		self.calls = []
		self.size = 3
		self.title = "untitled"

	def _record(self, name, *args):
		self.calls.append((name,) + args)
		return name

	def foo_str(self, a, b):
		return self._record("foo_str", a, b)

	def foo_mixed(self, a, b):
		return self._record("foo_mixed", a, b)

	def foo_wide(self, a, b):
		return self._record("foo_wide", a, b)

	def foo_double(self, a, b):
		return self._record("foo_double", a, b)

	def greet(self, name, punctuation="!"):
		return f"hello {name}{punctuation}"

	def greet_exact(self, name):
		return f"hi {name}"

	def make(self, value, type_args=()):
		return (value, type_args)


def _builder():
	return ContractBuilder(TypeTable())


def test_single_best_candidate_is_invoked_exactly_once():
	contract = (
		_builder()
		.method("foo_str", "String", "String", preferred_name="Foo")
		.method("foo_mixed", "Int32", "Int64", preferred_name="Foo")
		.method("foo_wide", "Int64", "Int64", preferred_name="Foo")
		.build()
	)
	target = Target()
	invoker = ObjectInvoker.bind(contract, target)

	assert [score for _, score in invoker.rank("Foo", None, [1, 2])] == [1, 2]
	assert invoker.invoke("Foo", None, [1, 2]) == "foo_mixed"
	assert target.calls == [("foo_mixed", 1, 2)]


def test_no_viable_candidate_names_the_member():
	contract = _builder().method("foo_str", "String", "String", preferred_name="Foo").build()
	invoker = ObjectInvoker.bind(contract, Target())

	with pytest.raises(MemberNotFoundError) as excinfo:
		invoker.call("Foo", 1, 2)

	assert excinfo.value.member_name == "Foo"
	assert "Foo" in str(excinfo.value)
	assert isinstance(excinfo.value, LookupError)


def test_unknown_member_name_is_not_found():
	invoker = ObjectInvoker.bind(_builder().method("greet", "String").build(), Target())

	with pytest.raises(MemberNotFoundError):
		invoker.call("Missing")


def test_tie_reports_exactly_the_tied_candidates():
	contract = (
		_builder()
		.method("foo_wide", "Int64", "Int32", preferred_name="Foo")
		.method("foo_mixed", "Int32", "Int64", preferred_name="Foo")
		.method("foo_double", "Double", "Int32", preferred_name="Foo")
		.method("foo_str", "Int64", "Int64", preferred_name="Foo")
		.build()
	)
	target = Target()
	invoker = ObjectInvoker.bind(contract, target)

	with pytest.raises(AmbiguousMemberError) as excinfo:
		invoker.call("Foo", 1, 2)

	tied = excinfo.value.ambiguous_members
	assert len(tied) == 3
	assert {m.name for m in tied} == {"foo_wide", "foo_mixed", "foo_double"}
	assert target.calls == []


def test_exact_match_beats_converting_match():
	contract = (
		_builder()
		.method("foo_wide", "Int64", "Int64", preferred_name="Foo")
		.method("foo_mixed", "Int32", "Int32", preferred_name="Foo")
		.build()
	)
	invoker = ObjectInvoker.bind(contract, Target())

	assert invoker.resolve("Foo", None, [1, 2]).name == "foo_mixed"
	assert invoker.resolve("Foo", None, [Typed(1, invoker.types.lookup("Int64")), 2]).name == "foo_wide"


def test_binding_all_arguments_beats_relying_on_optional():
	contract = (
		_builder()
		.method("greet", "String", "[String]", preferred_name="Greet")
		.method("greet_exact", "Object", preferred_name="Greet")
		.build()
	)
	invoker = ObjectInvoker.bind(contract, Target())

	assert invoker.call("Greet", "bob") == "hi bob"
	assert invoker.call("Greet", "bob", "?") == "hello bob?"


def test_property_and_field_reached_through_invoker():
	contract = _builder().property("title", "String", preferred_name="Title").field("size", "Int32").build()
	target = Target()
	invoker = ObjectInvoker.bind(contract, target)

	assert invoker.call("Title") == "untitled"
	assert invoker.call("Title", "report") is None
	assert target.title == "report"
	assert invoker.call("size") == 3
	with pytest.raises(MemberNotFoundError):
		invoker.call("size", "not a number")


def test_generic_types_select_generic_overload_and_reach_the_method():
	builder = _builder()
	contract = builder.method("make", "T", generics=["T"]).method("greet_exact", "Object", preferred_name="make").build()
	invoker = ObjectInvoker.bind(contract, Target())
	string_ty = invoker.types.string_type

	assert invoker.call("make", "x", generic_types=[string_ty]) == ("x", (string_ty,))
	assert invoker.call("make", "x") == "hi x"


def test_member_views_partition_members():
	contract = (
		_builder()
		.method("greet", "String")
		.property("title", "String")
		.field("size", "Int32")
		.build()
	)
	invoker = ObjectInvoker.bind(contract, Target())

	assert len(invoker.members) == 3
	assert [type(m) for m in invoker.methods] == [ObjectMethod]
	assert [type(m) for m in invoker.properties] == [ObjectProperty]
	assert [type(m) for m in invoker.fields] == [ObjectField]


def test_none_members_is_a_type_error():
	with pytest.raises(TypeError):
		ObjectInvoker(None, Target(), types=TypeTable())


def test_empty_invoker_finds_nothing():
	invoker = ObjectInvoker([], Target(), types=TypeTable())

	assert invoker.rank("Foo") == []
	with pytest.raises(MemberNotFoundError):
		invoker.invoke("Foo")


class Ledger:
	def total(self, values):
		return sum(values)

	def total_wide(self, values):
		return ("wide", len(values))

	def first(self, values, type_args=()):
		return values[0]


def test_homogeneous_list_binds_to_array_parameter():
	contract = _builder().method("total", "Int32[]").build()
	invoker = ObjectInvoker.bind(contract, Ledger())

	assert invoker.call("total", [1, 2, 3]) == 6
	with pytest.raises(MemberNotFoundError):
		invoker.call("total", [1, "2"])


def test_arrays_do_not_widen_element_types():
	contract = (
		_builder()
		.method("total", "Int32[]", preferred_name="Total")
		.method("total_wide", "Int64[]", preferred_name="Total")
		.build()
	)
	invoker = ObjectInvoker.bind(contract, Ledger())
	int64 = invoker.types.lookup("Int64")

	assert invoker.call("Total", (1, 2)) == 3
	assert invoker.call("Total", [Typed(1, int64), Typed(2, int64)]) == ("wide", 2)
	with pytest.raises(MemberNotFoundError):
		invoker.call("Total", [1.5])


def test_anonymous_placeholder_needs_a_generic_type():
	contract = _builder().method("first", "?").build()
	invoker = ObjectInvoker.bind(contract, Ledger())

	assert contract.members[0].signature.generic_type_count == 1
	assert invoker.call("first", ["a", "b"], generic_types=[invoker.types.string_type]) == "a"
	with pytest.raises(MemberNotFoundError):
		invoker.call("first", ["a", "b"])
