# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from objinvokers.core.types_core import TypeTable, Typed
from objinvokers.errors import MemberAccessError
from objinvokers.members import ObjectField, ObjectProperty
from objinvokers.signature import MemberParameter


class Counter:
	def __init__(self):
		self.count = 0
		self._label = "start"

	@property
	def label(self):
		return self._label

	@label.setter
	def label(self, value):
		self._label = value


def test_read_write_property_signature_has_one_optional_parameter():
	types = TypeTable()
	prop = ObjectProperty("label", types.string_type)

	assert prop.signature.parameters == (MemberParameter(types.string_type, is_optional=True),)
	assert prop.preferred_name == "label"


def test_read_only_and_write_only_property_signatures():
	types = TypeTable()

	assert ObjectProperty("label", types.string_type, writable=False).signature.parameters == ()
	assert ObjectProperty("label", types.string_type, readable=False).signature.parameters == (
		MemberParameter(types.string_type),
	)


def test_property_must_be_readable_or_writable():
	types = TypeTable()

	with pytest.raises(ValueError):
		ObjectProperty("label", types.string_type, readable=False, writable=False)


def test_property_invoke_reads_with_no_arguments_and_writes_with_one():
	types = TypeTable()
	target = Counter()
	prop = ObjectProperty("label", types.string_type, preferred_name="Label")

	assert prop.invoke(target) == "start"
	assert prop.invoke(target, None, ["next"]) is None
	assert target.label == "next"
	assert prop.invoke(target, [], []) == "next"


def test_property_invoke_rejects_generics_and_extra_arguments():
	types = TypeTable()
	prop = ObjectProperty("label", types.string_type)

	with pytest.raises(ValueError):
		prop.invoke(Counter(), [types.string_type], [])
	with pytest.raises(ValueError):
		prop.invoke(Counter(), None, ["a", "b"])


def test_property_access_direction_is_enforced():
	types = TypeTable()
	target = Counter()

	with pytest.raises(MemberAccessError):
		ObjectProperty("label", types.string_type, writable=False).set_value(target, "x")
	with pytest.raises(MemberAccessError):
		ObjectProperty("label", types.string_type, readable=False).get_value(target)


def test_field_reads_writes_and_unwraps_typed_values():
	types = TypeTable()
	target = Counter()
	count = ObjectField("count", types.lookup("Int32"))

	assert count.writable
	count.invoke(target, None, [Typed(5, types.lookup("Int16"))])
	assert target.count == 5
	assert count.invoke(target) == 5


def test_readonly_field():
	types = TypeTable()
	count = ObjectField("count", types.lookup("Int32"), readonly=True)

	assert not count.writable
	assert count.signature.parameters == ()
	with pytest.raises(MemberAccessError):
		count.set_value(Counter(), 1)
	assert isinstance(MemberAccessError("x"), AttributeError)
