# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import json

import pytest

from objinvokers.core.types_core import TypeTable, Typed
from objinvokers.tool import main, parse_call_argument

CONTRACT = """
method foo_str(String, String) as "Foo"
method foo_mixed(Int32, Int64) as "Foo"
method foo_wide(Int64, Int64) as "Foo"
method bar_a(Int64) as "Bar"
method bar_b(Double) as "Bar"
method make<T>(T)
"""


@pytest.fixture
def contract_path(tmp_path):
	path = tmp_path / "sample.contract"
	path.write_text(CONTRACT)
	return path


def _run_json(capsys, argv):
	code = main(argv + ["--json"])
	payload = json.loads(capsys.readouterr().out)
	assert payload["exit_code"] == code
	return code, payload


def test_parse_call_argument():
	types = TypeTable()

	assert parse_call_argument("1", types) == 1
	assert parse_call_argument('"a:b"', types) == "a:b"
	assert parse_call_argument("null", types) is None
	pinned = parse_call_argument("Int16:4", types)
	assert isinstance(pinned, Typed)
	assert pinned.type_id == types.lookup("Int16")
	assert pinned.value == 4


def test_unique_winner(capsys, contract_path):
	code, payload = _run_json(capsys, [str(contract_path), "Foo", "1", "2"])

	assert code == 0
	assert payload["winner"] == "foo_mixed(Int32, Int64)"
	assert [c["score"] for c in payload["candidates"]] == [None, 1, 2]
	assert {c["kind"] for c in payload["candidates"]} == {"method"}
	assert payload["diagnostics"] == []


def test_ambiguous_call(capsys, contract_path):
	code, payload = _run_json(capsys, [str(contract_path), "Bar", "1"])

	assert code == 1
	assert payload["winner"] is None
	(diag,) = payload["diagnostics"]
	assert diag["phase"] == "resolve"
	assert "bar_a(Int64)" in diag["message"]
	assert "bar_b(Double)" in diag["message"]


def test_typed_argument_breaks_tie(capsys, contract_path):
	code, payload = _run_json(capsys, [str(contract_path), "Bar", "Int64:1"])

	assert code == 0
	assert payload["winner"] == "bar_a(Int64)"


def test_not_found(capsys, contract_path):
	code, payload = _run_json(capsys, [str(contract_path), "Foo", '"x"'])

	assert code == 1
	assert payload["diagnostics"][0]["phase"] == "resolve"
	assert "Foo" in payload["diagnostics"][0]["message"]


def test_generic_arguments(capsys, contract_path):
	code, payload = _run_json(capsys, [str(contract_path), "make", "1", "--generic", "Int32"])

	assert code == 0
	assert payload["winner"] == "make<1>(T)"


def test_invalid_contract_is_a_contract_diagnostic(capsys, tmp_path):
	path = tmp_path / "broken.contract"
	path.write_text("method foo(Missing)\n")

	code, payload = _run_json(capsys, [str(path), "foo"])

	assert code == 1
	assert payload["diagnostics"][0]["phase"] == "contract"
	assert "Missing" in payload["diagnostics"][0]["message"]


def test_missing_contract_file(capsys, tmp_path):
	code, payload = _run_json(capsys, [str(tmp_path / "nope.contract"), "foo"])

	assert code == 1
	assert payload["diagnostics"][0]["phase"] == "contract"


def test_bad_argument_literal(capsys, contract_path):
	code, payload = _run_json(capsys, [str(contract_path), "Foo", "not-json"])

	assert code == 1
	assert payload["diagnostics"][0]["phase"] == "arguments"


def test_bad_weights(capsys, contract_path):
	code, payload = _run_json(capsys, [str(contract_path), "Foo", "--optional-score", "10"])

	assert code == 1
	assert payload["diagnostics"][0]["phase"] == "config"


def test_text_report(capsys, contract_path):
	code = main([str(contract_path), "Foo", "1", "2"])

	out = capsys.readouterr().out
	assert code == 0
	assert "candidates for 'Foo':" in out
	assert "no match" in out
	assert "winner: foo_mixed(Int32, Int64)" in out
