# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: objinvokers maintainers; created: 2026-10-17
"""
objinvokers diagnostic driver.

Ranks the members of a contract file for one call and reports the member the
invoker would select, without invoking anything:

	python -m objinvokers shapes.contract area 3 Int16:4 --generic Int32

Call arguments are JSON literals (`1`, `"text"`, `null`, `2.5`); prefixing a
literal with a type name (`Int16:4`, `Char:"a"`) pins its run-time type.
With --json a single JSON document is printed instead of the text report.
"""

from __future__ import annotations

import argparse
import json
import logging
import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from objinvokers.config import DeviancyWeights
from objinvokers.contract.loader import load_contract
from objinvokers.contract.parser import parse_type
from objinvokers.core.types_core import TypeTable, Typed
from objinvokers.deviancy import calculate_deviancy_score
from objinvokers.errors import AmbiguousMemberError, MemberNotFoundError, ObjectInvokerError
from objinvokers.invoker import ObjectInvoker
from objinvokers.signature import NO_MATCH_SCORE, format_signature

_TYPED_ARG = re.compile(r"^(?P<type>[A-Za-z_][A-Za-z_0-9.]*(?:\?|\[\])*):(?P<value>.+)$", re.S)


def parse_call_argument(text: str, types: TypeTable) -> Any:
	"""Decode one command-line call argument (JSON literal, optionally `Type:`-prefixed)."""
	match = _TYPED_ARG.match(text)
	if match is not None:
		ty = parse_type(match.group("type"), types)
		return Typed(json.loads(match.group("value")), ty)
	return json.loads(text)


def _diagnostic(phase: str, message: str) -> Dict[str, Any]:
	return {"phase": phase, "message": message, "severity": "error"}


def _report(payload: Dict[str, Any], as_json: bool) -> None:
	if as_json:
		print(json.dumps(payload))
		return
	for diag in payload["diagnostics"]:
		print(f"{diag['severity']}[{diag['phase']}]: {diag['message']}", file=sys.stderr)
	candidates = payload["candidates"]
	if candidates:
		width = max(len(c["signature"]) for c in candidates)
		print(f"candidates for '{payload['member']}':")
		for cand in candidates:
			score = "no match" if cand["score"] is None else str(cand["score"])
			print(f"  {cand['signature']:<{width}}  {cand['kind']:<8}  {score}")
	if payload["winner"] is not None:
		print(f"winner: {payload['winner']}")


def main(argv: Optional[List[str]] = None) -> int:
	"""
	Entry point for `python -m objinvokers`.

	Exit code 0 when exactly one member wins, 1 on not-found, ambiguity or an
	invalid contract/argument.
	"""
	parser = argparse.ArgumentParser(description="rank contract members for a by-name call")
	parser.add_argument("contract", type=Path, help="Path to a contract file")
	parser.add_argument("member", help="Preferred name of the member to call")
	parser.add_argument("arguments", nargs="*", help="Call arguments as JSON literals, optionally Type:-prefixed")
	parser.add_argument(
		"--generic",
		action="append",
		default=[],
		metavar="TYPE",
		help="Generic type argument (repeatable)",
	)
	parser.add_argument("--conversion-score", type=int, default=1, help="Cost of one implicit conversion")
	parser.add_argument("--optional-score", type=int, default=1000, help="Cost of one omitted optional parameter")
	parser.add_argument("--json", action="store_true", help="Emit a JSON document instead of a text report")
	parser.add_argument(
		"--log-level",
		default="WARNING",
		choices=["DEBUG", "INFO", "WARNING", "ERROR"],
		help="Logging level for library diagnostics",
	)
	args = parser.parse_args(argv)
	logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

	payload: Dict[str, Any] = {
		"exit_code": 1,
		"member": args.member,
		"candidates": [],
		"winner": None,
		"diagnostics": [],
	}

	try:
		weights = DeviancyWeights(conversion_score=args.conversion_score, optional_score=args.optional_score)
	except ValueError as exc:
		payload["diagnostics"].append(_diagnostic("config", str(exc)))
		_report(payload, args.json)
		return 1

	types = TypeTable()
	try:
		contract = load_contract(args.contract, types)
	except OSError as exc:
		payload["diagnostics"].append(_diagnostic("contract", f"cannot read {args.contract}: {exc}"))
		_report(payload, args.json)
		return 1
	except ObjectInvokerError as exc:
		payload["diagnostics"].append(_diagnostic("contract", str(exc)))
		_report(payload, args.json)
		return 1

	try:
		generic_types = [parse_type(text, types) for text in args.generic]
		call_args = [parse_call_argument(text, types) for text in args.arguments]
	except (ObjectInvokerError, ValueError) as exc:
		payload["diagnostics"].append(_diagnostic("arguments", str(exc)))
		_report(payload, args.json)
		return 1

	invoker = ObjectInvoker.bind(contract, None, weights=weights)
	for member in contract.find_members(args.member):
		score = calculate_deviancy_score(
			member, args.member, len(generic_types), call_args, types=types, weights=weights
		)
		payload["candidates"].append(
			{
				"signature": format_signature(member.signature, types),
				"kind": type(member).__name__.removeprefix("Object").lower(),
				"score": None if score == NO_MATCH_SCORE else score,
			}
		)

	try:
		winner = invoker.resolve(args.member, generic_types, call_args)
	except MemberNotFoundError as exc:
		payload["diagnostics"].append(_diagnostic("resolve", str(exc)))
	except AmbiguousMemberError as exc:
		tied = ", ".join(format_signature(m.signature, types) for m in exc.ambiguous_members)
		payload["diagnostics"].append(_diagnostic("resolve", f"{exc} ({tied})"))
	else:
		payload["winner"] = format_signature(winner.signature, types)
		payload["exit_code"] = 0

	_report(payload, args.json)
	return payload["exit_code"]


if __name__ == "__main__":
	sys.exit(main())
