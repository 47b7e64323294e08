# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: objinvokers maintainers; created: 2026-10-17
"""
Contract declaration: which members and events of a target object are reachable
by name. Declared in code with ContractBuilder or in text with parse_contract.
"""

from objinvokers.contract.builder import Contract, ContractBuilder
from objinvokers.contract.loader import load_contract, parse_contract
from objinvokers.contract.parser import EventDecl, parse_parameter, parse_type

__all__ = [
	"Contract",
	"ContractBuilder",
	"EventDecl",
	"load_contract",
	"parse_contract",
	"parse_parameter",
	"parse_type",
]
