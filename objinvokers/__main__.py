# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
# author: objinvokers maintainers; created: 2026-10-17
"""
CLI entrypoint for `python -m objinvokers`.
"""

from .tool import main

if __name__ == "__main__":
	import sys
	sys.exit(main())
