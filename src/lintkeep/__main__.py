"""Allow ``python -m lintkeep``."""

from __future__ import annotations

from lintkeep.cli.main import main

raise SystemExit(main())
