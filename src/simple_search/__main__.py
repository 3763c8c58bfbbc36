"""Allow ``python -m simple_search``."""

from simple_search.cli import main

raise SystemExit(main())
