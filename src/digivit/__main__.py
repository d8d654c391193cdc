"""Allow ``python -m digivit``."""

from .cli import main

raise SystemExit(main())
