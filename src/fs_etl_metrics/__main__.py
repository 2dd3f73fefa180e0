"""Allow ``python -m fs_etl_metrics``."""

from .cli import main

raise SystemExit(main())
