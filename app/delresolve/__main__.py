"""Allow running delresolve as ``python -m delresolve``."""

from delresolve.cli.main import app

app()
