"""Allow running dude as ``python -m dude``."""

from dude.cli.main import app

app(prog_name="dude")
