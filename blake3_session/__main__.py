"""Allow ``python -m blake3_session``."""

from blake3_session.cli import app

app(prog_name="blake3-session")
