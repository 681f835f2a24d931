"""
blake3_session.cli

Command-line interface for **blake3-session**.

Hashes files or standard input through the same :class:`Blake3Session` the
library exposes and prints ``b3sum``-style lines (``<hex>  <name>``). Library
validation errors exit with status 2, unreadable files with status 1.
"""

from __future__ import annotations

import json
import logging
import uuid
from pathlib import Path
from typing import Any, BinaryIO, NoReturn

import typer
from rich import print as rprint
from rich.table import Table

from blake3_session import get_version_info
from blake3_session.context import OPERATION_ID
from blake3_session.core.encoding import decode_hex
from blake3_session.core.session import Blake3Session, derive_key, hash_file
from blake3_session.errors import Blake3SessionError
from blake3_session.settings import configure_logging, get_settings

logger = logging.getLogger("blake3_session.cli")

# ---------------------------------------------------------------------------

# Typer application

# ---------------------------------------------------------------------------

app = typer.Typer(
    name="blake3-session",
    help="Hash files and derive keys with BLAKE3.",
    no_args_is_help=True,
)

STDIN = "-"

# ---------------------------------------------------------------------------

# Helper utilities

# ---------------------------------------------------------------------------


def _fail(message: str, code: int = 2) -> NoReturn:
    typer.echo(f"error: {message}", err=True)
    raise typer.Exit(code)


def _new_operation() -> str:
    op_id = uuid.uuid4().hex[:12]
    OPERATION_ID.set(op_id)
    return op_id


def _hex_option(value: str, option: str) -> bytes:
    try:
        return decode_hex(value)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint=option) from exc


def _read_key(key_hex: str | None, key_file: Path | None) -> bytes | None:
    """Resolve ``--key-hex``/``--key-file`` into raw key bytes."""
    if key_hex is not None and key_file is not None:
        raise typer.BadParameter("use either --key-hex or --key-file, not both")
    if key_hex is not None:
        return _hex_option(key_hex, "--key-hex")
    if key_file is not None:
        return key_file.read_bytes()
    return None


def _stdin() -> BinaryIO:
    return typer.get_binary_stream("stdin")


def _feed(session: Blake3Session, stream: BinaryIO, chunk_size: int) -> Blake3Session:
    while chunk := stream.read(chunk_size):
        session.update(chunk)
    return session


def _emit(name: str, session: Blake3Session, length: int, as_json: bool) -> None:
    digest = session.hexdigest(length)
    if as_json:
        payload: dict[str, Any] = {
            "name": name,
            "digest": digest,
            "length": length,
            "mode": session.mode.name,
        }
        typer.echo(json.dumps(payload))
    else:
        typer.echo(f"{digest}  {name}")


# ---------------------------------------------------------------------------

# Commands

# ---------------------------------------------------------------------------


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr."),
) -> None:
    """Hash files and derive keys with BLAKE3."""
    configure_logging(get_settings(), level="DEBUG" if verbose else None)


@app.command("hash")
def hash_command(
    files: list[str] | None = typer.Argument(
        None, help="Files to hash. '-' or no argument reads standard input."
    ),
    length: int | None = typer.Option(
        None, "--length", "-l", help="Output length in bytes (1-65536)."
    ),
    key_hex: str | None = typer.Option(
        None, "--key-hex", help="Keyed mode: the 32-byte key as 64 hex characters."
    ),
    key_file: Path | None = typer.Option(
        None,
        "--key-file",
        exists=True,
        dir_okay=False,
        help="Keyed mode: file containing the raw 32-byte key.",
    ),
    context: str | None = typer.Option(None, "--context", help="Derive-key mode context."),
    as_json: bool = typer.Option(False, "--json", help="Emit one JSON object per input."),
) -> None:
    """Print the BLAKE3 digest of each input."""
    settings = get_settings()
    key = _read_key(key_hex, key_file)
    chunk_size = settings.session.file_chunk_size
    failed = False

    for name in files or [STDIN]:
        op_id = _new_operation()
        try:
            if name == STDIN:
                session = _feed(
                    Blake3Session(digest_size=length, key=key, context=context),
                    _stdin(),
                    chunk_size,
                )
            else:
                session = hash_file(
                    name,
                    digest_size=length,
                    key=key,
                    context=context,
                    chunk_size=chunk_size,
                )
        except Blake3SessionError as exc:
            _fail(str(exc))
        except OSError as exc:
            logger.warning("operation %s could not read %s: %s", op_id, name, exc)
            typer.echo(f"error: {name}: {exc.strerror or exc}", err=True)
            failed = True
            continue
        _emit(name, session, session.digest_size, as_json)

    if failed:
        raise typer.Exit(1)


@app.command("derive-key")
def derive_key_command(
    context: str = typer.Argument(..., help="Domain-separation context string."),
    material_hex: str | None = typer.Option(
        None, "--material-hex", help="Key material as hex. Defaults to standard input."
    ),
    material_file: Path | None = typer.Option(
        None,
        "--material-file",
        exists=True,
        dir_okay=False,
        help="File containing the raw key material.",
    ),
    length: int = typer.Option(32, "--length", "-l", help="Output length in bytes (1-65536)."),
) -> None:
    """Derive a subkey from key material and print it as hex."""
    if material_hex is not None and material_file is not None:
        raise typer.BadParameter("use either --material-hex or --material-file, not both")
    _new_operation()
    if material_hex is not None:
        material = _hex_option(material_hex, "--material-hex")
    elif material_file is not None:
        material = material_file.read_bytes()
    else:
        material = _stdin().read()
    try:
        derived = derive_key(material, context, length)
    except Blake3SessionError as exc:
        _fail(str(exc))
    typer.echo(derived.hex())


@app.command()
def info() -> None:
    """Show the package version and effective settings."""
    versions = get_version_info()
    table = Table(title="blake3-session")
    table.add_column("Setting", justify="left")
    table.add_column("Value", justify="left")
    table.add_row("blake3_session", versions["version"])
    table.add_row("blake3 backend", versions["blake3"])
    for key, value in get_settings().summary().items():
        if key != "version":
            table.add_row(key, str(value))
    rprint(table)


if __name__ == "__main__":  # pragma: no cover - manual invocation
    app()
