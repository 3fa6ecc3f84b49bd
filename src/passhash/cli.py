"""Command-line interface for passhash.

Provides commands to hash a password, verify a password against a stored
hash and inspect the parameters embedded in a hash.
"""

import json
import sys
from typing import NoReturn

import click

from passhash import __version__
from passhash.core.config import get_settings
from passhash.core.exceptions import PasswordHashError
from passhash.core.logging import configure_logging, get_logger
from passhash.domain.entities.argon_parameters import ArgonParameters
from passhash.infrastructure.auth.hash_codec import ArgonHashCodec
from passhash.infrastructure.auth.password_hasher import ArgonPasswordHasher

# Exit codes; verify uses all three, hash and inspect use EXIT_ERROR
EXIT_MATCH = 0
EXIT_MISMATCH = 1
EXIT_ERROR = 2


def _read_password(from_stdin: bool, confirm: bool) -> str:
    if from_stdin:
        # Strip only the line terminator; other whitespace is part of the password
        return sys.stdin.read().rstrip("\r\n")
    return click.prompt("Password", hide_input=True, confirmation_prompt=confirm)


@click.group()
@click.version_option(version=__version__, prog_name="passhash")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="Set log level (overrides PASSHASH_LOG_LEVEL)",
)
def cli(log_level: str | None) -> None:
    """passhash - Argon2id password hashing.

    Default parameters are read from PASSHASH_* environment variables.
    """
    settings = get_settings()
    if log_level is not None:
        settings = settings.model_copy(update={"log_level": log_level})
    configure_logging(settings)


@cli.command("hash")
@click.option("--stdin", "from_stdin", is_flag=True, help="Read the password from stdin")
@click.option("--memory-cost", type=int, default=None, help="Memory cost in KiB")
@click.option("--time-cost", type=int, default=None, help="Number of iterations")
@click.option("--parallelism", type=int, default=None, help="Number of lanes")
@click.option("--salt-length", type=int, default=None, help="Salt length in bytes")
@click.option("--key-length", type=int, default=None, help="Derived key length in bytes")
def hash_command(
    from_stdin: bool,
    memory_cost: int | None,
    time_cost: int | None,
    parallelism: int | None,
    salt_length: int | None,
    key_length: int | None,
) -> None:
    """Hash a password and print the encoded hash."""
    overrides = {
        name: value
        for name, value in {
            "memory_cost": memory_cost,
            "time_cost": time_cost,
            "parallelism": parallelism,
            "salt_length": salt_length,
            "key_length": key_length,
        }.items()
        if value is not None
    }

    try:
        parameters = ArgonParameters.from_settings(get_settings()).with_overrides(**overrides)
        password = _read_password(from_stdin, confirm=True)
        encoded = ArgonPasswordHasher(parameters).hash(password)
    except PasswordHashError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(EXIT_ERROR)

    click.echo(encoded)


@cli.command()
@click.argument("encoded_hash")
@click.option("--stdin", "from_stdin", is_flag=True, help="Read the password from stdin")
def verify(encoded_hash: str, from_stdin: bool) -> None:
    """Verify a password against ENCODED_HASH.

    Exits 0 on match, 1 on mismatch and 2 if the hash is malformed or
    uses an incompatible version.
    """
    logger = get_logger(__name__)
    hasher = ArgonPasswordHasher(ArgonParameters.from_settings(get_settings()))
    password = _read_password(from_stdin, confirm=False)

    try:
        matched = hasher.verify(password, encoded_hash)
    except PasswordHashError as e:
        click.echo(f"Error: {e}", err=True)
        logger.error("Verification failed", error_kind=e.kind)
        raise SystemExit(EXIT_ERROR)

    if matched:
        click.echo("OK")
        raise SystemExit(EXIT_MATCH)
    click.echo("Password does not match", err=True)
    raise SystemExit(EXIT_MISMATCH)


@cli.command()
@click.argument("encoded_hash")
def inspect(encoded_hash: str) -> None:
    """Print the parameters embedded in ENCODED_HASH as JSON."""
    hasher = ArgonPasswordHasher(ArgonParameters.from_settings(get_settings()))
    try:
        decoded = ArgonHashCodec.decode(encoded_hash)
        outdated = hasher.needs_rehash(encoded_hash)
    except PasswordHashError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(EXIT_ERROR)

    info = {
        "algorithm": ArgonHashCodec.ALGORITHM,
        "version": ArgonHashCodec.VERSION,
        **decoded.parameters.as_dict(),
        "needs_rehash": outdated,
    }
    click.echo(json.dumps(info, indent=2))


def main() -> NoReturn:
    """Main entry point for the CLI.

    Called when the `passhash` command is run or via `python -m passhash`.
    """
    cli()
