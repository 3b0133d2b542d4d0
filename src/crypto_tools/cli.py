from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from crypto_tools import config
from crypto_tools.crypto import generate_passphrase
from crypto_tools.engine import run, transform
from crypto_tools.examples import EXAMPLES
from crypto_tools.models import Operation, TransformResult
from crypto_tools.ui import render_examples, shell_loop


ENCODE_OPERATIONS = {
    "base64": Operation.BASE64_ENCODE,
    "url": Operation.URL_ENCODE,
    "hex": Operation.HEX_ENCODE,
}

DECODE_OPERATIONS = {
    "base64": Operation.BASE64_DECODE,
    "url": Operation.URL_DECODE,
    "hex": Operation.HEX_DECODE,
}

text_argument = click.argument("text", required=False)
output_option = click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the result to this file instead of stdout.",
)
passphrase_option = click.option(
    "--passphrase",
    "-p",
    envvar=config.PASSPHRASE_ENV,
    help=f"AES passphrase. Defaults to ${config.PASSPHRASE_ENV}.",
)


def read_text(text: Optional[str]) -> str:
    """Return the TEXT argument, or stdin when it is missing or '-'.
    A single trailing newline is dropped from stdin."""
    if text is not None and text != "-":
        return text
    data = click.get_text_stream("stdin").read()
    if data.endswith("\r\n"):
        return data[:-2]
    if data.endswith("\n"):
        return data[:-1]
    return data


def emit(result: TransformResult, output: Optional[str]) -> None:
    """Print or save a success. Report a failure on stderr and exit 1."""
    if not result.ok:
        click.echo(f"Error ({result.kind}): {result.message}", err=True)
        raise click.exceptions.Exit(1)

    if output:
        Path(output).write_text(result.text, encoding="utf-8")
        click.echo(f"Saved output to {output}", err=True)
    else:
        click.echo(result.text)


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(config.LOG_LEVELS, case_sensitive=False),
    default=None,
    help=f"Log level. Defaults to ${config.LOG_LEVEL_ENV} or {config.DEFAULT_LOG_LEVEL}.",
)
@click.option("--json-logs", is_flag=True, help="Render log events as JSON.")
def cli(log_level: Optional[str], json_logs: bool):
    """Encode, decode, hash and encrypt text."""
    config.configure_logging(log_level, json_logs or None)


@cli.command()
@click.argument("format", type=click.Choice(list(ENCODE_OPERATIONS)))
@text_argument
@output_option
def encode(format: str, text: Optional[str], output: Optional[str]):
    """Encode TEXT as base64, url or hex."""
    emit(run(ENCODE_OPERATIONS[format], read_text(text)), output)


@cli.command()
@click.argument("format", type=click.Choice(list(DECODE_OPERATIONS)))
@text_argument
@output_option
def decode(format: str, text: Optional[str], output: Optional[str]):
    """Decode base64, url or hex TEXT back to text."""
    emit(run(DECODE_OPERATIONS[format], read_text(text)), output)


@cli.command()
@text_argument
@output_option
def sha256(text: Optional[str], output: Optional[str]):
    """Print the SHA-256 digest of TEXT as hex."""
    emit(run(Operation.SHA256, read_text(text)), output)


@cli.command()
@text_argument
@passphrase_option
@click.option("--generate", "-g", is_flag=True, help="Generate a passphrase and print it to stderr.")
@output_option
def encrypt(text: Optional[str], passphrase: Optional[str], generate: bool, output: Optional[str]):
    """Encrypt TEXT with AES-256-CBC into a Base64 Salted__ envelope."""
    if generate:
        if passphrase:
            raise click.UsageError("--generate cannot be combined with --passphrase")
        passphrase = generate_passphrase()
        click.echo(f"Passphrase: {passphrase}", err=True)
    emit(run(Operation.AES_ENCRYPT, read_text(text), passphrase), output)


@cli.command()
@text_argument
@passphrase_option
@output_option
def decrypt(text: Optional[str], passphrase: Optional[str], output: Optional[str]):
    """Decrypt a Base64 Salted__ envelope produced by encrypt, CryptoJS or openssl."""
    emit(run(Operation.AES_DECRYPT, read_text(text), passphrase), output)


@cli.command()
def passphrase():
    """Print a random 32 character hex passphrase."""
    click.echo(generate_passphrase())


@cli.command()
@click.argument("name", type=click.Choice(list(EXAMPLES)), required=False)
@output_option
def examples(name: Optional[str], output: Optional[str]):
    """Run the sample inputs. With NAME, print only that example's output."""
    if name:
        emit(transform(EXAMPLES[name].request()), output)
        return

    results = {key: transform(example.request()) for key, example in EXAMPLES.items()}
    Console().print(render_examples(results))


@cli.command()
def shell():
    """Interactive mode: choose a tool, enter input, see and save the output."""
    try:
        shell_loop()
    except (KeyboardInterrupt, EOFError):
        click.echo()


if __name__ == "__main__":
    cli()
