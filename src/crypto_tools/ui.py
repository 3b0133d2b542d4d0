import sys
from pathlib import Path
from typing import Dict, Optional, Tuple

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table
from rich.text import Text

from crypto_tools.crypto import generate_passphrase
from crypto_tools.engine import transform
from crypto_tools.examples import EXAMPLES, Example
from crypto_tools.models import Operation, TransformRequest, TransformResult


COLORS = {
    "title": "bold yellow",
    "success": "spring_green2",
    "failure": "bright_red",
    "passphrase": "cyan",
}

DEFAULT_OUTPUT_FILE = "output.txt"

ToolModes = Dict[str, Operation]

TOOLS: Dict[str, Tuple[str, ToolModes]] = {
    "base64": ("Base64", {
        "encode": Operation.BASE64_ENCODE,
        "decode": Operation.BASE64_DECODE,
    }),
    "aes": ("AES", {
        "encrypt": Operation.AES_ENCRYPT,
        "decrypt": Operation.AES_DECRYPT,
    }),
    "others": ("Hex / SHA256", {
        "hex-encode": Operation.HEX_ENCODE,
        "hex-decode": Operation.HEX_DECODE,
        "sha256": Operation.SHA256,
    }),
    "url": ("URL Encoding", {
        "encode": Operation.URL_ENCODE,
        "decode": Operation.URL_DECODE,
    }),
}


def render(result: Optional[TransformResult], title: str = "Output") -> Panel:
    """Render a transform result. User text is never parsed as markup."""
    if result is None:
        return Panel("Nothing to show yet…", title=title, border_style="dim")

    if result.ok:
        return Panel(Text(result.text), title=title, border_style=COLORS["success"])

    return Panel(
        Text(result.message),
        title=f"{title} ({result.kind})",
        border_style=COLORS["failure"],
    )


def render_examples(results: Dict[str, TransformResult]) -> Table:
    table = Table(title="Examples")
    table.add_column("Name", justify="right")
    table.add_column("Operation")
    table.add_column("Input")
    table.add_column("Output")

    for name, result in results.items():
        example = EXAMPLES[name]
        output = result.text if result.ok else f"{result.kind}: {result.message}"
        table.add_row(name, str(example.operation), Text(example.payload), Text(output))
    return table


GENERATE_ANSWER = "generate"


def ask_passphrase(console: Console, operation: Operation) -> str:
    """Prompt for the passphrase, hidden when reading from a terminal.
    When encrypting, answering `generate` creates a random passphrase.
    An empty answer is passed on and reported as a missing passphrase."""
    label = "Passphrase"
    if operation is Operation.AES_ENCRYPT:
        label = f"Passphrase ('{GENERATE_ANSWER}' for a random one)"

    passphrase = Prompt.ask(
        label,
        password=sys.stdin.isatty(),
        default="",
        show_default=False,
        console=console,
    )
    if operation is Operation.AES_ENCRYPT and passphrase == GENERATE_ANSWER:
        passphrase = generate_passphrase()
        console.print(f"Generated passphrase: [{COLORS['passphrase']}]{passphrase}[/{COLORS['passphrase']}]")
    return passphrase


def offer_download(console: Console, result: TransformResult) -> None:
    """Save a successful result to a file when asked to."""
    if not result.ok or not Confirm.ask("Save output to a file?", default=False, console=console):
        return
    path = Path(Prompt.ask("File name", default=DEFAULT_OUTPUT_FILE, console=console))
    path.write_text(result.text, encoding="utf-8")
    console.print(f"Saved to {path}")


def run_example(console: Console, example: Example) -> TransformResult:
    console.print(f"[{COLORS['title']}]{example.title}[/{COLORS['title']}]")
    result = transform(example.request())
    console.print(render(result))
    return result


def shell_loop(console: Optional[Console] = None) -> None:
    """Interactive loop: pick a tool and mode, enter input, see the output."""
    console = console or Console()
    console.print(Panel(
        "Base64 · AES · Hex · SHA256 · URL Encode",
        title="Crypto & Encoding Tools",
        border_style=COLORS["title"],
    ))

    while True:
        tool = Prompt.ask(
            "Tool",
            choices=[*TOOLS, "examples", "quit"],
            default="base64",
            console=console,
        )
        if tool == "quit":
            break

        if tool == "examples":
            name = Prompt.ask("Example", choices=[*EXAMPLES, "back"], console=console)
            if name != "back":
                offer_download(console, run_example(console, EXAMPLES[name]))
            continue

        title, modes = TOOLS[tool]
        mode = Prompt.ask(
            f"{title} mode",
            choices=[*modes, "back"],
            default=next(iter(modes)),
            console=console,
        )
        if mode == "back":
            continue

        operation = modes[mode]
        payload = Prompt.ask("Input", default="", show_default=False, console=console)
        passphrase = ask_passphrase(console, operation) if operation.requires_passphrase else None

        result = transform(TransformRequest(
            operation=operation,
            payload=payload,
            passphrase=passphrase,
        ))
        console.print(render(result))
        offer_download(console, result)
