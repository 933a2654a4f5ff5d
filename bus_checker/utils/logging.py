from rich.console import Console

# Terminal output only; the evaluator itself never logs.
console = Console(highlight=False)


def info(msg: str) -> None:
    console.print(f"[bold cyan]INFO[/bold cyan] {msg}")


def warn(msg: str) -> None:
    console.print(f"[bold yellow]WARN[/bold yellow] {msg}")


def error(msg: str) -> None:
    console.print(f"[bold red]ERROR[/bold red] {msg}")


def verdict(passed: bool, msg: str) -> None:
    """Print a PASS/FAIL line, e.g. the overall result of a compliance run."""
    if passed:
        console.print(f"[bold green]PASS[/bold green] {msg}")
    else:
        console.print(f"[bold red]FAIL[/bold red] {msg}")
