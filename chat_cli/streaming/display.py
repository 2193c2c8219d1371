"""Progressive rendering of streamed replies on a rich Console."""

from rich.console import Console
from rich.rule import Rule

from chat_cli.models.message import Role


class ConsoleDisplay:
    """Prints the role once, then content deltas as they arrive."""

    def __init__(self, console: Console) -> None:
        self.console = console

    def show_role(self, role: Role) -> None:
        self.console.print(f"[bold cyan]{role.value.capitalize()}:[/bold cyan] ", end="")

    def show_content(self, delta: str) -> None:
        self.console.print(delta, end="", markup=False, highlight=False, soft_wrap=True)

    def show_end(self) -> None:
        self.console.print()
        self.console.print(Rule(style="dim"))
