"""Console output for resource lifecycle messages."""

from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console
from rich.prompt import Confirm


class ProviderUI:
    """Writes lifecycle progress to a rich console.

    Prompts are answered "no" unless the UI was created as interactive.
    """

    INDENT = '    '

    def __init__(self, console: Optional[Console] = None, interactive: bool = False):
        self.console = console or Console()
        self.interactive = interactive
        self._depth = 0

    def write(self, message: str, *args) -> None:
        text = message % args if args else message
        self.console.print(f"{self.INDENT * self._depth}{text}", end='', markup=False, highlight=False)

    @contextmanager
    def indented(self) -> Iterator['ProviderUI']:
        self._depth += 1
        try:
            yield self
        finally:
            self._depth -= 1

    def confirm(self, question: str) -> bool:
        if not self.interactive:
            return False
        return Confirm.ask(question, console=self.console)
