import io

import pytest
from rich.console import Console

from mini_postman_cli.presenter import Presenter


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def presenter(output):
    console = Console(file=output, color_system=None, width=120, highlight=False, emoji=False)
    return Presenter(console=console)


def scripted(lines):
    """input() replacement that feeds ``lines`` then behaves like end of input."""
    it = iter(lines)

    def _input():
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return _input
