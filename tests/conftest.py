from collections.abc import Callable

import pytest

from letter.letter_parser import parse


@pytest.fixture  # type: ignore[misc]
def render() -> Callable[[str], str]:
    """Parses source and returns the program's canonical text."""

    def _render(source: str, **kwargs: object) -> str:
        return parse(source, **kwargs).to_text()  # type: ignore[arg-type]

    return _render
