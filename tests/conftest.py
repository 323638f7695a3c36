"""Shared pytest fixtures for umlbox tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

COMPONENT_SOURCE = """\
[uml2.5-component] {
    [Shop] Online Shop {
        port [api] on [Shop] left : REST
        [Cart] Cart Service
        [Billing] Billing
    }
    [Client] Web Client
    [Bank] Bank Gateway

    Client -())- Cart.api : orders
    Billing -> Bank
}
"""


@pytest.fixture
def component_source() -> str:
    """Return a diagram with one container, two crossings and a declared port."""
    return COMPONENT_SOURCE


@pytest.fixture
def write_diagram(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper that writes diagram text to a file in tmp_path."""

    def _write(text: str, name: str = "diagram.uml") -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write
