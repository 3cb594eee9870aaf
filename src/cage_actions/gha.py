"""GitHub Actions workflow commands written to stdout."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TextIO


def escape_data(message: str) -> str:
    """Escape a workflow command payload (``%``, CR, LF)."""
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def error(message: str, stream: TextIO | None = None) -> None:
    """Annotate the run with an error; the runner shows it on the summary page."""
    out = stream or sys.stdout
    out.write(f"::error::{escape_data(message)}\n")
    out.flush()


@contextmanager
def group(title: str, stream: TextIO | None = None) -> Iterator[None]:
    """Fold everything logged inside the block under a collapsible title."""
    out = stream or sys.stdout
    out.write(f"::group::{escape_data(title)}\n")
    out.flush()
    try:
        yield
    finally:
        out.write("::endgroup::\n")
        out.flush()
