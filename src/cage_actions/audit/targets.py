"""Audit targets: turn action inputs into ``cage audit`` argument lists."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from cage_actions.errors import InputError

_SERVICE = re.compile(r"^(.+?)/(.+?)$")


@dataclass(frozen=True)
class AuditTarget:
    """One scan scope: a context path, or a ``--cluster``/``--service`` pair."""

    options: tuple[str, ...] = ()
    args: tuple[str, ...] = ()


def parse_service_input(line: str) -> tuple[str, str]:
    """Split ``<cluster>/<service>`` at the first slash."""
    m = _SERVICE.match(line)
    if not m:
        raise InputError(
            f"Invalid audit-services entry: {line}. "
            "Expected format is <cluster>/<service>."
        )
    return m.group(1), m.group(2)


def iterate_targets(
    contexts: Iterable[str] = (), services: Iterable[str] = ()
) -> Iterator[AuditTarget]:
    """Contexts first, then services, each in the order given."""
    for ctx in contexts:
        yield AuditTarget(args=(ctx,))
    for line in services:
        cluster, service = parse_service_input(line)
        yield AuditTarget(options=("--cluster", cluster, "--service", service))


def build_args_list(
    region: str,
    targets: Iterable[AuditTarget],
    cage_options: Iterable[str] = (),
) -> list[list[str]]:
    extra = list(cage_options)
    args_list = [
        ["--region", region, *t.options, *extra, *t.args] for t in targets
    ]
    if not args_list:
        raise InputError(
            "Either 'audit-contexts' or 'audit-services' input must be provided."
        )
    return args_list
