"""Checks that each action.yml forwards its inputs to the CLI."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

ACTIONS_DIR = Path(__file__).resolve().parents[2] / "actions"


def _load(name: str) -> dict:
    return yaml.safe_load((ACTIONS_DIR / name / "action.yml").read_text())


@pytest.mark.parametrize("name, command", [("audit", "audit"), ("deploy", "deploy")])
def test_inputs_forwarded(name, command):
    action = _load(name)
    assert action["runs"]["using"] == "composite"
    step = next(s for s in action["runs"]["steps"] if "cage-actions" in s["run"])
    assert step["run"].strip() == f"cage-actions {command}"
    for input_name in action["inputs"]:
        key = "INPUT_" + input_name.upper()
        assert step["env"][key] == f"${{{{ inputs.{input_name} }}}}"


def test_audit_defaults():
    inputs = _load("audit")["inputs"]
    assert inputs["issue-title"]["default"] == "Cage audit report"
    assert inputs["dry-run"]["default"] == "false"
    assert inputs["region"]["required"] is True
