"""End-to-end tests for the create command with external tools faked out."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest
from rich.console import Console
from typer import Typer
from typer.testing import CliRunner

from create_laju_app.cli.commands import create as create_module
from create_laju_app.cli.commands.create import register_create_command
from create_laju_app.core import validation as validation_module
from create_laju_app.core.project import PackageManager
from create_laju_app.errors import StepError, TemplateFetchError
from create_laju_app.setup import steps as steps_module


class DummyClient:
    def __init__(self) -> None:
        self.closed = False

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def harness(monkeypatch: pytest.MonkeyPatch, tmp_path: Path, write_template):
    """Typer app plus recorders for every external collaborator."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CREATE_LAJU_DEBUG", raising=False)
    monkeypatch.delenv("CREATE_LAJU_TEMPLATE_REPO", raising=False)

    console = Console(file=io.StringIO(), force_terminal=False, width=120)
    app = Typer()
    banner_calls: list[str] = []
    register_create_command(app, console=console, show_banner=lambda: banner_calls.append("banner"), version="1.2.3")

    state = {
        "fetches": [],
        "commands": [],
        "clients": [],
        "fail_step": None,
    }

    def fake_fetch(source, target_path, *, client, github_token=None):
        state["fetches"].append((str(source), target_path, github_token))
        return write_template(target_path)

    def fake_client(skip_tls: bool = False):
        client = DummyClient()
        state["clients"].append((skip_tls, client))
        return client

    def fake_run(step, command, *, timeout, shell=False):
        state["commands"].append((step, command, Path.cwd()))
        if step == state["fail_step"]:
            raise StepError(f"Command failed with exit code 1: {command}", step=step, command=str(command), returncode=1)

    monkeypatch.setattr(create_module, "fetch_template", fake_fetch)
    monkeypatch.setattr(create_module, "build_http_client", fake_client)
    monkeypatch.setattr(create_module, "configure_logging", lambda debug=False: None)
    monkeypatch.setattr(create_module, "_is_interactive", lambda: False)
    monkeypatch.setattr(create_module, "detect_package_managers", lambda: [PackageManager.NPM, PackageManager.BUN])
    monkeypatch.setattr(validation_module, "check_tool", lambda tool: True)
    monkeypatch.setattr(steps_module, "run_command", fake_run)

    state["app"] = app
    state["console"] = console
    state["banner"] = banner_calls
    state["root"] = tmp_path
    return state


def _invoke(harness, args: list[str], input: str | None = None):
    runner = CliRunner()
    return runner.invoke(harness["app"], args, input=input, catch_exceptions=False)


def _output(harness) -> str:
    return harness["console"].file.getvalue()


def test_create_success_patches_manifest_and_runs_setup(harness) -> None:
    before = Path.cwd()

    result = _invoke(harness, ["my-app"])

    assert result.exit_code == 0, _output(harness)
    target = harness["root"] / "my-app"
    manifest = json.loads((target / "package.json").read_text(encoding="utf-8"))
    assert manifest["name"] == "my-app"
    assert manifest["version"] == "0.0.1"
    assert manifest["dependencies"] == {"knex": "^3.1.0"}

    steps = [(step, command) for step, command, _ in harness["commands"]]
    assert [s for s, _ in steps] == ["install", "env", "migrate"]
    assert steps[0][1] == ["npm", "install"]
    assert steps[2][1] == ["npx", "knex", "migrate:latest"]
    assert all(cwd == target.resolve() for _, _, cwd in harness["commands"])
    assert Path.cwd() == before

    assert harness["fetches"][0][0] == "maulanashalihin/laju"
    assert harness["clients"][0][1].closed
    assert harness["banner"] == ["banner"]
    assert "Project created successfully" in _output(harness)
    assert "cd my-app" in _output(harness)


def test_create_rejects_invalid_name_without_side_effects(harness) -> None:
    result = _invoke(harness, ["My App"])

    assert result.exit_code == 1
    assert harness["fetches"] == []
    assert harness["commands"] == []
    assert list(harness["root"].iterdir()) == []
    assert "Invalid project name" in _output(harness)


def test_create_rejects_existing_directory_before_clone(harness) -> None:
    (harness["root"] / "my-app").mkdir()

    result = _invoke(harness, ["my-app"])

    assert result.exit_code == 1
    assert harness["fetches"] == []
    assert "already exists" in _output(harness)


def test_create_reports_missing_git(harness, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(validation_module, "check_tool", lambda tool: tool != "git")

    result = _invoke(harness, ["my-app"])

    assert result.exit_code == 1
    assert harness["fetches"] == []
    assert "Git is required" in _output(harness)


@pytest.mark.parametrize(
    ("args", "message"),
    [
        (["my-app", "--package-manager", "pnpm"], "Invalid package manager"),
        (["my-app", "--tailwind", "v5"], "Invalid TailwindCSS version"),
    ],
)
def test_create_rejects_invalid_flag_values(harness, args: list[str], message: str) -> None:
    result = _invoke(harness, args)

    assert result.exit_code == 1
    assert message in _output(harness)
    assert harness["fetches"] == []
    assert not (harness["root"] / "my-app").exists()


def test_install_failure_aborts_remaining_steps(harness) -> None:
    harness["fail_step"] = "install"
    before = Path.cwd()

    result = _invoke(harness, ["my-app"])

    assert result.exit_code == 1
    assert [step for step, _, _ in harness["commands"]] == ["install"]
    assert Path.cwd() == before
    assert (harness["root"] / "my-app").exists()
    assert "exit code 1" in _output(harness)


def test_fetch_failure_is_fatal(harness, monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_fetch(source, target_path, *, client, github_token=None):
        raise TemplateFetchError("Could not download template maulanashalihin/laju (HTTP 404).", code="DOWNLOAD_FAILED")

    monkeypatch.setattr(create_module, "fetch_template", failing_fetch)

    result = _invoke(harness, ["my-app"])

    assert result.exit_code == 1
    assert harness["commands"] == []
    assert harness["clients"][0][1].closed
    assert "HTTP 404" in _output(harness)


def test_explicit_options_select_bun_and_tailwind_upgrade(harness) -> None:
    result = _invoke(harness, ["my-app", "-p", "bun", "-t", "v4", "--skip-tls", "--github-token", "tok"])

    assert result.exit_code == 0, _output(harness)
    commands = {step: command for step, command, _ in harness["commands"]}
    assert commands["install"] == ["bun", "install"]
    assert commands["migrate"] == ["bunx", "knex", "migrate:latest"]
    assert commands["tailwind"] == ["bunx", "@tailwindcss/upgrade", "--force"]
    assert harness["clients"][0][0] is True
    assert harness["fetches"][0][2] == "tok"


def test_non_interactive_defaults_to_first_detected_manager(harness, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(create_module, "detect_package_managers", lambda: [PackageManager.YARN])

    result = _invoke(harness, ["my-app"])

    assert result.exit_code == 0, _output(harness)
    assert harness["commands"][0][1] == ["yarn", "install"]
    assert "tailwind" not in [step for step, _, _ in harness["commands"]]


def test_no_package_manager_found(harness, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(create_module, "detect_package_managers", lambda: [])

    result = _invoke(harness, ["my-app"])

    assert result.exit_code == 1
    assert harness["fetches"] == []
    assert "No supported package manager" in _output(harness)


def test_interactive_selection_uses_menu(harness, monkeypatch: pytest.MonkeyPatch) -> None:
    prompts: list[tuple[str, str]] = []

    def fake_select(options, prompt_text, default_key=None, console=None):
        prompts.append((prompt_text, default_key))
        return "bun" if "package manager" in prompt_text else "v4"

    monkeypatch.setattr(create_module, "_is_interactive", lambda: True)
    monkeypatch.setattr(create_module, "select_with_arrows", fake_select)

    result = _invoke(harness, ["my-app"])

    assert result.exit_code == 0, _output(harness)
    assert prompts == [("Choose a package manager", "npm"), ("Choose a TailwindCSS version", "v4")]
    assert [step for step, _, _ in harness["commands"]][-1] == "tailwind"


def test_prompts_for_missing_project_name(harness) -> None:
    result = _invoke(harness, [], input="prompted-app\n")

    assert result.exit_code == 0, _output(harness)
    assert "Enter project name" in result.output
    assert (harness["root"] / "prompted-app" / "package.json").exists()


def test_empty_prompt_answer_exits(harness) -> None:
    result = _invoke(harness, [], input="\n")

    assert result.exit_code == 1
    assert "Project name is required" in _output(harness)
    assert harness["fetches"] == []


def test_debug_env_adds_traceback(harness, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CREATE_LAJU_DEBUG", "1")
    harness["fail_step"] = "migrate"

    result = _invoke(harness, ["my-app"])

    assert result.exit_code == 1
    assert "Traceback" in _output(harness)


def test_version_flag(harness) -> None:
    result = _invoke(harness, ["--version"])

    assert result.exit_code == 0
    assert "create-laju-app 1.2.3" in _output(harness)
    assert harness["fetches"] == []


def test_invalid_template_override_is_reported_before_fetch(harness, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CREATE_LAJU_TEMPLATE_REPO", "not-a-slug")

    result = _invoke(harness, ["my-app"])

    assert result.exit_code == 1
    assert "Invalid Input" in _output(harness)
    assert "owner/repo[#ref]" in _output(harness)
    assert harness["fetches"] == []
    assert harness["clients"] == []
    assert not (harness["root"] / "my-app").exists()
