"""Step definitions for ShellCommand behavioural tests."""
# pyright: reportMissingImports=false, reportUnknownMemberType=false

from __future__ import annotations

import shutil
import tempfile
import typing as t
from pathlib import Path

from behave import given, then, when  # type: ignore[attr-defined]

from shell_command.command_runner import CommandResult, ShellCommand
from shell_command.errors import ErrorKind
from shell_command.output import CapturedOutput, OutputChannel


class BehaveContext(t.Protocol):
    """Behave step context with attributes used in tests."""

    executor: ShellCommand
    output: CapturedOutput
    result: CommandResult

    def add_cleanup(self, cleanup_func: t.Callable[..., object], *args: object) -> None:
        """Register a callable to run after the scenario."""


@given("a shell command with captured output")
def step_create_executor(context: BehaveContext) -> None:
    """Create a :class:`ShellCommand` writing to a :class:`CapturedOutput`."""
    context.output = CapturedOutput()
    context.executor = ShellCommand(output=context.output)


@given("the working directory is a fresh temporary directory")
def step_use_temporary_directory(context: BehaveContext) -> None:
    """Point the executor at a directory removed after the scenario."""
    directory = tempfile.mkdtemp(prefix="shell-command-")
    context.add_cleanup(shutil.rmtree, directory)
    context.executor.working_directory = directory


@when('I run the arguments "{args}"')
def step_run_arguments(context: BehaveContext, args: str) -> None:
    """Run whitespace-separated *args* as an argument vector."""
    context.result = context.executor.execute(args.split())


@when("I run an empty argument list")
def step_run_empty_arguments(context: BehaveContext) -> None:
    """Run an invocation without any tokens."""
    context.result = context.executor.execute([])


@when("I run the command line '{line}'")
def step_run_command_line(context: BehaveContext, line: str) -> None:
    """Run *line* with the command interpreter."""
    context.result = context.executor.execute(line)


@then("the command should succeed")
def step_check_success(context: BehaveContext) -> None:
    """Ensure the command ran and exited with status 0."""
    assert context.result.ok, context.result.error
    assert context.result.exit_code == 0


@then('the command should fail with "{kind}"')
def step_check_failure_kind(context: BehaveContext, kind: str) -> None:
    """Ensure the result carries an error of *kind*."""
    assert context.result.error is not None
    assert context.result.error.kind is ErrorKind(kind)


@then("the exit code should be {code:d}")
def step_check_exit_code(context: BehaveContext, code: int) -> None:
    """Assert the process exit code equals *code*."""
    assert context.result.exit_code == code


@then('the error should mention "{text}"')
def step_check_error_message(context: BehaveContext, text: str) -> None:
    """Ensure the error descriptor contains *text*."""
    assert context.result.error is not None
    assert text in context.result.error.command


@then('standard output should be "{text}"')
def step_check_stdout(context: BehaveContext, text: str) -> None:
    """Ensure captured standard output matches *text*."""
    assert context.output.stdout.strip() == text


@then('error output should be "{text}"')
def step_check_stderr(context: BehaveContext, text: str) -> None:
    """Ensure captured error output matches *text*."""
    assert context.output.stderr.strip() == text


@then("error output should be empty")
def step_check_stderr_empty(context: BehaveContext) -> None:
    """Ensure nothing was written to the error channel."""
    assert context.output.stderr == ""


@then("error output should arrive before standard output")
def step_check_channel_order(context: BehaveContext) -> None:
    """Ensure the sink saw the error channel first."""
    channels = [channel for channel, _ in context.output.messages]
    assert channels == [OutputChannel.ERROR, OutputChannel.STANDARD]


@then("the output sink should not have been called")
def step_check_sink_untouched(context: BehaveContext) -> None:
    """Ensure the sink never received a message."""
    assert not context.output.called


@then('the file "{name}" in the working directory should contain "{text}"')
def step_check_file_contents(context: BehaveContext, name: str, text: str) -> None:
    """Ensure *name* was created inside the executor's working directory."""
    path = Path(context.executor.working_directory) / name
    assert path.read_text(encoding="utf-8").strip() == text
