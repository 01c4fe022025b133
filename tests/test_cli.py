import os

import pytest

from dart_dev import __version__, cli
from dart_dev.config import RunOptions, Task
from dart_dev.dispatch import HANDLERS
from dart_dev.process import TaskResult


@pytest.fixture
def handlers(monkeypatch):
    """Replace every task handler with a recorder returning exit code 0."""

    calls = []

    def make(task):
        def handler(config, options):
            calls.append((task, config, options))
            return TaskResult(exit_code=0)

        return handler

    for task in Task:
        monkeypatch.setitem(HANDLERS, task, make(task))
    return calls


def test_overlay_contains_only_flags_that_were_given():
    invocation = cli.parse_invocation(["analyze", "--no-hints"], root="/project")

    assert invocation.task is Task.ANALYZE
    assert invocation.overlay == {"hints": False}
    assert invocation.options == RunOptions(color=True, quiet=False, verbosity=0, root="/project")


def test_repeated_path_flags_build_a_list():
    invocation = cli.parse_invocation(
        ["test", "--integration", "--integration-test", "test/a/", "--integration-test", "test/b/", "-p", "vm"]
    )

    assert invocation.overlay == {
        "integration": True,
        "integration_tests": ["test/a/", "test/b/"],
        "platforms": ["vm"],
    }


def test_global_flags_are_accepted_before_and_after_the_task():
    before = cli.parse_invocation(["--no-color", "-q", "format", "--check"])
    after = cli.parse_invocation(["format", "--check", "--no-color", "-q"])

    for invocation in (before, after):
        assert invocation.overlay == {"check": True}
        assert invocation.options.color is False
        assert invocation.options.quiet is True


def test_unknown_task_is_a_usage_error(handlers, capsys):
    assert cli.main(["deploy"]) == 64

    err = capsys.readouterr().err
    assert "usage: dart_dev" in err
    assert "dart_dev: error:" in err
    assert handlers == []


def test_unknown_flag_prints_task_help(handlers, capsys):
    assert cli.main(["analyze", "--bogus"]) == 64

    err = capsys.readouterr().err
    assert "--fatal-warnings" in err
    assert "unrecognized arguments: --bogus" in err
    assert handlers == []


def test_invalid_port_is_a_usage_error(handlers, capsys):
    assert cli.main(["examples", "--port", "http"]) == 64
    assert "--port" in capsys.readouterr().err
    assert handlers == []


def test_missing_task_is_a_usage_error(handlers):
    assert cli.main([]) == 64
    assert handlers == []


def test_help_short_circuits_with_task_help(handlers, capsys):
    assert cli.main(["test", "--integration", "-h"]) == 0

    out = capsys.readouterr().out
    assert "--integration-test" in out
    assert handlers == []


def test_version_flag(handlers, capsys):
    assert cli.main(["--version"]) == 0
    assert __version__ in capsys.readouterr().out


def test_cli_flags_override_project_file_per_field(tmp_path, monkeypatch, handlers):
    (tmp_path / "tool").mkdir()
    (tmp_path / "tool" / "dev.toml").write_text(
        "[analyze]\n"
        'entry_points = ["web/"]\n'
        "hints = true\n"
    )
    monkeypatch.chdir(tmp_path)

    assert cli.main(["analyze", "--no-hints", "-q"]) == 0

    ((task, config, options),) = handlers
    assert task is Task.ANALYZE
    assert config.entry_points == ("web/",)
    assert config.hints is False
    assert config.fatal_warnings is True
    assert os.path.realpath(options.root) == os.path.realpath(tmp_path)


def test_malformed_project_file_aborts_before_dispatch(tmp_path, monkeypatch, handlers, capsys):
    (tmp_path / "tool").mkdir()
    (tmp_path / "tool" / "dev.toml").write_text("[format\n")
    monkeypatch.chdir(tmp_path)

    assert cli.main(["format", "-q"]) == 78
    assert "invalid TOML" in capsys.readouterr().err
    assert handlers == []


def test_wrongly_typed_project_value_aborts_before_dispatch(tmp_path, monkeypatch, handlers):
    (tmp_path / "tool").mkdir()
    (tmp_path / "tool" / "dev.toml").write_text('[examples]\nport = "8080"\n')
    monkeypatch.chdir(tmp_path)

    assert cli.main(["examples", "-q"]) == 78
    assert handlers == []


def test_tool_exit_code_is_the_process_exit_code(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        "dart_dev.tasks.format.run_tool",
        lambda command, cwd=None, echo=True: TaskResult(exit_code=1, command=tuple(command)),
    )

    assert cli.main(["format", "--check", "-q"]) == 1


def test_interrupt_exits_130(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    def interrupted(config, options):
        raise KeyboardInterrupt

    monkeypatch.setitem(HANDLERS, Task.EXAMPLES, interrupted)

    assert cli.main(["examples", "-q"]) == 130


def test_init_twice_reports_existing_file(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)

    assert cli.main(["init", "-q"]) == 0
    first = (tmp_path / "tool" / "dev.toml").read_bytes()

    assert cli.main(["init", "-q"]) == 73
    assert "already exists" in capsys.readouterr().err
    assert (tmp_path / "tool" / "dev.toml").read_bytes() == first

    assert cli.main(["init", "--force", "-q"]) == 0


def test_help_before_the_task_prints_task_help(handlers, capsys):
    assert cli.main(["-h", "analyze"]) == 0

    out = capsys.readouterr().out
    assert "--fatal-warnings" in out
    assert handlers == []


def test_help_without_a_task_prints_main_help(handlers, capsys):
    assert cli.main(["--help"]) == 0

    out = capsys.readouterr().out
    assert "examples" in out
    assert handlers == []


def test_verbose_counts_add_up_across_the_task_name():
    invocation = cli.parse_invocation(["-v", "analyze", "-v"])

    assert invocation.options.verbosity == 2
    assert invocation.overlay == {}


def test_init_into_a_file_named_tool_is_reported(tmp_path, monkeypatch, capsys):
    (tmp_path / "tool").write_text("")
    monkeypatch.chdir(tmp_path)

    assert cli.main(["init", "-q"]) == 73
    assert "cannot create" in capsys.readouterr().err


def test_color_help_names_what_the_flag_reaches():
    parser = cli.build_arg_parser()
    (color,) = [action for action in parser._actions if "--color" in action.option_strings]

    assert "test runner" in color.help
    assert "relayed as is" in color.help
