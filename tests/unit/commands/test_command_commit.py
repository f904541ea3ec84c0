import pytest

from imperator.commands import (
    Attribute,
    Command,
    CommandDeclarationError,
    InvalidCommandError,
    NullBackgroundProcessor,
    get_background_processor,
    use_background_processor,
)


class ProcessorFailure(Exception):
    pass


class ExplodingProcessor:
    def commit(self, command, options):
        raise ProcessorFailure("queue is down")


class ReturningProcessor:
    def commit(self, command, options):
        return ("queued", command, options)


# --- Fake commands for testing ---
class CommitCommand(Command):
    foo = Attribute(str)

    def action(self):
        raise AssertionError("commit must not run the action itself")


class SubCommitCommand(CommitCommand, background={"any_option": "foo"}):
    pass


class SubSubCommitCommand(SubCommitCommand, background={"queue": "low"}):
    pass


class ProgrammaticBackgroundCommand(CommitCommand):
    pass


ProgrammaticBackgroundCommand.background(retries=3)
ProgrammaticBackgroundCommand.background({"retries": 5, "queue": "high"})


class RequiredFooCommand(CommitCommand):
    foo = Attribute(str, required=True)


# --- Tests ---
def test_processor_starts_as_null():
    assert isinstance(get_background_processor(), NullBackgroundProcessor)


def test_commit_with_null_processor_is_a_no_op():
    assert CommitCommand(foo="bar").commit() is None


def test_sends_the_command_into_the_configured_background_processor(recorder):
    command = CommitCommand(foo="bar")
    command.commit()
    assert command in recorder.commits
    assert recorder.committed(command)


def test_subclassed_commands_commit_like_the_parent_class(recorder):
    command = SubCommitCommand(foo="bar")
    command.commit()
    assert recorder.committed(command)


def test_receives_background_options(recorder):
    command = SubCommitCommand(foo="bar")
    command.commit()
    assert recorder.calls == [(command, {"any_option": "foo"})]


def test_receives_options_supplied_on_the_call(recorder):
    command = SubCommitCommand(foo="bar")
    command.commit({"any_option": "bar"})
    assert recorder.calls == [(command, {"any_option": "bar"})]


def test_keyword_options_override_mapping_options(recorder):
    command = SubCommitCommand()
    command.commit({"any_option": "bar", "other": 1}, any_option="baz")
    assert recorder.options_for(command) == [{"any_option": "baz", "other": 1}]


def test_call_options_leave_other_class_options_intact(recorder):
    command = SubSubCommitCommand()
    command.commit(queue="high")
    assert recorder.options_for(command) == [{"any_option": "foo", "queue": "high"}]


def test_background_options_are_inherited():
    assert SubSubCommitCommand.background_defaults() == {
        "any_option": "foo",
        "queue": "low",
    }
    assert CommitCommand.background_defaults() == {}


def test_programmatic_background_declaration_accumulates():
    assert ProgrammaticBackgroundCommand.background_defaults() == {
        "retries": 5,
        "queue": "high",
    }
    assert CommitCommand.background_defaults() == {}


def test_background_options_cannot_be_declared_on_the_base_command():
    with pytest.raises(CommandDeclarationError):
        Command.background(queue="x")


def test_each_commit_call_is_recorded_once(recorder):
    command = CommitCommand()
    command.commit()
    command.commit()
    assert recorder.commit_count(command) == 2
    assert len(recorder) == 2


def test_commit_ignores_validity(recorder, monkeypatch):
    command = CommitCommand()
    monkeypatch.setattr(command, "is_valid", lambda: False)
    command.commit()
    assert recorder.committed(command)


def test_commit_strict_forwards_valid_commands(recorder):
    command = RequiredFooCommand(foo="bar")
    command.commit_strict(priority=1)
    assert recorder.calls == [(command, {"priority": 1})]


def test_commit_strict_never_forwards_invalid_commands(recorder):
    command = RequiredFooCommand()
    with pytest.raises(InvalidCommandError) as excinfo:
        command.commit_strict()
    assert excinfo.value.command is command
    assert recorder.commits == []


def test_bang_commit_does_not_raise_if_validations_not_enabled(recorder):
    command = CommitCommand()
    command.commit_strict()
    assert recorder.committed(command)


def test_commit_returns_what_the_processor_returns():
    command = SubCommitCommand()
    with use_background_processor(ReturningProcessor()):
        assert command.commit() == ("queued", command, {"any_option": "foo"})


def test_processor_errors_propagate_unchanged():
    with use_background_processor(ExplodingProcessor()):
        with pytest.raises(ProcessorFailure, match="queue is down"):
            CommitCommand().commit()
