import asyncio
import logging
import threading

import pytest

from imperator.commands import (
    AsyncioBackgroundProcessor,
    Attribute,
    BackgroundProcessorError,
    BackgroundProcessorProtocol,
    Command,
    InlineBackgroundProcessor,
    NullBackgroundProcessor,
    ProcessorKind,
    RecordingBackgroundProcessor,
    create_background_processor,
    get_background_processor,
    reset_background_processor,
    set_background_processor,
    use_background_processor,
)


# --- Fake commands for testing ---
class RecordThreadCommand(Command):
    label = Attribute(str, default="job")

    def action(self):
        return (self.label, threading.get_ident())


class FailingCommand(Command):
    def action(self):
        raise RuntimeError("boom")


# --- Process-wide slot ---
def test_set_background_processor_returns_the_previous_one():
    recorder = RecordingBackgroundProcessor()
    previous = set_background_processor(recorder)
    assert isinstance(previous, NullBackgroundProcessor)
    assert get_background_processor() is recorder


def test_reset_reinstalls_a_null_processor():
    recorder = RecordingBackgroundProcessor()
    set_background_processor(recorder)
    assert reset_background_processor() is recorder
    assert isinstance(get_background_processor(), NullBackgroundProcessor)


def test_use_background_processor_restores_on_exit():
    original = get_background_processor()
    recorder = RecordingBackgroundProcessor()
    with use_background_processor(recorder) as installed:
        assert installed is recorder
        assert get_background_processor() is recorder
    assert get_background_processor() is original


def test_use_background_processor_restores_after_errors():
    original = get_background_processor()
    with pytest.raises(ValueError):
        with use_background_processor(RecordingBackgroundProcessor()):
            raise ValueError("setup failed")
    assert get_background_processor() is original


def test_swap_affects_every_command_type():
    recorder = RecordingBackgroundProcessor()
    first, second = RecordThreadCommand(), FailingCommand()
    with use_background_processor(recorder):
        first.commit()
        second.commit()
    assert recorder.commits == [first, second]


def test_objects_without_commit_are_rejected():
    with pytest.raises(BackgroundProcessorError):
        set_background_processor(object())
    assert isinstance(get_background_processor(), NullBackgroundProcessor)


@pytest.mark.parametrize(
    "kind,expected",
    [
        ("null", NullBackgroundProcessor),
        ("inline", InlineBackgroundProcessor),
        ("recording", RecordingBackgroundProcessor),
        (ProcessorKind.ASYNCIO, AsyncioBackgroundProcessor),
    ],
)
def test_create_background_processor(kind, expected):
    processor = create_background_processor(kind)
    assert isinstance(processor, expected)
    assert isinstance(processor, BackgroundProcessorProtocol)


def test_create_background_processor_rejects_unknown_names():
    with pytest.raises(BackgroundProcessorError) as excinfo:
        create_background_processor("sidekiq")
    assert "sidekiq" in excinfo.value.message
    assert excinfo.value.context["known"] == ["null", "inline", "recording", "asyncio"]


# --- Null processor ---
def test_null_processor_does_nothing():
    assert NullBackgroundProcessor().commit(FailingCommand(), {"queue": "x"}) is None


# --- Recording processor ---
def test_recording_processor_records_commands_and_options():
    recorder = RecordingBackgroundProcessor()
    command = RecordThreadCommand()
    options = {"queue": "a"}
    recorder.commit(command, options)
    options["queue"] = "changed"
    assert recorder.commits == [command]
    assert recorder.options_for(command) == [{"queue": "a"}]


def test_recording_processor_membership_is_by_identity():
    recorder = RecordingBackgroundProcessor()
    command = RecordThreadCommand(id="same")
    twin = RecordThreadCommand(id="same")
    recorder.commit(command, {})
    assert recorder.committed(command)
    assert not recorder.committed(twin)


def test_recording_processor_perform_all_runs_in_order_and_drains():
    recorder = RecordingBackgroundProcessor()
    recorder.commit(RecordThreadCommand(label="a"), {})
    recorder.commit(RecordThreadCommand(label="b"), {})
    results = recorder.perform_all()
    assert [label for label, _ in results] == ["a", "b"]
    assert len(recorder) == 0


def test_recording_processor_clear():
    recorder = RecordingBackgroundProcessor()
    recorder.commit(RecordThreadCommand(), {})
    recorder.clear()
    assert recorder.commits == []


# --- Inline processor ---
def test_inline_processor_performs_on_the_calling_thread():
    with use_background_processor(InlineBackgroundProcessor()):
        label, thread_id = RecordThreadCommand(label="now").commit()
    assert label == "now"
    assert thread_id == threading.get_ident()


def test_inline_processor_propagates_action_errors():
    with use_background_processor(InlineBackgroundProcessor()):
        with pytest.raises(RuntimeError, match="boom"):
            FailingCommand().commit()


# --- Asyncio processor ---
def test_asyncio_processor_requires_a_running_loop():
    processor = AsyncioBackgroundProcessor()
    with pytest.raises(BackgroundProcessorError):
        processor.commit(RecordThreadCommand(), {})


@pytest.mark.asyncio
async def test_asyncio_processor_runs_action_off_the_calling_thread():
    processor = AsyncioBackgroundProcessor()
    with use_background_processor(processor):
        future = RecordThreadCommand(label="later").commit()
    label, thread_id = await future
    assert label == "later"
    assert thread_id != threading.get_ident()
    assert processor.pending == 0


@pytest.mark.asyncio
async def test_asyncio_processor_drain_waits_for_everything():
    processor = AsyncioBackgroundProcessor()
    with use_background_processor(processor):
        for label in ("a", "b", "c"):
            RecordThreadCommand(label=label).commit()
        results = await processor.drain()
    assert sorted(label for label, _ in results) == ["a", "b", "c"]
    await asyncio.sleep(0)
    assert processor.pending == 0


@pytest.mark.asyncio
async def test_asyncio_processor_drain_reraises_action_errors():
    processor = AsyncioBackgroundProcessor()
    with use_background_processor(processor):
        FailingCommand().commit()
        with pytest.raises(RuntimeError, match="boom"):
            await processor.drain()


@pytest.mark.asyncio
async def test_asyncio_processor_drain_with_nothing_pending():
    assert await AsyncioBackgroundProcessor().drain() == []


@pytest.mark.asyncio
async def test_asyncio_processor_logs_failures_nobody_awaits(caplog):
    processor = AsyncioBackgroundProcessor()
    command = FailingCommand()
    with caplog.at_level(logging.ERROR, logger="imperator"):
        with use_background_processor(processor):
            future = command.commit()
        await asyncio.wait([future])
        await asyncio.sleep(0)

    record = next(
        r for r in caplog.records if r.getMessage() == "Background command failed"
    )
    assert isinstance(record.exc_info[1], RuntimeError)
    assert record.imperator_context["command_id"] == command.id
    assert processor.pending == 0
