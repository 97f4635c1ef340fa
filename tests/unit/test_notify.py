"""Unit tests for notification sinks."""

import io

from rich.console import Console

from netheal.notify import ConsoleSink, MemorySink, Notification


def test_notification_expires_after_ttl():
    note = Notification("API Error: boom", created_at=100.0, ttl=4.0)

    assert not note.expired(now=103.9)
    assert note.expired(now=104.0)


def test_memory_sink_active_and_history():
    sink = MemorySink(ttl=4.0)
    sink.notify("API Error: first")
    first = sink.history[0]
    sink.notify("API Error: second", "warning")

    later = first.created_at + 10.0
    assert [n.message for n in sink.history] == ["API Error: first", "API Error: second"]
    assert sink.history[1].level == "warning"
    assert sink.active(now=first.created_at) != []
    assert sink.active(now=later) == []


def test_memory_sink_bounded():
    sink = MemorySink(max_items=2)
    for i in range(5):
        sink.notify(f"msg {i}")

    assert [n.message for n in sink.history] == ["msg 3", "msg 4"]


def test_memory_sink_clear():
    sink = MemorySink()
    sink.notify("x")
    sink.clear()

    assert sink.history == []


def test_console_sink_prints_message_verbatim():
    buffer = io.StringIO()
    sink = ConsoleSink(Console(file=buffer, force_terminal=False, width=120))

    sink.notify("API Error: [bold]not markup[/bold]")

    assert "API Error: [bold]not markup[/bold]" in buffer.getvalue()
