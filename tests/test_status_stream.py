from __future__ import annotations

import asyncio

from modal_engine.adapters import ModeStatusStreamer
from modal_engine.modes import EngineMode


def make_streamer(**kwargs: int) -> ModeStatusStreamer:
    return ModeStatusStreamer("127.0.0.1", 0, **kwargs)


def test_clients_get_history_then_live_updates() -> None:
    async def scenario() -> tuple[bytes, bytes]:
        streamer = make_streamer()
        streamer(EngineMode.NORMAL)
        await streamer.start()
        try:
            reader, writer = await asyncio.open_connection("127.0.0.1", streamer.port)
            replayed = await asyncio.wait_for(reader.readline(), timeout=2)
            streamer(EngineMode.VISUAL_LINE)
            live = await asyncio.wait_for(reader.readline(), timeout=2)
            writer.close()
            await writer.wait_closed()
        finally:
            await streamer.stop()
        return replayed, live

    replayed, live = asyncio.run(scenario())

    assert replayed == b"MODE=NORMAL\n"
    assert live == b"MODE=VISUAL_LINE\n"


def test_full_queue_drops_lines() -> None:
    async def scenario() -> int:
        streamer = make_streamer(queue_size=1)
        await streamer.start()
        try:
            for mode in (EngineMode.INSERT, EngineMode.NORMAL, EngineMode.VISUAL):
                streamer(mode)
            return streamer.dropped
        finally:
            await streamer.stop()

    assert asyncio.run(scenario()) == 2


def test_history_is_bounded_and_kept_before_start() -> None:
    streamer = make_streamer(history=2)

    for mode in (EngineMode.INSERT, EngineMode.NORMAL, EngineMode.OPERATOR_PENDING):
        streamer(mode)

    assert streamer.history == ("MODE=NORMAL\n", "MODE=OPERATOR_PENDING\n")
    assert streamer.running is False
    assert streamer.dropped == 0
