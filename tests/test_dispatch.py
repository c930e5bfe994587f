import asyncio

from pipeline.dispatch import dispatch


class RecordingChannel:
    def __init__(self, name, fail=False, delay=0.0):
        self.name = name
        self.fail = fail
        self.delay = delay
        self.sent = []

    async def send(self, text):
        await asyncio.sleep(self.delay)
        if self.fail:
            raise RuntimeError(f"{self.name} exploded")
        self.sent.append(text)


def test_one_send_per_message_and_channel():
    a, b = RecordingChannel("a"), RecordingChannel("b")
    issued = asyncio.run(dispatch(["m1", "m2"], [a, b]))
    assert issued == 4
    assert sorted(a.sent) == ["m1", "m2"]
    assert sorted(b.sent) == ["m1", "m2"]


def test_failing_channel_does_not_block_others(caplog):
    bad, good = RecordingChannel("bad", fail=True), RecordingChannel("good", delay=0.01)
    issued = asyncio.run(dispatch(["m1"], [bad, good]))
    assert issued == 2
    assert good.sent == ["m1"]
    assert "bad exploded" in caplog.text


def test_sends_run_concurrently():
    slow = [RecordingChannel(f"c{i}", delay=0.2) for i in range(5)]

    async def _run():
        loop = asyncio.get_running_loop()
        start = loop.time()
        await dispatch(["m"], slow)
        return loop.time() - start

    assert asyncio.run(_run()) < 0.8


def test_nothing_to_send():
    assert asyncio.run(dispatch([], [RecordingChannel("a")])) == 0
    assert asyncio.run(dispatch(["m"], [])) == 0
