import pytest

from lineserve.core.errors import MalformedRequest
from lineserve.core.exchange.chat import ChatApplication
from lineserve.core.exchange.compute import ComputeApplication
from tests.fake.fake_send_receive import FakeReceiveLine, FakeSendLine


@pytest.mark.ut
@pytest.mark.asyncio
async def test_chat_answers_every_line_in_order():
    app = ChatApplication()
    receive = FakeReceiveLine(["hello", "", "how are you?"])
    send = FakeSendLine()

    await app(receive, send)

    assert send.sent == ["Server:hello", "Server:", "Server:how are you?"]


@pytest.mark.ut
@pytest.mark.asyncio
async def test_chat_custom_prefix():
    app = ChatApplication(prefix="Echo")
    send = FakeSendLine()

    await app(FakeReceiveLine(["x"]), send)

    assert send.sent == ["Echo:x"]


@pytest.mark.ut
@pytest.mark.asyncio
async def test_chat_ends_on_end_of_stream():
    app = ChatApplication()
    receive = FakeReceiveLine([])
    send = FakeSendLine()

    await app(receive, send)

    assert send.sent == []
    assert receive.calls == 1


@pytest.mark.ut
@pytest.mark.asyncio
async def test_compute_answers_two_squares():
    app = ComputeApplication()
    send = FakeSendLine()

    await app(FakeReceiveLine(["4", "7"]), send)

    assert send.sent == ["Square of 4: 16", "Square of 7: 49"]


@pytest.mark.ut
@pytest.mark.asyncio
async def test_compute_reads_exactly_two_lines():
    app = ComputeApplication()
    receive = FakeReceiveLine(["1", "2", "3"])
    send = FakeSendLine()

    await app(receive, send)

    assert receive.calls == 2
    assert len(send.sent) == 2


@pytest.mark.ut
@pytest.mark.asyncio
async def test_compute_fails_fast_on_invalid_first_line():
    app = ComputeApplication()
    receive = FakeReceiveLine(["four", "7"])
    send = FakeSendLine()

    with pytest.raises(MalformedRequest):
        await app(receive, send)

    assert receive.calls == 1
    assert send.sent == []


@pytest.mark.ut
@pytest.mark.asyncio
async def test_compute_invalid_second_line_writes_nothing():
    app = ComputeApplication()
    send = FakeSendLine()

    with pytest.raises(MalformedRequest):
        await app(FakeReceiveLine(["4", "7.5"]), send)

    assert send.sent == []


@pytest.mark.ut
@pytest.mark.asyncio
async def test_compute_end_of_stream_before_second_operand():
    app = ComputeApplication()
    send = FakeSendLine()

    with pytest.raises(MalformedRequest, match="1 of 2"):
        await app(FakeReceiveLine(["4"]), send)

    assert send.sent == []
