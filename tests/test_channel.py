import threading

import pytest

from mandelthreads import ChannelClosed, ResultChannel


def test_iteration_ends_when_every_sender_closes():
    channel = ResultChannel()
    first = channel.sender()
    second = channel.sender()
    first.send(0, 10)
    second.send(1, 11)
    first.close()
    second.send(2, 12)
    second.close()

    assert sorted(channel) == [(0, 10), (1, 11), (2, 12)]
    assert channel.open_senders == 0


def test_channel_without_senders_is_empty():
    assert list(ResultChannel()) == []


def test_send_after_close_raises():
    channel = ResultChannel()
    sender = channel.sender()
    sender.close()
    with pytest.raises(ChannelClosed):
        sender.send(0, 0)


def test_close_is_idempotent():
    channel = ResultChannel()
    sender = channel.sender()
    other = channel.sender()
    sender.close()
    sender.close()
    other.send(5, 1)
    other.close()
    assert list(channel) == [(5, 1)]


def test_context_exit_disconnects():
    channel = ResultChannel()
    with channel.sender() as sender:
        sender.send(3, 7)
    assert sender.closed
    assert list(channel) == [(3, 7)]


def test_context_exit_disconnects_on_error():
    channel = ResultChannel()
    sender = channel.sender()
    with pytest.raises(RuntimeError):
        with sender:
            sender.send(1, 1)
            raise RuntimeError("boom")
    assert list(channel) == [(1, 1)]


def test_many_producers_single_consumer():
    channel = ResultChannel()
    producers = 6
    per_producer = 400
    senders = [channel.sender() for _ in range(producers)]

    def produce(offset, sender):
        with sender:
            for i in range(per_producer):
                sender.send(offset + i, offset)

    threads = [
        threading.Thread(target=produce, args=(n * per_producer, sender))
        for n, sender in enumerate(senders)
    ]
    for thread in threads:
        thread.start()
    received = list(channel)
    for thread in threads:
        thread.join()

    assert sorted(index for index, _ in received) == list(range(producers * per_producer))


def test_per_sender_order_is_preserved():
    channel = ResultChannel()
    with channel.sender() as sender:
        for i in range(50):
            sender.send(i, i)
    assert [index for index, _ in channel] == list(range(50))
