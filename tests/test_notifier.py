import asyncio
import uuid

from ferrelog.core.notifier import OrderChangeNotifier


def test_publish_without_subscribers_is_a_noop():
    notifier = OrderChangeNotifier()
    notifier.publish("INSERT", uuid.uuid4(), "Pendiente")
    assert notifier.subscriber_count == 0


def test_subscriber_receives_published_change():
    notifier = OrderChangeNotifier()
    folio = uuid.uuid4()

    async def scenario():
        stream = notifier.subscribe()
        pending = asyncio.ensure_future(stream.__anext__())
        await asyncio.sleep(0)
        assert notifier.subscriber_count == 1

        notifier.publish("UPDATE", folio, "En Tránsito")
        change = await asyncio.wait_for(pending, timeout=1)
        await stream.aclose()
        return change

    change = asyncio.run(scenario())
    assert change == {"event": "UPDATE", "folio": str(folio), "estado": "En Tránsito"}
    assert notifier.subscriber_count == 0


def test_publish_from_worker_thread_reaches_every_subscriber():
    notifier = OrderChangeNotifier()
    folio = uuid.uuid4()

    async def scenario():
        streams = [notifier.subscribe(), notifier.subscribe()]
        pending = [asyncio.ensure_future(s.__anext__()) for s in streams]
        await asyncio.sleep(0)

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, notifier.publish, "DELETE", folio, None)
        changes = await asyncio.wait_for(asyncio.gather(*pending), timeout=1)
        for s in streams:
            await s.aclose()
        return changes

    changes = asyncio.run(scenario())
    assert changes == [{"event": "DELETE", "folio": str(folio), "estado": None}] * 2


def test_full_queue_drops_changes():
    notifier = OrderChangeNotifier(max_queue=1)

    async def scenario():
        stream = notifier.subscribe()
        pending = asyncio.ensure_future(stream.__anext__())
        await asyncio.sleep(0)

        notifier.publish("UPDATE", uuid.uuid4(), "Entregado")
        first = await asyncio.wait_for(pending, timeout=1)

        # Nobody reads while these arrive; only one fits in the queue.
        notifier.publish("INSERT", uuid.uuid4(), "Pendiente")
        notifier.publish("INSERT", uuid.uuid4(), "Pendiente")
        await asyncio.sleep(0)
        second = await asyncio.wait_for(stream.__anext__(), timeout=1)
        await stream.aclose()
        return first, second

    first, second = asyncio.run(scenario())
    assert first["event"] == "UPDATE"
    assert second["event"] == "INSERT"
