import unittest
from roadchase.domain.models import ChaseEndReason
from roadchase.events.bus import EventBus
from roadchase.events.types import ChaseEnded, HeatChanged


class TestEventBus(unittest.TestCase):
    def test_typed_and_global_handlers(self):
        bus = EventBus()
        typed, everything = [], []
        bus.subscribe(HeatChanged, typed.append)
        bus.subscribe_all(everything.append)

        bus.emit(HeatChanged(tick=1, value=0.35))
        bus.emit(ChaseEnded(tick=2, reason=ChaseEndReason.ESCAPED))

        self.assertEqual([e.value for e in typed], [0.35])
        self.assertEqual(len(everything), 2)
        self.assertEqual(bus.handler_count(), 2)
        self.assertEqual(bus.handler_count(HeatChanged), 1)

    def test_unsubscribe_and_clear(self):
        bus = EventBus()
        received = []
        bus.subscribe(HeatChanged, received.append)
        bus.unsubscribe(HeatChanged, received.append)
        bus.emit(HeatChanged(value=1.0))
        self.assertEqual(received, [])

        bus.subscribe_all(received.append)
        bus.clear()
        self.assertEqual(bus.handler_count(), 0)

if __name__ == '__main__':
    unittest.main()
