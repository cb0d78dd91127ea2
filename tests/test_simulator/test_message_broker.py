"""
Message Broker Tests
"""

import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

import simpy

from simulator.infrastructure.message_broker import MessageBroker


def test_every_subscriber_receives_each_message():
    env = simpy.Environment()
    broker = MessageBroker(env, verbose=False)
    first = broker.subscribe("elevator_controller/door")
    second = broker.subscribe("elevator_controller/door")
    other = broker.subscribe("elevator_controller/active")

    delivered = broker.put("elevator_controller/door", {'data': 1})

    assert delivered == 2
    assert first.items == [{'data': 1}]
    assert second.items == [{'data': 1}]
    assert other.items == []


def test_publish_without_subscribers():
    env = simpy.Environment()
    broker = MessageBroker(env, verbose=False)
    assert broker.put("nobody/listens", 5) == 0
    assert broker.get_subscriber_count("nobody/listens") == 0


def test_listener_process_receives_in_order():
    env = simpy.Environment()
    broker = MessageBroker(env, verbose=False)
    pipe = broker.subscribe("elevator_controller/target_floor")
    received = []

    def listener():
        while True:
            message = yield pipe.get()
            received.append((env.now, message))

    def publisher():
        yield env.timeout(1.0)
        broker.put("elevator_controller/target_floor", 2)
        broker.put("elevator_controller/target_floor", 3)

    env.process(listener())
    env.process(publisher())
    env.run(until=2.0)

    assert received == [(1.0, 2), (1.0, 3)]
    assert broker.get_current_time() == 2.0


def test_verbose_publication_is_logged(capsys):
    env = simpy.Environment()
    broker = MessageBroker(env)
    broker.put("elevator_controller/door", 0)
    assert "[Broker] Publish on 'elevator_controller/door': 0" in capsys.readouterr().out
