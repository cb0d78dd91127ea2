import simpy
from typing import Dict, List

class MessageBroker:
    """
    Mediates communication between components within the simulation.
    Implements a topic-based publish-subscribe model where every subscriber
    of a topic receives its own copy of each message.
    """
    def __init__(self, env: simpy.Environment, verbose: bool = True):
        """
        Initialize the message broker

        Args:
            env (simpy.Environment): SimPy environment
            verbose (bool): Print every publication
        """
        self.env = env
        self.verbose = verbose
        self.subscribers: Dict[str, List[simpy.Store]] = {}  # One Store per subscriber, per topic

    def subscribe(self, topic: str) -> simpy.Store:
        """
        Create a new subscriber pipe (Store) for the specified topic

        Only messages published after subscription are delivered.
        """
        pipe = simpy.Store(self.env)
        self.subscribers.setdefault(topic, []).append(pipe)
        return pipe

    def put(self, topic: str, message):
        """
        Publish (put) a message to every subscriber of the specified topic

        Returns:
            Number of subscribers the message was delivered to
        """
        if self.verbose:
            print(f"{self.env.now:.2f} [Broker] Publish on '{topic}': {message}")
        pipes = self.subscribers.get(topic, [])
        for pipe in pipes:
            pipe.put(message)
        return len(pipes)

    def get_subscriber_count(self, topic: str) -> int:
        return len(self.subscribers.get(topic, []))

    def get_current_time(self) -> float:
        """
        Get current simulation time

        Gives controllers a clock without a direct dependency on the
        SimPy environment.

        Returns:
            Current simulation time
        """
        return self.env.now
