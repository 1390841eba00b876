"""Pipeline-related constants."""


class Pipeline:
    """Queue and coordinator defaults."""

    DEFAULT_QUEUE_CAPACITY = 5
    DEFAULT_WAIT_TIMEOUT = 1.0  # seconds, coordinator retry granularity
    DEFAULT_NUM_CONSUMERS = 1
    MIN_CAPACITY = 1


class Latency:
    """Simulated per-item processing latency (seconds)."""

    PRODUCER_MIN = 0.1
    PRODUCER_MAX = 0.5
    CONSUMER_MIN = 0.2
    CONSUMER_MAX = 0.7


class ActorNames:
    """Thread name prefixes."""

    PRODUCER = "Producer"
    CONSUMER = "Consumer"


__all__ = ["ActorNames", "Latency", "Pipeline"]
