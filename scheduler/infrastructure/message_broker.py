import logging
import queue
import threading
import time

logger = logging.getLogger(__name__)


class MessageBroker:
    """
    Mediates communication between scheduler components and observers.
    Implements a topic-based publish-subscribe model on thread-safe queues,
    so the dispatch worker can publish while other threads consume.
    """
    def __init__(self):
        self.topics = {}  # Dictionary to hold a Queue for each topic
        self.broadcast_pipes = []  # One Queue per broadcast subscriber
        self._lock = threading.Lock()
        self._start_time = time.monotonic()

    def get_pipe(self, topic: str) -> queue.Queue:
        """
        Get or create a communication pipe (Queue) for the specified topic
        """
        with self._lock:
            if topic not in self.topics:
                self.topics[topic] = queue.Queue()
            return self.topics[topic]

    def put(self, topic: str, message):
        """
        Publish (put) a message to the specified topic
        """
        logger.debug("%.2f [Broker] Publish on '%s': %s", self.get_current_time(), topic, message)
        pipe = self.get_pipe(topic)
        with self._lock:
            subscribers = list(self.broadcast_pipes)
        for broadcast_pipe in subscribers:
            broadcast_pipe.put({'topic': topic, 'message': message})
        pipe.put(message)

    def get(self, topic: str, timeout=None):
        """
        Wait to receive (get) a message from the specified topic

        Raises:
            queue.Empty: If timeout expires before a message arrives
        """
        pipe = self.get_pipe(topic)
        return pipe.get(timeout=timeout)

    def open_broadcast_pipe(self) -> queue.Queue:
        """
        Subscribe to every topic

        Each subscriber gets its own pipe receiving
        {'topic': ..., 'message': ...} for all messages published afterwards.
        """
        pipe = queue.Queue()
        with self._lock:
            self.broadcast_pipes.append(pipe)
        return pipe

    def get_current_time(self) -> float:
        """
        Seconds elapsed since the broker was created

        Used as the timestamp of published events.
        """
        return time.monotonic() - self._start_time
