import json
import logging
import queue
import threading
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)


class DispatchStatistics:
    """
    Receives all scheduler broadcasts and
    records necessary information as an independent "recorder".
    Also forwards events to the WebSocket server for live monitoring.
    Collects all events in JSON Lines format for offline review.
    """
    def __init__(self, broadcast_pipe: queue.Queue, websocket_server=None):
        self.broadcast_pipe = broadcast_pipe
        self.websocket_server = websocket_server  # Optional WebSocket server reference

        self.packets_received = 0
        self.packets_sent = 0
        self.packets_rejected = 0
        self.dispatches_per_elevator = Counter()  # {elevator_id: count}
        self.updates_per_port = Counter()  # {floor port: status updates forwarded}
        self.rejections_by_error = Counter()  # {error kind: count}
        self.registered_floors = 0
        self.registered_elevators = 0

        # JSON Lines event log
        self.event_log = []
        self.metadata = {}

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def _send_to_websocket(self, message):
        """
        Send message to WebSocket server (if connected).
        Thread-safe method to queue messages for WebSocket broadcast.
        """
        if self.websocket_server:
            self.websocket_server.queue_message(message)

    def set_metadata(self, metadata):
        """
        Set run metadata (called before the scheduler starts).

        Args:
            metadata (dict): Scheduler configuration
        """
        self.metadata = {
            "format_version": "1.0",
            "timestamp": datetime.now().isoformat(),
            "config": metadata
        }

    def record(self, topic: str, message: dict, timestamp: Optional[float] = None):
        """Account for one broadcast event"""
        if topic == 'scheduler/received':
            self.packets_received += 1
        elif topic == 'scheduler/sent':
            self.packets_sent += 1
        elif topic == 'scheduler/rejected':
            self.packets_rejected += 1
            self.rejections_by_error[message.get('error', 'Unknown')] += 1
        elif topic == 'scheduler/assigned':
            self.dispatches_per_elevator[message['elevator']] += 1
        elif topic == 'scheduler/forwarded':
            self.updates_per_port[message['port']] += 1
        elif topic == 'registry/floor_added':
            self.registered_floors += 1
        elif topic == 'registry/elevator_added':
            self.registered_elevators += 1

        event = {
            "time": timestamp if timestamp is not None else datetime.now().timestamp(),
            "type": topic,
            "data": message
        }
        self.event_log.append(event)
        self._send_to_websocket(event)

    def consume_pending(self) -> int:
        """
        Drain every event currently waiting in the broadcast pipe.

        Returns:
            Number of events recorded
        """
        count = 0
        while True:
            try:
                data = self.broadcast_pipe.get_nowait()
            except queue.Empty:
                return count
            self.record(data.get('topic', ''), data.get('message', {}))
            count += 1

    def start_listening(self):
        """Record events on a background thread until stop_listening()"""
        self._thread = threading.Thread(target=self._listen, name="dispatch-statistics", daemon=True)
        self._thread.start()

    def _listen(self):
        while not self._stop_event.is_set():
            try:
                data = self.broadcast_pipe.get(timeout=0.2)
            except queue.Empty:
                continue
            self.record(data.get('topic', ''), data.get('message', {}))

    def stop_listening(self):
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
        # Pick up anything published after the listener's last poll
        self.consume_pending()

    def summary(self) -> dict:
        return {
            'packets_received': self.packets_received,
            'packets_sent': self.packets_sent,
            'packets_rejected': self.packets_rejected,
            'registered_floors': self.registered_floors,
            'registered_elevators': self.registered_elevators,
            'dispatches_per_elevator': dict(self.dispatches_per_elevator),
            'updates_per_port': dict(self.updates_per_port),
            'rejections_by_error': dict(self.rejections_by_error),
        }

    def print_summary(self):
        summary = self.summary()
        print("\n" + "="*60)
        print("   DISPATCH SUMMARY")
        print("="*60)
        print(f"Floors registered:    {summary['registered_floors']}")
        print(f"Elevators registered: {summary['registered_elevators']}")
        print(f"Packets received:     {summary['packets_received']}")
        print(f"Packets sent:         {summary['packets_sent']}")
        print(f"Packets rejected:     {summary['packets_rejected']}")
        for elevator_id, count in sorted(summary['dispatches_per_elevator'].items()):
            print(f"  Elevator {elevator_id}: {count} dispatches")
        for error, count in sorted(summary['rejections_by_error'].items()):
            print(f"  {error}: {count} rejected")
        print("="*60)

    def save_event_log(self, file_path: Union[str, Path]):
        """
        Write metadata and every recorded event as JSON Lines.

        Args:
            file_path: Output .jsonl path
        """
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, 'w', encoding='utf-8') as f:
            if self.metadata:
                f.write(json.dumps({"type": "metadata", "data": self.metadata}) + "\n")
            for event in self.event_log:
                f.write(json.dumps(event) + "\n")
        logger.info("Event log saved to %s (%d events)", file_path, len(self.event_log))
