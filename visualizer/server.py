#!/usr/bin/env python3
"""
WebSocket Server for Live Dispatch Monitoring
Bridges between DispatchStatistics events and browser/CLI clients
"""
import asyncio
import json
import logging
import queue
import threading

import websockets

logger = logging.getLogger(__name__)


class VisualizerServer:
    def __init__(self, host='localhost', port=8765):
        self.host = host
        self.port = port
        self.clients = set()
        self.message_queue = queue.Queue()  # Thread-safe queue for cross-thread communication
        self._thread = None

    async def register(self, websocket):
        """Register a new client connection"""
        self.clients.add(websocket)
        logger.info("Monitor client connected. Total clients: %d", len(self.clients))

    async def unregister(self, websocket):
        """Unregister a client connection"""
        self.clients.discard(websocket)
        logger.info("Monitor client disconnected. Total clients: %d", len(self.clients))

    async def send_to_client(self, websocket, message):
        """Send message to a specific client"""
        try:
            await websocket.send(json.dumps(message))
        except websockets.exceptions.ConnectionClosed:
            await self.unregister(websocket)

    async def broadcast(self, message):
        """Broadcast message to all connected clients"""
        if self.clients:
            disconnected = set()
            for client in set(self.clients):
                try:
                    await client.send(json.dumps(message))
                except websockets.exceptions.ConnectionClosed:
                    disconnected.add(client)

            # Clean up disconnected clients
            for client in disconnected:
                await self.unregister(client)

    async def handle_client(self, websocket):
        """Handle individual client connection"""
        await self.register(websocket)
        try:
            async for message in websocket:
                data = json.loads(message)
                logger.debug("Received from monitor client: %s", data)

                if data.get('type') == 'ping':
                    await self.send_to_client(websocket, {'type': 'pong'})

        except websockets.exceptions.ConnectionClosed:
            pass
        finally:
            await self.unregister(websocket)

    async def flush_queue(self) -> int:
        """Broadcast every queued message; returns how many were sent"""
        sent = 0
        while True:
            try:
                message = self.message_queue.get_nowait()
            except queue.Empty:
                return sent
            await self.broadcast(message)
            sent += 1

    async def message_sender(self):
        """Continuously send queued messages to all clients"""
        while True:
            if await self.flush_queue() == 0:
                await asyncio.sleep(0.01)  # 10ms polling interval

    def queue_message(self, message):
        """Queue a message to be sent (thread-safe from DispatchStatistics)"""
        self.message_queue.put(message)

    async def start(self):
        """Start the WebSocket server"""
        logger.info("Starting WebSocket monitor on ws://%s:%d", self.host, self.port)

        sender = asyncio.create_task(self.message_sender())
        try:
            async with websockets.serve(self.handle_client, self.host, self.port):
                await asyncio.Future()  # Run forever
        finally:
            sender.cancel()

    def start_in_thread(self):
        """Run the server on its own event loop in a daemon thread"""
        self._thread = threading.Thread(target=asyncio.run, args=(self.start(),),
                                        name="websocket-monitor", daemon=True)
        self._thread.start()
