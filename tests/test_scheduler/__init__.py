"""
Scheduler Tests

Tests for the datagram scheduler including:
- Protocol codec and validation
- Registry and allocation strategies
- Bootstrap handshake
- Dispatch loop and service lifecycle
- Configuration, broker and telemetry
"""
