"""
Scheduler Analyzer

This package records and summarizes the scheduler's broadcast events.

Components:
- DispatchStatistics: Counts packets and dispatches, keeps a JSON Lines event log
"""

__version__ = "0.1.0"

from .dispatch_statistics import DispatchStatistics

__all__ = ['DispatchStatistics']
