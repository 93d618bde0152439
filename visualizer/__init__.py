"""Live dispatch monitor served over WebSocket"""

from .server import VisualizerServer

__all__ = ['VisualizerServer']
