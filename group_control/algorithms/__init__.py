"""Allocation algorithms"""

from .first_registered import FirstRegisteredStrategy
from .nearest_car import NearestCarStrategy

__all__ = ['FirstRegisteredStrategy', 'NearestCarStrategy']
