"""
This module contains classes for representing a public transit network: its
stops, the routes that connect them, and the vehicles that run on those
routes, along with the text format used to store and exchange networks.
"""

from .errors import *
from .stops import Stop
from .transit import *
from .network import Network
