import logging as log

import config_utils
from world.errors import TransportFormatError


class Stop:
    """A named stop at a fixed position in the network.

    A stop keeps track of the routes that pass through it and of the stops
    adjacent to it on any of those routes.  It does not own either; both are
    owned by the network that the stop belongs to.
    """
    def __init__(self, name, x, y):
        self.name = config_utils.sanitize_text(name)
        self.x = x
        self.y = y
        self._routes = set()
        self._neighbours = set()

    def add_route(self, route):
        if route is None:
            return
        self._routes.add(route)

    def get_routes(self):
        return list(self._routes)

    def add_neighbouring_stop(self, stop):
        if stop is None or stop is self:
            return
        self._neighbours.add(stop)

    def get_neighbouring_stops(self):
        return list(self._neighbours)

    def is_at_location(self, x, y):
        return self.x == x and self.y == y

    def __eq__(self, other):
        if not isinstance(other, Stop):
            return False
        return self.name == other.name and self.x == other.x and \
            self.y == other.y

    def __hash__(self):
        return hash((self.name, self.x, self.y))

    def __repr__(self):
        return 'Stop(name: {}, x: {}, y: {})'.format(self.name, self.x,
                                                     self.y)

    def __str__(self):
        return self.encode()

    def encode(self):
        return '{}:{}:{}'.format(self.name, self.x, self.y)

    @classmethod
    def decode(cls, stop_str):
        """Builds a stop from text of the form '{name}:{x}:{y}'."""
        if stop_str is None or stop_str.count(':') != 2:
            log.debug('bad stop string: %r', stop_str)
            raise TransportFormatError(
                'stop must be formatted as name:x:y, got {!r}'.format(
                    stop_str))
        name, x_str, y_str = stop_str.split(':')
        try:
            x = config_utils.parse_int(x_str)
            y = config_utils.parse_int(y_str)
        except ValueError as err:
            log.debug('bad stop coordinates in %r', stop_str)
            raise TransportFormatError(
                'stop coordinates must be integers: {!r}'.format(
                    stop_str)) from err
        return cls(name, x, y)
