import logging as log
from dataclasses import dataclass
from enum import Enum

import config_utils
from world.errors import EmptyRouteError, IncompatibleTypeError, \
    TransportFormatError


# delimiters used in the encoded formats
FIELD_SEP = ','
STOPS_SEP = ':'
STOP_NAME_SEP = '|'


class TransportMode(Enum):
    """The kinds of public transport in the network.  The value of each
    member is the tag used for it in encoded text."""
    BUS = 'bus'
    TRAIN = 'train'
    FERRY = 'ferry'


class Route:
    """A named, numbered sequence of stops that vehicles of a single
    transport mode can follow."""
    def __init__(self, name, number, mode):
        self.name = config_utils.sanitize_text(name)
        self.number = number
        self.mode = TransportMode(mode)
        self._stops = []
        self._vehicles = []

    @classmethod
    def bus(cls, name, number):
        return cls(name, number, TransportMode.BUS)

    @classmethod
    def train(cls, name, number):
        return cls(name, number, TransportMode.TRAIN)

    @classmethod
    def ferry(cls, name, number):
        return cls(name, number, TransportMode.FERRY)

    def get_type(self):
        return self.mode.value

    def get_stops_on_route(self):
        return list(self._stops)

    def get_start_stop(self):
        if len(self._stops) == 0:
            raise EmptyRouteError(
                'route {} has no stops'.format(self.number))
        return self._stops[0]

    def add_stop(self, stop):
        """Appends a stop to the end of the route.

        The stop is told that it is on this route, and it and the previous
        stop (if any) are made neighbours of one another."""
        if stop is None:
            return

        stop.add_route(self)
        self._stops.append(stop)
        if len(self._stops) == 1:
            # this is the start stop, so it has no predecessor
            return

        previous = self._stops[-2]
        previous.add_neighbouring_stop(stop)
        stop.add_neighbouring_stop(previous)

    def get_transports(self):
        return list(self._vehicles)

    def add_transport(self, transport):
        """Puts a vehicle on this route.

        The checks happen in a fixed order: a None vehicle is ignored, then
        the route must have a stop, then the vehicle's type must match the
        route's."""
        if transport is None:
            return

        if len(self._stops) == 0:
            raise EmptyRouteError(
                'cannot add a vehicle to route {} with no stops'.format(
                    self.number))

        if transport.get_type() != self.get_type():
            raise IncompatibleTypeError(
                'a {} cannot run on {} route {}'.format(
                    transport.get_type(), self.get_type(), self.number))

        self._vehicles.append(transport)

    def __eq__(self, other):
        if not isinstance(other, Route):
            return False
        return self.name == other.name and self.number == other.number

    def __hash__(self):
        return hash(self.number)

    def __repr__(self):
        return 'Route(type: {}, name: {}, number: {}, stops: {})'.format(
            self.get_type(), self.name, self.number, len(self._stops))

    def __str__(self):
        return self.encode()

    def encode(self):
        """Returns '{type},{name},{number}:{stop0}|{stop1}|...|{stopN}'.
        A route with no stops ends at the colon."""
        stop_names = STOP_NAME_SEP.join(stop.name for stop in self._stops)
        header = FIELD_SEP.join([self.get_type(), self.name,
                                 str(self.number)])
        return header + STOPS_SEP + stop_names

    @classmethod
    def decode(cls, route_str, existing_stops):
        """Builds a route from the output of encode().

        The stop names in the string are resolved against existing_stops,
        so the returned route refers to those stop objects rather than to
        new ones.  Any malformed input raises TransportFormatError.

        Commas and colons are field delimiters, so neither may appear in the
        route name or in a stop name.
        """
        if route_str is None or existing_stops is None:
            raise TransportFormatError('route string and stops are required')
        if route_str.endswith(STOP_NAME_SEP):
            _fail('route ends with a stop delimiter', route_str)

        _check_delimiter_counts(route_str)
        type_tag, name, rest = route_str.split(FIELD_SEP, 2)
        number_str, colon, stops_str = rest.partition(STOPS_SEP)
        if not colon:
            # the colon is elsewhere, eg. in the route name
            _fail('route number must be followed by a colon', route_str)
        number = _parse_route_number(number_str, route_str)

        try:
            mode = TransportMode(type_tag)
        except ValueError:
            _fail('unknown route type {!r}'.format(type_tag), route_str)
        route = cls(name, number, mode)

        if stops_str:
            for stop_name in stops_str.split(STOP_NAME_SEP):
                route.add_stop(_find_stop(stop_name, existing_stops,
                                          route_str))
        return route


def _fail(reason, encoded):
    log.debug('could not decode %r: %s', encoded, reason)
    raise TransportFormatError('{}: {!r}'.format(reason, encoded))


def _check_delimiter_counts(route_str):
    # the number of stops varies, but these delimiters always appear once
    # (or twice) in a valid route
    if route_str.count(FIELD_SEP) != 2 or route_str.count(STOPS_SEP) != 1:
        _fail('route needs exactly two commas and one colon', route_str)


def _parse_route_number(number_str, route_str):
    try:
        return config_utils.parse_int(number_str)
    except ValueError:
        _fail('route number is not an integer', route_str)


def _find_stop(stop_name, existing_stops, route_str):
    for stop in existing_stops:
        if stop.name == stop_name:
            return stop
    _fail('no existing stop named {!r}'.format(stop_name), route_str)


@dataclass
class PublicTransport:
    """A vehicle that runs on a route.

    Each transport mode carries one field of its own: buses have a
    registration number, trains a carriage count, and ferries a ferry type.
    The fields belonging to other modes must be left as None.
    """
    id: int
    capacity: int
    route: Route
    mode: TransportMode
    registration_number: str = None
    carriage_count: int = None
    ferry_type: str = None

    def __post_init__(self):
        self.mode = TransportMode(self.mode)
        variant_fields = {
            TransportMode.BUS: 'registration_number',
            TransportMode.TRAIN: 'carriage_count',
            TransportMode.FERRY: 'ferry_type',
        }
        for mode, field_name in variant_fields.items():
            if mode is not self.mode and \
               getattr(self, field_name) is not None:
                raise ValueError('{} is not a field of a {}'.format(
                    field_name, self.mode.value))

        if self.mode is TransportMode.BUS:
            self.registration_number = \
                config_utils.sanitize_text(self.registration_number)
        elif self.mode is TransportMode.FERRY:
            self.ferry_type = config_utils.sanitize_text(self.ferry_type)
        elif self.carriage_count is None:
            raise ValueError('a train must have a carriage count')

    @classmethod
    def bus(cls, id, capacity, route, registration_number):
        return cls(id, capacity, route, TransportMode.BUS,
                   registration_number=registration_number)

    @classmethod
    def train(cls, id, capacity, route, carriage_count):
        return cls(id, capacity, route, TransportMode.TRAIN,
                   carriage_count=carriage_count)

    @classmethod
    def ferry(cls, id, capacity, route, ferry_type):
        return cls(id, capacity, route, TransportMode.FERRY,
                   ferry_type=ferry_type)

    def get_type(self):
        return self.mode.value

    @property
    def extra(self):
        """The value of this vehicle's mode-specific field."""
        if self.mode is TransportMode.BUS:
            return self.registration_number
        elif self.mode is TransportMode.TRAIN:
            return self.carriage_count
        return self.ferry_type

    def __str__(self):
        return self.encode()

    def encode(self):
        """Returns '{type},{id},{capacity},{route number},{extra}'."""
        route_number = '' if self.route is None else self.route.number
        fields = [self.get_type(), self.id, self.capacity, route_number,
                  self.extra]
        return FIELD_SEP.join(str(ff) for ff in fields)

    @classmethod
    def decode(cls, transport_str, existing_routes):
        """Builds a vehicle from the output of encode().  Its route is looked
        up by number in existing_routes (an empty route field means no
        route), but the vehicle is not added to that route."""
        if transport_str is None or existing_routes is None:
            raise TransportFormatError(
                'vehicle string and routes are required')
        if transport_str.count(FIELD_SEP) != 4:
            _fail('vehicle needs exactly four commas', transport_str)

        type_tag, id_str, capacity_str, route_str, extra = \
            transport_str.split(FIELD_SEP)
        try:
            mode = TransportMode(type_tag)
            vehicle_id = config_utils.parse_int(id_str)
            capacity = config_utils.parse_int(capacity_str)
            if mode is TransportMode.TRAIN:
                extra = config_utils.parse_int(extra)
            # an empty route field is a vehicle that is not on any route
            route_number = None
            if route_str.strip():
                route_number = config_utils.parse_int(route_str)
        except ValueError as err:
            _fail(str(err), transport_str)

        route = None
        if route_number is not None:
            route = _find_route(route_number, existing_routes, transport_str)

        if mode is TransportMode.BUS:
            return cls.bus(vehicle_id, capacity, route, extra)
        elif mode is TransportMode.TRAIN:
            return cls.train(vehicle_id, capacity, route, extra)
        return cls.ferry(vehicle_id, capacity, route, extra)


def _find_route(route_number, existing_routes, transport_str):
    for route in existing_routes:
        if route.number == route_number:
            return route
    _fail('no existing route numbered {}'.format(route_number),
          transport_str)
