import logging as log
from pathlib import Path

import networkx as nx

import config_utils
from world.errors import TransportError, TransportFormatError
from world.stops import Stop
from world.transit import Route, PublicTransport


class Network:
    """Owns every stop, route and vehicle in a transport network.

    The encoded form of a network is a text document with three sections,
    for stops, routes and vehicles in that order.  Each section is a line
    holding the number of entries, followed by one encoded entry per line.
    """
    def __init__(self):
        self._stops = []
        self._routes = []
        self._vehicles = []

    def add_stop(self, stop):
        if stop is None:
            return
        self._stops.append(stop)

    def add_stops(self, stops):
        for stop in stops:
            self.add_stop(stop)

    def add_route(self, route):
        if route is None:
            return
        self._routes.append(route)

    def add_vehicle(self, vehicle):
        """Adds a vehicle and puts it on its route, if it has one."""
        if vehicle is None:
            return
        if vehicle.route is not None:
            vehicle.route.add_transport(vehicle)
        self._vehicles.append(vehicle)

    def get_stops(self):
        return list(self._stops)

    def get_stop(self, name):
        for stop in self._stops:
            if stop.name == name:
                return stop
        return None

    def get_routes(self):
        return list(self._routes)

    def get_route(self, number):
        for route in self._routes:
            if route.number == number:
                return route
        return None

    def get_vehicles(self):
        return list(self._vehicles)

    def stop_graph(self):
        """Returns the stops as an undirected graph.  There is an edge for
        each pair of consecutive stops on some route, labelled with the
        numbers of the routes that run along it.

        Nodes are keyed by stop name, as stops are everywhere else in the
        network, so stop names are assumed to be unique.  Stops that share a
        name are merged into a single node."""
        graph = nx.Graph()
        for stop in self._stops:
            graph.add_node(stop.name, x=stop.x, y=stop.y)
        for route in self._routes:
            stops = route.get_stops_on_route()
            for prev_stop, next_stop in zip(stops[:-1], stops[1:]):
                if prev_stop.name == next_stop.name:
                    continue
                if graph.has_edge(prev_stop.name, next_stop.name):
                    edge = graph.edges[prev_stop.name, next_stop.name]
                    if route.number not in edge['routes']:
                        edge['routes'].append(route.number)
                else:
                    graph.add_edge(prev_stop.name, next_stop.name,
                                   routes=[route.number])
        return graph

    def encode(self):
        lines = []
        for section in (self._stops, self._routes, self._vehicles):
            lines.append(str(len(section)))
            lines += [item.encode() for item in section]
        return '\n'.join(lines) + '\n'

    @classmethod
    def decode(cls, network_str):
        if network_str is None:
            raise TransportFormatError('network string is required')
        lines = network_str.split('\n')
        # tolerate blank lines at the end of the document
        while lines and lines[-1].strip() == '':
            lines.pop()
        # strip carriage returns from files written with windows line endings
        lines = [ll[:-1] if ll.endswith('\r') else ll for ll in lines]

        network = cls()
        line_iter = iter(enumerate(lines, start=1))
        for stop_str in _read_section(line_iter, 'stops'):
            network.add_stop(Stop.decode(stop_str))
        for route_str in _read_section(line_iter, 'routes'):
            network.add_route(Route.decode(route_str, network._stops))
        for vehicle_str in _read_section(line_iter, 'vehicles'):
            vehicle = PublicTransport.decode(vehicle_str, network._routes)
            try:
                network.add_vehicle(vehicle)
            except TransportError as err:
                raise TransportFormatError(
                    'vehicle {!r} does not fit its route: {}'.format(
                        vehicle_str, err)) from err

        extra = next(line_iter, None)
        if extra is not None:
            raise TransportFormatError(
                'unexpected content on line {}: {!r}'.format(*extra))
        return network

    def save(self, path):
        log.info('writing network to {}'.format(path))
        Path(path).write_text(self.encode())

    @classmethod
    def load(cls, path):
        log.info('reading network from {}'.format(path))
        network = cls.decode(Path(path).read_text())
        log.info('read {} stops, {} routes, {} vehicles'.format(
            len(network._stops), len(network._routes),
            len(network._vehicles)))
        return network


def _read_section(line_iter, section_name):
    """Yields the encoded entries of one count-prefixed section."""
    line_num, count_str = next(line_iter, (None, None))
    if count_str is None:
        raise TransportFormatError(
            'missing count of {}'.format(section_name))
    try:
        count = config_utils.parse_int(count_str)
    except ValueError as err:
        raise TransportFormatError(
            'line {}: bad count of {}: {!r}'.format(
                line_num, section_name, count_str)) from err
    if count < 0:
        raise TransportFormatError(
            'line {}: negative count of {}'.format(line_num, section_name))

    for _ in range(count):
        line_num, item_str = next(line_iter, (None, None))
        if item_str is None:
            raise TransportFormatError(
                'expected {} {} but the network ended'.format(
                    count, section_name))
        yield item_str
