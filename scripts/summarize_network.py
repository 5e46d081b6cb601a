# Copyright 2023 Andrew Holliday
#
# This file is part of the Transit Learning project.
#
# Transit Learning is free software: you can redistribute it and/or modify it
# under the terms of the GNU General Public License as published by the Free
# Software Foundation, either version 3 of the License, or (at your option) any
# later version.
#
# Transit Learning is distributed in the hope that it will be useful, but
# WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or
# FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more
# details.
#
# You should have received a copy of the GNU General Public License along with
# Transit Learning. If not, see <https://www.gnu.org/licenses/>.

import logging as log
from collections import Counter

from omegaconf import DictConfig
import hydra
import networkx as nx

import config_utils
from world import Network


def summarize(network):
    """Collects some basic statistics about a network into a dict."""
    graph = network.stop_graph()
    routes = network.get_routes()
    return {
        'num_stops': len(network.get_stops()),
        'num_routes': len(routes),
        'num_vehicles': len(network.get_vehicles()),
        'routes_by_type': dict(Counter(rr.get_type() for rr in routes)),
        'num_links': graph.number_of_edges(),
        'num_components': nx.number_connected_components(graph),
        # stops that no route passes through
        'unserved_stops': sorted(ss.name for ss in network.get_stops()
                                 if len(ss.get_routes()) == 0),
    }


@hydra.main(version_base=None, config_path="../cfg",
            config_name="summarize_network")
def main(cfg: DictConfig):
    config_utils.configure_logging(cfg)
    network = Network.load(cfg.network_path)

    summary = summarize(network)
    for key, value in summary.items():
        log.info('{}: {}'.format(key, value))
    for route in network.get_routes():
        log.info('route {} ({}, {}): {} stops, {} vehicles'.format(
            route.number, route.name, route.get_type(),
            len(route.get_stops_on_route()), len(route.get_transports())))

    if cfg.graph_out:
        nx.write_edgelist(network.stop_graph(), cfg.graph_out, delimiter='|')
        log.info('wrote stop graph to {}'.format(cfg.graph_out))


if __name__ == "__main__":
    main()
