import pytest

from world import Stop, Route, PublicTransport, TransportMode, \
    EmptyRouteError, IncompatibleTypeError, TransportFormatError


@pytest.fixture
def stops():
    return [Stop('UQ Lakes', 0, 0), Stop('City', 5, 4), Stop('Valley', 7, 8)]


@pytest.fixture
def red_route(stops):
    route = Route.bus('red', 1)
    for stop in stops:
        route.add_stop(stop)
    return route


def test_name_is_sanitized():
    route = Route.bus('re\nd\r', 1)
    assert route.name == 'red'
    assert Route.train(None, 2).name == ''


def test_new_route_is_empty():
    route = Route.ferry('harbour', 4)
    assert route.get_stops_on_route() == []
    assert route.get_transports() == []
    with pytest.raises(EmptyRouteError):
        route.get_start_stop()


@pytest.mark.parametrize("factory, tag", [
    (Route.bus, 'bus'), (Route.train, 'train'), (Route.ferry, 'ferry')])
def test_variant_types(factory, tag):
    route = factory('x', 1)
    assert route.get_type() == tag
    assert route.mode is TransportMode(tag)


def test_add_stop_links_neighbours(stops):
    s1, s2, s3 = stops
    route = Route.bus('red', 1)
    route.add_stop(s1)
    assert route.get_start_stop() is s1
    assert s1.get_neighbouring_stops() == []
    assert s1.get_routes() == [route]

    route.add_stop(s2)
    assert route.get_start_stop() is s1
    assert s1.get_neighbouring_stops() == [s2]
    assert s2.get_neighbouring_stops() == [s1]
    assert s2.get_routes() == [route]

    route.add_stop(s3)
    # only adjacent stops become neighbours
    assert set(s2.get_neighbouring_stops()) == {s1, s3}
    assert s3 not in s1.get_neighbouring_stops()
    assert route.get_stops_on_route() == [s1, s2, s3]


def test_add_none_stop(red_route, stops):
    red_route.add_stop(None)
    assert len(red_route.get_stops_on_route()) == 3
    assert set(stops[-1].get_neighbouring_stops()) == {stops[1]}


def test_returned_lists_are_copies(red_route):
    red_route.get_stops_on_route().clear()
    assert len(red_route.get_stops_on_route()) == 3
    red_route.add_transport(PublicTransport.bus(1, 50, red_route, 'ABC'))
    red_route.get_transports().clear()
    assert len(red_route.get_transports()) == 1


def test_add_transport(red_route):
    bus = PublicTransport.bus(1, 50, red_route, 'ABC')
    red_route.add_transport(bus)
    red_route.add_transport(None)
    assert red_route.get_transports() == [bus]


def test_add_transport_to_empty_route():
    route = Route.bus('red', 1)
    with pytest.raises(EmptyRouteError):
        route.add_transport(PublicTransport.bus(1, 50, route, 'ABC'))
    # the empty route check comes before the type check
    with pytest.raises(EmptyRouteError):
        route.add_transport(PublicTransport.train(2, 500, route, 4))
    route.add_transport(None)
    assert route.get_transports() == []


def test_add_incompatible_transport(red_route):
    with pytest.raises(IncompatibleTypeError):
        red_route.add_transport(PublicTransport.ferry(1, 50, red_route, 'x'))
    assert red_route.get_transports() == []


def test_equality():
    assert Route.bus('red', 1) == Route.train('red', 1)
    assert Route.bus('red', 1) != Route.bus('red', 2)
    assert Route.bus('red', 1) != Route.bus('blue', 1)
    assert Route.bus('red', 1) != 'red'
    assert hash(Route.bus('red', 1)) == hash(Route.ferry('blue', 1))


def test_encode(red_route):
    assert red_route.encode() == 'bus,red,1:UQ Lakes|City|Valley'
    assert str(red_route) == red_route.encode()
    assert Route.train('express', 12).encode() == 'train,express,12:'


def test_decode(stops):
    route = Route.decode('bus,red,1:UQ Lakes|City|Valley', stops)
    assert route.get_type() == 'bus'
    assert route.name == 'red'
    assert route.number == 1
    assert route.get_stops_on_route() == stops
    # the existing stop objects are used
    assert route.get_start_stop() is stops[0]
    assert route in stops[1].get_routes()
    assert set(stops[1].get_neighbouring_stops()) == {stops[0], stops[2]}


@pytest.mark.parametrize("factory", [Route.bus, Route.train, Route.ferry])
def test_decode_encoded(factory, stops):
    route = factory('somewhere', 42)
    for stop in stops[::-1]:
        route.add_stop(stop)
    decoded = Route.decode(route.encode(), stops)
    assert decoded == route
    assert decoded.get_type() == route.get_type()
    assert decoded.get_stops_on_route() == route.get_stops_on_route()


def test_decode_without_stops(stops):
    route = Route.decode('ferry,harbour,3:', stops)
    assert route.get_type() == 'ferry'
    assert route.get_stops_on_route() == []
    assert Route.decode('train,express,12:', []).number == 12


def test_decode_number_whitespace(stops):
    assert Route.decode('bus,red, 7 :City', stops).number == 7
    assert Route.decode('bus,red,-7:', stops).number == -7


def test_decode_first_match_wins():
    first = Stop('City', 0, 0)
    second = Stop('City', 1, 1)
    route = Route.decode('bus,red,1:City', [first, second])
    assert route.get_start_stop() is first


def test_decode_keeps_name_whitespace(stops):
    route = Route.decode('bus, red line ,1:', stops)
    assert route.name == ' red line '


@pytest.mark.parametrize("route_str", [
    # unknown or wrongly-cased type
    'car,red,1:',
    'Bus,red,1:',
    # trailing stop delimiter
    'bus,red,1:UQ Lakes|City|',
    'bus,red,1:|',
    # wrong delimiter counts
    'bus,red,1',
    'bus,red:1',
    'bus,red,1::',
    'bus,red,1,:',
    'bus,red1:',
    'bus,r:ed,1',
    'bus,red,1:City:Valley',
    # bad route numbers
    'bus,red,one:',
    'bus,red,:',
    'bus,red,1.5:',
    'bus,red,1_000:',
    # unknown stops
    'bus,red,1:UQ Lakes|City|Toowong',
    'bus,red,1:city',
    'bus,red,1:UQ Lakes||City',
    'bus,red,1:|City',
])
def test_decode_bad_format(route_str, stops):
    with pytest.raises(TransportFormatError):
        Route.decode(route_str, stops)


def test_decode_missing_stop(stops):
    with pytest.raises(TransportFormatError):
        Route.decode('bus,red,1:UQ Lakes|City|Valley', stops[:2])
    with pytest.raises(TransportFormatError):
        Route.decode('bus,red,1:UQ Lakes', [])


def test_decode_none(stops):
    with pytest.raises(TransportFormatError):
        Route.decode(None, stops)
    with pytest.raises(TransportFormatError):
        Route.decode('bus,red,1:', None)


def test_transport_variants(red_route):
    bus = PublicTransport.bus(1, 50, red_route, 'AB\nC')
    assert bus.get_type() == 'bus'
    assert bus.registration_number == 'ABC'
    assert PublicTransport.bus(1, 50, red_route, None).registration_number \
        == ''
    train = PublicTransport.train(2, 500, None, 6)
    assert train.get_type() == 'train'
    assert train.extra == 6
    ferry = PublicTransport.ferry(3, 100, None, None)
    assert ferry.ferry_type == ''

    with pytest.raises(ValueError):
        PublicTransport(4, 10, None, TransportMode.BUS, carriage_count=3)
    with pytest.raises(ValueError):
        PublicTransport(5, 10, None, TransportMode.TRAIN)


def test_transport_encode(red_route):
    bus = PublicTransport.bus(101, 80, red_route, 'ABC123')
    assert bus.encode() == 'bus,101,80,1,ABC123'
    train = PublicTransport.train(201, 600, Route.train('t', 22), 6)
    assert str(train) == 'train,201,600,22,6'
    assert PublicTransport.ferry(3, 10, None, 'cat').encode() == \
        'ferry,3,10,,cat'


def test_transport_decode(red_route):
    routes = [Route.train('t', 22), red_route]
    bus = PublicTransport.decode('bus,101,80,1,ABC123', routes)
    assert bus == PublicTransport.bus(101, 80, red_route, 'ABC123')
    assert bus.route is red_route
    # decoding does not put the vehicle on the route
    assert red_route.get_transports() == []

    train = PublicTransport.decode('train,201,600,22,6', routes)
    assert train.carriage_count == 6
    assert train.route is routes[0]


@pytest.mark.parametrize("transport_str", [
    'ferry,3,10,,cat', 'ferry,3,10, ,cat'])
def test_transport_decode_without_route(transport_str, red_route):
    ferry = PublicTransport.decode(transport_str, [red_route])
    assert ferry.route is None
    assert ferry.ferry_type == 'cat'
    assert ferry.encode() == 'ferry,3,10,,cat'


@pytest.mark.parametrize("transport_str", [
    'bus,101,80,1',
    'bus,101,80,1,ABC,DEF',
    'car,101,80,1,ABC',
    'bus,x,80,1,ABC',
    'bus,101,lots,1,ABC',
    'bus,101,80,x,ABC',
    'bus,101,80,99,ABC',
    'train,201,600,1,six',
])
def test_transport_decode_bad_format(transport_str, red_route):
    with pytest.raises(TransportFormatError):
        PublicTransport.decode(transport_str, [red_route])


def test_transport_decode_none(red_route):
    with pytest.raises(TransportFormatError):
        PublicTransport.decode(None, [red_route])
    with pytest.raises(TransportFormatError):
        PublicTransport.decode('bus,101,80,1,ABC', None)
