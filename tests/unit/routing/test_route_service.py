"""Unit tests for RouteService.find_route."""

from unittest.mock import patch

import pytest

from core.config import RoutingSettings
from src.transit_bc.line.domain.entities.line import Line
from src.transit_bc.routing.exceptions import CatalogValidationError, SearchLimitExceeded
from src.transit_bc.routing.network_graph import NetworkGraph
from src.transit_bc.routing.route_result import (
    InvalidInput,
    RouteFound,
    RouteNotFound,
    RouteStatus,
    SameStop,
    UnknownStop,
)
from src.transit_bc.routing.route_service import RouteService
from src.transit_bc.stop.domain.entities.stop import Stop


def make_stop(stop_id: int) -> Stop:
    return Stop(id=stop_id, name=f"Stop {stop_id}", lat=43.3, lon=21.9)


class TestScenarios:
    """End-to-end queries through the service."""

    def test_direct_route_preferred(self, two_line_catalog):
        result = RouteService(two_line_catalog).find_route(1, 3)
        assert isinstance(result, RouteFound)
        assert result.success is True
        assert result.status == RouteStatus.FOUND
        assert result.stop_ids == [1, 3]
        assert result.duration_minutes == 15
        assert result.transfer_count == 0

    def test_default_network(self, default_catalog):
        result = RouteService(default_catalog).find_route(9, 7)
        assert result.stop_ids == [9, 6, 3, 4, 7]
        assert result.duration_minutes == 53
        assert result.transfer_count == 2

    def test_approximate_transfers(self, default_catalog):
        service = RouteService(default_catalog, RoutingSettings(TRANSFER_METRIC="approximate"))
        assert service.find_route(9, 7).transfer_count == 3

    def test_unknown_stop(self, two_line_catalog):
        result = RouteService(two_line_catalog).find_route(9999, 3)
        assert isinstance(result, UnknownStop)
        assert result.stop_ids == [9999]
        assert result.status == RouteStatus.UNKNOWN_STOP
        assert result.message == "Unknown stop: 9999"

    def test_both_stops_unknown(self, two_line_catalog):
        result = RouteService(two_line_catalog).find_route(998, 999)
        assert result.stop_ids == [998, 999]

    def test_same_stop(self, two_line_catalog):
        result = RouteService(two_line_catalog).find_route(2, 2)
        assert isinstance(result, SameStop)
        assert result.message == "Departure and destination cannot be the same"

    def test_same_unknown_stop(self, two_line_catalog):
        """Identical ids are reported as same_stop even when unknown."""
        assert isinstance(RouteService(two_line_catalog).find_route(9999, 9999), SameStop)

    def test_disconnected(self, disconnected_catalog):
        result = RouteService(disconnected_catalog).find_route(1, 5)
        assert isinstance(result, RouteNotFound)
        assert result.success is False
        assert result.status == RouteStatus.NO_ROUTE

    def test_stop_on_no_line(self, disconnected_catalog):
        """A known stop that no line serves has no route."""
        assert isinstance(RouteService(disconnected_catalog).find_route(6, 1), RouteNotFound)


class TestInvalidInput:
    """Ids that are missing or not positive integers."""

    @pytest.mark.parametrize("from_id,to_id,fields", [
        (None, 3, ["from"]),
        (1, None, ["to"]),
        (None, None, ["from", "to"]),
        (0, 3, ["from"]),
        (-1, 3, ["from"]),
        (True, 3, ["from"]),
        ("1", 3, ["from"]),
        (1.0, 3, ["from"]),
    ])
    def test_rejected(self, two_line_catalog, from_id, to_id, fields):
        result = RouteService(two_line_catalog).find_route(from_id, to_id)
        assert isinstance(result, InvalidInput)
        assert result.fields == fields
        assert result.message == "Please select both departure and destination stops"

    def test_invalid_before_same_stop(self, two_line_catalog):
        assert isinstance(RouteService(two_line_catalog).find_route(0, 0), InvalidInput)


class TestGraphLifecycle:
    """Graph construction and sharing."""

    def test_no_graph_work_for_unknown_stop(self, two_line_catalog):
        service = RouteService(two_line_catalog, RoutingSettings(SHARE_GRAPH=False))
        with patch.object(NetworkGraph, "build_from_lines") as build:
            service.find_route(1, 9999)
        build.assert_not_called()

    def test_shared_graph_built_once(self, default_catalog):
        service = RouteService(default_catalog)
        with patch.object(
            NetworkGraph, "build_from_lines", wraps=NetworkGraph.build_from_lines
        ) as build:
            service.find_route(1, 3)
            service.find_route(9, 7)
        assert build.call_count == 1
        assert service.get_graph().is_frozen

    def test_unshared_graph_rebuilt_per_query(self, default_catalog):
        service = RouteService(default_catalog, RoutingSettings(SHARE_GRAPH=False))
        first = service.get_graph()
        second = service.get_graph()
        assert first is not second
        assert not first.is_frozen

    def test_invalidate_graph(self, default_catalog):
        service = RouteService(default_catalog)
        graph = service.get_graph()
        service.invalidate_graph()
        assert service.get_graph() is not graph

    def test_catalog_reload_rebuilds_shared_graph(self, two_line_catalog):
        """Routes follow the reloaded lines, not the graph cached before the reload."""
        service = RouteService(two_line_catalog)
        assert service.find_route(1, 3).duration_minutes == 15
        old_graph = service.get_graph()

        two_line_catalog.reload_data(
            [make_stop(stop_id) for stop_id in (1, 2, 3, 4, 5)],
            [Line(id="C", stop_ids=(1, 3, 5), duration_minutes=80)],
        )

        to_new_stop = service.find_route(1, 5)
        assert isinstance(to_new_stop, RouteFound)
        assert to_new_stop.stop_ids == [1, 3, 5]
        assert to_new_stop.duration_minutes == 80

        # Line B (15 min) is gone; only line C serves 1-3
        direct = service.find_route(1, 3)
        assert direct.duration_minutes == 40
        assert [leg.line_id for leg in direct.legs] == ["C"]

        assert service.get_graph() is not old_graph
        assert service.get_graph().is_frozen

    def test_graph_rebuilt_once_per_reload(self, two_line_catalog):
        service = RouteService(two_line_catalog)
        service.find_route(1, 3)
        two_line_catalog.reload_data(
            [make_stop(stop_id) for stop_id in (1, 2, 3)],
            [Line(id="A", stop_ids=(1, 2, 3), duration_minutes=10)],
        )
        with patch.object(
            NetworkGraph, "build_from_lines", wraps=NetworkGraph.build_from_lines
        ) as build:
            service.find_route(1, 3)
            service.find_route(3, 1)
        assert build.call_count == 1

    def test_failed_reload_keeps_shared_graph(self, two_line_catalog):
        service = RouteService(two_line_catalog)
        graph = service.get_graph()
        with pytest.raises(CatalogValidationError):
            two_line_catalog.reload_data(
                [make_stop(1)], [Line(id="Z", stop_ids=(1, 9), duration_minutes=5)]
            )
        assert service.get_graph() is graph
        assert service.find_route(1, 3).duration_minutes == 15

    def test_shared_and_unshared_agree(self, default_catalog):
        shared = RouteService(default_catalog)
        unshared = RouteService(default_catalog, RoutingSettings(SHARE_GRAPH=False))
        for source, target in [(1, 10), (5, 6), (9, 7)]:
            assert shared.find_route(source, target) == unshared.find_route(source, target)


class TestStrategies:
    """Linear and heap selection give identical results."""

    def test_same_routes(self, default_catalog):
        linear = RouteService(default_catalog, RoutingSettings(SELECTION_STRATEGY="linear"))
        heap = RouteService(default_catalog, RoutingSettings(SELECTION_STRATEGY="heap"))
        for source in range(1, 11):
            for target in range(1, 11):
                assert linear.find_route(source, target) == heap.find_route(source, target)

    def test_deterministic(self, default_catalog):
        service = RouteService(default_catalog)
        assert service.find_route(1, 10) == service.find_route(1, 10)

    def test_symmetric_duration(self, default_catalog):
        service = RouteService(default_catalog)
        assert service.find_route(9, 7).total_minutes == service.find_route(7, 9).total_minutes


class TestGuards:

    def test_vertex_cap_propagates(self, default_catalog):
        service = RouteService(default_catalog, RoutingSettings(MAX_GRAPH_VERTICES=5))
        with pytest.raises(SearchLimitExceeded):
            service.find_route(1, 3)

    def test_vertex_cap_not_applied_to_invalid_input(self, default_catalog):
        service = RouteService(default_catalog, RoutingSettings(MAX_GRAPH_VERTICES=5))
        assert isinstance(service.find_route(1, 1), SameStop)
