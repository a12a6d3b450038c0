# tests/core/test_controller.py

import pytest

from fipcontroller.core.controller import Controller
from fipcontroller.core.exceptions import NoEligibleServerError, WatchError
from fipcontroller.core.watcher import NodeEvent, ServiceEvent
from fipcontroller.models.floating_ip import FloatingIP
from tests.conftest import FakeHcloud, make_node, make_service


async def replay(*events):
    for event in events:
        yield event


async def test_dispatches_events_to_reconcilers(core_api, inventory, cluster_nodes):
    node_a = make_node("A", 5, unschedulable=True)
    cluster_nodes.extend([node_a, make_node("B", 7), make_node("C", 9)])
    hcloud = FakeHcloud([FloatingIP(id=1, ip="10.0.0.1", server=5), FloatingIP(id=2, ip="10.0.0.2", server=3)])
    controller = Controller(core_api, inventory, hcloud)

    await controller.run(
        replay(
            NodeEvent("MODIFIED", node_a),
            ServiceEvent("ADDED", make_service("svc-1", ingress_ips=["10.0.0.2"])),
        )
    )

    assert hcloud.server_of(1) in {7, 9}
    assert hcloud.server_of(2) == 7


async def test_duplicated_events_are_harmless(core_api, inventory, cluster_nodes):
    cluster_nodes.extend([make_node("X", 3, unschedulable=True), make_node("Y", 7)])
    hcloud = FakeHcloud([FloatingIP(id=2, ip="10.0.0.1", server=3)])
    service = make_service("svc-1", ingress_ips=["10.0.0.1"])
    controller = Controller(core_api, inventory, hcloud)

    await controller.run(replay(*[ServiceEvent("MODIFIED", service)] * 3))

    assert hcloud.assign_calls == [(2, 7)]


async def test_error_stops_the_loop(core_api, inventory, cluster_nodes):
    node_a = make_node("A", 5, unschedulable=True)
    cluster_nodes.append(node_a)
    hcloud = FakeHcloud([FloatingIP(id=1, ip="10.0.0.1", server=5), FloatingIP(id=2, ip="10.0.0.2")])
    controller = Controller(core_api, inventory, hcloud)

    with pytest.raises(NoEligibleServerError):
        await controller.run(
            replay(
                NodeEvent("MODIFIED", node_a),
                ServiceEvent("ADDED", make_service("svc-1", ingress_ips=["10.0.0.2"])),
            )
        )

    assert hcloud.list_calls == 1


async def test_run_watches_nodes_and_services(core_api, inventory, mocker):
    """Without an explicit stream the controller watches both resource kinds."""
    watched = []

    async def fake_watch_applied(list_func, wrap):
        watched.append(list_func)
        if False:
            yield
        raise WatchError("stop")

    mocker.patch("fipcontroller.core.controller.watch_applied", side_effect=fake_watch_applied)
    controller = Controller(core_api, inventory, FakeHcloud([]))

    with pytest.raises(WatchError):
        await controller.run()

    assert core_api.list_node in watched
    assert core_api.list_service_for_all_namespaces in watched
