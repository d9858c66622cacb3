from Route_Sim.graph.model import GraphModel
from Route_Sim.session import (
    DELIVERED_MESSAGE,
    NO_PATH_MESSAGE,
    REGENERATED_MESSAGE,
    SAME_NODE_MESSAGE,
    NodeRole,
    SimulationState,
    mark_delivered,
    node_role,
    plan_route,
    reset_state,
    select_destination,
    select_source,
)


def test_plan_route_success_sets_path_and_cost_message():
    state = select_destination(select_source(SimulationState(), "A"), "F")
    planned = plan_route(state, GraphModel.default())
    assert planned.is_animating and not planned.is_complete
    assert len(planned.path) == 3
    assert planned.message.endswith("Total cost: 18")
    # input state untouched
    assert state.path == () and not state.is_animating


def test_plan_route_refuses_identical_endpoints():
    state = SimulationState(source_id="B", destination_id="B", is_complete=True)
    planned = plan_route(state, GraphModel.default())
    assert planned.message == SAME_NODE_MESSAGE
    assert planned.path == () and not planned.is_complete


def test_plan_route_reports_missing_route():
    graph = GraphModel.from_dict({"nodes": [{"id": "A"}, {"id": "B"}], "edges": []})
    planned = plan_route(SimulationState(source_id="A", destination_id="B"), graph)
    assert planned.message == NO_PATH_MESSAGE
    assert not planned.is_animating


def test_plan_route_without_selection_is_noop():
    state = SimulationState(source_id="A")
    assert plan_route(state, GraphModel.default()) is state


def test_selection_frozen_while_animating():
    state = SimulationState(source_id="A", destination_id="F", is_animating=True)
    assert select_source(state, "B") is state
    assert select_destination(state, "C") is state


def test_delivery_and_reset():
    delivered = mark_delivered(SimulationState(source_id="A", is_animating=True))
    assert delivered.is_complete and not delivered.is_animating
    assert delivered.message == DELIVERED_MESSAGE
    assert delivered.source_id == "A"
    fresh = reset_state()
    assert fresh == SimulationState(message=REGENERATED_MESSAGE)


def test_node_roles_are_derived_from_selection():
    state = SimulationState(source_id="A", destination_id="F")
    assert node_role(state, "A") is NodeRole.SOURCE
    assert node_role(state, "F") is NodeRole.DESTINATION
    assert node_role(state, "C") is NodeRole.ROUTER


def test_planned_state_is_hashable():
    state = SimulationState(source_id="A", destination_id="F")
    planned = plan_route(state, GraphModel.default())
    assert isinstance(planned.path, tuple)
    assert hash(planned) == hash(plan_route(state, GraphModel.default()))
    assert len({planned, state}) == 2
