import pytest

from src.diffgrowth.node import Node
from src.diffgrowth.settings import merge_settings


def test_distance_is_euclidean() -> None:
    a = Node(0.0, 0.0)
    b = Node(3.0, 4.0)
    assert a.distance(b) == pytest.approx(5.0)
    assert b.distance(a) == pytest.approx(5.0)


def test_iterate_steps_fraction_toward_target() -> None:
    node = Node(0.0, 0.0, max_velocity=0.5)
    node.next_x = 10.0
    node.next_y = -4.0
    node.iterate()
    assert node.x == pytest.approx(5.0)
    assert node.y == pytest.approx(-2.0)
    node.iterate()
    assert node.x == pytest.approx(7.5)


def test_fixed_node_does_not_move() -> None:
    node = Node(1.0, 2.0, max_velocity=1.0, is_fixed=True)
    node.next_x = 50.0
    node.next_y = 50.0
    node.iterate()
    assert node.position == (1.0, 2.0)


def test_target_starts_at_position_and_resets() -> None:
    node = Node(3, 4)
    assert (node.next_x, node.next_y) == (3.0, 4.0)
    node.next_x = 9.0
    node.reset_target()
    assert (node.next_x, node.next_y) == (3.0, 4.0)


def test_from_settings_copies_thresholds() -> None:
    settings = merge_settings(
        {"min_distance": 2.0, "max_distance": 7.0, "repulsion_radius": 11.0, "max_velocity": 0.3}
    )
    node = Node.from_settings(1.0, 1.0, settings, fixed=True)
    assert node.min_distance == 2.0
    assert node.max_distance == 7.0
    assert node.repulsion_radius == 11.0
    assert node.max_velocity == 0.3
    assert node.is_fixed


def test_nodes_compare_by_identity() -> None:
    a = Node(0.0, 0.0)
    b = Node(0.0, 0.0)
    assert a != b
    assert a in [a]
    assert b not in [a]
