import numpy as np
import pytest

from elastobar.mesh import IntervalMesh
from elastobar.model import ConfigurationError


@pytest.mark.parametrize("order", [1, 2, 3])
def test_connectivity_invariants(order):
    n_el = 7
    mesh = IntervalMesh.uniform(0.1, n_el, order)

    assert mesh.cell_to_dof.shape == (n_el, order + 1)
    assert mesh.n_dofs == n_el * order + 1
    assert mesh.dofs_per_element == order + 1

    for dofs, coords in mesh:
        assert len(set(dofs.tolist())) == order + 1
        assert coords[1] > coords[0]
        # interior nodes sit strictly inside, left to right
        interior = coords[2:]
        assert np.all(interior > coords[0]) and np.all(interior < coords[1])
        assert np.all(np.diff(interior) > 0)

    # every DOF belongs to some element
    assert set(mesh.cell_to_dof.ravel().tolist()) == set(range(mesh.n_dofs))


@pytest.mark.parametrize("order", [1, 2, 3])
def test_neighbours_share_a_vertex(order):
    mesh = IntervalMesh.uniform(1.0, 5, order)
    for e in range(mesh.n_elements - 1):
        assert mesh.cell_to_dof[e, 1] == mesh.cell_to_dof[e + 1, 0]


def test_quadratic_numbering_is_vertex_then_interior():
    mesh = IntervalMesh.uniform(1.0, 2, order=2)
    assert mesh.cell_to_dof.tolist() == [[0, 1, 2], [1, 3, 4]]
    np.testing.assert_allclose(mesh.node_location, [0.0, 0.5, 0.25, 1.0, 0.75])


def test_end_nodes_hit_domain_ends_exactly():
    L = 0.1
    mesh = IntervalMesh.uniform(L, 10, order=3)
    assert mesh.node_location.min() == 0.0
    assert mesh.node_location.max() == L
    assert mesh.element_size == pytest.approx(0.01)


def test_node_coordinates_are_uniform():
    mesh = IntervalMesh.uniform(2.0, 4, order=3)
    np.testing.assert_allclose(np.sort(mesh.node_location), np.linspace(0.0, 2.0, 13), atol=1e-14)


def test_tables_are_read_only():
    mesh = IntervalMesh.uniform(1.0, 3, order=1)
    with pytest.raises(ValueError):
        mesh.node_location[0] = 1.0
    with pytest.raises(ValueError):
        mesh.cell_to_dof[0, 0] = 2


@pytest.mark.parametrize("kwargs", [
    dict(length=1.0, n_elements=0, order=1),
    dict(length=0.0, n_elements=3, order=1),
    dict(length=1.0, n_elements=3, order=4),
])
def test_invalid_mesh_parameters(kwargs):
    with pytest.raises(ConfigurationError):
        IntervalMesh.uniform(**kwargs)
