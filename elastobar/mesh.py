# elastobar/mesh.py
"""
INTERVAL MESH: Connectivity and Coordinate Tables
=================================================

PURPOSE:
--------
Assembly and error evaluation only need two tables:

    cell_to_dof[e]      global DOF indices of element e, in local node order
    node_location[i]    x-coordinate of global DOF i

This module builds both for a uniform subdivision of [0, L].

DOF NUMBERING:
--------------
DOFs are numbered cell by cell, vertices first, then the interior nodes of
the cell. A vertex shared with the previous cell keeps its number:

    order 2, 2 elements:

        x:     0 ---- L/4 ---- L/2 ---- 3L/4 ---- L
        dof:   0       2        1        4        3

    cell 0 -> (0, 1, 2)
    cell 1 -> (1, 3, 4)

Global DOF numbers are therefore NOT sorted by x; always go through
node_location.
"""

from dataclasses import dataclass, field

import numpy as np

from .model import ConfigurationError, check_order


@dataclass(frozen=True, eq=False)
class IntervalMesh:
    """
    Uniform 1D mesh with Lagrange DOF numbering.

    Attributes:
    -----------
    length : float
        Domain length L; the mesh covers [0, L]
    n_elements : int
        Number of cells
    order : int
        Polynomial order, giving order + 1 DOFs per cell
    cell_to_dof : np.ndarray
        Shape (n_elements, order + 1), read-only
    node_location : np.ndarray
        Shape (n_dofs,), read-only

    Examples:
    ---------
    >>> mesh = IntervalMesh.uniform(1.0, 2, order=1)
    >>> mesh.cell_to_dof.tolist()
    [[0, 1], [1, 2]]
    >>> mesh.node_location.tolist()
    [0.0, 0.5, 1.0]
    """
    length: float
    n_elements: int
    order: int
    cell_to_dof: np.ndarray = field(repr=False)
    node_location: np.ndarray = field(repr=False)

    @classmethod
    def uniform(cls, length: float, n_elements: int, order: int = 1) -> "IntervalMesh":
        order = check_order(order)
        if n_elements < 1:
            raise ConfigurationError(f"Need at least one element, got {n_elements}.")
        if not length > 0.0:
            raise ConfigurationError(f"Domain length must be positive, got {length}.")

        vertices = np.linspace(0.0, length, n_elements + 1)
        n_dofs = n_elements * order + 1

        cell_to_dof = np.zeros((n_elements, order + 1), dtype=int)
        node_location = np.zeros(n_dofs, dtype=float)

        node_location[0] = vertices[0]
        next_dof = 1
        left = 0
        for e in range(n_elements):
            right = next_dof
            next_dof += 1
            node_location[right] = vertices[e + 1]

            cell_to_dof[e, 0] = left
            cell_to_dof[e, 1] = right

            # equally spaced interior nodes, left to right
            x0, x1 = vertices[e], vertices[e + 1]
            for a in range(2, order + 1):
                dof = next_dof
                next_dof += 1
                node_location[dof] = x0 + (a - 1) * (x1 - x0) / order
                cell_to_dof[e, a] = dof

            left = right

        cell_to_dof.setflags(write=False)
        node_location.setflags(write=False)
        return cls(length=float(length), n_elements=int(n_elements), order=order,
                   cell_to_dof=cell_to_dof, node_location=node_location)

    @property
    def n_dofs(self) -> int:
        return len(self.node_location)

    @property
    def dofs_per_element(self) -> int:
        return self.order + 1

    @property
    def element_size(self) -> float:
        return self.length / self.n_elements

    def element_dofs(self, e: int) -> np.ndarray:
        return self.cell_to_dof[e]

    def element_coordinates(self, e: int) -> np.ndarray:
        """Nodal x-coordinates of element e, in local node order."""
        return self.node_location[self.cell_to_dof[e]]

    def __iter__(self):
        """Yield (dofs, coordinates) for every element in mesh order."""
        for e in range(self.n_elements):
            dofs = self.cell_to_dof[e]
            yield dofs, self.node_location[dofs]
