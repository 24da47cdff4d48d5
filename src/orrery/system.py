'''Planar Keplerian orbits for a hierarchical body model
System class definition'''

import json
import logging
import numpy as np
import pandas as pd
from typing import Optional, Dict, Tuple, Iterable, Iterator
from .bodies import Orbiter, Orbitable, Body
from .hierarchy import build_system

logger = logging.getLogger(__name__)


class System:
    """
    Read-only view of a built body hierarchy.

    Wraps the root returned by build_system() and provides name lookup,
    whole-tree propagation and the serialization projection consumed by
    renderers and transport layers.

    Parameters
    ----------
    root : Orbitable
        Root of a built hierarchy (configured, without a parent)

    Notes
    -----
    - System keeps the root alive, and with it every node of the tree.
      Child-to-parent links are weak, so a node detached from any System
      loses its parent once the root is garbage collected.
    - Node names are expected to be unique; lookup returns the first match
      in depth-first order.
    """

    # ========== CONSTRUCTION ==========
    def __init__(self, root: Orbitable):
        if not isinstance(root, Orbitable):
            raise TypeError(f"root must be an Orbitable, got {type(root).__name__}")
        if not root.is_configured:
            raise ValueError(
                f"'{root.name}' has not been built, use System.build() or build_system()")
        if root.parent is not None:
            raise ValueError(
                f"'{root.name}' orbits '{root.parent.name}' and cannot be a system root")

        self._root = root
        self._bodies = tuple(root.walk())
        self._index: Dict[str, Orbiter] = {}
        for node in self._bodies:
            self._index.setdefault(node.name, node)
        logger.debug("System '%s' with %d node(s)", root.name, len(self._bodies))

    @classmethod
    def build(cls, central_body: Body, satellites: Iterable[Orbiter]) -> "System":
        """Run build_system() and wrap the resulting root"""
        return cls(build_system(central_body, satellites))

    # ========== PROPERTY ACCESS ==========
    @property
    def root(self) -> Orbitable:
        return self._root

    @property
    def bodies(self) -> Tuple[Orbiter, ...]:
        """All nodes in depth-first pre-order, root first"""
        return self._bodies

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(node.name for node in self._bodies)

    def find(self, name: str) -> Optional[Orbiter]:
        """Node with the given name, or None"""
        return self._index.get(name)

    # ========== PROPAGATION ==========
    def positions_at(self, t: float, mode=None) -> Dict[str, Tuple[float, float]]:
        """
        Absolute position of every node at time t.

        Parents are propagated once and children are offset from them, so a
        call costs one Kepler solve per node.

        Returns
        -------
        dict
            Mapping of node name to (x, y) relative to the root
        """
        positions = {self._root.name: (0.0, 0.0)}
        for sat in self._root.satellites:
            self._accumulate(sat, 0.0, 0.0, t, mode, positions)
        return positions

    def _accumulate(self, node, px, py, t, mode, positions):
        x, y = node.position_at(t, mode)
        x += px
        y += py
        positions.setdefault(node.name, (x, y))
        if isinstance(node, Orbitable):
            for sat in node.satellites:
                self._accumulate(sat, x, y, t, mode, positions)

    # ========== SERIALIZATION ==========
    def to_dict(self) -> dict:
        """Nested projection of the whole tree, starting at the root"""
        return self._root.to_dict()

    def to_json(self, **kwargs) -> str:
        """JSON text of to_dict(); kwargs are passed to json.dumps"""
        return json.dumps(self.to_dict(), **kwargs)

    def to_dataframe(self, t: float, mode=None) -> pd.DataFrame:
        """
        Tabulate the system state at time t.

        Returns
        -------
        pd.DataFrame
            Indexed by node name with columns: type, parent, depth, x, y
            (absolute), r (distance from the parent), period, soi
        """
        positions = self.positions_at(t, mode)
        rows = []
        for node in self._bodies:
            rel_x, rel_y = node.position_at(t, mode)
            x, y = positions[node.name]
            parent = node.parent
            if isinstance(node, Body):
                node_type = node.body_type.name.lower()
            else:
                node_type = type(node).__name__.lower()
            rows.append({
                'name': node.name,
                'type': node_type,
                'parent': parent.name if parent is not None else None,
                'depth': node.depth,
                'x': x,
                'y': y,
                'r': float(np.hypot(rel_x, rel_y)),
                'period': node.period(),
                'soi': node.soi_radius if isinstance(node, Orbitable) else np.nan,
            })
        return pd.DataFrame(rows).set_index('name')

    # ========== SPECIAL METHODS ==========
    def __len__(self):
        return len(self._bodies)

    def __iter__(self) -> Iterator[Orbiter]:
        return iter(self._bodies)

    def __contains__(self, name):
        return name in self._index

    def __getitem__(self, name: str) -> Orbiter:
        try:
            return self._index[name]
        except KeyError:
            raise KeyError(f"No body named '{name}' in system '{self._root.name}'") from None

    def __repr__(self):
        return f"System(root='{self._root.name}', bodies={len(self._bodies)})"
