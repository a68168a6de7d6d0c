"""
Explored State Space for rpnkey

This module records the symbolic states visited during exploration and
the transitions between them. A state is keyed by a FormulaPair, usually
(path condition, value definitions). States are deduplicated through a
KeyTable using FORMULA_PAIR_TRAITS, so revisiting a structurally equal
state returns the existing id instead of growing the graph.

Design Decisions:
    - Uses NetworkX DiGraph for directed transitions
    - Dense integer state ids, assigned in discovery order
    - Stores the FormulaPair as a node attribute
    - Structural equality only: logically equivalent states with different
      token sequences stay distinct

Graph Properties:
    - Directed: edges point from a state to its successor
    - May have cycles (loops in the explored program)
    - Parallel transitions collapse into one edge
"""

import logging
from typing import Iterable, Iterator, Optional

import networkx as nx

from rpnkey.hash.formula_hash import FORMULA_PAIR_TRAITS
from rpnkey.models import FormulaPair
from rpnkey.table import KeyTable

logger = logging.getLogger(__name__)


class StateSpace:
    """
    Deduplicating store of explored symbolic states.

    Wraps a NetworkX DiGraph and a KeyTable to provide:
    - Adding states with structural deduplication
    - Adding transitions between known states
    - Traversing successors and predecessors
    - Counting revisits

    Usage:
        space = StateSpace()
        root, _ = space.add_state(FormulaPair(pc, defs))
        child, is_new = space.add_state(FormulaPair(pc2, defs2))
        space.add_transition(root, child)
    """

    def __init__(self) -> None:
        """Initialize an empty state space."""
        self._graph: nx.DiGraph = nx.DiGraph()
        self._index: KeyTable[FormulaPair, int] = KeyTable(FORMULA_PAIR_TRAITS)
        self._revisits = 0

    @property
    def graph(self) -> nx.DiGraph:
        """Access the underlying NetworkX graph."""
        return self._graph

    @property
    def state_count(self) -> int:
        """Return the number of distinct states."""
        return self._graph.number_of_nodes()

    @property
    def transition_count(self) -> int:
        """Return the number of distinct transitions."""
        return self._graph.number_of_edges()

    @property
    def revisit_count(self) -> int:
        """Number of add_state calls that matched an existing state."""
        return self._revisits

    def add_state(self, state: FormulaPair) -> tuple[int, bool]:
        """
        Add a state unless a structurally equal one is already known.

        Args:
            state: The (path condition, definitions) pair

        Returns:
            (state id, True) for a new state, (existing id, False) otherwise
        """
        state_id, is_new = self._index.insert(state, self._graph.number_of_nodes())
        if is_new:
            self._graph.add_node(state_id, state=state)
            logger.debug("new state %d (%d tokens)", state_id, len(state.first) + len(state.second))
        else:
            self._revisits += 1
            logger.debug("revisited state %d", state_id)
        return state_id, is_new

    def add_transition(self, source: int, target: int) -> None:
        """
        Record a transition between two known states.

        Raises:
            KeyError: If either id does not name a state
        """
        for state_id in (source, target):
            if state_id not in self._graph:
                raise KeyError(f"Unknown state id: {state_id}")
        self._graph.add_edge(source, target)

    def explore_trace(self, states: Iterable[FormulaPair]) -> list[int]:
        """
        Add a sequence of states, linking each to the next.

        Args:
            states: States in the order they were reached

        Returns:
            The id of each state, in order
        """
        ids: list[int] = []
        for state in states:
            state_id, _ = self.add_state(state)
            if ids:
                self.add_transition(ids[-1], state_id)
            ids.append(state_id)
        return ids

    def find_state(self, state: FormulaPair) -> Optional[int]:
        """Return the id of a structurally equal known state, or None."""
        return self._index.get(state)

    def get_state(self, state_id: int) -> FormulaPair:
        """
        Retrieve a state by its id.

        Raises:
            KeyError: If the id does not name a state
        """
        if state_id not in self._graph:
            raise KeyError(f"Unknown state id: {state_id}")
        return self._graph.nodes[state_id]["state"]

    def successors(self, state_id: int) -> Iterator[int]:
        """Yield ids of states reachable in one transition."""
        if state_id in self._graph:
            yield from self._graph.successors(state_id)

    def predecessors(self, state_id: int) -> Iterator[int]:
        """Yield ids of states with a transition into state_id."""
        if state_id in self._graph:
            yield from self._graph.predecessors(state_id)
