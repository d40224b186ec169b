"""
Population data model for the SEIR network simulation.

Individuals and edges are immutable records. A ``Network`` bundles one
snapshot of every individual with the static edge list; stepping the
epidemic produces a new ``Network`` that shares the edge list and the
strength index with its predecessor, so earlier snapshots stay intact.

Example:
    >>> import networkx as nx
    >>> from seir_network.population import InfectionStatus, Network
    >>>
    >>> network = Network.from_networkx(nx.path_graph(5), infectious=[0])
    >>> network.status_counts()[InfectionStatus.INFECTIOUS]
    1
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Tuple

import networkx as nx


DEFAULT_EDGE_STRENGTH = 0.5


class InfectionStatus(str, Enum):
    """Disease compartments of the SEIR model.

    Attributes:
        SUSCEPTIBLE: Never infected, can be exposed by infectious contacts
        EXPOSED: Infected but not yet able to transmit
        INFECTIOUS: Actively spreading to susceptible contacts
        RECOVERED: Removed, immune for the rest of the run
    """
    SUSCEPTIBLE = "SUSCEPTIBLE"
    EXPOSED = "EXPOSED"
    INFECTIOUS = "INFECTIOUS"
    RECOVERED = "RECOVERED"


class DataConsistencyError(LookupError):
    """Raised when adjacency sets and the edge list disagree."""


@dataclass(frozen=True)
class Individual:
    """One member of the population.

    Attributes:
        id: Unique index in [0, population_size).
        status: Current disease compartment.
        connections: Ids of contacts. Undirected, no self-loops.
        days_exposed: Days spent in the EXPOSED state so far.
        days_infected: Days spent in the INFECTIOUS state so far.
        community: Community label, fixed at creation.
        age: Age in years. Informational only; 0 means unknown, as for
            networks imported without an ``age`` node attribute.
    """
    id: int
    status: InfectionStatus = InfectionStatus.SUSCEPTIBLE
    connections: FrozenSet[int] = field(default_factory=frozenset)
    days_exposed: int = 0
    days_infected: int = 0
    community: int = 0
    age: int = 0


@dataclass(frozen=True)
class Edge:
    """Undirected contact between two individuals."""
    source: int
    target: int
    strength: float


@dataclass(frozen=True)
class SimulationStats:
    """Population counts for a single simulated day.

    Attributes:
        day: Day number, 0 for the initial state.
        susceptible: Individuals never infected.
        exposed: Individuals in the incubation period.
        infectious: Individuals currently spreading.
        recovered: Individuals removed from the epidemic.
        new_cases: Susceptible -> exposed transitions during this day. For
            day 0 this is the number of individuals seeded infectious.
        total_cases: Everyone who has ever left the susceptible pool.
    """
    day: int
    susceptible: int
    exposed: int
    infectious: int
    recovered: int
    new_cases: int
    total_cases: int

    @property
    def population_size(self) -> int:
        return self.susceptible + self.exposed + self.infectious + self.recovered

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


def _edge_key(a: int, b: int) -> Tuple[int, int]:
    return (a, b) if a <= b else (b, a)


class Network:
    """
    One snapshot of the population together with its contact graph.

    The edge list and adjacency sets are fixed once the network is built.
    Only the individuals' disease state changes between snapshots, via
    ``with_individuals``.

    Attributes:
        individuals: Tuple of Individual records, indexed by id.
        edges: Tuple of Edge records, one per undirected contact.
    """

    def __init__(
        self,
        individuals: Sequence[Individual],
        edges: Sequence[Edge],
        _strengths: Optional[Dict[Tuple[int, int], float]] = None,
    ) -> None:
        self.individuals: Tuple[Individual, ...] = tuple(individuals)
        self.edges: Tuple[Edge, ...] = tuple(edges)
        if _strengths is None:
            _strengths = {
                _edge_key(edge.source, edge.target): edge.strength
                for edge in self.edges
            }
        self._strengths = _strengths

    @property
    def population_size(self) -> int:
        return len(self.individuals)

    def __len__(self) -> int:
        return len(self.individuals)

    def __iter__(self) -> Iterator[Individual]:
        return iter(self.individuals)

    def __getitem__(self, individual_id: int) -> Individual:
        return self.individuals[individual_id]

    def __repr__(self) -> str:
        return (
            f"Network(population_size={self.population_size}, "
            f"edges={len(self.edges)})"
        )

    def edge_strength(self, a: int, b: int) -> float:
        """Return the strength of the edge between ``a`` and ``b``.

        Raises:
            DataConsistencyError: If no edge record links the pair.
        """
        try:
            return self._strengths[_edge_key(a, b)]
        except KeyError:
            raise DataConsistencyError(
                f"No edge record between individuals {a} and {b}"
            ) from None

    def with_individuals(self, individuals: Sequence[Individual]) -> "Network":
        """Return a new snapshot with updated individuals and the same topology."""
        if len(individuals) != len(self.individuals):
            raise ValueError(
                f"Expected {len(self.individuals)} individuals, got {len(individuals)}"
            )
        return Network(individuals, self.edges, _strengths=self._strengths)

    def status_counts(self) -> Dict[InfectionStatus, int]:
        """Count individuals per disease status."""
        counts = {status: 0 for status in InfectionStatus}
        for person in self.individuals:
            counts[person.status] += 1
        return counts

    def check_consistency(self) -> None:
        """Verify the adjacency sets agree with the edge list.

        Raises:
            DataConsistencyError: On out-of-range ids, self-loops, duplicate
                edges, strengths outside (0, 1], or any mismatch between an
                individual's connections and the edge list.
        """
        n = self.population_size
        for index, person in enumerate(self.individuals):
            if person.id != index:
                raise DataConsistencyError(
                    f"Individual at position {index} has id {person.id}"
                )

        seen = set()
        adjacency: Dict[int, set] = {i: set() for i in range(n)}
        for edge in self.edges:
            a, b = edge.source, edge.target
            if not (0 <= a < n and 0 <= b < n):
                raise DataConsistencyError(f"Edge ({a}, {b}) references unknown id")
            if a == b:
                raise DataConsistencyError(f"Self-loop on individual {a}")
            key = _edge_key(a, b)
            if key in seen:
                raise DataConsistencyError(f"Duplicate edge ({a}, {b})")
            if not 0.0 < edge.strength <= 1.0:
                raise DataConsistencyError(
                    f"Edge ({a}, {b}) has strength {edge.strength} outside (0, 1]"
                )
            seen.add(key)
            adjacency[a].add(b)
            adjacency[b].add(a)

        for person in self.individuals:
            if set(person.connections) != adjacency[person.id]:
                raise DataConsistencyError(
                    f"Connections of individual {person.id} do not match the edge list"
                )

    def to_networkx(self) -> nx.Graph:
        """Convert to a NetworkX graph.

        Nodes carry ``status``, ``community`` and ``age`` attributes, edges
        carry ``strength``.
        """
        graph = nx.Graph()
        for person in self.individuals:
            graph.add_node(
                person.id,
                status=person.status.value,
                community=person.community,
                age=person.age,
            )
        for edge in self.edges:
            graph.add_edge(edge.source, edge.target, strength=edge.strength)
        return graph

    @classmethod
    def from_networkx(
        cls,
        graph: nx.Graph,
        infectious: Iterable[int] = (),
        default_strength: float = DEFAULT_EDGE_STRENGTH,
    ) -> "Network":
        """Build a network from an existing NetworkX graph.

        Nodes are relabelled to 0..n-1 in their iteration order and
        self-loops are dropped. Edge ``strength`` attributes are kept when
        present, otherwise ``default_strength`` is used. Node ``community``
        and ``age`` attributes are kept when present.

        Args:
            graph: Undirected NetworkX graph with at least one node.
            infectious: Ids (after relabelling) to mark INFECTIOUS.
            default_strength: Strength for edges without a strength attribute.

        Raises:
            ValueError: If the graph contains no nodes, an infectious id is
                not in the graph, or any edge strength (including
                ``default_strength``) lies outside (0, 1].
        """
        if graph.number_of_nodes() == 0:
            raise ValueError("Graph must contain at least one node.")
        if not 0.0 < default_strength <= 1.0:
            raise ValueError(
                f"default_strength must be in (0, 1], got {default_strength}"
            )

        graph = nx.convert_node_labels_to_integers(graph, first_label=0)
        infectious = set(int(node) for node in infectious)
        unknown = [node for node in infectious if not 0 <= node < graph.number_of_nodes()]
        if unknown:
            raise ValueError(f"Infectious ids not in graph: {sorted(unknown)}")

        edges: List[Edge] = []
        neighbours: Dict[int, set] = {node: set() for node in graph.nodes()}
        for u, v, data in graph.edges(data=True):
            if u == v:
                continue
            a, b = _edge_key(u, v)
            strength = float(data.get("strength", default_strength))
            if not 0.0 < strength <= 1.0:
                raise ValueError(
                    f"Edge ({a}, {b}) has strength {strength} outside (0, 1]"
                )
            edges.append(Edge(a, b, strength))
            neighbours[a].add(b)
            neighbours[b].add(a)

        individuals = []
        for node in sorted(graph.nodes()):
            data = graph.nodes[node]
            status = (
                InfectionStatus.INFECTIOUS
                if node in infectious
                else InfectionStatus.SUSCEPTIBLE
            )
            individuals.append(
                Individual(
                    id=node,
                    status=status,
                    connections=frozenset(neighbours[node]),
                    community=int(data.get("community", 0)),
                    age=int(data.get("age", 0)),
                )
            )
        return cls(individuals, edges)

