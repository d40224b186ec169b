"""
Synthetic Contact Network Generator.

Builds the population and its contact graph using Barabási-Albert
preferential attachment with a community bias: new individuals attach to
existing ones with probability proportional to degree, three times more
likely when both share a community. Contacts within a community are also
stronger, which raises the transmission probability along them.

Example:
    >>> import numpy as np
    >>> from seir_network.params import SimulationParams
    >>> from seir_network.network_generator import generate_network
    >>>
    >>> params = SimulationParams(population_size=100, connections_per_person=3)
    >>> network = generate_network(params, rng=np.random.default_rng(0))
    >>> network.population_size
    100

References:
    - Barabási, A. L., & Albert, R. (1999). Emergence of scaling in random networks.
"""

from __future__ import annotations

import logging
from typing import List, Mapping, Optional, Set

import numpy as np

from seir_network.params import SimulationParams
from seir_network.population import Edge, Individual, InfectionStatus, Network

logger = logging.getLogger(__name__)

# Multiplicative attachment weight for candidates in the same community.
COMMUNITY_BOOST = 3.0
BASE_LINK_STRENGTH = 0.5
SAME_COMMUNITY_LINK_BONUS = 0.3
LINK_STRENGTH_JITTER = 0.2
MIN_AGE = 20
MAX_AGE = 80  # exclusive


def generate_network(
    params: SimulationParams,
    rng: Optional[np.random.Generator] = None,
) -> Network:
    """Generate a population and its contact network.

    Args:
        params: Simulation parameters. Validated before anything is built.
        rng: Random generator. A fresh unseeded generator is used if None.

    Returns:
        Network with ``initial_infections`` individuals INFECTIOUS and the
        rest SUSCEPTIBLE.

    Raises:
        ConfigurationError: If ``params`` is invalid.
    """
    params.validate()
    if rng is None:
        rng = np.random.default_rng()

    n = params.population_size
    communities = rng.integers(0, params.community_count, size=n)
    ages = rng.integers(MIN_AGE, MAX_AGE, size=n)

    statuses = [InfectionStatus.SUSCEPTIBLE] * n
    if params.initial_infections > 0:
        seeded = rng.choice(n, size=params.initial_infections, replace=False)
        for node in seeded:
            statuses[int(node)] = InfectionStatus.INFECTIOUS

    connections: List[Set[int]] = [set() for _ in range(n)]
    degrees = np.zeros(n, dtype=np.float64)
    edges: List[Edge] = []

    def connect(a: int, b: int) -> None:
        same_community = communities[a] == communities[b]
        connections[a].add(b)
        connections[b].add(a)
        degrees[a] += 1
        degrees[b] += 1
        edges.append(Edge(a, b, calculate_link_strength(same_community, rng)))

    # Complete seed graph so early nodes have degree to attract new links
    start_size = min(params.connections_per_person + 1, n)
    for i in range(start_size):
        for j in range(i + 1, start_size):
            connect(i, j)

    for i in range(start_size, n):
        candidate_degrees = degrees[:i]
        total_degree = candidate_degrees.sum()
        shares = candidate_degrees / total_degree if total_degree > 0 else candidate_degrees
        boost = np.where(communities[:i] == communities[i], COMMUNITY_BOOST, 1.0)
        picks = _sample_indices(shares * boost, params.connections_per_person, rng)
        for target in picks:
            connect(i, int(target))

    individuals = [
        Individual(
            id=i,
            status=statuses[i],
            connections=frozenset(connections[i]),
            community=int(communities[i]),
            age=int(ages[i]),
        )
        for i in range(n)
    ]

    logger.debug(
        "Generated network: %d individuals, %d edges, %d initially infectious",
        n,
        len(edges),
        params.initial_infections,
    )
    return Network(individuals, edges)


def weighted_sample_without_replacement(
    weights: Mapping[int, float],
    count: int,
    rng: np.random.Generator,
) -> List[int]:
    """Draw distinct candidates with probability proportional to weight.

    Draws are sequential: after each pick the remaining weights are
    renormalised. Candidates with zero weight are only used to fill up the
    sample once every positive-weight candidate has been taken.

    Args:
        weights: Mapping of candidate to non-negative, unnormalised weight.
        count: Number of candidates wanted.
        rng: Random generator.

    Returns:
        ``min(count, len(weights))`` distinct candidates, in draw order.

    Raises:
        ValueError: If any weight is negative.
    """
    candidates = list(weights.keys())
    values = np.array([float(weights[c]) for c in candidates], dtype=np.float64)
    picks = _sample_indices(values, count, rng)
    return [candidates[int(k)] for k in picks]


def _sample_indices(values: np.ndarray, count: int, rng: np.random.Generator) -> np.ndarray:
    """Index-based core of ``weighted_sample_without_replacement``."""
    if np.any(values < 0):
        raise ValueError("Weights must be non-negative.")
    size = values.size
    if count <= 0 or size == 0:
        return np.empty(0, dtype=np.int64)
    if count >= size:
        return np.arange(size)

    positive = np.flatnonzero(values > 0)
    if count >= positive.size:
        zero = np.flatnonzero(values == 0)
        fill = rng.choice(zero, size=count - positive.size, replace=False)
        return np.concatenate([positive, fill])

    probs = values / values.sum()
    return rng.choice(size, size=count, replace=False, p=probs)


def calculate_link_strength(same_community: bool, rng: np.random.Generator) -> float:
    """Strength of a new contact: stronger within a community, capped at 1."""
    strength = BASE_LINK_STRENGTH
    if same_community:
        strength += SAME_COMMUNITY_LINK_BONUS
    strength += rng.uniform(0.0, LINK_STRENGTH_JITTER)
    return float(min(strength, 1.0))
