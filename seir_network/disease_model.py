"""
SEIR Day-Stepping Model.

Advances every individual's disease state by one day over a fixed contact
network. Each day reads only the previous day's snapshot and writes a new
one, so the order in which individuals are processed never matters:

- Susceptible individuals draw one transmission trial per infectious
  contact, with probability ``transmission_rate * edge_strength``
- Exposed individuals become infectious after ``exposed_days``
- Infectious individuals recover after ``recovery_days``
- Recovered individuals stay recovered

Example:
    >>> import numpy as np
    >>> from seir_network.params import SimulationParams
    >>> from seir_network.network_generator import generate_network
    >>> from seir_network.disease_model import simulate_day
    >>>
    >>> rng = np.random.default_rng(0)
    >>> params = SimulationParams()
    >>> network = generate_network(params, rng)
    >>> network, stats = simulate_day(network, params, 1, rng)
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Iterable, List, Optional, Tuple

import numpy as np

from seir_network.params import SimulationParams
from seir_network.population import (
    DEFAULT_EDGE_STRENGTH,
    DataConsistencyError,
    Individual,
    InfectionStatus,
    Network,
    SimulationStats,
)

logger = logging.getLogger(__name__)


def simulate_day(
    network: Network,
    params: SimulationParams,
    day_number: int,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[Network, SimulationStats]:
    """Advance the epidemic by one day.

    The input network is left untouched; the returned network shares its
    edges and adjacency with the input and differs only in the individuals'
    status and day counters.

    Args:
        network: Snapshot of the previous day.
        params: Simulation parameters (transmission rate and durations).
        day_number: Day being simulated, recorded in the stats.
        rng: Random generator for transmission trials.

    Returns:
        Tuple of (updated_network, stats).
    """
    if rng is None:
        rng = np.random.default_rng()

    updated: List[Individual] = []
    new_cases = 0

    for person in network.individuals:
        if person.status == InfectionStatus.SUSCEPTIBLE:
            if _is_exposed_today(person, network, params.transmission_rate, rng):
                person = dataclasses.replace(
                    person, status=InfectionStatus.EXPOSED, days_exposed=0
                )
                new_cases += 1

        elif person.status == InfectionStatus.EXPOSED:
            days_exposed = person.days_exposed + 1
            if days_exposed >= params.exposed_days:
                person = dataclasses.replace(
                    person,
                    status=InfectionStatus.INFECTIOUS,
                    days_exposed=days_exposed,
                    days_infected=0,
                )
            else:
                person = dataclasses.replace(person, days_exposed=days_exposed)

        elif person.status == InfectionStatus.INFECTIOUS:
            days_infected = person.days_infected + 1
            if days_infected >= params.recovery_days:
                person = dataclasses.replace(
                    person,
                    status=InfectionStatus.RECOVERED,
                    days_infected=days_infected,
                )
            else:
                person = dataclasses.replace(person, days_infected=days_infected)

        # RECOVERED: no waning immunity, immunity_days is not consumed here

        updated.append(person)

    stats = calculate_statistics(updated, day_number, new_cases)
    return network.with_individuals(updated), stats


def _is_exposed_today(
    person: Individual,
    network: Network,
    transmission_rate: float,
    rng: np.random.Generator,
) -> bool:
    """Run one transmission trial per infectious contact, stopping at the first success."""
    for contact_id in sorted(person.connections):
        if network[contact_id].status != InfectionStatus.INFECTIOUS:
            continue
        try:
            strength = network.edge_strength(person.id, contact_id)
        except DataConsistencyError as exc:
            logger.warning("%s; using default strength %.2f", exc, DEFAULT_EDGE_STRENGTH)
            strength = DEFAULT_EDGE_STRENGTH
        if rng.random() < transmission_rate * strength:
            return True
    return False


def calculate_statistics(
    individuals: Iterable[Individual],
    day: int,
    new_cases: int,
) -> SimulationStats:
    """Count individuals per status and build the stats record for ``day``."""
    counts = {status: 0 for status in InfectionStatus}
    for person in individuals:
        counts[person.status] += 1
    population_size = sum(counts.values())
    susceptible = counts[InfectionStatus.SUSCEPTIBLE]
    return SimulationStats(
        day=day,
        susceptible=susceptible,
        exposed=counts[InfectionStatus.EXPOSED],
        infectious=counts[InfectionStatus.INFECTIOUS],
        recovered=counts[InfectionStatus.RECOVERED],
        new_cases=new_cases,
        total_cases=population_size - susceptible,
    )


def initial_statistics(network: Network) -> SimulationStats:
    """Day-0 stats. New cases are the individuals seeded as infectious."""
    seeded = network.status_counts()[InfectionStatus.INFECTIOUS]
    return calculate_statistics(network.individuals, 0, seeded)
