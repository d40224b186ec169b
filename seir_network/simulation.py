"""
Epidemic Simulation Driver.

Owns one simulation run: generates (or restores) the network, advances it
day by day, and accumulates the per-day statistics. Stopping is a policy of
the driver, not of the day-stepping model: ``is_finished`` becomes True once
nobody is exposed or infectious.

Example:
    >>> from seir_network.params import SimulationParams
    >>> from seir_network.simulation import EpidemicSimulation
    >>>
    >>> sim = EpidemicSimulation(SimulationParams(population_size=300), seed=7)
    >>> history = sim.run(max_days=365)
    >>> history[-1].total_cases
"""

from __future__ import annotations

import logging
from typing import List, Optional

import numpy as np

from seir_network.disease_model import initial_statistics, simulate_day
from seir_network.network_generator import generate_network
from seir_network.params import ConfigurationError, SimulationParams
from seir_network.population import Network, SimulationStats

logger = logging.getLogger(__name__)


class EpidemicSimulation:
    """
    A single SEIR run over a contact network.

    Attributes:
        params: Simulation parameters.
        network: Current network snapshot.
        current_day: Number of days simulated since the last reset.
        history: One SimulationStats per day, starting with day 0.
    """

    def __init__(
        self,
        params: SimulationParams,
        seed: Optional[int] = None,
        network: Optional[Network] = None,
    ) -> None:
        """Initialize and reset the simulation.

        Args:
            params: Simulation parameters, validated immediately.
            seed: Random seed for reproducibility. None for random runs.
            network: Optional pre-built network. When given, every reset
                restarts from this exact snapshot instead of generating a
                new one.

        Raises:
            ConfigurationError: If ``params`` is invalid, or ``network`` does
                not have ``params.population_size`` individuals.
            DataConsistencyError: If ``network`` adjacency and edges disagree.
        """
        params.validate()
        if network is not None:
            if network.population_size != params.population_size:
                raise ConfigurationError(
                    f"population_size is {params.population_size} but the network "
                    f"has {network.population_size} individuals"
                )
            network.check_consistency()
        self.params = params
        self.rng = np.random.default_rng(seed)

        self._initial_network = network
        self.network: Network
        self.current_day: int = 0
        self.history: List[SimulationStats] = []

        self.reset()

    def reset(self) -> SimulationStats:
        """Start a new run and return the day-0 statistics."""
        if self._initial_network is not None:
            self.network = self._initial_network
        else:
            self.network = generate_network(self.params, self.rng)

        self.current_day = 0
        self.history = [initial_statistics(self.network)]
        logger.info(
            "Simulation reset: %d individuals, %d edges, %d infectious",
            self.network.population_size,
            len(self.network.edges),
            self.history[0].infectious,
        )
        return self.history[0]

    def step(self) -> SimulationStats:
        """Simulate one more day and return its statistics."""
        self.network, stats = simulate_day(
            self.network, self.params, self.current_day + 1, self.rng
        )
        self.current_day += 1
        self.history.append(stats)
        return stats

    @property
    def latest_stats(self) -> SimulationStats:
        return self.history[-1]

    @property
    def is_finished(self) -> bool:
        """True once the epidemic has burned out or never took hold."""
        latest = self.latest_stats
        return latest.infectious == 0 and latest.exposed == 0

    def run(self, max_days: int = 365) -> List[SimulationStats]:
        """Step until the epidemic is over or ``max_days`` more days have run.

        Returns:
            The full statistics history, day 0 included.
        """
        for _ in range(max_days):
            if self.is_finished:
                break
            self.step()

        if not self.is_finished:
            logger.info("Stopped after %d days with the epidemic still active", self.current_day)
        return self.history
