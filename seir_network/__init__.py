"""
SEIR Network: disease spread over synthetic social networks.

Builds a scale-free contact network with community structure and advances
an SEIR (Susceptible-Exposed-Infectious-Recovered) model over it one day at
a time, producing per-day population statistics.

Core Modules:
    - network_generator: Preferential-attachment network generation
    - disease_model: Per-day SEIR state transitions and statistics
    - simulation: Run driver with the burn-out stopping policy

Example:
    >>> from seir_network import EpidemicSimulation, SimulationParams
    >>> sim = EpidemicSimulation(SimulationParams(), seed=0)
    >>> history = sim.run(max_days=200)
"""

from seir_network.params import ConfigurationError, SimulationParams
from seir_network.population import (
    DataConsistencyError,
    Edge,
    Individual,
    InfectionStatus,
    Network,
    SimulationStats,
)
from seir_network.network_generator import (
    calculate_link_strength,
    generate_network,
    weighted_sample_without_replacement,
)
from seir_network.disease_model import (
    calculate_statistics,
    initial_statistics,
    simulate_day,
)
from seir_network.simulation import EpidemicSimulation
from seir_network.network_stats import print_network_statistics, summarize_network

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "SimulationParams",
    "ConfigurationError",
    # Data model
    "InfectionStatus",
    "Individual",
    "Edge",
    "Network",
    "SimulationStats",
    "DataConsistencyError",
    # Generation
    "generate_network",
    "weighted_sample_without_replacement",
    "calculate_link_strength",
    # Day stepping
    "simulate_day",
    "calculate_statistics",
    "initial_statistics",
    # Driver
    "EpidemicSimulation",
    # Analysis
    "summarize_network",
    "print_network_statistics",
]
