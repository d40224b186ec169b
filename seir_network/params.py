"""
Simulation parameters for the SEIR network model.

A single dataclass holds everything needed to generate a contact network
and advance the epidemic over it. Parameters are validated once, before a
network is built, so that a bad configuration never produces a partially
constructed network.

Example:
    >>> from seir_network.params import SimulationParams
    >>>
    >>> params = SimulationParams(population_size=500, transmission_rate=0.08)
    >>> params.validate()
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from numbers import Integral, Real
from typing import Any, Dict, Optional


class ConfigurationError(ValueError):
    """Raised when simulation parameters are out of their valid range."""


@dataclass
class SimulationParams:
    """Configuration parameters for network generation and day stepping.

    Attributes:
        population_size: Number of individuals in the network. Must be >= 1.
        initial_infections: Individuals seeded as infectious at day 0,
            chosen uniformly at random. Must be in [0, population_size].
        transmission_rate: Probability of transmission per infectious contact
            per day, before scaling by the contact's edge strength.
            Must be in [0, 1].
        exposed_days: Days spent EXPOSED before becoming INFECTIOUS.
        recovery_days: Days spent INFECTIOUS before RECOVERED.
        immunity_days: Duration of immunity after recovery. Accepted and
            validated but not consumed by the transition rules; None means
            lifelong immunity.
        connections_per_person: Target number of contacts each newly added
            individual attaches to during preferential attachment.
        community_count: Number of communities individuals are split into.
    """
    population_size: int = 200
    initial_infections: int = 5
    transmission_rate: float = 0.05
    exposed_days: int = 3
    recovery_days: int = 14
    immunity_days: Optional[int] = None
    connections_per_person: int = 5
    community_count: int = 5

    def validate(self) -> None:
        """Check every field against its valid range.

        Raises:
            ConfigurationError: If any parameter is invalid. The message
                names the offending field.
        """
        for name in (
            "population_size",
            "initial_infections",
            "exposed_days",
            "recovery_days",
            "connections_per_person",
            "community_count",
        ):
            _require_int(name, getattr(self, name))

        if self.population_size < 1:
            raise ConfigurationError(
                f"population_size must be at least 1, got {self.population_size}"
            )
        if not 0 <= self.initial_infections <= self.population_size:
            raise ConfigurationError(
                f"initial_infections must be in [0, {self.population_size}], "
                f"got {self.initial_infections}"
            )

        if isinstance(self.transmission_rate, bool) or not isinstance(
            self.transmission_rate, Real
        ):
            raise ConfigurationError(
                f"transmission_rate must be a number, got {self.transmission_rate!r}"
            )
        if not 0.0 <= float(self.transmission_rate) <= 1.0:
            raise ConfigurationError(
                f"transmission_rate must be in [0, 1], got {self.transmission_rate}"
            )

        if self.exposed_days < 1:
            raise ConfigurationError(
                f"exposed_days must be positive, got {self.exposed_days}"
            )
        if self.recovery_days < 1:
            raise ConfigurationError(
                f"recovery_days must be positive, got {self.recovery_days}"
            )
        if self.immunity_days is not None:
            _require_int("immunity_days", self.immunity_days)
            if self.immunity_days < 1:
                raise ConfigurationError(
                    f"immunity_days must be positive or None, got {self.immunity_days}"
                )
        if self.connections_per_person < 1:
            raise ConfigurationError(
                f"connections_per_person must be at least 1, "
                f"got {self.connections_per_person}"
            )
        if self.community_count < 1:
            raise ConfigurationError(
                f"community_count must be at least 1, got {self.community_count}"
            )

    def as_dict(self) -> Dict[str, Any]:
        """Return the parameters as a plain dictionary."""
        return asdict(self)


def _require_int(name: str, value: Any) -> None:
    # bool is an Integral subclass but never a meaningful count
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
