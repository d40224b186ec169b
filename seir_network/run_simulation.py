"""
SEIR Network Simulation Runner.

Generates a contact network, runs the epidemic until it burns out (or a day
limit is reached) and prints a per-day table.

Usage:
    $ python -m seir_network.run_simulation \\
        --population-size 500 \\
        --transmission-rate 0.08 \\
        --seed 42 \\
        --output results/run.json

Output:
    - Network statistics and per-day SEIR counts on stdout
    - run.json (optional): parameters, network summary and stats history
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from seir_network.network_stats import print_network_statistics, summarize_network
from seir_network.params import ConfigurationError, SimulationParams
from seir_network.population import SimulationStats
from seir_network.simulation import EpidemicSimulation


def build_parser() -> argparse.ArgumentParser:
    defaults = SimulationParams()
    parser = argparse.ArgumentParser(
        description="Simulate SEIR disease spread over a synthetic social network"
    )
    parser.add_argument("--population-size", type=int, default=defaults.population_size,
                        help="Number of individuals")
    parser.add_argument("--initial-infections", type=int, default=defaults.initial_infections,
                        help="Individuals infectious at day 0")
    parser.add_argument("--transmission-rate", type=float, default=defaults.transmission_rate,
                        help="Transmission probability per infectious contact per day")
    parser.add_argument("--exposed-days", type=int, default=defaults.exposed_days,
                        help="Days from exposure to becoming infectious")
    parser.add_argument("--recovery-days", type=int, default=defaults.recovery_days,
                        help="Days from becoming infectious to recovery")
    parser.add_argument("--immunity-days", type=int, default=defaults.immunity_days,
                        help="Immunity duration after recovery (recorded only)")
    parser.add_argument("--connections-per-person", type=int,
                        default=defaults.connections_per_person,
                        help="Contacts each new individual attaches to")
    parser.add_argument("--community-count", type=int, default=defaults.community_count,
                        help="Number of communities")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for reproducibility")
    parser.add_argument("--max-days", type=int, default=365,
                        help="Maximum number of days to simulate")
    parser.add_argument("--output", type=str, default=None,
                        help="Optional JSON file for the run results")
    parser.add_argument("--verbose", action="store_true",
                        help="Enable debug logging")
    return parser


def params_from_args(args: argparse.Namespace) -> SimulationParams:
    return SimulationParams(
        population_size=args.population_size,
        initial_infections=args.initial_infections,
        transmission_rate=args.transmission_rate,
        exposed_days=args.exposed_days,
        recovery_days=args.recovery_days,
        immunity_days=args.immunity_days,
        connections_per_person=args.connections_per_person,
        community_count=args.community_count,
    )


def print_history(history: List[SimulationStats]) -> None:
    print(f"\n{'day':>5} {'S':>6} {'E':>6} {'I':>6} {'R':>6} {'new':>5} {'total':>6}")
    for stats in history:
        print(
            f"{stats.day:5d} "
            f"{stats.susceptible:6d} "
            f"{stats.exposed:6d} "
            f"{stats.infectious:6d} "
            f"{stats.recovered:6d} "
            f"{stats.new_cases:5d} "
            f"{stats.total_cases:6d}"
        )


def save_results(
    sim: EpidemicSimulation,
    output_path: str | Path,
    seed: Optional[int] = None,
) -> None:
    """Save parameters, network summary and stats history to JSON.

    Args:
        sim: Finished simulation
        output_path: Path for output JSON
        seed: Seed the run was started with
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    results = {
        "params": sim.params.as_dict(),
        "seed": seed,
        "network": summarize_network(sim.network),
        "finished": sim.is_finished,
        "history": [stats.as_dict() for stats in sim.history],
    }

    with open(output_path, "w") as f:
        json.dump(results, f, indent=2)

    print(f"\n✓ Results saved to {output_path}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        sim = EpidemicSimulation(params_from_args(args), seed=args.seed)
    except ConfigurationError as exc:
        parser.error(str(exc))

    print("=" * 60)
    print("SEIR network simulation")
    print("=" * 60)
    print_network_statistics(sim.network, "Contact network")

    history = sim.run(max_days=args.max_days)
    print_history(history)

    peak = max(history, key=lambda s: s.infectious)
    print("\n" + "=" * 60)
    print(
        f"Days simulated: {sim.current_day} "
        f"({'burned out' if sim.is_finished else 'still active'})"
    )
    print(f"Peak infectious: {peak.infectious} on day {peak.day}")
    print(
        f"Total cases: {sim.latest_stats.total_cases} / "
        f"{sim.network.population_size}"
    )
    print("=" * 60)

    if args.output:
        save_results(sim, args.output, seed=args.seed)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
