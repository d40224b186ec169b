"""
Unit tests for synthetic network generation.

Run with: pytest tests/ -v
"""

import pytest
import networkx as nx
import numpy as np

from seir_network.network_generator import (
    calculate_link_strength,
    generate_network,
    weighted_sample_without_replacement,
)
from seir_network.network_stats import summarize_network
from seir_network.params import ConfigurationError, SimulationParams
from seir_network.population import InfectionStatus


class TestGenerationValidity:
    """Tests for structural guarantees of generated networks."""

    def test_no_self_loops_or_duplicates(self):
        """Generated network should pass the consistency check."""
        params = SimulationParams(population_size=50, connections_per_person=5)
        network = generate_network(params, np.random.default_rng(0))

        network.check_consistency()

        pairs = [tuple(sorted((e.source, e.target))) for e in network.edges]
        assert len(pairs) == len(set(pairs))
        assert all(a != b for a, b in pairs)

    def test_every_individual_connected(self):
        """Every individual should have at least one contact."""
        params = SimulationParams(population_size=50, connections_per_person=5)
        network = generate_network(params, np.random.default_rng(1))

        assert all(len(person.connections) >= 1 for person in network)

    def test_edge_count(self):
        """Seed clique plus connections_per_person edges per later individual."""
        params = SimulationParams(population_size=50, connections_per_person=5)
        network = generate_network(params, np.random.default_rng(2))

        # K6 seed graph, then 44 individuals with 5 new edges each
        assert len(network.edges) == 15 + 44 * 5

    def test_ids_match_positions(self):
        """Individual ids should run from 0 to population_size - 1."""
        params = SimulationParams(population_size=30, connections_per_person=2)
        network = generate_network(params, np.random.default_rng(3))

        assert [person.id for person in network] == list(range(30))

    def test_small_population_is_complete_graph(self):
        """A population no bigger than the seed graph is fully connected."""
        params = SimulationParams(
            population_size=4, initial_infections=1, connections_per_person=10
        )
        network = generate_network(params, np.random.default_rng(4))

        assert len(network.edges) == 6
        assert all(len(person.connections) == 3 for person in network)

    def test_single_individual(self):
        """A population of one has no edges."""
        params = SimulationParams(population_size=1, initial_infections=1)
        network = generate_network(params, np.random.default_rng(5))

        assert network.population_size == 1
        assert network.edges == ()
        assert network[0].connections == frozenset()

    def test_attributes_in_range(self):
        """Community and age should lie in their configured ranges."""
        params = SimulationParams(population_size=200, community_count=4)
        network = generate_network(params, np.random.default_rng(6))

        assert all(0 <= person.community < 4 for person in network)
        assert all(20 <= person.age < 80 for person in network)
        assert all(person.days_exposed == 0 for person in network)
        assert all(person.days_infected == 0 for person in network)

    def test_converts_to_networkx(self):
        """NetworkX view should carry the same nodes and edges."""
        params = SimulationParams(population_size=80, connections_per_person=3)
        network = generate_network(params, np.random.default_rng(7))

        graph = network.to_networkx()

        assert graph.number_of_nodes() == 80
        assert graph.number_of_edges() == len(network.edges)
        assert nx.is_connected(graph)


class TestInitialInfections:
    """Tests for seeding of initial infections."""

    def test_exact_number_infectious(self):
        """Exactly initial_infections individuals start infectious."""
        params = SimulationParams(population_size=100, initial_infections=7)
        network = generate_network(params, np.random.default_rng(10))

        counts = network.status_counts()
        assert counts[InfectionStatus.INFECTIOUS] == 7
        assert counts[InfectionStatus.SUSCEPTIBLE] == 93

    def test_zero_initial_infections(self):
        """No seeds gives a fully susceptible population."""
        params = SimulationParams(population_size=50, initial_infections=0)
        network = generate_network(params, np.random.default_rng(11))

        assert network.status_counts()[InfectionStatus.SUSCEPTIBLE] == 50

    def test_whole_population_infected(self):
        """Seeding everyone leaves nobody susceptible."""
        params = SimulationParams(population_size=100, initial_infections=100)
        network = generate_network(params, np.random.default_rng(12))

        assert network.status_counts()[InfectionStatus.INFECTIOUS] == 100

    def test_too_many_infections_raises(self):
        """More seeds than people is a configuration error."""
        params = SimulationParams(population_size=10, initial_infections=11)

        with pytest.raises(ConfigurationError, match="initial_infections"):
            generate_network(params, np.random.default_rng(13))


class TestReproducibility:
    """Tests for seeded generation."""

    def test_same_seed_same_network(self):
        """Identical seeds should produce identical networks."""
        params = SimulationParams(population_size=120)

        a = generate_network(params, np.random.default_rng(99))
        b = generate_network(params, np.random.default_rng(99))

        assert a.edges == b.edges
        assert a.individuals == b.individuals

    def test_different_seed_different_network(self):
        """Different seeds should (almost surely) differ."""
        params = SimulationParams(population_size=120)

        a = generate_network(params, np.random.default_rng(1))
        b = generate_network(params, np.random.default_rng(2))

        assert a.edges != b.edges


class TestLinkStrength:
    """Tests for edge strengths."""

    def test_strength_ranges_by_community(self):
        """Same-community edges are in [0.8, 1], cross-community in [0.5, 0.7]."""
        params = SimulationParams(population_size=300, community_count=3)
        network = generate_network(params, np.random.default_rng(20))

        for edge in network.edges:
            same = network[edge.source].community == network[edge.target].community
            if same:
                assert 0.8 <= edge.strength <= 1.0
            else:
                assert 0.5 <= edge.strength <= 0.7

    def test_single_community_all_strong(self):
        """With one community every edge is intra-community."""
        params = SimulationParams(population_size=100, community_count=1)
        network = generate_network(params, np.random.default_rng(21))

        assert all(edge.strength >= 0.8 for edge in network.edges)

    def test_calculate_link_strength_capped(self):
        """Strength never exceeds 1."""
        rng = np.random.default_rng(22)

        values = [calculate_link_strength(True, rng) for _ in range(200)]

        assert max(values) <= 1.0
        assert min(values) >= 0.8


class TestPreferentialAttachment:
    """Tests for scale-free and community structure."""

    def test_hubs_form(self):
        """Preferential attachment should produce high-degree hubs."""
        params = SimulationParams(population_size=500, connections_per_person=2)
        network = generate_network(params, np.random.default_rng(30))

        summary = summarize_network(network)

        assert summary["max_degree"] > 5 * params.connections_per_person
        assert summary["min_degree"] >= params.connections_per_person

    def test_community_homophily(self):
        """Intra-community edges should be over-represented."""
        params = SimulationParams(
            population_size=500, connections_per_person=3, community_count=5
        )
        network = generate_network(params, np.random.default_rng(31))

        summary = summarize_network(network)

        # 0.2 expected without the community boost
        assert summary["intra_community_fraction"] > 0.3


class TestWeightedSampling:
    """Tests for weighted sampling without replacement."""

    def test_distinct_candidates(self):
        """Sample should contain distinct candidates of the requested size."""
        rng = np.random.default_rng(40)
        weights = {i: float(i + 1) for i in range(20)}

        picks = weighted_sample_without_replacement(weights, 5, rng)

        assert len(picks) == 5
        assert len(set(picks)) == 5
        assert set(picks) <= set(weights)

    def test_small_pool_returns_all(self):
        """A pool smaller than the count is returned whole."""
        rng = np.random.default_rng(41)

        picks = weighted_sample_without_replacement({3: 1.0, 7: 2.0}, 5, rng)

        assert sorted(picks) == [3, 7]

    def test_zero_weight_never_preferred(self):
        """Zero-weight candidates are not drawn while positive ones remain."""
        rng = np.random.default_rng(42)
        weights = {0: 1.0, 1: 1.0, 2: 0.0, 3: 1.0}

        for _ in range(50):
            assert 2 not in weighted_sample_without_replacement(weights, 2, rng)
        assert sorted(weighted_sample_without_replacement(weights, 3, rng)) == [0, 1, 3]

    def test_zero_weights_fill_shortfall(self):
        """Zero-weight candidates fill the sample once positives run out."""
        rng = np.random.default_rng(43)
        weights = {0: 0.0, 1: 2.0, 2: 0.0, 3: 0.0}

        picks = weighted_sample_without_replacement(weights, 2, rng)

        assert 1 in picks
        assert len(set(picks)) == 2

    def test_heavy_weight_dominates(self):
        """A dominant weight should almost always be drawn first."""
        weights = {0: 1000.0, 1: 1e-6, 2: 1e-6}

        for seed in range(20):
            picks = weighted_sample_without_replacement(
                weights, 1, np.random.default_rng(seed)
            )
            assert picks == [0]

    def test_negative_weight_raises(self):
        """Negative weights are rejected."""
        with pytest.raises(ValueError, match="non-negative"):
            weighted_sample_without_replacement(
                {0: 1.0, 1: -1.0, 2: 1.0}, 1, np.random.default_rng(44)
            )

    def test_zero_count(self):
        """Asking for nothing returns nothing."""
        assert weighted_sample_without_replacement(
            {0: 1.0}, 0, np.random.default_rng(45)
        ) == []


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
