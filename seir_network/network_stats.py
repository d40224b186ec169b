"""
Structural statistics for contact networks.

Summarizes a generated network through NetworkX: size, density, degree
spread, clustering, diameter, and how strongly the community structure
shows up in the edges.

Usage:
    >>> from seir_network.network_stats import print_network_statistics
    >>> print_network_statistics(network, "BA-200")
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Optional

import networkx as nx
import numpy as np

from seir_network.population import Network


# All-pairs BFS gets slow on large networks
MAX_DIAMETER_NODES = 1000


def summarize_network(
    network: Network,
    max_diameter_nodes: Optional[int] = MAX_DIAMETER_NODES,
) -> Dict[str, Any]:
    """Compute structural properties of the network.

    Args:
        network: Network to analyze
        max_diameter_nodes: Skip the diameter above this many nodes.
            None always computes it.

    Returns:
        Dict with nodes, edges, density, degree stats, clustering,
        diameter (-1 if disconnected, None if skipped for size),
        intra-community edge fraction, mean edge strength and community sizes
    """
    graph = network.to_networkx()
    n = graph.number_of_nodes()
    m = graph.number_of_edges()

    degrees = np.array([d for _, d in graph.degree()], dtype=np.float64)

    diameter: Optional[int]
    if max_diameter_nodes is not None and n > max_diameter_nodes:
        diameter = None
    elif n > 1 and nx.is_connected(graph):
        diameter = nx.diameter(graph)
    else:
        diameter = -1

    communities = {person.id: person.community for person in network}
    intra = sum(
        1 for edge in network.edges
        if communities[edge.source] == communities[edge.target]
    )
    strengths = [edge.strength for edge in network.edges]

    return {
        "nodes": n,
        "edges": m,
        "density": float(nx.density(graph)),
        "avg_degree": float(degrees.mean()) if n else 0.0,
        "max_degree": int(degrees.max()) if n else 0,
        "min_degree": int(degrees.min()) if n else 0,
        "avg_clustering": float(nx.average_clustering(graph)) if n else 0.0,
        "diameter": diameter,
        "intra_community_fraction": intra / m if m else 0.0,
        "mean_strength": float(np.mean(strengths)) if strengths else 0.0,
        "community_sizes": dict(sorted(Counter(communities.values()).items())),
    }


def print_network_statistics(network: Network, name: str = "Network") -> None:
    """Print the summary computed by ``summarize_network``."""
    summary = summarize_network(network)

    print(f"\n{name} Statistics:")
    print(f"  Nodes: {summary['nodes']}")
    print(f"  Edges: {summary['edges']}")
    print(f"  Density: {summary['density']:.4f}")
    print(f"  Avg degree: {summary['avg_degree']:.2f}")
    print(f"  Max degree: {summary['max_degree']}")
    print(f"  Avg clustering: {summary['avg_clustering']:.4f}")
    if summary["diameter"] is not None and summary["diameter"] > 0:
        print(f"  Diameter: {summary['diameter']}")
    print(f"  Intra-community edges: {summary['intra_community_fraction']:.1%}")
    print(f"  Mean edge strength: {summary['mean_strength']:.3f}")
    print(f"  Communities: {summary['community_sizes']}")
