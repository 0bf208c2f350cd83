# -*- coding: utf-8 -*-
"""
Service start order.
"""

import heapq
from typing import Dict, List, Mapping

from sunspear.core.compose.manifest import ServiceSpec
from sunspear.core.compose.translators import parse_depends_on
from sunspear.utils.exceptions import DependencyCycleError, UnknownDependencyError


def resolve_service_order(services: Mapping[str, ServiceSpec]) -> List[str]:
    """
    Order services so every dependency comes before its dependents.

    Kahn's algorithm; services that become ready together are taken in
    lexical order, so the result is deterministic.

    Args:
        services: Service name -> spec

    Returns:
        All service names in start order

    Raises:
        UnknownDependencyError: A service depends on an undefined service
        DependencyCycleError: The dependency graph has a cycle
    """
    in_degree: Dict[str, int] = {name: 0 for name in services}
    dependents: Dict[str, List[str]] = {name: [] for name in services}

    for name in sorted(services):
        for dependency in parse_depends_on(services[name].depends_on):
            if dependency not in services:
                raise UnknownDependencyError(name, dependency)
            in_degree[name] += 1
            dependents[dependency].append(name)

    ready = [name for name, degree in in_degree.items() if degree == 0]
    heapq.heapify(ready)

    order: List[str] = []
    while ready:
        name = heapq.heappop(ready)
        order.append(name)
        for dependent in dependents[name]:
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                heapq.heappush(ready, dependent)

    if len(order) < len(services):
        raise DependencyCycleError(sorted(name for name, degree in in_degree.items() if degree > 0))

    return order
