"""Dense NumPy views of parsed MineLib records.

Solvers and modeling layers usually want coefficient arrays indexed by
block, period, destination and resource. These helpers turn the sparse
dictionaries of the data model into dense arrays over the declared
dimensions, filling absent entries with the same defaults the accessors use
(0.0 for profits and coefficients, -inf/+inf for bounds).

Example:
    >>> data = parse_cpit("newman1.cpit")
    >>> profits = discounted_profit_matrix(data)   # shape (num_blocks, num_periods)
    >>> usage = resource_coefficient_matrix(data)  # shape (num_blocks, num_resources)
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from .data import CPITData, PCPSPData, Precedences, ResourceLimits, UPITData


def _check_index(value: int, size: int, what: str) -> None:
    if not 0 <= value < size:
        raise ValueError(f"{what} {value} is outside the declared range [0, {size})")


def discount_factors(rate: float, num_periods: int) -> NDArray[np.float64]:
    """Return ``1 / (1 + rate) ** t`` for ``t = 0 .. num_periods - 1``."""
    return 1.0 / (1.0 + rate) ** np.arange(num_periods, dtype=np.float64)


def objective_vector(data: UPITData | CPITData) -> NDArray[np.float64]:
    """Block profits as a vector of length ``num_blocks``."""
    values = np.zeros(data.num_blocks, dtype=np.float64)
    for block_id, profit in data.objective.items():
        _check_index(block_id, data.num_blocks, "block id")
        values[block_id] = profit
    return values


def discounted_profit_matrix(data: CPITData) -> NDArray[np.float64]:
    """Discounted profit of every block in every period, shape (blocks, periods)."""
    profits = np.zeros(data.num_blocks, dtype=np.float64)
    for block_id, profit in data.objective.items():
        _check_index(block_id, data.num_blocks, "block id")
        profits[block_id] = profit
    # Divide rather than multiply by the factor so entries match get_discounted_profit().
    growth = (1.0 + data.discount_rate) ** np.arange(data.num_periods, dtype=np.float64)
    return profits[:, np.newaxis] / growth[np.newaxis, :]


def discounted_profit_tensor(data: PCPSPData) -> NDArray[np.float64]:
    """Discounted profit per block, destination and period.

    Shape is (num_blocks, num_destinations, num_periods).
    """
    profits = np.zeros((data.num_blocks, data.num_destinations), dtype=np.float64)
    for block_id, by_dest in data.objective.items():
        _check_index(block_id, data.num_blocks, "block id")
        for dest, profit in by_dest.items():
            _check_index(dest, data.num_destinations, "destination id")
            profits[block_id, dest] = profit
    growth = (1.0 + data.discount_rate) ** np.arange(data.num_periods, dtype=np.float64)
    return profits[:, :, np.newaxis] / growth[np.newaxis, np.newaxis, :]


def resource_coefficient_matrix(data: CPITData) -> NDArray[np.float64]:
    """Resource consumption, shape (num_blocks, num_resources)."""
    coefficients = np.zeros((data.num_blocks, data.num_resources), dtype=np.float64)
    for block_id, by_resource in data.resource_coefficients.items():
        _check_index(block_id, data.num_blocks, "block id")
        for resource, value in by_resource.items():
            _check_index(resource, data.num_resources, "resource id")
            coefficients[block_id, resource] = value
    return coefficients


def resource_coefficient_tensor(data: PCPSPData) -> NDArray[np.float64]:
    """Resource consumption, shape (num_blocks, num_destinations, num_resources)."""
    shape = (data.num_blocks, data.num_destinations, data.num_resources)
    coefficients = np.zeros(shape, dtype=np.float64)
    for block_id, by_dest in data.resource_coefficients.items():
        _check_index(block_id, data.num_blocks, "block id")
        for dest, by_resource in by_dest.items():
            _check_index(dest, data.num_destinations, "destination id")
            for resource, value in by_resource.items():
                _check_index(resource, data.num_resources, "resource id")
                coefficients[block_id, dest, resource] = value
    return coefficients


def resource_bound_arrays(
    limits: ResourceLimits, num_resources: int, num_periods: int
) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Lower and upper bounds, each of shape (num_resources, num_periods).

    Entries without a bound are -inf (lower) and +inf (upper).
    """
    lower = np.full((num_resources, num_periods), -np.inf, dtype=np.float64)
    upper = np.full((num_resources, num_periods), np.inf, dtype=np.float64)
    for target, table in ((lower, limits.lower_bounds), (upper, limits.upper_bounds)):
        for resource, by_period in table.items():
            _check_index(resource, num_resources, "resource id")
            for period, value in by_period.items():
                _check_index(period, num_periods, "period")
                target[resource, period] = value
    return lower, upper


def precedence_arc_array(precedences: Precedences) -> NDArray[np.int64]:
    """Precedence arcs as an (num_arcs, 2) array of ``(predecessor, block)`` rows."""
    arcs = np.fromiter(
        (node for arc in precedences.arcs() for node in arc),
        dtype=np.int64,
        count=2 * precedences.num_arcs(),
    )
    return arcs.reshape(-1, 2)
