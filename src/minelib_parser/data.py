"""Core data structures for MineLib open-pit mining instances."""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

# Numeric attributes are stored as float, text attributes as str.
AttributeValue = float | str


class ProblemType(Enum):
    """MineLib optimization problem variants."""

    UPIT = "upit"
    CPIT = "cpit"
    PCPSP = "pcpsp"


class BoundType(Enum):
    """Constraint bound types used in MineLib limit sections.

    Attributes:
        LESS_THAN: ``L``, upper bound only.
        GREATER_THAN: ``G``, lower bound only.
        INTERVAL: ``I``, lower and upper bound.
    """

    LESS_THAN = "L"
    GREATER_THAN = "G"
    INTERVAL = "I"

    @classmethod
    def from_token(cls, token: str) -> BoundType | None:
        """Map a bound-type letter (any case) to its member, or None if unknown."""
        try:
            return cls(token.strip().upper())
        except ValueError:
            return None


def discount_factor(rate: float, period: int) -> float:
    """Return the present-value factor ``1 / (1 + rate) ** period``."""
    return 1.0 / (1.0 + rate) ** period


@dataclass(frozen=True)
class Precedences:
    """Block precedence relationships.

    Each block maps to the blocks that must be extracted before it. The graph
    is acyclic by problem definition; this is not checked.

    Attributes:
        num_blocks: Declared block count (1 + largest id seen by the parser).
        predecessors: Block ID -> ordered list of direct predecessor IDs.

    Examples:
        >>> prec = Precedences(num_blocks=11, predecessors={10: [1, 2, 3]})
        >>> prec.get_predecessors(10)
        [1, 2, 3]
        >>> prec.get_predecessors(4)
        []
    """

    num_blocks: int
    predecessors: dict[int, list[int]] = field(default_factory=dict)

    def get_predecessors(self, block_id: int) -> list[int]:
        return self.predecessors.get(block_id, [])

    def num_arcs(self) -> int:
        """Total number of precedence arcs."""
        return sum(len(preds) for preds in self.predecessors.values())

    def blocks_with_predecessors(self) -> Iterator[int]:
        """Iterate over blocks that have at least one predecessor."""
        return (block_id for block_id, preds in self.predecessors.items() if preds)

    def arcs(self) -> Iterator[tuple[int, int]]:
        """Iterate over ``(predecessor, block)`` pairs."""
        for block_id, preds in self.predecessors.items():
            for pred in preds:
                yield pred, block_id


@dataclass
class ResourceLimits:
    """Resource constraint bounds by resource and period.

    Missing entries are unconstrained: ``-inf`` lower and ``+inf`` upper.

    Attributes:
        lower_bounds: resource -> period -> lower bound.
        upper_bounds: resource -> period -> upper bound.
    """

    lower_bounds: dict[int, dict[int, float]] = field(default_factory=dict)
    upper_bounds: dict[int, dict[int, float]] = field(default_factory=dict)

    def get_bounds(self, resource: int, period: int) -> tuple[float, float]:
        """Return the ``(lower, upper)`` bounds for a resource and period."""
        lower = self.lower_bounds.get(resource, {}).get(period, -math.inf)
        upper = self.upper_bounds.get(resource, {}).get(period, math.inf)
        return lower, upper

    def set_bounds(
        self,
        resource: int,
        period: int,
        lower: float = -math.inf,
        upper: float = math.inf,
    ) -> None:
        self.lower_bounds.setdefault(resource, {})[period] = lower
        self.upper_bounds.setdefault(resource, {})[period] = upper

    def resources(self) -> list[int]:
        """Sorted resource IDs that carry at least one bound entry."""
        return sorted(set(self.lower_bounds) | set(self.upper_bounds))


@dataclass
class Block:
    """A single block of a geological block model.

    Attributes:
        id: Block identifier.
        x, y, z: Integer grid coordinates.
        attributes: Extra columns by name; numeric values are floats, others text.

    Examples:
        >>> block = Block(id=1, x=1, y=0, z=0, attributes={"tonnage": 1200.0})
        >>> block["tonnage"], block["x"], block.coordinates
        (1200.0, 1, (1, 0, 0))
    """

    id: int
    x: int
    y: int
    z: int
    attributes: dict[str, AttributeValue] = field(default_factory=dict)

    @property
    def coordinates(self) -> tuple[int, int, int]:
        return self.x, self.y, self.z

    def __getitem__(self, name: str) -> int | AttributeValue:
        if name in ("x", "y", "z"):
            return getattr(self, name)
        return self.attributes[name]

    def __contains__(self, name: object) -> bool:
        return name in ("x", "y", "z") or name in self.attributes

    def get(self, name: str, default: AttributeValue | None = None) -> int | AttributeValue | None:
        try:
            return self[name]
        except KeyError:
            return default


@dataclass
class BlockModel:
    """Geological block model.

    Attributes:
        num_blocks: 1 + largest block ID seen.
        blocks: Block ID -> Block.
    """

    num_blocks: int = 0
    blocks: dict[int, Block] = field(default_factory=dict)

    def get_block(self, block_id: int) -> Block | None:
        return self.blocks.get(block_id)

    def get_coordinates(self, block_id: int) -> tuple[int, int, int] | None:
        """Return ``(x, y, z)`` for a block, or None if the block is unknown."""
        block = self.blocks.get(block_id)
        return None if block is None else block.coordinates

    def __len__(self) -> int:
        return len(self.blocks)


@dataclass
class UPITData:
    """Data for the Ultimate Pit Limit problem.

    UPIT selects the set of blocks to extract that maximizes total value
    subject to precedence constraints (a maximum-weight closure problem).

    Attributes:
        name: Instance name.
        num_blocks: Number of blocks.
        objective: Block ID -> profit (negative for waste).
        precedences: Precedence graph, if one was supplied.
    """

    name: str = ""
    num_blocks: int = 0
    objective: dict[int, float] = field(default_factory=dict)
    precedences: Precedences | None = None

    problem_type: ClassVar[ProblemType] = ProblemType.UPIT

    def total_positive_value(self) -> float:
        """Sum of all positive block values."""
        return sum((v for v in self.objective.values() if v > 0), 0.0)

    def total_negative_value(self) -> float:
        """Sum of all negative block values (waste cost)."""
        return sum((v for v in self.objective.values() if v < 0), 0.0)


@dataclass
class CPITData:
    """Data for the Constrained Pit Limit problem.

    CPIT adds time periods and resource side constraints to UPIT and
    maximizes discounted NPV.

    Attributes:
        name: Instance name.
        num_blocks: Number of blocks.
        num_periods: Number of time periods.
        num_resources: Number of resource side constraints.
        discount_rate: Per-period discount rate.
        objective: Block ID -> undiscounted profit.
        resource_limits: Resource bounds by period.
        resource_coefficients: block -> resource -> consumption.
        precedences: Precedence graph, if one was supplied.

    Note:
        The discounted profit of block b in period t is ``p_b / (1 + rate) ** t``.
    """

    name: str = ""
    num_blocks: int = 0
    num_periods: int = 0
    num_resources: int = 0
    discount_rate: float = 0.0
    objective: dict[int, float] = field(default_factory=dict)
    resource_limits: ResourceLimits = field(default_factory=ResourceLimits)
    resource_coefficients: dict[int, dict[int, float]] = field(default_factory=dict)
    precedences: Precedences | None = None

    problem_type: ClassVar[ProblemType] = ProblemType.CPIT

    def get_discounted_profit(self, block: int, period: int) -> float:
        """Discounted profit of a block extracted in a 0-based period."""
        return self.objective.get(block, 0.0) / (1.0 + self.discount_rate) ** period

    def get_resource_coefficient(self, block: int, resource: int) -> float:
        """Resource consumption of a block; 0.0 when not given."""
        return self.resource_coefficients.get(block, {}).get(resource, 0.0)


@dataclass
class PCPSPData:
    """Data for the Precedence Constrained Production Scheduling problem.

    PCPSP extends CPIT with processing destinations (e.g. mill or waste dump)
    and general side constraints, deciding both when and where each block goes.

    Attributes:
        name: Instance name.
        num_blocks: Number of blocks.
        num_periods: Number of time periods.
        num_destinations: Number of processing destinations.
        num_resources: Number of resource side constraints.
        num_general_constraints: Number of general side constraint rows.
        discount_rate: Per-period discount rate.
        objective: block -> destination -> profit.
        resource_limits: Resource bounds by period.
        resource_coefficients: block -> destination -> resource -> consumption.
        general_coefficients: (block, destination, period, row) -> coefficient.
        general_limits: row -> (lower, upper).
        precedences: Precedence graph, if one was supplied.
    """

    name: str = ""
    num_blocks: int = 0
    num_periods: int = 0
    num_destinations: int = 0
    num_resources: int = 0
    num_general_constraints: int = 0
    discount_rate: float = 0.0
    objective: dict[int, dict[int, float]] = field(default_factory=dict)
    resource_limits: ResourceLimits = field(default_factory=ResourceLimits)
    resource_coefficients: dict[int, dict[int, dict[int, float]]] = field(default_factory=dict)
    general_coefficients: dict[tuple[int, int, int, int], float] = field(default_factory=dict)
    general_limits: dict[int, tuple[float, float]] = field(default_factory=dict)
    precedences: Precedences | None = None

    problem_type: ClassVar[ProblemType] = ProblemType.PCPSP

    def get_discounted_profit(self, block: int, destination: int, period: int) -> float:
        base_profit = self.objective.get(block, {}).get(destination, 0.0)
        return base_profit / (1.0 + self.discount_rate) ** period

    def get_resource_coefficient(self, block: int, destination: int, resource: int) -> float:
        """Resource consumption for a block sent to a destination; 0.0 when not given."""
        return self.resource_coefficients.get(block, {}).get(destination, {}).get(resource, 0.0)

    def get_general_coefficient(self, block: int, destination: int, period: int, row: int) -> float:
        return self.general_coefficients.get((block, destination, period, row), 0.0)

    def get_general_bounds(self, row: int) -> tuple[float, float]:
        """Return ``(lower, upper)`` for a general constraint row, unbounded if absent."""
        return self.general_limits.get(row, (-math.inf, math.inf))
