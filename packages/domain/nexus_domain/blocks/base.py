"""Base classes for computation blocks.

This module provides the foundation for the reporting blocks:
- Block abstract base class
- BlockContext for passing records and DataFrames between blocks
- BlockExecutor for dependency resolution and execution
- Topological sort for DAG execution order
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field


# =============================================================================
# Block Context
# =============================================================================

@dataclass
class BlockContext:
    """Named values shared between blocks.

    The caller seeds the context with record snapshots; blocks read their
    inputs from it and write their DataFrames back.

    Example:
        context = BlockContext()
        context.set("ledger_entries", entries)

        TrialBalanceBlock().execute(context)
        trial_balance_df = context.get("trial_balance")
    """

    _data: Dict[str, Any] = field(default_factory=dict)

    def get(self, key: str) -> Any:
        """Get value from context.

        Raises:
            KeyError: If key not found in context
        """
        if key not in self._data:
            raise KeyError(f"Key '{key}' not found in context. Available keys: {list(self._data.keys())}")
        return self._data[key]

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def has(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> List[str]:
        return list(self._data.keys())


# =============================================================================
# Block Base Class
# =============================================================================

class Block(ABC):
    """Abstract base class for computation blocks.

    A Block:
    1. Declares the context keys it reads (inputs)
    2. Declares the context keys it writes (outputs)
    3. Computes its outputs in execute()

    Subclass example:
        class LockCountBlock(Block):
            def inputs(self) -> List[str]:
                return ["capital_locks"]

            def outputs(self) -> List[str]:
                return ["lock_count"]

            def execute(self, context: BlockContext) -> None:
                context.set("lock_count", len(context.get("capital_locks")))
    """

    @abstractmethod
    def inputs(self) -> List[str]:
        """Context keys this block reads."""
        pass

    @abstractmethod
    def outputs(self) -> List[str]:
        """Context keys this block writes."""
        pass

    @abstractmethod
    def execute(self, context: BlockContext) -> None:
        """Read inputs from context, compute, write outputs to context.

        Raises:
            KeyError: If required inputs not available in context
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(inputs={self.inputs()}, outputs={self.outputs()})"


# =============================================================================
# Dependency Resolution
# =============================================================================

class CircularDependencyError(Exception):
    """Raised when blocks have circular dependencies."""
    pass


def topological_sort(blocks: List[Block]) -> List[Block]:
    """Order blocks so that every producer runs before its consumers.

    Kahn's algorithm. Blocks with no dependency between them keep their
    input order, so execution is reproducible.

    Raises:
        CircularDependencyError: If blocks have circular dependencies
        ValueError: If two blocks declare the same output
    """
    producers: Dict[str, Block] = {}
    for block in blocks:
        for key in block.outputs():
            if key in producers:
                raise ValueError(
                    f"Multiple blocks produce '{key}': {producers[key]} and {block}"
                )
            producers[key] = block

    in_degree: Dict[Block, int] = {block: 0 for block in blocks}
    consumers: Dict[Block, List[Block]] = {block: [] for block in blocks}

    for block in blocks:
        for key in block.inputs():
            # Keys nobody produces must come from the initial context
            if key in producers:
                consumers[producers[key]].append(block)
                in_degree[block] += 1

    ready: List[Block] = [block for block in blocks if in_degree[block] == 0]
    ordered: List[Block] = []

    while ready:
        current = ready.pop(0)
        ordered.append(current)
        for consumer in consumers[current]:
            in_degree[consumer] -= 1
            if in_degree[consumer] == 0:
                ready.append(consumer)

    if len(ordered) != len(blocks):
        remaining = [block for block in blocks if in_degree[block] > 0]
        raise CircularDependencyError(
            f"Circular dependency detected among blocks: {remaining}"
        )

    return ordered


# =============================================================================
# Block Executor
# =============================================================================

class BlockExecutor:
    """Runs blocks in dependency order.

    Before a block runs, every key it reads must be in the context; after it
    runs, every key it declares must have been written. Either failure names
    all the offending keys at once.

    Example:
        executor = BlockExecutor([TrialBalanceBlock(), CapitalScheduleBlock()])
        context = BlockContext()
        context.set("ledger_entries", entries)
        context.set("capital_locks", locks)
        context.set("as_of_date", date(2024, 6, 30))

        executor.execute(context)
        schedule_df = context.get("capital_schedule")
    """

    def __init__(self, blocks: List[Block]):
        self.blocks = blocks
        self._plan: Optional[List[Block]] = None

    @property
    def plan(self) -> List[Block]:
        """Execution order, resolved once on first use."""
        if self._plan is None:
            self._plan = topological_sort(self.blocks)
        return self._plan

    def execute(self, context: BlockContext) -> BlockContext:
        """Execute all blocks in dependency order.

        Raises:
            CircularDependencyError: If blocks have circular dependencies
            KeyError: If a block's inputs are missing from context
            ValueError: If a block did not write all its declared outputs
        """
        for block in self.plan:
            absent = _absent_keys(block.inputs(), context)
            if absent:
                raise KeyError(
                    f"{block} is missing inputs {absent}; context holds {context.keys()}"
                )

            block.execute(context)

            unwritten = _absent_keys(block.outputs(), context)
            if unwritten:
                raise ValueError(f"{block} did not write outputs {unwritten}")

        return context


def _absent_keys(keys: List[str], context: BlockContext) -> List[str]:
    return [key for key in keys if not context.has(key)]
