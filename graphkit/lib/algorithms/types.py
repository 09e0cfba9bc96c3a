"""Result containers returned by graph algorithms."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Generic, List, Set, TypeVar, Union

from graphkit.lib.algorithms.base import GraphError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful algorithm outcome carrying its value."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed algorithm outcome carrying the error that describes it.

    The error is not raised until ``unwrap`` is called, so callers that expect
    the failure (for example, probing a graph for cycles) can branch on
    ``is_ok`` instead of catching.
    """

    error: GraphError

    @property
    def is_ok(self) -> bool:
        return False

    def unwrap(self):
        raise self.error


#: Either an Ok carrying a value of type T or an Err carrying a GraphError.
Result = Union[Ok[T], Err]

#: Discovery and finish stamps for one node: [start, finish].
TimeStamps = List[int]


@dataclass(frozen=True)
class FlowSummary:
    """Summary of a max-flow computation.

    Edges are identified by their index in the input graph.

    Attributes:
        total_flow: The maximum flow value achieved.
        edge_flow: Flow placed on each input edge.
        residual_cap: Remaining capacity on each input edge.
        reachable: Node indices reachable from the source in the final residual graph.
        min_cut: Saturated edges leading from the reachable set to the rest of the graph.
    """

    total_flow: int
    edge_flow: Dict[int, int]
    residual_cap: Dict[int, int]
    reachable: Set[int]
    min_cut: List[int]
