# valuegrad/core/node.py
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class TraceNode:
    """
    Snapshot of one Value taken by `trace()`.

    Attributes
    ----------
    id    : int
        Identity of the Value (Value.id).
    data  : float
        Forward value at trace time.
    grad  : float
        Accumulated gradient at trace time.
    label : str
        Cosmetic name ("" if unset).
    op    : Optional[str]
        Operation tag, None for leaves.
    """
    id: int
    data: float
    grad: float
    label: str
    op: Optional[str]


@dataclass(frozen=True)
class Edge:
    """Directed operand -> consumer edge; `position` is the argument slot."""
    src: int
    dst: int
    position: int


@dataclass
class GraphTrace:
    nodes: List[TraceNode] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)

    def node_ids(self) -> List[int]:
        return [n.id for n in self.nodes]

    def by_id(self) -> Dict[int, TraceNode]:
        return {n.id: n for n in self.nodes}

    def operand_ids(self, node_id: int) -> List[int]:
        """Operand ids of `node_id` in argument order, repeated for aliased operands."""
        incoming = [e for e in self.edges if e.dst == node_id]
        return [e.src for e in sorted(incoming, key=lambda e: e.position)]

    def as_pairs(self) -> List[Tuple[int, int]]:
        return [(e.src, e.dst) for e in self.edges]
