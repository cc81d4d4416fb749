from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from . import config
from .model import Automaton


@dataclass(frozen=True)
class Node:
    id: int
    label: str
    accepting: bool
    emphasis: int
    initial: bool = False


@dataclass(frozen=True)
class Edge:
    id: str
    source: int
    target: int
    symbols: Tuple[str, ...]

    @property
    def label(self) -> str:
        return ", ".join(self.symbols)


@dataclass(frozen=True)
class GraphProjection:
    """Renderable view of an automaton.

    Edge ids are only meaningful inside one projection; consumers replace the
    whole projection after every change instead of patching edges.
    """

    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]

    def node(self, node_id: int) -> Optional[Node]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def edge_between(self, source: int, target: int) -> Optional[Edge]:
        for edge in self.edges:
            if edge.source == source and edge.target == target:
                return edge
        return None

    def edge_for(self, source: int, symbol: str) -> Optional[Edge]:
        for edge in self.edges:
            if edge.source == source and symbol in edge.symbols:
                return edge
        return None


def project(model: Automaton) -> GraphProjection:
    nodes = tuple(
        Node(
            id=state.id,
            label=state.label,
            accepting=state.accepting,
            emphasis=config.ACCEPTING_BORDER_WIDTH if state.accepting else config.DEFAULT_BORDER_WIDTH,
            initial=state.id == model.initial,
        )
        for state in model.states
    )

    grouped: Dict[Tuple[int, int], List[str]] = {}
    for (source, symbol), target in model.transitions.items():
        labels = grouped.setdefault((source, target), [])
        if symbol not in labels:
            labels.append(symbol)

    edges = tuple(
        Edge(id=f"e{index}", source=source, target=target, symbols=tuple(labels))
        for index, ((source, target), labels) in enumerate(grouped.items(), start=1)
    )
    return GraphProjection(nodes=nodes, edges=edges)
