import pandas as pd
from graphviz import Digraph

from . import config
from .engine import Highlight

NODE_FILL = {
    Highlight.ACTIVE: config.ACTIVE_NODE_COLOR,
    Highlight.ACCEPTED: config.ACCEPTED_NODE_COLOR,
    Highlight.REJECTED: config.REJECTED_NODE_COLOR,
}

START_MARKER = '__start__'


class Visualizer:
    """Creates a Graphviz diagram of a projection, optionally highlighted by an animation frame."""

    def __init__(self, projection):
        self.projection = projection

    def render(self, frame=None):
        node_highlights = frame.node_highlights if frame is not None else {}
        edge_highlights = frame.edge_highlights if frame is not None else {}

        dot = Digraph(comment='Deterministic Finite Automaton')
        dot.attr(rankdir='LR')
        dot.attr('node', color=config.NODE_COLOR)
        dot.attr('edge', color=config.EDGE_COLOR)

        for node in self.projection.nodes:
            attrs = {
                'shape': 'doublecircle' if node.accepting else 'circle',
                'penwidth': str(node.emphasis),
            }
            if node.accepting:
                attrs['color'] = '#000000'
            highlight = node_highlights.get(node.id)
            if highlight is not None:
                attrs['style'] = 'filled'
                attrs['fillcolor'] = NODE_FILL[highlight]
            dot.node(str(node.id), node.label, **attrs)

            if node.initial:
                dot.node(START_MARKER, '', shape='none', width='0', height='0')
                dot.edge(START_MARKER, str(node.id), label='')

        for edge in self.projection.edges:
            attrs = {}
            if edge.id in edge_highlights:
                attrs['color'] = config.ACTIVE_EDGE_COLOR
                attrs['fontcolor'] = config.ACTIVE_EDGE_COLOR
                attrs['penwidth'] = '2'
            dot.edge(str(edge.source), str(edge.target), label=edge.label, **attrs)
        return dot


def to_dot(projection, frame=None):
    return Visualizer(projection).render(frame).source


def trace_table(model, verdict):
    """One row per consumed symbol, indexed by step number."""
    rows = [
        {
            "Step": index,
            "From State": model.label(step.source),
            "Input": step.symbol,
            "To State": model.label(step.target),
        }
        for index, step in enumerate(verdict.steps, start=1)
    ]
    table = pd.DataFrame(rows, columns=["Step", "From State", "Input", "To State"])
    return table.set_index("Step")
