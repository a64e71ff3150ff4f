"""
Inbound Adapters

Graph document loading.
"""

from .graph_loader import load_graph, graph_from_dict

__all__ = ["load_graph", "graph_from_dict"]
