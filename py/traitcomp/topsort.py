# © 2024 Intel Corporation
# SPDX-License-Identifier: MPL-2.0

# Topological sorting of trait composition graphs

__all__ = (
    'topsort',
    'trait_graph',
    'CycleFound',
)

class CycleFound(Exception):
    def __init__(self, cycle):
        self.cycle = cycle
    def __str__(self):
        return str(self.cycle)

def trait_graph(roots, children=lambda node: node.traits):
    """Collect the graph reachable from the given roots, as a dict
    mapping each node to the list of its children. Nodes are keyed
    by identity through their hash, which traits do not override."""
    graph = {}
    pending = list(roots)
    while pending:
        node = pending.pop()
        if node in graph:
            continue
        edges = list(children(node))
        graph[node] = edges
        pending.extend(edges)
    return graph

def topsort(graph):
    """Topologically sort a graph. The graph is represented by a dict
    where the keys are the set of nodes, and the values are lists of
    edge targets from the respective node. Children come before their
    parents in the result."""
    visited = set()
    result = []
    def traverse(node, path):
        '''Visit the subgraph reachable from node depth-first, skipping
        already visited nodes; the deepest nodes are appended to
        'result' first.'''
        if node in path:
            raise CycleFound(path[path.index(node):])
        for n in graph[node]:
            if n not in visited:
                traverse(n, path + [node])
        visited.add(node)
        result.append(node)
    for node in graph:
        if node not in visited:
            traverse(node, [])
    return result
