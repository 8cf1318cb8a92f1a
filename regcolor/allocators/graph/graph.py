import logging

from sortedcontainers import SortedSet

import regcolor.allocators.graph.spillers as spillers
import regcolor.program.analysis as analysis
import regcolor.utils as utils
from regcolor.allocators.allocator import Allocator, AllocationResult
from regcolor.errors import ColoringFailure, InternalInconsistency

logger = logging.getLogger(__name__)

# Build Interference Graph from the variable table. Returns dictionary
# {vertex id: set of neighbour ids} with a key for every variable.
# Every pair of variables is tested, so the cost is quadratic in the number of
# variables. That is fine for small programs; large ones would need a sweep over
# sorted intervals.
def build_interference_graph(variables):
    neighs = {var.id: set() for var in variables}

    for i, v1 in enumerate(variables):
        for v2 in variables[i+1:]:
            if v1.interferes_with(v2):
                neighs[v1.id].add(v2.id)
                neighs[v2.id].add(v1.id)

    logger.debug("interference graph: %d vertices, %d edges",
                 len(neighs), sum(len(n) for n in neighs.values()) // 2)
    return neighs

# Checks that vertex ids are dense, every edge is mirrored and there are
# no self-loops.
def check_interference_graph(neighs):
    if sorted(neighs) != list(range(len(neighs))):
        raise InternalInconsistency("vertex ids are not dense: {}".format(sorted(neighs)))

    for v, nset in neighs.items():
        for n in nset:
            if n not in neighs:
                raise InternalInconsistency("edge ({}, {}) references undefined vertex {}".format(v, n, n))
            if n == v:
                raise InternalInconsistency("vertex {} is its own neighbour".format(v))
            if v not in neighs[n]:
                raise InternalInconsistency("edge ({}, {}) has no mirror".format(v, n))

# Lexicographic breadth-first search. Returns the vertices in visiting order.
# Each unvisited vertex is labelled with the visit ranks of its visited
# neighbours; the vertex with the largest label (smallest id on ties) goes next.
def lex_bfs(neighs):
    labels = {v: () for v in neighs}
    unvisited = SortedSet(neighs, key=lambda v: (labels[v], -v))

    order = []
    while unvisited:
        v = unvisited.pop()
        order.append(v)
        rank = len(neighs) - len(order)
        for n in neighs[v]:
            if n in unvisited:
                # The key changes, so the vertex has to be re-inserted.
                unvisited.remove(n)
                labels[n] += (rank,)
                unvisited.add(n)

    return order

# Returns a perfect elimination order of the graph (reversed lex BFS) or None
# if there is none, i.e. the graph is not chordal. In such an order the
# neighbours of every vertex that come after it form a clique.
def perfect_elimination_order(neighs):
    order = list(reversed(lex_bfs(neighs)))
    position = {v: i for i, v in enumerate(order)}

    for v in order:
        later = [n for n in neighs[v] if position[n] > position[v]]
        if not later:
            continue
        first = min(later, key=position.get)
        for n in later:
            if n != first and n not in neighs[first]:
                return None

    return order

def is_chordal(neighs):
    return perfect_elimination_order(neighs) is not None

# Size of the largest clique, None if the graph isn't chordal. Interference
# graphs of lifetime intervals are interval graphs, so they are always chordal
# and need exactly that many colors.
def max_clique_size(neighs):
    order = perfect_elimination_order(neighs)
    if order is None:
        return None

    position = {v: i for i, v in enumerate(order)}
    largest = 0
    for v in order:
        later = sum(1 for n in neighs[v] if position[n] > position[v])
        largest = max(largest, later + 1)
    return largest


class Coloring:
    ALL_COLORED = "all-colored"
    EXHAUSTED = "exhausted"
    ABORTED = "aborted"

    def __init__(self, status, colors, steps):
        self.status = status
        # Color of every vertex, 0 if none.
        self.colors = colors
        # Number of color attempts made by the search.
        self.steps = steps

    def success(self):
        return self.status == Coloring.ALL_COLORED

    def __repr__(self):
        return "Coloring({}, {})".format(self.status, self.colors)

# Checks if the color can be used for the vertex. Vertices after the current
# one in the search order are uncolored, so only the already visited
# neighbours are relevant.
def is_possible(neighs, colors, vertex, color):
    for n in neighs[vertex]:
        if colors[n] == color:
            return False
    return True

# Looks for an assignment of colors 1..palette_size-1 to all vertices such that
# neighbours differ. Vertices are visited in ascending id order and colors tried
# in ascending order, so the first coloring found is always the same for
# the same graph, although not necessarily the one with the fewest colors.
#
# The search is depth-first with backtracking. Instead of recursion it keeps
# next_color[v], the next color to try at v, for every vertex on the current
# path, which makes the depth independent of the interpreter's stack.
#
# budget - maximal number of color attempts or None. When it is used up the
#          search stops with Coloring.ABORTED.
def color(neighs, palette_size, budget=None):
    n = len(neighs)
    colors = [0] * n
    next_color = [1] * n
    steps = 0

    vertex = 0
    while 0 <= vertex < n:
        placed = False
        c = next_color[vertex]
        while c < palette_size:
            if budget is not None and steps >= budget:
                logger.debug("search aborted after %d steps at vertex %d", steps, vertex)
                return Coloring(Coloring.ABORTED, [0] * n, steps)

            steps += 1
            if is_possible(neighs, colors, vertex, c):
                colors[vertex] = c
                next_color[vertex] = c + 1
                placed = True
                break
            c += 1

        if placed:
            vertex += 1
            if vertex < n:
                next_color[vertex] = 1
        else:
            # Colors exhausted, undo and go back to the previous vertex.
            colors[vertex] = 0
            next_color[vertex] = 1
            vertex -= 1

    if vertex < 0:
        logger.debug("no coloring with %d colors, %d steps", palette_size, steps)
        return Coloring(Coloring.EXHAUSTED, colors, steps)

    logger.debug("colored %d vertices in %d steps", n, steps)
    return Coloring(Coloring.ALL_COLORED, colors, steps)


# General abstract class for graph coloring register allocation algorithms
class GraphColoringAllocator(Allocator):
    def __init__(self, spiller=None, palette=None, name="Graph Coloring Allocator"):
        super().__init__(name)
        self.spiller = spiller if spiller is not None else spillers.default()
        self.palette = palette if palette is not None else utils.Palette()

    # Returns a Coloring of the interference graph.
    def color_graph(self, neighs):
        raise NotImplementedError()

    def perform_register_allocation(self, program, regcount=None):
        if regcount is None:
            regcount = program.regcount
        if regcount < 0:
            raise ValueError("number of registers cannot be negative: {}".format(regcount))

        if not program.is_analysed():
            analysis.perform_full_analysis(program)

        neighs = build_interference_graph(program.vars)
        check_interference_graph(neighs)

        # A clique of k vertices needs k usable colors and the palette has
        # len - 1 of them, so the search can't succeed.
        clique = max_clique_size(neighs)
        if clique is not None and clique >= len(self.palette):
            logger.debug("%s: clique of %d vertices, %d usable colors",
                         program.name, clique, len(self.palette) - 1)
            coloring = Coloring(Coloring.EXHAUSTED, [0] * len(neighs), 0)
        else:
            coloring = self.color_graph(neighs)

        if not coloring.success():
            failure = ColoringFailure(len(self.palette),
                                      aborted=(coloring.status == Coloring.ABORTED),
                                      steps=coloring.steps)
            logger.info("%s: %s", program.name, failure)
            return AllocationResult.failed(program, neighs, len(self.palette), regcount, failure)

        promoted = self.spiller.promote_colors(coloring.colors, regcount)
        kept = set(promoted)
        colors = [c if c in kept else 0 for c in coloring.colors]

        result = AllocationResult(program, neighs, len(self.palette), regcount,
                                  colors=colors,
                                  original_colors=list(coloring.colors),
                                  promoted=promoted)
        logger.info("%s: %d registers needed, %d available, %d variables spilled",
                    program.name, result.registers_needed, regcount, len(result.spilled()))
        return result


class BacktrackingGraphColoringAllocator(GraphColoringAllocator):
    def __init__(self, spiller=None, palette=None, budget=None,
                 name="Backtracking Graph Coloring"):
        super().__init__(spiller, palette, name)
        if budget is not None and budget < 0:
            raise ValueError("search budget cannot be negative: {}".format(budget))
        self.budget = budget

    def color_graph(self, neighs):
        return color(neighs, len(self.palette), self.budget)
