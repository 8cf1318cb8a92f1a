import regcolor.utils as utils
from regcolor.allocators.graph import max_clique_size
from regcolor.allocators.graph.spillers import rank_colors


# Checks that b is a neighbour of a iff a is a neighbour of b and that
# no vertex is its own neighbour.
def graph_is_symmetric(neighs):
    for v, nset in neighs.items():
        if v in nset:
            return False
        for n in nset:
            if v not in neighs.get(n, ()):
                return False
    return True

# Checks that every vertex has a color and neighbours never share one.
def coloring_is_correct(neighs, colors):
    for v, nset in neighs.items():
        if colors[v] == 0:
            return False
        for n in nset:
            if colors[v] == colors[n]:
                return False
    return True

# Checks whether the coloring uses as few colors as possible, the promoted
# colors are exactly the top min(R, C) colors by population, every variable
# with another color is spilled and the allocation names match the colors.
def allocation_is_correct(result):
    if not result.success:
        return False

    if not coloring_is_correct(result.graph, result.original_colors):
        return False

    # Vertices are colored in the order of interval starts, so the search uses
    # no more colors than the largest clique.
    if result.registers_needed != max_clique_size(result.graph):
        return False

    ranking = rank_colors(result.original_colors)
    expected = ranking[:min(result.regcount, len(ranking))]
    if result.promoted != expected:
        return False

    promoted = set(result.promoted)
    for var in result.variables:
        original = result.original_colors[var.id]
        alloc = result.allocs[var.id]
        if original in promoted:
            if result.colors[var.id] != original or not utils.is_regname(alloc):
                return False
        elif result.colors[var.id] != 0 or alloc != utils.slot(var):
            return False

    # Variables holding the same color share the register.
    reg_of_color = {}
    for var in result.variables:
        color = result.colors[var.id]
        if color != 0 and reg_of_color.setdefault(color, result.allocs[var.id]) != result.allocs[var.id]:
            return False

    return True

