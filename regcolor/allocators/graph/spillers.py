import logging

logger = logging.getLogger(__name__)


# Returns the colors used in the assignment ranked by population: the color
# held by more vertices comes first, equal populations are ordered by
# ascending color id. The reserved color 0 is never ranked.
def rank_colors(colors):
    population = {}
    for color in colors:
        if color != 0:
            population[color] = population.get(color, 0) + 1

    return sorted(population, key=lambda color: (-population[color], color))


class Spiller:
    # Chooses colors that get physical registers out of a valid
    # coloring, at most regcount of them. Vertices holding any other
    # color are spilled. Returns the list of promoted colors.
    def promote_colors(self, colors, regcount):
        raise NotImplementedError()


# Keeps in registers the colors shared by the largest number of variables,
# which minimizes the number of spilled variables for a given coloring.
class MostUsedFirst(Spiller):
    def promote_colors(self, colors, regcount):
        ranking = rank_colors(colors)
        promoted = ranking[:max(regcount, 0)]
        logger.debug("ranking %s, promoted %s", ranking, promoted)
        return promoted


def default():
    return MostUsedFirst()
