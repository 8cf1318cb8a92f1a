import regcolor.utils as utils


# Result of a single allocation run. It is handed to printers and exporters
# and nothing modifies it afterwards.
#
# colors - final color of each vertex, 0 means the variable is spilled.
# original_colors - colors as found by the colorer, before spilling.
# promoted - colors which got physical registers, in ranking order.
# allocs - {vertex id: register name or memory slot}
class AllocationResult:
    def __init__(self, program, graph, palette_size, regcount, colors=None,
                 original_colors=None, promoted=None, failure=None):
        self.program = program
        self.variables = program.vars
        self.graph = graph
        self.palette_size = palette_size
        self.regcount = regcount
        self.failure = failure
        self.success = failure is None

        self.colors = colors
        self.original_colors = original_colors
        self.promoted = promoted if promoted is not None else []
        self.registers_needed = max(original_colors) if original_colors else 0

        self.allocs = {}
        if self.success:
            reg_of_color = {color: utils.regname(i) for i, color in enumerate(self.promoted)}
            for var in self.variables:
                if self.colors[var.id] in reg_of_color:
                    self.allocs[var.id] = reg_of_color[self.colors[var.id]]
                else:
                    self.allocs[var.id] = utils.slot(var)

    @classmethod
    def failed(cls, program, graph, palette_size, regcount, failure):
        return cls(program, graph, palette_size, regcount, failure=failure)

    def is_spilled(self, vid):
        return self.success and self.colors[vid] == 0

    # Variables that got a register, grouped by promoted color in ranking order.
    def registered(self):
        res = []
        for color in self.promoted:
            res.extend([var for var in self.variables if self.colors[var.id] == color])
        return res

    def spilled(self):
        if not self.success:
            return []
        return [var for var in self.variables if self.colors[var.id] == 0]

    # {color: number of vertices} for colors found by the colorer.
    def color_population(self):
        population = {}
        for color in self.original_colors or []:
            population[color] = population.get(color, 0) + 1
        return population


class Allocator:
    def __init__(self, name):
        self.name = name

    # Performs register allocation for the provided program and number of
    # available registers (the program header is used if regcount is None).
    # Returns an AllocationResult, which has success set to False if no
    # allocation was found.
    def perform_register_allocation(self, program, regcount=None):
        raise NotImplementedError()

    # Performs register allocation on each program with the same number
    # of registers and returns the list of results.
    def perform_batch_register_allocation(self, programs, regcount=None):
        return [self.perform_register_allocation(p, regcount) for p in programs]
