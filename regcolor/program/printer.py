from termcolor import colored

import regcolor.utils as utils


class Opts:
    def __init__(self, **options):
        self.colors = options.get("colors", True)
        self.nums = options.get("nums", True)
        # Instead of variable names, print allocs.
        self.alloc_only = options.get("alloc_only", False)
        # Besides variable names, print allocs.
        self.with_alloc = options.get("with_alloc", False)
        self.intervals_verbose = options.get("intervals_verbose", False)


def paint(text, options, color=None, attrs=None):
    if not options.colors:
        return text
    return colored(text, color, attrs=attrs)

def allocstr(alloc, options):
    if alloc is None:
        return "-"
    if utils.is_regname(alloc):
        return paint(alloc, options, 'blue')
    return paint(alloc, options, 'green')


class InstrString:
    # result - optional AllocationResult, needed to print allocations.
    def __init__(self, instr, result=None, options=Opts()):
        self.instr = instr
        self.result = result
        self.options = options
        self.var_ids = {}
        if result is not None:
            self.var_ids = {var.name: var.id for var in result.variables}

    def alloc(self, name):
        if self.result is None or not self.result.success:
            return None
        return self.result.allocs.get(self.var_ids.get(name))

    def operand(self, op):
        if not utils.is_varname(op):
            return op

        vstr = paint(op, self.options, 'yellow', attrs=['bold'])
        alloc = self.alloc(op)
        if self.options.alloc_only and alloc:
            vstr = allocstr(alloc, self.options)
        elif self.options.with_alloc and alloc:
            vstr += "(" + allocstr(alloc, self.options) + ")"
        return vstr

    def operands(self):
        return ", ".join(self.operand(op) for op in self.instr.operands)

    def full(self):
        num = str(self.instr.num) + ":" if self.options.nums else ">"
        opname = paint(self.instr.opname, self.options, 'red')
        return "{:>4} {:<6} {}".format(num, opname, self.operands()).rstrip()

    def __str__(self):
        return self.full()


class ProgramString:
    def __init__(self, program, result=None, options=Opts()):
        self.program = program
        self.result = result
        self.options = options

    def full(self):
        name = paint(self.program.name, self.options, attrs=['underline'])
        res = [name, "registers: {}".format(self.program.regcount)]
        for instr in self.program.instructions:
            res.append(InstrString(instr, self.result, self.options).full())
        return "\n".join(res)

    def __str__(self):
        return self.full()


class IntervalsString:
    def __init__(self, variables, result=None, options=Opts()):
        self.variables = variables
        self.result = result
        self.options = options
        self.basic_pattern = "{:12s} {:8s}"
        self.reg_pattern = "{:^10s}"
        self.verbose_pattern = "{:>6s} {:s}"

    def interval(self, var):
        endpoints = "[" + str(var.first_use) + ", " + str(var.last_use) + "]"
        res = [self.basic_pattern.format(endpoints, var.name)]

        alloc = None
        if self.result is not None and self.result.success:
            alloc = self.result.allocs[var.id]
        res.append(self.reg_pattern.format(alloc if utils.is_regname(alloc) else "-"))

        if self.options.intervals_verbose:
            color = str(self.result.colors[var.id]) if alloc else "-"
            neighs = sorted(self.result.graph[var.id]) if self.result is not None else []
            res.append(self.verbose_pattern.format(color, str(neighs)))

        return ''.join(res)

    def full(self):
        ivs = sorted(self.variables, key=lambda var: (var.first_use, var.last_use, var.id))

        res = [self.basic_pattern.format("INTERVAL", "VAR-ID"), self.reg_pattern.format("REG")]
        if self.options.intervals_verbose:
            res.append(self.verbose_pattern.format("COLOR", "NEIGHBOURS"))
        res.append("\n")

        for var in ivs:
            res.extend([self.interval(var), "\n"])

        return ''.join(res)

    def __str__(self):
        return self.full()


# Text report of an allocation: which variables get registers and which
# stay in memory.
class AllocationString:
    def __init__(self, result, palette=None, options=Opts()):
        self.result = result
        self.palette = palette if palette is not None else utils.Palette(result.palette_size)
        self.options = options

    def failure(self):
        failure = self.result.failure
        if failure.aborted:
            return "The search was aborted after {} steps".format(failure.steps)
        return "It was not possible to find a solution with {} colors".format(failure.palette_size)

    def summary(self):
        return ["It was possible to find a solution!",
                "The number of needed registers is: {}".format(self.result.registers_needed),
                "The number of available registers is: {}".format(self.result.regcount)]

    def registered(self):
        res = []
        for var in self.result.registered():
            color = self.palette.name(self.result.colors[var.id])
            alloc = allocstr(self.result.allocs[var.id], self.options)
            res.append("{} gonna be colored with {} ({})".format(
                paint(var.name, self.options, 'yellow', attrs=['bold']), color, alloc))
        return res

    def spilled(self):
        return ["{} stays in memory :'(".format(paint(var.name, self.options, 'yellow', attrs=['bold']))
                for var in self.result.spilled()]

    def full(self):
        if not self.result.success:
            return self.failure()
        return "\n".join(self.summary() + self.registered() + self.spilled())

    def __str__(self):
        return self.full()
