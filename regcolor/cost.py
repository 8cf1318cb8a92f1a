class CostCalculator:
    # Cost of a single instruction under the given allocation.
    def instr_cost(self, instr, result):
        raise NotImplementedError()

    def program_cost(self, result):
        total = 0
        for instr in result.program.instructions:
            total += self.instr_cost(instr, result)
        return total

    # Computes cost difference cost(r1) - cost(r2)
    def program_diff(self, r1, r2):
        return self.program_cost(r1) - self.program_cost(r2)


# Number of operands in the instruction which refer to spilled variables.
def spilled_operands(instr, result):
    spilled = set(var.name for var in result.spilled())
    return len([name for name in instr.variables() if name in spilled])


# Calculates how many memory accesses (i.e. operands of spilled variables)
# there are in the program.
class SpillInstructionsCounter(CostCalculator):
    def __init__(self, name="No. of memory accesses"):
        self.name = name

    def instr_cost(self, instr, result):
        return spilled_operands(instr, result)


# Every instruction costs N, and each of its operands living in memory
# adds S.
class MainCostCalculator(CostCalculator):
    def __init__(self, S=2, N=1, name=None):
        self.S = S # spill
        self.N = N # normal
        if name is None:
            self.name = "Main cost (S={}, N={})".format(S, N)
        else:
            self.name = name

    def instr_cost(self, instr, result):
        return self.N + self.S * spilled_operands(instr, result)
