import logging

from regcolor.program.program import Variable

logger = logging.getLogger(__name__)

###############################################################################
################################## INTERVALS ##################################
###############################################################################

# Scans instructions in order and returns the variable table (list indexed by
# variable id). A variable gets the next free id on its first occurrence.
# Its interval starts at the first occurrence and ends at the last one.
# Opcodes are never treated as operands.
def compute_intervals(instructions):
    variables = []
    by_name = {}

    for instr in instructions:
        for name in instr.variables():
            if name in by_name:
                by_name[name].last_use = instr.num
            else:
                var = Variable(len(variables), name, instr.num)
                by_name[name] = var
                variables.append(var)

    return variables

# Computes the variable table of the program and stores it in program.vars.
def perform_full_analysis(program):
    program.vars = compute_intervals(program.instructions)
    logger.debug("%s: %d variables", program.name, len(program.vars))
    return program.vars

###############################################################################
############################## REGISTER PRESSURE ##############################
###############################################################################

# Minimal register pressure is the maximum over a number of distinct
# variables used by a single instruction. No budget below it makes
# every operand of that instruction fit in registers at once.
def minimal_register_pressure(program):
    max_uses = 0
    for instr in program.instructions:
        max_uses = max(max_uses, len(set(instr.variables())))

    return max_uses

# Maximal register pressure is the maximum over the number of live
# intervals at every instruction. Intervals form an interval graph, so this is
# also the size of the largest clique in the interference graph and
# no allocation needs more registers.
def maximal_register_pressure(program):
    if not program.is_analysed():
        perform_full_analysis(program)

    # +1 when an interval starts, -1 right after it ends.
    events = {}
    for var in program.vars:
        events[var.first_use] = events.get(var.first_use, 0) + 1
        events[var.last_use + 1] = events.get(var.last_use + 1, 0) - 1

    max_pressure = 0
    pressure = 0
    for num in sorted(events):
        pressure += events[num]
        max_pressure = max(max_pressure, pressure)

    return max_pressure
