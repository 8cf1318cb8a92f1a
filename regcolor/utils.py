import re
import json
import glob
import os
import numpy as np

from dashtable import data2rst
from matplotlib import pyplot as plt

import regcolor.program as program
from regcolor.errors import ParseError

MAX_VARNAME_LENGTH = 2

# Color 0 is reserved and means "no color" (uncolored or spilled).
COLOR_NAMES = ["none", "red", "blue", "green", "yellow", "purple",
               "black", "pink", "orange", "cyan", "white", "brown"]
HTML_COLORS = ["#909090", "#EA0D0D", "#0D67EA", "#29C529", "#E5F30C", "#980CF3",
               "#000000", "#F510E3", "#F5A210", "#10F5C8", "#FFFFFF", "#6E2C00"]
DEFAULT_PALETTE_SIZE = len(COLOR_NAMES)

#########################################################################
########################## HELPER FUNCTIONS ############################
#########################################################################

# Operands up to two characters long are variables, longer ones are
# literals or memory addresses.
def is_varname(name):
    if not name:
        return False
    return len(name) <= MAX_VARNAME_LENGTH

# Checks if the given name is the name of a register
def is_regname(name):
    if name is None:
        return False
    return re.match(r'reg[0-9]+$', name) is not None

def is_slotname(name):
    if name is None:
        return False
    return re.match(r'mem\(.+\)$', name) is not None

def regname(index):
    return "reg" + str(index + 1)

def slot(var):
    return "mem(" + var.name + ")"

# Reads all .asm files from the given directory and creates a Program
# from each. Returns a list of the Programs sorted by file name.
def programs_from_files(dir_path):
    if not os.path.isdir(dir_path):
        raise ParseError("not a directory: {}".format(dir_path))

    programs = []
    for filename in sorted(glob.glob(os.path.join(dir_path, '*.asm'))):
        programs.append(program.Program.from_file(filename))

    return programs

#########################################################################
################################ PALETTE ################################
#########################################################################

# Palette of K colors keyed by color id. Id 0 is the reserved "none"
# value and ids 1..K-1 are usable by the colorer.
class Palette:
    def __init__(self, size=DEFAULT_PALETTE_SIZE):
        if size < 1 or size > len(COLOR_NAMES):
            raise ValueError("palette size must be between 1 and {}, got {}".format(
                len(COLOR_NAMES), size))
        self.size = size

    def __len__(self):
        return self.size

    def __contains__(self, color):
        return 0 <= color < self.size

    def usable(self):
        return range(1, self.size)

    def name(self, color):
        assert color in self, "color outside of the palette"
        return COLOR_NAMES[color]

    def html(self, color):
        assert color in self, "color outside of the palette"
        return HTML_COLORS[color]

#########################################################################
############################### DRAWINGS ################################
#########################################################################

# Builds the node/link description of the interference graph used by
# graph viewers. Spilled vertices get the "none" color.
def graph_to_json(result, palette=None):
    if palette is None:
        palette = Palette()
    colors = result.colors if result.success else [0] * len(result.variables)

    nodes = []
    for var in result.variables:
        nodes.append({
            "id": var.id,
            "label": var.name,
            "color": palette.html(colors[var.id])})

    links = []
    for v in sorted(result.graph):
        for n in sorted(result.graph[v]):
            if v < n:
                links.append({"id": len(links), "source": v, "target": n})

    return {"nodes": nodes, "links": links}

def save_graph_json(result, filename, palette=None):
    with open(filename, 'w') as f:
        json.dump(graph_to_json(result, palette), f, indent=2)

# Draws the interference graph saving it either as png or dot.
# It seems that the pictures are better if we save it in .dot and later
# execute 'dot -Tpng file.dot -o file.png'.
def draw_graph(result, filename, palette=None):
    import pygraphviz as pgv

    if palette is None:
        palette = Palette()
    desc = graph_to_json(result, palette)
    A = pgv.AGraph()
    for node in desc["nodes"]:
        A.add_node(node["id"], label=node["label"], style="filled", fillcolor=node["color"])
    for link in desc["links"]:
        A.add_edge(link["source"], link["target"])

    if filename.endswith('.dot'):
        A.write(filename)
    elif filename.endswith('.png'):
        A.layout()
        A.draw(filename)
    else:
        raise ValueError("unsupported graph file extension: " + filename)

# Draws plot with provided intervals. Each interval is a line segment [first_use, last_use],
# with Y coordinate equal to the variable id. If an allocation result is provided,
# registers are drawn in color and spilled variables with dashed lines.
# to_file - name of the file where the plot should be saved. If None, the plot is shown
#           in the pop-up window.
def draw_intervals(variables, result=None, to_file=None, figsize=None, title="Lifetime intervals"):
    plt.figure(figsize=figsize)

    allocated = result is not None and result.success
    regcount = len(result.promoted) if allocated else 0
    cmap = plt.get_cmap('gnuplot')
    colors = [cmap(i) for i in np.linspace(0, 0.8, regcount+1)]
    black = colors[0]
    reg_colors = {regname(i): col for i, col in enumerate(colors[1:])}

    for var in variables:
        color = black
        linestyle = 'solid'
        if allocated:
            alloc = result.allocs[var.id]
            if is_regname(alloc):
                color = reg_colors[alloc]
            elif is_slotname(alloc):
                linestyle = '--'

        # A single-instruction lifetime is drawn as a short segment.
        plt.plot([var.first_use - 0.1, var.last_use + 0.1], [var.id, var.id],
                 color=color, linestyle=linestyle)

    plt.title(title)
    plt.xlabel('Instruction number')
    plt.ylabel('Variable id')
    plt.yticks([var.id for var in variables], [var.name for var in variables])
    plt.margins(0.05)

    if to_file:
        plt.savefig(to_file)
    else:
        plt.show()
    plt.close()

#########################################################################
########################### COMPUTING RESULTS ###########################
#########################################################################

# A helper class for storing arguments for computing full results.
# inputs - list of Programs.
# regcounts - list of ints denoting number of registers.
# allocators - list of allocators.
# cost_calculators - list of CostCalculators.
class ResultCompSetting:
    def __init__(self, inputs, regcounts, allocators, cost_calculators):
        self.inputs = inputs
        self.regcounts = regcounts
        self.allocators = allocators
        self.cost_calculators = cost_calculators

    def allocator_names(self):
        return [al.name for al in self.allocators]

    def cost_calc_names(self):
        return [cc.name for cc in self.cost_calculators]


# For provided ResultSetting object, computes results for provided arguments returning
# list [(input_name, [(regcount, [(allocator_name, [(cost_name, RESULT)] )] )] )].
# RESULT is -1 if the allocation failed.
def compute_full_results(setting):
    results = []

    for inp in setting.inputs:
        # REGISTERS
        reg_results = []
        for regc in setting.regcounts:
            # ALLOCATORS
            alloc_results = []
            for al in setting.allocators:
                allocation = al.perform_register_allocation(inp, regc)

                # COSTS
                cost_results = []
                for cc in setting.cost_calculators:
                    res = -1
                    if allocation.success:
                        res = cc.program_cost(allocation)
                    cost_results.append((cc.name, res))

                alloc_results.append((al.name, cost_results))

            reg_results.append((regc, alloc_results))

        results.append((inp.name, reg_results))

    return results


# Computes a table with span lists that we can print out to the
# console using dashtable.data2rst.
# d - results computed by compute_full_results
# setting - a ResultCompSetting object.
# We assume that d is correctly computed result table and per
# each input and regcount there is the same number of results.
def compute_result_table(d, setting):
    allocator_names = setting.allocator_names()
    cost_calc_names = setting.cost_calc_names()

    spans = [[[0, 0], [0, 1]]]
    table = []

    # Zero row: Allocators
    row0 = ["", ""]
    col = 2
    for al in allocator_names:
        row0.append(al)
        for c in range(len(cost_calc_names)-1):
            row0.append("")

        # Don't add one-element spans.
        if len(cost_calc_names) > 1:
            span = [[0, col+el] for el in range(len(cost_calc_names))]
            spans.append(span)
        col += len(cost_calc_names)

    table.append(row0)

    # First row: Costs
    row1 = ["Input", "Registers"]
    for al in allocator_names:
        row1.extend(cost_calc_names)
    table.append(row1)

    # Remaining rows
    row = 2
    for name, reg_results in d:
        regcount = len(reg_results)

        # Don't add one-element spans.
        if regcount > 1:
            span = [[row+el, 0] for el in range(regcount)]
            spans.append(span)
        row += regcount

        first = True
        for reg, alloc_results in reg_results:
            rowN = [""]
            if first:
                rowN = [name]
                first = False
            rowN.append(reg)

            for alname, cost_results in alloc_results:
                for c, res in cost_results:
                    if res == -1:
                        res = "Failed"
                    rowN.append(res)

            table.append(rowN)

    return table, spans

# Computes and prints to the output table with results provided as argument.
def compute_and_print_result_table(results, setting):
    table, spans = compute_result_table(results, setting)
    table = [[str(cell) for cell in row] for row in table]
    print(data2rst(table, spans=spans, use_headers=True))
