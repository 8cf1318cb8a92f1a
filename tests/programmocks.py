import os
import unittest

from regcolor.program import Program
import regcolor.program.analysis as analysis

PROGRAMS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "programs")


def program_path(name):
    return os.path.join(PROGRAMS_DIR, name)


class ExampleTest(unittest.TestCase):
    """
    TestCase based on the following program.

    registers: 2
       0: LOAD A, FA10
       1: LOAD B, FA12
       2: SHL A, 0001
       3: STORE C, FA14

    Intervals: A [0, 2], B [1, 1], C [3, 3]
    Interference graph: A - B
    """

    def setUp(self):
        self.p = Program.from_file(program_path("example.asm"))
        analysis.perform_full_analysis(self.p)


class SwapTest(unittest.TestCase):
    """
    TestCase based on the following program.

    registers: 2
       0: LOAD A, 0x0100
       1: LOAD B, 0x0102
       2: MOV T, A
       3: MOD T, B
       4: MOV A, B
       5: MOV B, T
       6: CMP B, 0x0000
       7: LOAD X, 0x0104
       8: ADD X, A
       9: STORE X, 0x0106
      10: LOAD Y, 0x0108
      11: ADD Y, X
      12: STORE Y, 0x010A

    Intervals: A [0, 8], B [1, 6], T [2, 5], X [7, 11], Y [10, 12]
    Interference graph: triangle A - B - T, A - X, X - Y
    """

    def setUp(self):
        self.p = Program.from_file(program_path("swap.asm"))
        analysis.perform_full_analysis(self.p)
        self.ids = {var.name: var.id for var in self.p.vars}


class ChainTest(unittest.TestCase):
    """
    TestCase based on a program where each variable overlaps only with
    the previous and the next one.

    registers: 1
       0: LOAD A, FF00
       1: ADD A, B
       2: ADD B, C
       3: ADD C, D
       4: ADD D, E
       5: STORE E, FF02
    """

    def setUp(self):
        self.p = Program.from_file(program_path("chain.asm"))
        analysis.perform_full_analysis(self.p)


# {vertex: set of neighbours} of a complete graph on n vertices.
def complete_graph(n):
    return {v: set(range(n)) - {v} for v in range(n)}
