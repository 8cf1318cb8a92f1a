import unittest

from regcolor.allocators.graph import BacktrackingGraphColoringAllocator
from regcolor.program.printer import AllocationString, InstrString, IntervalsString, Opts, ProgramString
from regcolor.utils import Palette
import tests.programmocks as programmocks

PLAIN = Opts(colors=False)


class AllocationStringTests(programmocks.ExampleTest):

    def test_solution(self):
        result = BacktrackingGraphColoringAllocator().perform_register_allocation(self.p)
        expected = "\n".join([
            "It was possible to find a solution!",
            "The number of needed registers is: 2",
            "The number of available registers is: 2",
            "A gonna be colored with red (reg1)",
            "C gonna be colored with red (reg1)",
            "B gonna be colored with blue (reg2)"])
        self.assertEqual(str(AllocationString(result, options=PLAIN)), expected)

    def test_spilled(self):
        result = BacktrackingGraphColoringAllocator().perform_register_allocation(self.p, 1)
        lines = AllocationString(result, options=PLAIN).full().split("\n")
        self.assertEqual(lines[2], "The number of available registers is: 1")
        self.assertEqual(lines[-1], "B stays in memory :'(")

    def test_failure(self):
        allocator = BacktrackingGraphColoringAllocator(palette=Palette(2))
        result = allocator.perform_register_allocation(self.p)
        self.assertEqual(AllocationString(result, options=PLAIN).full(),
                         "It was not possible to find a solution with 2 colors")

    def test_aborted(self):
        allocator = BacktrackingGraphColoringAllocator(budget=1)
        result = allocator.perform_register_allocation(self.p)
        self.assertEqual(AllocationString(result, options=PLAIN).full(),
                         "The search was aborted after 1 steps")


class InstrStringTests(programmocks.ExampleTest):

    def test_plain(self):
        self.assertEqual(InstrString(self.p.instructions[0], options=PLAIN).full(), "  0: LOAD   A, FA10")

    def test_with_alloc(self):
        result = BacktrackingGraphColoringAllocator().perform_register_allocation(self.p, 1)
        opts = Opts(colors=False, with_alloc=True)
        self.assertEqual(InstrString(self.p.instructions[0], result, opts).full(), "  0: LOAD   A(reg1), FA10")
        self.assertEqual(InstrString(self.p.instructions[1], result, opts).full(), "  1: LOAD   B(mem(B)), FA12")

    def test_alloc_only(self):
        result = BacktrackingGraphColoringAllocator().perform_register_allocation(self.p)
        opts = Opts(colors=False, alloc_only=True, nums=False)
        self.assertEqual(InstrString(self.p.instructions[1], result, opts).full(), "   > LOAD   reg2, FA12")

    def test_program(self):
        lines = ProgramString(self.p, options=PLAIN).full().split("\n")
        self.assertEqual(lines[1], "registers: 2")
        self.assertEqual(len(lines), 2 + self.p.instr_count())


class IntervalsStringTests(programmocks.ExampleTest):

    def test_intervals(self):
        result = BacktrackingGraphColoringAllocator().perform_register_allocation(self.p, 1)
        lines = IntervalsString(self.p.vars, result, PLAIN).full().split("\n")
        self.assertTrue(lines[0].startswith("INTERVAL"))
        self.assertEqual(lines[1].split(), ["[0,", "2]", "A", "reg1"])
        self.assertEqual(lines[2].split(), ["[1,", "1]", "B", "-"])
        self.assertEqual(lines[3].split(), ["[3,", "3]", "C", "reg1"])

    def test_verbose(self):
        result = BacktrackingGraphColoringAllocator().perform_register_allocation(self.p)
        opts = Opts(colors=False, intervals_verbose=True)
        lines = IntervalsString(self.p.vars, result, opts).full().split("\n")
        self.assertEqual(lines[1].split(), ["[0,", "2]", "A", "reg1", "1", "[1]"])


if __name__ == '__main__':
    unittest.main()
