import io
import json
import os
import shutil
import tempfile
import unittest
from contextlib import redirect_stdout

import matplotlib
matplotlib.use("Agg")

from regcolor.main import main
import tests.programmocks as programmocks


class MainTests(unittest.TestCase):

    def setUp(self):
        self.dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.dir)

    def run_main(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            status = main(list(argv))
        return status, out.getvalue()

    def test_file(self):
        status, out = self.run_main("-file", programmocks.program_path("example.asm"), "-nocolors")
        self.assertEqual(status, 0)
        self.assertIn("It was possible to find a solution!", out)
        self.assertIn("A gonna be colored with red (reg1)", out)

    def test_registers_override(self):
        status, out = self.run_main("-file", programmocks.program_path("example.asm"),
                                    "-nocolors", "-registers", "1")
        self.assertEqual(status, 0)
        self.assertIn("The number of available registers is: 1", out)
        self.assertIn("B stays in memory :'(", out)

    def test_no_solution(self):
        status, out = self.run_main("-file", programmocks.program_path("swap.asm"), "-colors", "3")
        self.assertEqual(status, 0)
        self.assertIn("It was not possible to find a solution with 3 colors", out)

    def test_intervals_and_table(self):
        status, out = self.run_main("-file", programmocks.program_path("swap.asm"),
                                    "-nocolors", "-intervals", "-table")
        self.assertEqual(status, 0)
        self.assertIn("INTERVAL", out)
        self.assertIn("Main cost (S=2, N=1)", out)

    def test_exports(self):
        json_file = os.path.join(self.dir, "graph.json")
        plot_file = os.path.join(self.dir, "intervals.png")
        status, out = self.run_main("-file", programmocks.program_path("example.asm"),
                                    "-json", json_file, "-plot", plot_file)
        self.assertEqual(status, 0)
        with open(json_file) as f:
            self.assertEqual(len(json.load(f)["nodes"]), 3)
        self.assertTrue(os.path.exists(plot_file))

    def test_dir(self):
        status, out = self.run_main("-dir", programmocks.PROGRAMS_DIR, "-nocolors")
        self.assertEqual(status, 0)
        self.assertEqual(out.count("It was possible to find a solution!"), 3)

    def test_missing_dir(self):
        status, out = self.run_main("-dir", os.path.join(self.dir, "missing"))
        self.assertEqual(status, 1)
        self.assertEqual(out, "")

    def test_empty_dir(self):
        with self.assertLogs("regcolor.main", level="WARNING") as cm:
            status, out = self.run_main("-dir", self.dir)
        self.assertEqual(status, 0)
        self.assertEqual(out, "")
        self.assertIn("no .asm files found", cm.output[0])

    def test_parse_error(self):
        filename = os.path.join(self.dir, "bad.asm")
        with open(filename, 'w') as f:
            f.write("registers two\n00 LOAD A, FA10\n")
        status, out = self.run_main("-file", filename)
        self.assertEqual(status, 1)
        self.assertEqual(out, "")

    def test_undecodable_file(self):
        filename = os.path.join(self.dir, "binary.asm")
        with open(filename, "wb") as f:
            f.write(b"registers: 2\n00 LOAD A, \xff\xfe\n")
        status, out = self.run_main("-file", filename)
        self.assertEqual(status, 1)
        self.assertEqual(out, "")

    def test_missing_input(self):
        self.assertEqual(self.run_main()[0], 2)

    def test_invalid_configuration(self):
        path = programmocks.program_path("example.asm")
        self.assertEqual(self.run_main("-file", path, "-colors", "0")[0], 2)
        self.assertEqual(self.run_main("-file", path, "-budget", "-3")[0], 2)
        self.assertEqual(self.run_main("-file", path, "-registers", "-1")[0], 2)


if __name__ == '__main__':
    unittest.main()
