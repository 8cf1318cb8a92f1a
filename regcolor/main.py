import argparse
import logging
import sys

import regcolor.program.analysis as analysis
import regcolor.utils as utils
from regcolor.allocators.graph import BacktrackingGraphColoringAllocator
from regcolor.cost import MainCostCalculator, SpillInstructionsCounter
from regcolor.errors import ParseError
from regcolor.program import Program
from regcolor.program.printer import AllocationString, IntervalsString, Opts

logger = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(description='Graph coloring register allocation of simple assembly programs.')
    parser.add_argument('-file', help="Assembly file with 'registers: N' header.")
    parser.add_argument('-dir', help="Path to the directory with .asm files to read.")
    parser.add_argument('-colors', type=int, default=utils.DEFAULT_PALETTE_SIZE,
                        help="Palette size, color 0 is reserved (default: %(default)s).")
    parser.add_argument('-registers', type=int, help="Number of registers, overrides the file header.")
    parser.add_argument('-budget', type=int, help="Maximal number of color attempts of the search.")
    parser.add_argument('-intervals', action='store_true', help="Print lifetime intervals.")
    parser.add_argument('-table', action='store_true',
                        help="Print costs for every register count between minimal and maximal pressure.")
    parser.add_argument('-graph', help="Draw the interference graph to a .dot or .png file.")
    parser.add_argument('-json', help="Export the interference graph as nodes and links to a json file.")
    parser.add_argument('-plot', help="Plot lifetime intervals to an image file.")
    parser.add_argument('-nocolors', action='store_true', help="Don't use colors in the terminal output.")
    parser.add_argument('-verbose', action='store_true', help="Log progress of every stage.")
    return parser


def report(program, allocator, args, options):
    result = allocator.perform_register_allocation(program, args.registers)

    if args.intervals:
        print(IntervalsString(program.vars, result, options))

    print(AllocationString(result, allocator.palette, options))

    if args.json:
        utils.save_graph_json(result, args.json, allocator.palette)
    if args.graph:
        utils.draw_graph(result, args.graph, allocator.palette)
    if args.plot:
        utils.draw_intervals(program.vars, result, to_file=args.plot, title=program.name)

    if args.table:
        setting = utils.ResultCompSetting(
            inputs=[program],
            regcounts=range(analysis.minimal_register_pressure(program),
                            analysis.maximal_register_pressure(program)+1),
            allocators=[allocator],
            cost_calculators=[MainCostCalculator(), SpillInstructionsCounter()])
        res = utils.compute_full_results(setting)
        utils.compute_and_print_result_table(res, setting)

    return result


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    if not args.file and not args.dir:
        logger.error("missing input file, use -file or -dir (see --help)")
        return 2

    if args.registers is not None and args.registers < 0:
        logger.error("number of registers cannot be negative: %d", args.registers)
        return 2

    try:
        palette = utils.Palette(args.colors)
        allocator = BacktrackingGraphColoringAllocator(palette=palette, budget=args.budget)
    except ValueError as e:
        logger.error("%s", e)
        return 2

    options = Opts(colors=not args.nocolors)
    try:
        if args.file:
            programs = [Program.from_file(args.file)]
        else:
            programs = utils.programs_from_files(args.dir)
            if not programs:
                logger.warning("no .asm files found in %s", args.dir)
    except ParseError as e:
        logger.error("%s", e)
        return 1

    for program in programs:
        if len(programs) > 1:
            print(program.name)
        report(program, allocator, args, options)

    return 0


if __name__ == '__main__':
    sys.exit(main())
