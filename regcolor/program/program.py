import logging

import regcolor.utils as utils
from regcolor.errors import ParseError

logger = logging.getLogger(__name__)

#########################################################################
############################# PROGRAM MODEL #############################
#########################################################################

# Variable is an operand interesting for register allocation, in contrary to
# literals and memory addresses which are also instructions' operands
# but do not need to reside in registers.
# Ids are dense and follow the order in which variables were first seen.
# first_use and last_use are instruction numbers of the first and the last
# occurrence, they make up the liveness interval [first_use, last_use].
class Variable:
    def __init__(self, vid, name, first_use, last_use=None):
        self.id = vid
        self.name = name
        self.first_use = first_use
        self.last_use = first_use if last_use is None else last_use

    def __eq__(self, other):
        if isinstance(other, self.__class__):
            return (self.id, self.name, self.first_use, self.last_use) == \
                   (other.id, other.name, other.first_use, other.last_use)
        return False

    def __hash__(self):
        return hash((self.id, self.name))

    def __str__(self):
        return self.name

    def __repr__(self):
        return "{}[{}, {}]".format(self.name, self.first_use, self.last_use)

    # Inclusive interval intersection: intervals touching at one
    # instruction interfere.
    def interferes_with(self, other):
        return self.first_use <= other.last_use and self.last_use >= other.first_use


class Instruction:
    def __init__(self, num, opname, operands=None, label=None):
        # Number of the instruction in the program. Blank lines are not counted.
        self.num = num

        # Operation name e.g. LOAD, ADD, STORE.
        self.opname = opname

        # List of all operands, variables as well as literals and addresses.
        self.operands = operands if operands else []

        # Address or label written in front of the opcode.
        self.label = label

    def __eq__(self, other):
        if isinstance(other, self.__class__):
            return (self.num, self.opname, self.operands) == (other.num, other.opname, other.operands)
        return False

    def __repr__(self):
        return "{}: {} {}".format(self.num, self.opname, ", ".join(self.operands))

    # Operands classified as variables, in order of appearance.
    def variables(self):
        return [op for op in self.operands if utils.is_varname(op)]

    # Creates new Instruction from a line of the form "label OPCODE op1, op2, ...".
    # Operand fields are glued together and split on commas, so "A, FA10"
    # and "A,FA10" mean the same.
    @classmethod
    def from_line(cls, line, num, lineno=None):
        fields = line.split()
        if len(fields) < 2:
            raise ParseError("instruction needs a label and an opcode: " + repr(line.strip()), lineno)

        operands = [op for op in ''.join(fields[2:]).split(',') if op != '']
        return cls(num, fields[1], operands, label=fields[0])


# Program is the context of a single allocation run: the register count
# taken from the header and the ordered list of instructions. Analysis stores
# the variable table in self.vars.
class Program:
    def __init__(self, name, regcount, instructions):
        self.name = name
        self.regcount = regcount
        self.instructions = instructions

        # Variable table indexed by id, None until analysis is performed.
        self.vars = None

    def instr_count(self):
        return len(self.instructions)

    def is_analysed(self):
        return self.vars is not None

    # Header is a single "label: N" line, e.g. "registers: 4".
    @staticmethod
    def parse_header(line, lineno=1):
        parts = line.split(':')
        if len(parts) < 2:
            raise ParseError("header should be of the form 'label: N': " + repr(line.strip()), lineno)

        try:
            regcount = int(parts[1].strip())
        except ValueError:
            raise ParseError("invalid number of registers: " + repr(parts[1].strip()), lineno)

        if regcount < 0:
            raise ParseError("number of registers cannot be negative: {}".format(regcount), lineno)

        return regcount

    @classmethod
    def from_lines(cls, lines, name="program"):
        lines = iter(lines)
        header = next(lines, None)
        if header is None:
            raise ParseError("missing header line")

        regcount = cls.parse_header(header)
        instructions = []
        for lineno, line in enumerate(lines, start=2):
            # Blank lines don't advance the instruction counter.
            if not line.strip():
                continue
            instructions.append(Instruction.from_line(line, len(instructions), lineno))

        logger.debug("read %d instructions from %s (%d registers)", len(instructions), name, regcount)
        return cls(name, regcount, instructions)

    @classmethod
    def from_file(cls, filename):
        try:
            with open(filename, encoding="utf-8") as f:
                lines = f.read().splitlines()
        except OSError as e:
            raise ParseError("cannot read {}: {}".format(filename, e.strerror))
        except UnicodeDecodeError as e:
            raise ParseError("cannot decode {}: {}".format(filename, e.reason))

        return cls.from_lines(lines, name=filename)
