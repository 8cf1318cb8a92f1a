from regcolor.program.program import Variable, Instruction, Program
