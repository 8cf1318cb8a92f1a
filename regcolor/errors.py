class RegcolorError(Exception):
    pass


# Malformed header, malformed instruction line or unreadable input.
# It aborts the run before any allocation starts.
class ParseError(RegcolorError):
    def __init__(self, message, lineno=None):
        self.lineno = lineno
        if lineno is not None:
            message = "line {}: {}".format(lineno, message)
        super().__init__(message)


# Raised when the interference graph breaks its own invariants
# (unknown vertex, self-loop, missing mirror edge). It signals a bug
# in the graph builder, not a property of the input program.
class InternalInconsistency(RegcolorError):
    pass


# Not an exception. The colorer may legitimately fail to find an assignment
# for a palette (or give up when its search budget runs out) and this value
# travels back to the caller inside the AllocationResult.
class ColoringFailure:
    def __init__(self, palette_size, aborted=False, steps=0):
        self.palette_size = palette_size
        self.aborted = aborted
        self.steps = steps

    def __str__(self):
        if self.aborted:
            return "search aborted after {} steps".format(self.steps)
        return "no solution with {} colors".format(self.palette_size)

    def __repr__(self):
        return "ColoringFailure({}, aborted={})".format(self.palette_size, self.aborted)
