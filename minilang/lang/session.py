"""Session control for minilang. A Session owns the global environment, so everything added to it shares variables,
either from a single file or line by line from the shell.
"""

from minilang.frontend.parser import Parser
from minilang.lang.error import GenericException
from minilang.runtime.environment import create_global_env
from minilang.runtime.evaluator import evaluate


class Session:
    """Governs a minilang session: parses source into Programs and evaluates them against one global scope."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, show_ast=False):
        self.error_handler = error_handler

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.show_ast = show_ast  # print trees instead of evaluating them

        self.env = create_global_env()
        self.parser = Parser()

        self.to_exec = []  # list of Programs waiting to be run
        self.results = []  # list of runtime values (or trees, if show_ast)

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            self.add(source)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line):
        """Strips trailing whitespace from line. Returns updated line and whether it needs a continuation (unclosed
        parentheses, braces or brackets).
        """
        line = line.rstrip()
        opened = sum(line.count(char) for char in "({[")
        closed = sum(line.count(char) for char in ")}]")
        return line, opened > closed

    def add(self, source, line_num=1):
        """Parses source and queues the resulting Program. Evaluation is delayed until run is called."""
        self.error_handler.register_source(self.path, source, line_num)  # in case error is raised

        self.to_exec.append(self.parser.produce_ast(source))

    def run(self):
        """Runs every queued Program in order. Will raise any errors that are encountered."""
        while self.to_exec:
            program = self.to_exec.pop(0)

            if self.show_ast:
                self.results.append(program)
            else:
                self.results.append(evaluate(program, self.env))

        self.error_handler.remove_source(self.path)

    def pop(self):
        """Returns and removes the most recent result."""
        return self.results.pop()
