"""Session control for the Monkey language: runs the interpreter either in file interpretation mode or in command-line
mode.
"""

from monkey.interpreter import parse
from monkey.lang.environment import Environment
from monkey.lang.error import MonkeyError
from monkey.lang.evaluator import Evaluator

OPENERS = ("(", "{")
CLOSERS = (")", "}")


class Session:
    """Governs a Monkey session. A session has one global Environment for its whole life, so bindings made by one
    program (or shell line) are visible to the next.
    """
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, max_depth=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.env = Environment()
        self.evaluator = Evaluator(max_depth)

        self.to_exec = []  # list of (Program, source, line num) to execute
        self.results = []  # values of executed programs

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise MonkeyError("'{}' could not be opened", path, diagnosis=False)

            self.add(source, 1)

        elif not cmd_line:
            raise MonkeyError("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, prev=""):
        """Joins line to prev (the lines entered so far) and returns it along with whether the input is incomplete, i.e.
        has unclosed parentheses, braces or string literals and needs a continuation line.
        """
        line = prev + "\n" + line if prev else line

        depth = 0
        in_string = False
        for char in line:
            if char == '"':
                in_string = not in_string
            elif in_string:
                continue
            elif char in OPENERS:
                depth += 1
            elif char in CLOSERS:
                depth -= 1

        return line, depth > 0 or in_string

    def add(self, source, line_num):
        """Parses source and queues it for execution. Evaluation is delayed until run is called."""
        self.error_handler.register_line(self.path, source, line_num)  # in case error is raised

        program = parse(source)
        self.error_handler.register_step("parse", program.display())
        self.to_exec.append((program, source, line_num))

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Evaluates queued programs in order. Will raise any errors that are encountered."""
        while self.to_exec:
            program, source, line_num = self.to_exec.pop(0)
            self.error_handler.register_line(self.path, source, line_num)

            result = self.evaluator.evaluate(program, self.env)
            self.error_handler.register_step("eval", result)
            self.results.append(result)

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes and returns the most recent result."""
        return self.results.pop()
