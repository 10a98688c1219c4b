"""Session control for lamb. Runs lamb source either from a file (the whole file is one program) or from the
command-line shell (each complete input is one program, and top-level defines carry over to later inputs).
"""

from lamb.lang.environment import Environment
from lamb.lang.error import GenericException
from lamb.lang.evaluator import run
from lamb.lang.value import show
from lamb.pure.lexical import TokenKind, lex
from lamb.pure.syntax import parse


class Session:
    """Governs a lamb session, with control over the environment that top-level defines are added to."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode

        self.env = Environment.empty()  # top-level defines of every program run so far
        self.to_exec = {}               # dict of line num: (source, Program) to execute
        self.results = []               # values of executed programs

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            self.add(source, 1)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, pending=""):
        """Joins line onto pending (the unfinished input so far). Returns the joined input and whether more lines are
        needed before it can be run, i.e. whether it has more '(' than ')'.
        """
        line = f"{pending}\n{line}" if pending else line

        tokens = lex(line)
        opened = sum(token.kind is TokenKind.OPAREN for token in tokens)
        closed = sum(token.kind is TokenKind.CPAREN for token in tokens)

        return line, opened > closed

    def add(self, source, line_num):
        """Parses source and queues it to be run. Evaluation is delayed until run is called."""
        self.error_handler.register_line(self.path, source.strip(), line_num)  # in case error is raised
        self.to_exec[line_num] = (source, parse(source))
        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self):
        """Runs this session's queued programs in order, appending each program's value to results. Will raise any
        errors that are encountered.
        """
        for line_num, (source, program) in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, source.strip(), line_num)

            try:
                values, self.env = run(program, self.env, self.error_handler)
                self.results.append(values[-1])
            finally:
                del self.to_exec[line_num]

            self.error_handler.remove_line(self.path)

    def pop(self):
        """Removes the latest result and returns it rendered for display."""
        return show(self.results.pop())
