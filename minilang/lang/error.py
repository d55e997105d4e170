"""Error handling for minilang. Every failure in the lexer, parser, environment or evaluator is raised as a subclass of
GenericException; anything else that makes it all the way to ErrorHandler is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be reported by an ErrorHandler. Positional info (line_num,
    start, end) is optional: runtime errors usually don't know where in the source they came from.
    """
    label = "error"

    def __init__(self, msg, exprs=None, line_num=None, start=0, end=-1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(str(expr), attrs=["bold"]) for expr in exprs))  # color expr snippets
        super().__init__(self.msg)

        self.line_num = line_num
        self.start = start
        self.end = end if end != -1 else start + 1  # needed for error display

        self.diagnosis = diagnosis and line_num is not None
        self.internal = internal


class LexError(GenericException):
    """Unrecognized character in source text."""
    label = "lexical error"


class ParseError(GenericException):
    """Unexpected token, missing delimiter, malformed declaration or invalid member access."""
    label = "parse error"


class ResolutionError(GenericException):
    """Unknown identifier, redeclaration in the same scope, or assignment to a constant."""
    label = "resolution error"


class EvaluationError(GenericException):
    """Unsupported node kind, non-identifier assignment target, or call of a non-callable value."""
    label = "evaluation error"


class ErrorHandler:
    """Context manager that reports minilang errors/warnings. If fatal, the first error exits the process; otherwise the
    error is swallowed after being printed so that a shell can keep going.
    """
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}  # path: (source lines, line number of first line)

    def register_source(self, path, source, first_line=1):
        """Registers source text for path. Should be called before Session add/run."""
        self.traceback[path] = (source.split("\n"), first_line)

    def remove_source(self, path):
        """Removes source from traceback given path. Should be called after successful Session add/run."""
        self.traceback.pop(path, None)

    def _locate(self, error):
        """Returns (path, line number, offending line) for error, or (path, None, None) if it can't be placed."""
        if not self.traceback:
            return None, None, None

        path, (lines, first_line) = next(reversed(list(self.traceback.items())))
        if error.line_num is None or not 0 < error.line_num <= len(lines):
            return path, None, None
        return path, first_line + error.line_num - 1, lines[error.line_num - 1]

    @staticmethod
    def diagnose(error, line, warning=False):
        """Returns offending part of line highlighted and bolded, with a marker underneath."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + line[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(line[error.start:end], color, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def _header(self, error):
        path, line_num, __ = self._locate(error)
        if path is None:
            return ""
        if line_num is None:
            return colored(f"{path}: ", attrs=["bold"])
        return colored(f"{path}:{line_num}:{error.start + 1}: ", attrs=["bold"])

    def warn(self, *args, **kwargs):
        """Generates and prints warning message based on args."""
        error = GenericException(*args, **kwargs)

        print(self._header(error) + colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg)

        __, __, line = self._locate(error)
        if not error.internal and error.diagnosis and line is not None:
            print(ErrorHandler.diagnose(error, line, warning=True))

    def throw(self, error):
        """Reports error, which must be a GenericException. Exits if self.fatal."""
        error_msg = self._header(error)

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored(f"{error.label}: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        __, __, line = self._locate(error)
        if not error.internal and error.diagnosis and line is not None:
            print(ErrorHandler.diagnose(error, line))

        if self.fatal:
            sys.exit(1)
        self.traceback = {}  # if error occurred, reset traceback (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
