"""Runs the minilang interpreter on a file, or in command-line mode if no file is given. Also uses the error handling
context manager. Installed as the `minilang` console script.
"""

import argparse

from minilang.lang.error import ErrorHandler
from minilang.lang.shell import Shell
from minilang.lang.session import Session


def main(argv=None):
    """Runs minilang interpreter."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="minilang")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--ast", action="store_true", help="print the syntax tree instead of evaluating")
        args = parser.parse_args(argv)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, show_ast=args.ast)
            sess.run()

            if sess.results:
                print(sess.pop())

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, show_ast=args.ast)).cmdloop()


if __name__ == "__main__":
    main()
