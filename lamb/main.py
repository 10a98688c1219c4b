"""Runs lamb programs from a file or a string, or starts command-line mode. Also uses the error handling context
manager. Called from the lamb console script.

Python version must be >=3.7, because error handling requires that dicts are insertion-ordered and syntax nodes are
dataclasses.
"""

import argparse
import sys

from lamb.interpreter import evaluate_program
from lamb.lang.error import ErrorHandler
from lamb.lang.session import Session
from lamb.lang.shell import Shell
from lamb.lang.value import show


def main(argv=None):
    """Runs lamb interpreter. Called from lamb console script."""
    assert sys.version_info >= (3, 7), "lamb cannot be run with python < 3.7"

    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="lamb")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("-c", "--command", help="program passed in as a string")
        args = parser.parse_args(argv)

        if args.command is not None:
            error_handler.register_file("<string>")
            error_handler.register_line("<string>", args.command, 1)
            print(show(evaluate_program(args.command, error_handler)))

        elif args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False)
            sess.run()

            print(sess.pop())

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
