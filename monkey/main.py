"""Runs the Monkey interpreter on a .monkey file, or in command-line mode. Also uses the error handling context manager.
Called from the monkey console script.
"""

import argparse
import sys

from monkey.lang.error import ErrorHandler
from monkey.lang.evaluator import Evaluator
from monkey.lang.objects import NULL
from monkey.lang.session import Session
from monkey.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="monkey", description="Monkey programming language interpreter")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("-v", "--verbose", help="print the syntax tree and value of every program", action="store_true")
    parser.add_argument("--max-depth", help=f"maximum function call depth (default: {Evaluator.RECURSION_LIMIT})",
                        type=int, default=Evaluator.RECURSION_LIMIT)
    return parser


def main(argv=None):
    """Runs Monkey interpreter. Called from monkey console script."""
    args = build_parser().parse_args(argv)

    with ErrorHandler(verbose=args.verbose) as error_handler:
        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, max_depth=args.max_depth)
            sess.run()

            for result in sess.results:
                if result != NULL:
                    print(result)

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, max_depth=args.max_depth)).cmdloop()


if __name__ == "__main__":
    sys.exit(main())
