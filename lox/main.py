"""Runs the lox interpreter on a script file, or in command-line mode when no file is given. Also uses the error
handling context manager. Called from the lox executable script.
"""

import argparse
import sys

from lox.lang.error import ErrorHandler
from lox.lang.printer import AstPrinter
from lox.lang.session import Session
from lox.lang.shell import Shell


RECURSION_LIMIT = 10000  # every lox call costs several Python frames


def main(argv=None):
    """Runs lox interpreter. Called from lox executable script."""
    parser = argparse.ArgumentParser(prog="lox")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--ast", action="store_true", help="print the parsed syntax tree instead of running")
    args = parser.parse_args(argv)

    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    with ErrorHandler(fatal=args.file is not None) as error_handler:
        sess = Session(error_handler)

        if args.file is None:
            Shell(sess).cmdloop()
            return

        try:
            with open(args.file, "r", encoding="utf-8") as file:
                source = file.read()
        except OSError as error:
            print(f"lox: '{args.file}' could not be opened: {error.strerror}", file=sys.stderr)
            sys.exit(66)

        if args.ast:
            statements, result = sess.parse(source)
            printer = AstPrinter()
            for stmt in statements:
                print(printer.print(stmt))
        else:
            result = sess.run(source)

        if not result.ok:
            sys.exit(error_handler.exit_status())


if __name__ == "__main__":
    main()
