# UI.py
"""Terminal user interface for the calculation engine.

Structure
---------
- One-shot mode: evaluate the expression given on the command line
- Interactive mode: read-eval-print loop, the last result is kept as 'ans'

Responsibilities
----------------
- Build an Engine from the settings file plus command line overrides
- Render results ('= 5', '≈ 0.333333333333') or errors with their code
- Optional clipboard integration: copy the bare result after a calculation
"""
import argparse
import logging
import sys

import pyperclip

from . import error as E
from . import config_manager
from .Calculator import Engine

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_SYNTAX = 1
EXIT_EXECUTION = 2
EXIT_OTHER = 3

QUIT_WORDS = ("quit", "exit")


def parse_variable(text):
    """'x=5' -> ('x', 5.0)"""
    name, sep, value = text.partition("=")
    name = name.strip()
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"Expected NAME=VALUE, got '{text}'")
    try:
        return name, float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Value of '{name}' is not a number: '{value}'")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="calc-engine",
        description="Evaluate arithmetic expressions such as '2(3+4)', '√9' or 'sin(90)'.",
    )
    parser.add_argument("expression", nargs="?", help="expression to evaluate; omit for interactive mode")
    parser.add_argument("--var", dest="variables", action="append", type=parse_variable, default=[],
                        metavar="NAME=VALUE", help="bind a variable (repeatable)")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--radians", dest="radians", action="store_true", default=None,
                      help="treat angles as radians")
    mode.add_argument("--degrees", dest="radians", action="store_false", default=None,
                      help="treat angles as degrees")

    parser.add_argument("--fractions", action="store_true", default=None, help="show results as fractions")
    parser.add_argument("--check", action="store_true", help="only check the syntax")
    parser.add_argument("--show-equation", action="store_true", help="print the expression before the result")
    parser.add_argument("--copy", action="store_true", default=None, help="copy the result to the clipboard")
    parser.add_argument("--debug", action="store_true", default=None, help="log every evaluation step")
    parser.add_argument("--save", action="store_true",
                        help="store the given --radians/--degrees, --fractions, --copy and --debug in the settings file")
    return parser


def exit_code_for(error):
    family = error.kind.family
    if family == "syntax":
        return EXIT_SYNTAX
    if family == "execution":
        return EXIT_EXECUTION
    return EXIT_OTHER


def format_error(error):
    """Two lines like the calculator's error dialog: headline and details."""
    headline = f"Error {error.code}: {E.describe(error.code)}"
    details = f"Details: {error.message}\nEquation: {error.equation}"
    return headline + "\n" + details


def copy_result(text):
    """Copy text to the clipboard; a missing clipboard only logs a warning."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        logger.warning("Could not copy to clipboard: %s", e)
        return False
    return True


def render(expression, output, show_equation):
    if show_equation:
        return f"{expression} {output}"
    return output


def run_once(engine, expression, variables, check_only=False, show_equation=False, copy=False, out=None):
    """Evaluate (or only check) one expression and print the outcome; returns an exit code."""
    out = out or sys.stdout

    if check_only:
        if engine.check_syntax(expression):
            print(f"Valid: {engine.current_expression}", file=out)
            return EXIT_OK
        error = engine.last_error
        print(f"Error {error.code}: {error.detail}", file=sys.stderr)
        return exit_code_for(error)

    try:
        output = engine.calculate(expression, variables)
    except E.MathError as e:
        print(format_error(e), file=sys.stderr)
        return exit_code_for(e)

    print(render(expression, output, show_equation), file=out)
    if copy:
        copy_result(output[2:])
    return EXIT_OK


def repl(engine, variables, show_equation=False, copy=False, out=None):
    """Read-eval-print loop; the previous result is available as 'ans'."""
    out = out or sys.stdout
    variables = dict(variables)

    while True:
        try:
            line = input("> ")
        except EOFError:
            break

        problem = line.strip()
        if not problem:
            continue
        if problem.lower() in QUIT_WORDS:
            break

        try:
            output = engine.calculate(problem, variables)
        except E.MathError as e:
            print(format_error(e), file=out)
            continue

        variables["ans"] = engine.last_result

        print(render(problem, output, show_equation), file=out)
        if copy:
            copy_result(output[2:])

    return EXIT_OK


def main(argv=None):
    args = build_parser().parse_args(argv)
    settings = config_manager.load_setting_value("all")

    overrides = {}
    if args.radians is not None:
        overrides["radians"] = args.radians
    if args.fractions is not None:
        overrides["fractions"] = args.fractions
    if args.debug is not None:
        overrides["debug"] = args.debug
    if args.copy is not None:
        overrides["copy_to_clipboard"] = args.copy

    if args.save:
        settings = dict(settings)
        settings.update(overrides)
        try:
            config_manager.save_setting(settings)
        except E.ConfigurationError as e:
            print(format_error(e), file=sys.stderr)
            return EXIT_OTHER
        print(f"Settings saved to {config_manager.config_path()}")
        if args.expression is None:
            return EXIT_OK

    overrides.pop("copy_to_clipboard", None)
    engine = Engine.from_settings(settings, **overrides)
    if engine.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    copy = args.copy if args.copy is not None else bool(settings.get("copy_to_clipboard", False))
    variables = dict(args.variables)

    if args.expression is None:
        return repl(engine, variables, show_equation=args.show_equation, copy=copy)
    return run_once(engine, args.expression, variables, check_only=args.check,
                    show_equation=args.show_equation, copy=copy)


if __name__ == "__main__":
    sys.exit(main())
