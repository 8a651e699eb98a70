# CommandLine.py
"""""
Console front end.

    python main.py --eval <expression> [name=value ...] [--complex | --real]
    python main.py --diff <expression> --by <variable> [--complex | --real]

Without --complex/--real the number domain comes from the `number_domain`
setting. Errors are printed as "Error <code>: ..." on stderr (exit status 1).
"""""

import sys

from . import config_manager as config_manager
from . import error as E
from . import MathEngine as MathEngine
from .ScientificEngine import COMPLEX, REAL, get_domain

USAGE = ("Usage: main.py --eval <expression> [name=value ...] [--complex | --real] OR "
         "--diff <expression> --by <variable> [--complex | --real]")


def parse_variable(arg, domain, variables):
    """Split `name=value` at the first '=' and store the parsed value in `variables`."""
    name, equals, value = arg.partition("=")
    name = name.strip()
    if not equals or not name:
        raise E.ArgumentError(f"Invalid variable format: {arg}", code="3011")
    try:
        variables[name] = domain.from_binding(value.strip())
    except ValueError:
        raise E.ArgumentError(f"Invalid value for '{name}': {value}", code="3011")
    return variables


def split_domain_flag(args):
    """Remove --complex/--real from `args`; return (remaining_args, domain or None)."""
    remaining = []
    domain = None
    for arg in args:
        if arg == "--complex":
            domain = COMPLEX
        elif arg == "--real":
            domain = REAL
        else:
            remaining.append(arg)
    return remaining, domain


def report_error(error):
    area = E.Error_Dictionary.get(error.code[:1], "Unexpected Error")
    description = E.ERROR_MESSAGES.get(error.code, "Unknown error")
    print(f"{area}", file=sys.stderr)
    print(f"Error {error.code}: {description}", file=sys.stderr)
    print(f"Details: {error.message}", file=sys.stderr)
    if error.equation is not None:
        print(f"Equation: {error.equation}", file=sys.stderr)


def main(argv=None):
    """Run one console command; returns the process exit status."""
    if argv is None:
        argv = sys.argv[1:]

    args, domain = split_domain_flag(list(argv))
    if not args:
        print(USAGE, file=sys.stderr)
        return 1

    try:
        if domain is None:
            domain = get_domain(config_manager.load_setting_value("number_domain"))

        mode = args[0]
        if mode == "--eval":
            if len(args) < 2:
                print(USAGE, file=sys.stderr)
                return 1
            variables = {}
            for arg in args[2:]:
                parse_variable(arg, domain, variables)
            print(MathEngine.calculate(args[1], variables, domain))

        elif mode == "--diff":
            if len(args) < 4 or args[2] != "--by":
                print(USAGE, file=sys.stderr)
                return 1
            original, derivative = MathEngine.derive(args[1], args[3], domain)
            print(original)
            print(f"d/d{args[3]} = {derivative}")

        else:
            print(f"Unknown mode: {mode}", file=sys.stderr)
            print(USAGE, file=sys.stderr)
            return 1

    except E.MathError as e:
        report_error(e)
        return 1

    return 0
