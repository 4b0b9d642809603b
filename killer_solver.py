import argparse
import logging
import sys
from dataclasses import dataclass

from cage_output import OutputLimitExceeded, serialize, serialize_json
from cage_search import SPOT_LIMIT, CageRequest, MalformedRequest, iter_combinations
from calculator_config import CalculatorConfig, ConfigError, load_config
from digit_mask import DigitMask

logger = logging.getLogger(__name__)

# Sum of the digits 1..9, the total of every row, column and box
BOX_TOTAL = 45


# ------------------------------------------------------
# LOG SETUP
# ------------------------------------------------------
def configure_logging(log_file=None, verbose=False):
    if log_file:
        logging.basicConfig(
            filename=log_file,
            filemode="w",
            level=logging.DEBUG,
            format="%(message)s"
        )
    else:
        logging.basicConfig(
            stream=sys.stderr,
            level=logging.DEBUG if verbose else logging.WARNING,
            format="%(message)s"
        )


# ------------------------------------------------------
# CORE OPERATIONS
# ------------------------------------------------------
def complement(box_total):
    return box_total - BOX_TOTAL


def render_combinations(combinations, config):
    if config.output_format == "json":
        return serialize_json(combinations, config.max_output_bytes)
    return serialize(combinations, config.max_output_bytes)


def solve_cage(target_sum, spot_count, excluded=(), overlapping=False, config=None):
    """Every digit combination for one cage, one per line.

    ``excluded`` may be a DigitMask, a raw 9-bit integer or an iterable of
    digits. No combinations gives an empty string.
    """
    config = config or CalculatorConfig()
    if isinstance(excluded, int) and not isinstance(excluded, bool):
        excluded = DigitMask.from_bits(excluded)
    request = CageRequest.build(target_sum, spot_count, excluded, overlapping)
    return render_combinations(iter_combinations(request), config)


def solve_complement(box_total):
    return f"{complement(box_total)}\n"


# ------------------------------------------------------
# COMMAND INTERPRETER
# ------------------------------------------------------
class CommandError(ValueError):
    """User-facing problem with a command line."""


@dataclass(frozen=True)
class Command:
    keyword: str
    request: CageRequest | None = None
    box_total: int | None = None


# keyword -> overlapping
CAGE_COMMANDS = {"cc": False, "co": True}
COMPLEMENT_COMMAND = "x3"


def tokenize(line):
    return line.split()


def parse_int(token):
    """Read an optional '-' and the run of decimal digits that follows it.

    Trailing junk is ignored ("12ab" reads as 12), but at least one digit
    must be present.
    """
    index = 0
    polarity = 1
    if token.startswith("-"):
        polarity = -1
        index = 1

    number = 0
    start = index
    while index < len(token) and token[index] in "0123456789":
        number = number * 10 + int(token[index])
        index += 1

    if index == start:
        raise CommandError(f"Not a number: {token}")
    return number * polarity


def parse_cage(keyword, args):
    if len(args) < 2:
        raise CommandError("Invalid Number of Arguments")

    total = parse_int(args[0])
    if total < 0:
        raise CommandError("Invalid Box Total")

    spots = parse_int(args[1])
    if spots < 0 or spots > SPOT_LIMIT:
        raise CommandError("Invalid Number of Spots Available in the Cage")

    # out of range digits are simply dropped by the mask
    excluded = DigitMask.of(parse_int(arg) for arg in args[2:])
    return CageRequest.build(total, spots, excluded, CAGE_COMMANDS[keyword])


def parse_command(line):
    tokens = tokenize(line)
    if not tokens:
        raise CommandError("Invalid Input")

    keyword, args = tokens[0], tokens[1:]

    if keyword == COMPLEMENT_COMMAND:
        if not args:
            raise CommandError("x3 cmd: missing number as second argument")
        return Command(keyword, box_total=parse_int(args[0]))

    if keyword in CAGE_COMMANDS:
        return Command(keyword, request=parse_cage(keyword, args))

    raise CommandError("Invalid cmd")


def execute(line, config=None):
    config = config or CalculatorConfig()
    command = parse_command(line)
    logger.info("[CMD] %s", line.strip())

    if command.keyword == COMPLEMENT_COMMAND:
        return solve_complement(command.box_total)

    output = render_combinations(iter_combinations(command.request), config)
    if not output and config.no_solution_message:
        return config.no_solution_message + "\n"
    return output


# ------------------------------------------------------
# PROMPT LOOP
# ------------------------------------------------------
QUIT_WORDS = ("quit", "exit")


def run_prompt(stdin, stdout, config=None):
    config = config or CalculatorConfig()

    while True:
        stdout.write(config.prompt)
        stdout.flush()

        line = stdin.readline()
        if not line:
            # EOF
            break

        line = line.strip()
        if not line:
            continue
        if line in QUIT_WORDS:
            break

        try:
            output = execute(line, config)
        except (CommandError, MalformedRequest, OutputLimitExceeded) as e:
            logger.info("[ERROR] %s -> %s", line, e)
            stdout.write(f"{e}\n")
            continue

        stdout.write(output)


# ------------------------------------------------------
# MAIN
# ------------------------------------------------------
def build_parser():
    parser = argparse.ArgumentParser(
        prog="killer-calc",
        description="Killer sudoku cage calculator. Commands: "
                    "'cc <total> <spots> [excluded...]' (standard cage), "
                    "'co <total> <spots> [excluded...]' (cage across boxes), "
                    "'x3 <boxTotal>' (box-total complement).",
    )
    parser.add_argument("--config", help="JSON file with calculator settings")
    parser.add_argument("--log-file", help="write a debug log of every search to this file")
    parser.add_argument("--verbose", action="store_true", help="log searches to stderr")
    parser.add_argument("--max-output-bytes", type=int, help="fail when a result would be larger than this")
    parser.add_argument("--format", dest="output_format", choices=("text", "json"), help="output format")
    parser.add_argument("--prompt", help="prompt shown in interactive mode")
    parser.add_argument("--no-solution-message", help="line printed when a cage has no combinations")
    parser.add_argument("command", nargs="*", help="run a single command instead of the prompt")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config) if args.config else CalculatorConfig()
        config = config.merged(
            prompt=args.prompt,
            max_output_bytes=args.max_output_bytes,
            output_format=args.output_format,
            no_solution_message=args.no_solution_message,
            log_file=args.log_file,
            verbose=True if args.verbose else None,
        )
    except ConfigError as e:
        parser.error(str(e))

    configure_logging(config.log_file, config.verbose)

    if args.command:
        try:
            output = execute(" ".join(args.command), config)
        except (CommandError, MalformedRequest, OutputLimitExceeded) as e:
            logger.info("[ERROR] %s", e)
            print(e, file=sys.stderr)
            return 2
        sys.stdout.write(output)
        return 0

    run_prompt(sys.stdin, sys.stdout, config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
