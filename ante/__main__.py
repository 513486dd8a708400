import argparse
import logging
import sys
import typing as t

import ante

USAGE = "usage: ante filename.ante"


def set_up_argparse() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ante",
        usage=USAGE[len("usage: "):],
        description=(
            "An interpreter for Ante, the card deck programming language."
        )
    )

    parser.add_argument(
        "files", type=str, nargs="*", help=(
            "The file to interpret."
        )
    )

    parser.add_argument(
        "--parse", action="store_true", help=(
            "Print the parsed program as JSON instead of running it."
        )
    )

    parser.add_argument(
        "--step-limit", type=int, default=0, help=(
            "Stop with an error after this many cards. 0 means no limit."
        )
    )

    parser.add_argument(
        "--debug", action="store_true", help=(
            "Log tokenizing, label resolution and execution to stderr."
        )
    )

    return parser


def main(argv: t.Optional[t.Sequence[str]] = None) -> None:
    parser = set_up_argparse()
    args, extra = parser.parse_known_args(argv)
    files = [*args.files, *extra]

    if len(files) != 1:
        print(USAGE)
        return

    if args.debug:
        logging.basicConfig(level=logging.DEBUG)

    interpreter = ante.Interpreter(step_limit=args.step_limit)

    try:
        if args.parse:
            print(interpreter.test_parse(ante.load_source(files[0])))
        else:
            interpreter.run_file(files[0])
    except ante.AnteError as e:
        sys.stdout.flush()
        print(e, file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
