# SPDX-License-Identifier: AGPL-3.0-or-later
import argparse
import os
import os.path
import sys

from acceptlang.cli import Runner

# Defaults
PROG = 'acceptlang'
LOG_LEVEL = 'WARNING'
SUPPORTED = os.getenv('ACCEPT_LANGUAGE_SUPPORTED', '')
BENCH_ITERATIONS = 10000
FUZZ_ITERATIONS = 1000
FUZZ_MAX_LENGTH = 256


def opt_args(argv=None):
    parser = argparse.ArgumentParser(prog=PROG, description='Accept-Language header parser and matcher')
    parser.add_argument("--log-level", dest='log_level', default=LOG_LEVEL,
                        help="log level (default: {})".format(LOG_LEVEL))
    parser.add_argument("--log-timestamp", dest='log_timestamp', action='store_true', default=False,
                        help="prefix log messages with a timestamp")
    parser.add_argument("--json", dest='json', action='store_true', default=False,
                        help="write results as JSON")
    parser.add_argument("--with-quality", dest='with_quality', action='store_true', default=False,
                        help="include the quality of each language")
    parser.add_argument("--supported", dest='supported', default=SUPPORTED, metavar="LIST",
                        help="supported languages (comma-separated, default: $ACCEPT_LANGUAGE_SUPPORTED)")
    parser.add_argument("--supported-file", dest='supported_file', type=is_file, metavar="FILE",
                        help="JSON file with supported languages, added after --supported")
    parser.add_argument("--ordered", dest='ordered', action='store_true', default=False,
                        help="sort supported languages once and use binary search lookups")

    commands = parser.add_subparsers(dest='command', metavar='COMMAND')
    commands.required = True

    for name, summary in (('parse', 'print the languages of a header, best first'),
                          ('intersect', 'print the supported languages accepted by a header'),
                          ('best', 'print the best supported language for a header')):
        command = commands.add_parser(name, help=summary)
        command.add_argument("header", help="Accept-Language header value")

    bench = commands.add_parser('bench', help='time intersection lookups')
    bench.add_argument("-n", "--iterations", dest="iterations", type=is_positive, default=BENCH_ITERATIONS,
                       help="calls per function (default: {})".format(BENCH_ITERATIONS), metavar="N")

    fuzz = commands.add_parser('fuzz', help='feed random headers and check the results')
    fuzz.add_argument("-n", "--iterations", dest="iterations", type=is_positive, default=FUZZ_ITERATIONS,
                      help="number of headers (default: {})".format(FUZZ_ITERATIONS), metavar="N")
    fuzz.add_argument("--seed", dest="seed", type=int, default=None,
                      help="random seed (default: random)")
    fuzz.add_argument("--max-length", dest="max_length", type=is_positive, default=FUZZ_MAX_LENGTH,
                      help="maximum header length (default: {})".format(FUZZ_MAX_LENGTH), metavar="N")

    return parser.parse_args(argv)


def is_file(path):
    if not os.path.isfile(path):
        raise argparse.ArgumentTypeError("is_file:{} is not a file".format(path))
    return path


def is_positive(value):
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError("{} is not an integer".format(value))
    if n < 1:
        raise argparse.ArgumentTypeError("{} is not a positive integer".format(value))
    return n


def main(args=None):
    """The main routine."""
    if args is None:
        args = opt_args()

    runner = Runner()
    return runner.run(args)


if __name__ == '__main__':
    sys.exit(main())
