# SPDX-License-Identifier: AGPL-3.0-or-later
import logging
import random
import sys
import time

import ujson
from jsonschema import ValidationError

from acceptlang import (best_match, best_match_ordered, intersection,
                        intersection_ordered,
                        intersection_ordered_with_quality,
                        intersection_with_quality, normalize_tag,
                        parse_with_quality, sort_supported)
from acceptlang.cli.schema import schema_validator

try:
    import colorlog
    COLORLOG = True
except ImportError:
    COLORLOG = False

"""
Command line front end

Parses headers and intersects them with a configured set of supported
languages, and carries the benchmark and fuzz harnesses for the library.

"""

BENCH_HEADER = 'en-US, de;q=0.7, zh-Hant, jp;q=0.1'
BENCH_LANGUAGES = (
    'aa', 'ab', 'ae', 'af', 'ak', 'am', 'an', 'ar', 'as', 'av', 'ay', 'az', 'ba', 'be', 'bg',
    'bh', 'bi', 'bm', 'bn', 'bo', 'br', 'bs', 'ca', 'ce', 'ch', 'co', 'cr', 'cs', 'cu', 'cv',
    'cy', 'da', 'de', 'dv', 'dz', 'ee', 'el', 'en', 'en-UK', 'en-US', 'eo', 'es', 'es-ar',
    'et', 'eu', 'fa', 'ff', 'fi', 'fj', 'fo', 'fr', 'fy', 'ga', 'gd', 'gl', 'gn', 'gu', 'gv',
    'ha', 'he', 'hi', 'ho', 'hr', 'ht', 'hu', 'hy', 'hz', 'ia', 'id', 'ie', 'ig', 'ii',
    'ik', 'in', 'io', 'is', 'it', 'iu', 'ja', 'jp', 'jv', 'ka', 'kg', 'ki', 'kj', 'kk',
    'kl', 'km', 'kn', 'ko', 'kr', 'ks', 'ku', 'kv', 'kw', 'ky', 'la', 'lb', 'lg', 'li',
    'ln', 'lo', 'lt', 'lu', 'lv', 'mg', 'mh', 'mi', 'mk', 'ml', 'mn', 'mo', 'mr', 'ms', 'mt',
    'my', 'na', 'nb', 'nd', 'ne', 'ng', 'nl', 'nn', 'no', 'nr', 'nv', 'ny', 'oc', 'oj', 'om',
    'or', 'os', 'pa', 'pi', 'pl', 'ps', 'pt', 'qu', 'rm', 'rn', 'ro', 'ru', 'rw', 'sa', 'sd',
    'se', 'sg', 'sh', 'si', 'sk', 'sl', 'sm', 'sn', 'so', 'sq', 'sr', 'ss', 'st', 'su',
    'sv', 'sw', 'ta', 'te', 'tg', 'th', 'ti', 'tk', 'tl', 'tn', 'to', 'tr', 'ts', 'tt', 'tw',
    'ty', 'ug', 'uk', 'ur', 'uz', 've', 'vi', 'vo', 'wa', 'wo', 'xh', 'yi', 'yo', 'za', 'zh',
    'zh-Hans', 'zh-Hant', 'zu',
)

LOG_HANDLER = 'acceptlang'

# Characters which exercise the header delimiters and quality parsing.
FUZZ_ALPHABET = 'enUSdeZH-*;,=q.019 \t_xé'


def dumps_json(obj):
    return ujson.dumps(obj, indent=2, ensure_ascii=False, escape_forward_slashes=False)


def load_supported(path):
    """Load supported languages from a JSON file.

    Args:
        path (str): file holding a list of tags, or an object with a
            "languages" list.

    Returns:
        List: supported language tags in priority order.

    Raises:
        ValueError: when the file is not valid JSON.
        ValidationError: when the JSON does not match the schema.
    """
    with open(path, 'rb') as f:
        data = ujson.loads(f.read().decode('utf-8'))

    schema_validator.validate(data)
    if isinstance(data, dict):
        data = data['languages']
    return data


def check_invariants(header, supported):
    """Returns a list of problems found in the results for header."""
    problems = []

    languages = parse_with_quality(header)
    for previous, language in zip(languages, languages[1:]):
        if language.quality > previous.quality:
            problems.append('not sorted by quality: %r before %r' % (previous, language))
    for language in languages:
        if not 0.0 <= language.quality <= 1.0:
            problems.append('quality out of range: %r' % (language,))
        if normalize_tag(language.tag) != language.tag:
            problems.append('tag not normalized: %r' % (language.tag,))

    matches = intersection(header, supported)
    for tag in matches:
        if tag not in supported:
            problems.append('match not supported: %r' % (tag,))
    if len(set(matches)) != len(matches):
        problems.append('duplicate matches: %r' % (matches,))
    best = best_match(header, supported)
    if best != (matches[0] if matches else None):
        problems.append('best match %r is not the first match of %r' % (best, matches))

    return problems


class Runner:
    def __init__(self, out=None):
        self.out = out or sys.stdout

    def init_logging(self, log_level, log_timestamp=True):
        numeric_level = getattr(logging, log_level.upper(), None)
        if not isinstance(numeric_level, int):
            raise ValueError('Invalid log level: %s' % log_level)

        fmt = '%(levelname)-8s %(message)s'
        if log_timestamp:
            fmt = '%(asctime)s ' + fmt

        # This is the handler for all log records.
        if COLORLOG:
            handler = colorlog.StreamHandler()
            handler.setFormatter(colorlog.ColoredFormatter('%(log_color)s' + fmt))
        else:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(fmt))

        handler.set_name(LOG_HANDLER)

        root = logging.getLogger()
        root.setLevel(numeric_level)
        # Replace the handler of an earlier call, keep foreign ones.
        for existing in [h for h in root.handlers if h.get_name() == LOG_HANDLER]:
            root.removeHandler(existing)
        root.addHandler(handler)

        # Send all warnings to logging.
        logging.captureWarnings(True)

    def write(self, line):
        self.out.write(line + '\n')

    def write_languages(self, languages, args):
        if args.json:
            if args.with_quality:
                self.write(dumps_json([list(language) for language in languages]))
            else:
                self.write(dumps_json([language.tag for language in languages]))
            return

        for language in languages:
            if args.with_quality:
                self.write('%s;q=%s' % (language.tag, language.quality))
            else:
                self.write(language.tag)

    def get_supported(self, args):
        supported = []
        if args.supported:
            supported.extend(tag.strip() for tag in args.supported.split(',') if tag.strip())
        if args.supported_file:
            try:
                supported.extend(load_supported(args.supported_file))
            except (OSError, ValueError, ValidationError) as ex:
                logging.error("invalid supported languages file '%s': %s", args.supported_file, ex)
                return None
        if args.ordered:
            supported = sort_supported(supported)
        return supported

    def run_parse(self, args):
        self.write_languages(parse_with_quality(args.header), args)
        return 0

    def run_intersect(self, args):
        supported = self.get_supported(args)
        if supported is None:
            return 1
        if not supported:
            logging.warning('no supported languages configured, intersection is always empty')

        if args.ordered:
            languages = intersection_ordered_with_quality(args.header, supported)
        else:
            languages = intersection_with_quality(args.header, supported)
        self.write_languages(languages, args)
        return 0

    def run_best(self, args):
        supported = self.get_supported(args)
        if supported is None:
            return 1
        if args.ordered:
            tag = best_match_ordered(args.header, supported)
        else:
            tag = best_match(args.header, supported)

        if tag is None:
            logging.info("no supported language matches '%s'", args.header)
            return 1

        self.write(dumps_json(tag) if args.json else tag)
        return 0

    def run_bench(self, args):
        supported = sort_supported(BENCH_LANGUAGES)
        results = {}
        for name, func in (('intersection', intersection), ('intersection_ordered', intersection_ordered)):
            start = time.perf_counter()
            for _ in range(args.iterations):
                func(BENCH_HEADER, supported)
            elapsed = time.perf_counter() - start
            results[name] = elapsed / args.iterations * 1e6
            logging.debug('%s: %d iterations in %.3fs', name, args.iterations, elapsed)

        if args.json:
            self.write(dumps_json(results))
        else:
            for name, usec in results.items():
                self.write('%-22s %10.2f us/call' % (name, usec))
        return 0

    def fuzz_headers(self, rnd, args):
        for n in range(args.iterations):
            length = rnd.randint(0, args.max_length)
            if n % 2:
                yield bytes(rnd.getrandbits(8) for _ in range(length))
            else:
                yield ''.join(rnd.choice(FUZZ_ALPHABET) for _ in range(length))

    def run_fuzz(self, args):
        seed = args.seed if args.seed is not None else random.randrange(2 ** 32)
        rnd = random.Random(seed)
        supported = list(BENCH_LANGUAGES) + ['*']

        failures = 0
        for header in self.fuzz_headers(rnd, args):
            try:
                problems = check_invariants(header, supported)
            except Exception:
                logging.exception('unhandled exception for header %r', header)
                failures += 1
                continue

            for problem in problems:
                logging.error('header %r: %s', header, problem)
            if problems:
                failures += 1

        logging.info('fuzzed %d headers with seed %s, %d failures', args.iterations, seed, failures)
        if args.json:
            self.write(dumps_json({'iterations': args.iterations, 'seed': seed, 'failures': failures}))
        return 1 if failures else 0

    def run(self, args):
        # Initialize logging, keep this at the beginning!
        self.init_logging(args.log_level, log_timestamp=args.log_timestamp)

        command = getattr(self, 'run_%s' % args.command)
        return command(args)
