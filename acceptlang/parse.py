# SPDX-License-Identifier: AGPL-3.0-or-later
import collections
import logging
import re

from .utils import normalize_tag

DEFAULT_QUALITY = 1.0

# qvalue = ( "0" [ "." 0*3DIGIT ] ) / ( "1" [ "." 0*3("0") ] )
QVALUE_RE = re.compile(r'^(?:0(?:\.[0-9]{0,3})?|1(?:\.0{0,3})?)$')

Language = collections.namedtuple('Language', 'tag quality')
Language.__doc__ = 'A language tag with the quality it was requested (or matched) with.'


def _parse_quality(param):
    name, sep, value = param.partition('=')
    if not sep or name.strip().lower() != 'q':
        raise ValueError('not a quality parameter: %r' % param)

    value = value.strip()
    if not QVALUE_RE.match(value):
        raise ValueError('invalid quality value: %r' % value)
    return float(value)


def _parse_segment(segment):
    values = segment.split(';')
    tag = normalize_tag(values[0])

    quality = DEFAULT_QUALITY
    # Accept-Language only knows the weight parameter, and only once.
    if len(values) == 2:
        quality = _parse_quality(values[1])
    elif len(values) > 2:
        raise ValueError('too many parameters')

    return Language(tag, quality)


def parse_with_quality(accept_language):
    '''Parses HTTP Accept-Language header

       https://tools.ietf.org/html/rfc7231#section-5.3.5

       Malformed entries are skipped, the rest of the header is still used.
       Never raises for str, bytes or None input.

       Returns a list of Language tuples sorted by quality (highest first),
       entries of equal quality keep their order in the header.
    '''

    if not accept_language:
        return []
    if isinstance(accept_language, (bytes, bytearray)):
        # Header values are ISO-8859-1, which decodes any byte sequence.
        accept_language = accept_language.decode('iso-8859-1')

    languages = []
    for segment in accept_language.split(','):
        if not segment.strip():
            continue

        try:
            languages.append(_parse_segment(segment))
        except ValueError as ex:
            logging.debug('skipping accept-language entry %r: %s', segment, ex)

    # sort() is stable, ties stay in header order.
    languages.sort(key=lambda language: language.quality, reverse=True)

    return languages


def parse(accept_language):
    '''Parses HTTP Accept-Language header into a list of language tags

       >>> parse('en-US, en-GB;q=0.5')
       ['en-US', 'en-GB']
    '''

    return [language.tag for language in parse_with_quality(accept_language)]
