# SPDX-License-Identifier: AGPL-3.0-or-later
"""Intersection of client language preferences and supported languages.

A preference without region ('en') matches every supported language with the
same primary subtag ('en', 'en-US', 'en-GB'). A preference with region
('en-US') matches only the same tag, or as a fallback the bare primary subtag
('en') when the exact tag is not supported. The wildcard matches everything.

Within a group of preferences of equal quality, exact and language matches
come first (in preference order), then fallbacks, then wildcard matches.
Preferences with a quality of 0 match like any other, paired with 0.0.

Supported languages are returned as given by the caller, compared case
insensitive.
"""
import bisect
import collections.abc
import itertools
import logging
import operator

from .parse import Language, parse_with_quality
from .utils import WILDCARD, normalize_tag, split_tag, supported_key


def _preferences(preferences):
    if preferences is None or isinstance(preferences, (str, bytes, bytearray)):
        return parse_with_quality(preferences)

    languages = []
    for preference in preferences:
        try:
            tag, quality = preference
            quality = float(quality)
            if not 0.0 <= quality <= 1.0:
                raise ValueError('quality out of range: %r' % quality)
            languages.append(Language(normalize_tag(tag), quality))
        except (ValueError, AttributeError, TypeError):
            logging.debug('skipping invalid language preference %r', preference)
    return languages


def _sequence(supported):
    if isinstance(supported, str):
        return (supported,)
    if isinstance(supported, collections.abc.Sequence):
        return supported
    return tuple(supported)


class _Index:
    """Lookup of supported languages by normalized tag.

    Lookups yield positions into the supported sequence, in sequence order.
    """

    def __init__(self, supported):
        self.supported = _sequence(supported)

    def exact(self, key):
        raise NotImplementedError

    def language(self, primary):
        raise NotImplementedError

    def all(self):
        raise NotImplementedError

    def specific(self, tag):
        primary, rest = split_tag(tag)
        if rest is None:
            yield from self.language(primary)
        else:
            yield from self.exact(tag)

    def fallback(self, tag):
        primary, rest = split_tag(tag)
        if rest is None:
            return
        for _ in self.exact(tag):
            return
        yield from self.exact(primary)


class LinearIndex(_Index):
    """Scans the supported languages in the order given."""

    def __init__(self, supported):
        super().__init__(supported)
        self.keys = [supported_key(tag) for tag in self.supported]

    def exact(self, key):
        for position, candidate in enumerate(self.keys):
            if candidate == key:
                yield position

    def language(self, primary):
        prefix = primary + '-'
        for position, candidate in enumerate(self.keys):
            if candidate == primary or candidate.startswith(prefix):
                yield position

    def all(self):
        for position, candidate in enumerate(self.keys):
            if candidate:
                yield position


class SortedIndex(_Index):
    """Binary search over supported languages sorted with sort_supported().

    The sort order is not verified. Results for an unsorted sequence are
    unspecified.
    """

    def _key(self, position):
        return supported_key(self.supported[position])

    def exact(self, key):
        position = bisect.bisect_left(self.supported, key, key=supported_key)
        while position < len(self.supported) and self._key(position) == key:
            yield position
            position += 1

    def language(self, primary):
        # The bare tag sorts before its regional variants.
        yield from self.exact(primary)
        yield from self.prefixed(primary + '-')

    def prefixed(self, prefix):
        position = bisect.bisect_left(self.supported, prefix, key=supported_key)
        while position < len(self.supported) and self._key(position).startswith(prefix):
            yield position
            position += 1

    def all(self):
        for position in range(len(self.supported)):
            if self._key(position):
                yield position


def _tier_positions(tier, index):
    specific = [language for language in tier if language.tag != WILDCARD]

    for language in specific:
        yield from index.specific(language.tag)
    for language in specific:
        yield from index.fallback(language.tag)
    if len(specific) != len(tier):
        yield from index.all()


def iter_matches(preferences, index):
    """Yields matching supported languages as Language tuples, best first.

    Each supported language is yielded once, with the quality of the first
    preference that matched it.
    """

    preferences = _preferences(preferences)
    if not preferences or not index.supported:
        return

    seen = set()
    for quality, tier in itertools.groupby(preferences, key=operator.attrgetter('quality')):
        for position in _tier_positions(list(tier), index):
            tag = index.supported[position]
            if tag in seen:
                continue
            seen.add(tag)
            yield Language(tag, quality)


def sort_supported(supported):
    '''Sorts supported languages for use with the *_ordered functions'''

    return sorted(_sequence(supported), key=supported_key)


def intersection_with_quality(preferences, supported):
    '''Supported languages acceptable to the client, with their quality

       preferences is either a raw Accept-Language header or a sorted list of
       (tag, quality) pairs such as returned by parse_with_quality().

       Returns a list of Language tuples holding the supported language (as
       given) and the quality of the preference it matched.
    '''

    return list(iter_matches(preferences, LinearIndex(supported)))


def intersection(preferences, supported):
    '''Supported languages acceptable to the client, best first

       >>> intersection('en-US, en-GB;q=0.5', ['en-US', 'de', 'en-GB'])
       ['en-US', 'en-GB']
    '''

    return [language.tag for language in iter_matches(preferences, LinearIndex(supported))]


def best_match(preferences, supported, default=None):
    '''The single best supported language, or default when nothing matches'''

    for language in iter_matches(preferences, LinearIndex(supported)):
        return language.tag
    return default


def intersection_ordered_with_quality(preferences, supported):
    '''Like intersection_with_quality() for supported sorted with sort_supported()'''

    return list(iter_matches(preferences, SortedIndex(supported)))


def intersection_ordered(preferences, supported):
    '''Like intersection() for supported sorted with sort_supported()

       Uses binary search instead of scanning the supported languages. The
       sort order is a precondition and is not checked.
    '''

    return [language.tag for language in iter_matches(preferences, SortedIndex(supported))]


def best_match_ordered(preferences, supported, default=None):
    '''Like best_match() for supported sorted with sort_supported()'''

    for language in iter_matches(preferences, SortedIndex(supported)):
        return language.tag
    return default
