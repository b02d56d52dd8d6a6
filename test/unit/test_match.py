# SPDX-License-Identifier: AGPL-3.0-or-later

import pytest

from acceptlang import (best_match, best_match_ordered, intersection,
                        intersection_ordered, intersection_ordered_with_quality,
                        intersection_with_quality, parse_with_quality,
                        sort_supported)


def test_intersection():
    assert intersection('en-US, en-GB;q=0.5', ['en-US', 'de', 'en-GB']) == ['en-US', 'en-GB']


def test_intersection_with_quality():
    assert intersection_with_quality('en-US, en-GB;q=0.5', ['en-US', 'de', 'en-GB']) == [('en-US', 1.0), ('en-GB', 0.5)]


def test_intersection_language_list(header, supported):
    assert intersection(header, supported) == ['en-US', 'zh-Hant', 'de', 'jp']


def test_no_intersection(header):
    assert intersection(header, ['fr', 'en-GB']) == []
    assert intersection('fr', ['en-US', 'de']) == []


def test_language_matches_all_regions():
    assert intersection('en', ['en-US', 'en-GB']) == ['en-US', 'en-GB']
    assert intersection('en', ['en-GB', 'de', 'en', 'en-US']) == ['en-GB', 'en', 'en-US']


def test_returns_supported_tags_as_given():
    assert intersection('en-us', ['EN-US']) == ['EN-US']
    assert intersection('ZH-hant', ['zh-Hant']) == ['zh-Hant']


def test_region_fallback():
    assert intersection('en-AU', ['en-US', 'en']) == ['en']
    assert intersection('en-US', ['en', 'en-US']) == ['en-US']


def test_region_fallback_after_exact_matches():
    assert intersection('en-AU, de', ['en', 'de']) == ['de', 'en']
    assert intersection('en-AU, en-US', ['en', 'en-US']) == ['en-US', 'en']


def test_region_fallback_beats_lower_quality():
    assert best_match('en-AU, de;q=0.5', ['de', 'en']) == 'en'


def test_wildcard():
    assert intersection_with_quality('fr, *;q=0.5', ['de', 'fr', 'en']) == [('fr', 1.0), ('de', 0.5), ('en', 0.5)]


def test_wildcard_after_specific_preferences():
    assert intersection('*, en', ['de', 'en']) == ['en', 'de']


def test_zero_quality():
    assert intersection_with_quality('en;q=0', ['en']) == [('en', 0.0)]
    assert intersection_with_quality('*;q=0', ['en']) == [('en', 0.0)]
    assert intersection('*, en;q=0', ['en', 'de']) == ['en', 'de']
    assert intersection_with_quality('en-US, en;q=0', ['en-US', 'en']) == [('en-US', 1.0), ('en', 0.0)]


def test_each_language_once():
    assert intersection_with_quality('en, en-US;q=0.5', ['en-US']) == [('en-US', 1.0)]
    assert intersection('de', ['de', 'de']) == ['de']


@pytest.mark.parametrize('accept_language, languages', [
    ('', ['en']),
    (None, ['en']),
    ('en', []),
    ('garbage;;;', ['en']),
])
def test_empty(accept_language, languages):
    assert intersection(accept_language, languages) == []
    assert best_match(accept_language, languages) is None


def test_best_match(header, supported):
    assert best_match(header, supported) == 'en-US'
    assert best_match('en', ['en-GB', 'en-US']) == 'en-GB'
    assert best_match('en', ['en-GB', 'en']) == 'en-GB'
    assert best_match('fr', ['en']) is None
    assert best_match('fr', ['en'], default='en') == 'en'


def test_parsed_preferences():
    assert intersection(parse_with_quality('de, en;q=0.5'), ['en', 'de']) == ['de', 'en']
    assert intersection([('EN-us', 1.0)], ['en-US']) == ['en-US']
    assert intersection([('', 1.0), (None, 1.0), ('de', 0.5)], ['de']) == ['de']


@pytest.mark.parametrize('preferences, expected', [
    ([('en', 1.0), ('de',)], [('en', 1.0)]),
    ([('de', 'high')], []),
    ([('en', 5.0), ('de', 0.5)], [('de', 0.5)]),
    ([('en', -1), ('de', 0.5)], [('de', 0.5)]),
    ([('en', float('nan')), ('de', 0.5)], [('de', 0.5)]),
    ([42, ('de', 0.5)], [('de', 0.5)]),
    ([('de', 0.5, 'extra')], []),
])
def test_invalid_parsed_preferences_are_skipped(preferences, expected):
    assert intersection_with_quality(preferences, ['en', 'de']) == expected


def test_parsed_preference_quality_text():
    assert intersection_with_quality([('en', '0.5')], ['en']) == [('en', 0.5)]


def test_supported_iterables():
    assert intersection('de', (tag for tag in ['en', 'de'])) == ['de']
    assert intersection('de', 'de') == ['de']
    assert intersection('*', ['', None, 'de']) == ['de']


def test_sort_supported():
    assert sort_supported(['en-US', 'de', 'EN', 'en-GB']) == ['de', 'EN', 'en-GB', 'en-US']


def test_intersection_ordered(header, supported):
    languages = sort_supported(supported)
    assert intersection_ordered(header, languages) == ['en-US', 'zh-Hant', 'de', 'jp']
    assert intersection_ordered(header, ['en-GB', 'fr']) == []
    assert intersection_ordered('en-US, en-GB;q=0.5', ['de', 'en-GB', 'en-US']) == ['en-US', 'en-GB']


def test_intersection_ordered_with_quality():
    languages = sort_supported(['en-US', 'de', 'en-GB'])
    assert intersection_ordered_with_quality('en-US, en-GB;q=0.5', languages) == [('en-US', 1.0), ('en-GB', 0.5)]


def test_best_match_ordered():
    languages = sort_supported(['en-US', 'en-GB', 'de'])
    assert best_match_ordered('en', languages) == 'en-GB'
    assert best_match_ordered('fr', languages) is None
    assert best_match_ordered('fr', languages, default='de') == 'de'
    assert best_match_ordered('en', []) is None


@pytest.mark.parametrize('accept_language', [
    'en',
    'en-AU, de;q=0.5',
    '*;q=0.1, fr',
    'zh, en-GB;q=0.9',
    '*, en;q=0',
    'es-AR, zh-hans',
    'xx',
])
def test_ordered_matches_linear(accept_language, supported):
    languages = sort_supported(supported + ['en-GB', 'EN-au', 'zh-TW'])
    assert intersection_ordered_with_quality(accept_language, languages) == intersection_with_quality(accept_language, languages)
    assert best_match_ordered(accept_language, languages) == best_match(accept_language, languages)
