# SPDX-License-Identifier: AGPL-3.0-or-later

WILDCARD = '*'


def split_tag(tag):
    '''Splits a language tag into its primary subtag and the remainder

       Returns a tuple of the primary subtag and everything after the first
       hyphen (None when the tag has no hyphen).
    '''

    primary, sep, rest = tag.partition('-')
    if not sep:
        return primary, None
    return primary, rest


def normalize_tag(tag):
    '''Normalizes a language tag

       The primary subtag is lowercased, everything after it is uppercased and
       kept hyphen-joined as given ('zh-hant-tw' becomes 'zh-HANT-TW'). The
       wildcard is returned unchanged.

       Raises ValueError when the primary subtag is empty.
    '''

    tag = tag.strip()
    if tag == WILDCARD:
        return tag

    primary, rest = split_tag(tag)
    if not primary:
        raise ValueError('empty primary subtag in language tag %r' % tag)

    # Skip building a new string for the common case of no region.
    if rest is None:
        return primary.lower()
    return '%s-%s' % (primary.lower(), rest.upper())


def supported_key(tag):
    '''Lookup key of a supported language, empty for invalid tags'''

    try:
        return normalize_tag(tag)
    except (ValueError, AttributeError, TypeError):
        return ''
