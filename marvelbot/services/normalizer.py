"""
Matching-key normalization.

Card and rule names are compared without case or punctuation so that
"Get Behind Me!" matches "get behind me" and "Spider-Man" matches
"spiderman".
"""

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize(s: str) -> str:
    """
    Return the matching key for a string.

    Lower-cases, then deletes every character that is not an ASCII letter
    or digit. Whitespace and punctuation are removed, not replaced.

    Examples:
        >>> normalize("Get Behind Me!")
        'getbehindme'
        >>> normalize("1 2 3 4 5!")
        '12345'
    """
    return _NON_ALNUM.sub("", s.lower())
