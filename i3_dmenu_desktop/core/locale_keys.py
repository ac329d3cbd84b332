"""Locale suffix candidates for localized desktop entry keys.

LC_MESSAGES value     | Candidates, highest priority first
----------------------|---------------------------------------------------
lang_COUNTRY@MODIFIER | lang_COUNTRY@MODIFIER, lang_COUNTRY, lang@MODIFIER, lang
lang_COUNTRY          | lang_COUNTRY, lang
lang@MODIFIER         | lang@MODIFIER, lang
lang                  | lang
"""

import re
from typing import List

ENCODING = re.compile(r"\.[^@]+")
COUNTRY_AND_MODIFIER = re.compile(r"_[^@]+@")
MODIFIER = re.compile(r"@.*")
COUNTRY = re.compile(r"_[^@]+")
COUNTRY_OR_MODIFIER = re.compile(r"[_@].*")


def resolve_candidates(locale_id: str) -> List[str]:
    """Return locale suffixes to try for ``Key[locale]`` entries.

    Args:
        locale_id: Raw locale such as ``en_CA.UTF-8`` or ``sr_RS@latin``

    Returns:
        Candidate suffixes ordered from highest to lowest priority

    Examples:
        >>> resolve_candidates("en_CA@Latn")
        ['en_CA@Latn', 'en_CA', 'en@Latn', 'en']
        >>> resolve_candidates("en_CA.UTF8")
        ['en_CA', 'en']
    """
    # Encoding never takes part in matching
    locale_id = ENCODING.sub("", locale_id, count=1)
    candidates = [locale_id]
    if COUNTRY_AND_MODIFIER.search(locale_id):
        candidates.append(MODIFIER.sub("", locale_id, count=1))
        candidates.append(COUNTRY.sub("", locale_id, count=1))
    lang = COUNTRY_OR_MODIFIER.sub("", locale_id, count=1)
    if lang != locale_id:
        candidates.append(lang)
    return candidates
