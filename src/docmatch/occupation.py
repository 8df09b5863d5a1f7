"""
Flexible occupation matching.

Occupations on income certificates are free text ('รับจ้างทั่วไป',
'ค้าขายของชำ') while the profile stores whatever the applicant typed at
sign-up. Exact text rarely agrees, so related occupations are grouped.
"""

from typing import Any, List, NamedTuple

from thai_text import normalize_text


# Related occupation groups. Symmetric: order inside a group does not matter.
OCCUPATION_GROUPS: List[List[str]] = [
    # self-employed / business owner / trader / day laborer
    ['อิสระ', 'อาชีพอิสระ', 'ธุรกิจส่วนตัว', 'เจ้าของกิจการ', 'ค้าขาย', 'รับจ้าง', 'freelance'],
    # company employee / staff / hired worker
    ['บริษัท', 'พนักงาน', 'ลูกจ้าง', 'รับจ้าง'],
    # civil servant / state enterprise
    ['ข้าราชการ', 'รัฐวิสาหกิจ', 'พนักงานรัฐวิสาหกิจ'],
    # farmer / rice / field / orchard / livestock
    ['เกษตรกร', 'เกษตร', 'ทำนา', 'ทำไร่', 'ทำสวน', 'เลี้ยงสัตว์'],
]


class OccupationComparison(NamedTuple):
    match: bool
    warn: bool


def _group_hit(text: str, group: List[str]) -> bool:
    return any(term in text for term in group)


def compare_occupation(extracted: Any, profile: Any) -> OccupationComparison:
    """
    Compare two occupations.

    Equal or containing (either direction) after normalization is a match
    without warning. Sharing an occupation group is a match with warning.
    An empty side never matches.
    """
    text1 = normalize_text(extracted)
    text2 = normalize_text(profile)
    if not text1 or not text2:
        return OccupationComparison(False, False)

    if text1 == text2 or text1 in text2 or text2 in text1:
        return OccupationComparison(True, False)

    for group in OCCUPATION_GROUPS:
        if _group_hit(text1, group) and _group_hit(text2, group):
            return OccupationComparison(True, True)

    return OccupationComparison(False, False)
