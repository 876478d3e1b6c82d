"""
Prefecture reference data and region label matching.
"""

import re
from typing import Optional

AGGREGATE_REGION = "全国"

# Exports label the national total row "総数"; some hand-made sheets use "全国".
AGGREGATE_KEYWORDS = ("総数", "全国")

PREFECTURES = (
    "北海道", "青森県", "岩手県", "宮城県", "秋田県", "山形県", "福島県",
    "茨城県", "栃木県", "群馬県", "埼玉県", "千葉県", "東京都", "神奈川県",
    "新潟県", "富山県", "石川県", "福井県", "山梨県", "長野県", "岐阜県",
    "静岡県", "愛知県", "三重県", "滋賀県", "京都府", "大阪府", "兵庫県",
    "奈良県", "和歌山県", "鳥取県", "島根県", "岡山県", "広島県", "山口県",
    "徳島県", "香川県", "愛媛県", "高知県", "福岡県", "佐賀県", "長崎県",
    "熊本県", "大分県", "宮崎県", "鹿児島県", "沖縄県",
)

_PREFECTURE_SET = frozenset(PREFECTURES)
_WHITESPACE = re.compile(r"\s+")


def is_aggregate_label(label: str) -> bool:
    """True when the label, with all whitespace removed, names the national total."""
    return _WHITESPACE.sub("", label or "") in AGGREGATE_KEYWORDS


def resolve_region(label: str) -> Optional[str]:
    """
    Map a raw region label to a known region.

    Args:
        label: Region label cell as read from the export

    Returns:
        Prefecture name, AGGREGATE_REGION, or None for unrecognized labels
    """
    name = (label or "").strip()
    if name in _PREFECTURE_SET:
        return name
    if is_aggregate_label(name):
        return AGGREGATE_REGION
    return None
