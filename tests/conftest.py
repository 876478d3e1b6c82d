"""
Shared export fixtures.
"""

import pytest


def _csv(rows):
    return "\r\n".join(",".join(row) for row in rows) + "\r\n"


@pytest.fixture
def teiten_rows():
    """Current-week multi-disease table as delivered in the export."""
    return [
        ["2025年12週 定点把握疾患 報告数"],
        ["集計日", "2025/03/25"],
        ["都道府県", "インフルエンザ", "", "新型コロナウイルス感染症(COVID-19)", ""],
        ["", "報告", "定当", "報告", "定当"],
        ["総数", "4000", "8.12", "2500", "5.01"],
        ["北海道", "150", "6.5", "90", "3.2"],
        ["東京都", "600", "15.2", "300", "-"],
        ["不明", "1", "0.1", "1", "0.1"],
    ]


@pytest.fixture
def ari_rows():
    return [
        ["2025年12週 急性呼吸器感染症"],
        ["集計日", "2025/03/25"],
        ["都道府県", "ARI"],
        ["", "報告", "定当"],
        ["総数", "300000", "85.4"],
        ["北海道", "12000", "70.1"],
        ["沖縄県", "3000", "x"],
    ]


@pytest.fixture
def tougai_rows():
    """Year-to-date history with an Influenza and a COVID-19 block."""
    return [
        ["2025年 週別 定点当たり報告数"],
        ["インフルエンザ"],
        ["", "1週", "", "2週", ""],
        ["", "報告", "定当", "報告", "定当"],
        ["総数", "100", "1.5", "200", "2.5"],
        ["北海道", "5", "0.5", "6", "x"],
        ["COVID-19"],
        ["", "1週", "2週"],
        ["", "定当", "定当"],
        ["総数", "3", "4"],
        ["東京都", "1"],
        ["", "注記"],
        ["東京都", "9", "9"],
    ]


@pytest.fixture
def teiten_text(teiten_rows):
    return _csv(teiten_rows)


@pytest.fixture
def ari_text(ari_rows):
    return _csv(ari_rows)


@pytest.fixture
def tougai_text(tougai_rows):
    # Blank lines between blocks are dropped by the tokenizer.
    return _csv(tougai_rows[:6]) + "\r\n\r\n" + _csv(tougai_rows[6:])
