import os

import pytest

from app.core.pattern import PatternData, PatternHandle


def straight_pattern(rows: int = 16, threads: int = 16, shafts: int = 4) -> PatternData:
    draw = {i: frozenset({(i - 1) % shafts + 1}) for i in range(1, max(rows, threads) + 1)}
    return PatternData(
        warp_threads=threads,
        weft_threads=rows,
        shafts=shafts,
        treadles=shafts,
        threading={i: s for i, s in draw.items() if i <= threads},
        treadling={i: s for i, s in draw.items() if i <= rows},
        liftplan={i: s for i, s in draw.items() if i <= rows},
    )


@pytest.fixture
def make_handle():
    def _make(rows: int = 16, threads: int = 16) -> PatternHandle:
        return PatternHandle(straight_pattern(rows, threads))
    return _make


SAMPLE_WIF = """\
[WIF]
Version=1.1
Date=April 20, 1997
Developers=wif@mhsoft.com
Source Program=Test Suite

[CONTENTS]
COLOR PALETTE=yes
TEXT=yes
WEAVING=yes
WARP=yes
WEFT=yes
COLOR TABLE=yes
THREADING=yes
TIEUP=yes
TREADLING=yes
WARP COLORS=yes

[TEXT]
Title=Test Twill
Author=A. Weaver

[WEAVING]
Shafts=4
Treadles=4
Rising Shed=yes

[WARP]
Threads=8
Color=1

[WEFT]
Threads=6
Color=2

[COLOR PALETTE]
Entries=2
Form=RGB
Range=0,999

[COLOR TABLE]
1=0,0,0
2=999,999,999

[THREADING]
1=1
2=2
3=3
4=4
5=1
6=2
7=3
8=4

[TIEUP]
1=1,2
2=2,3
3=3,4
4=4,1

[TREADLING]
1=1
2=2
3=3
4=4
5=1

[WARP COLORS]
1=2
"""


@pytest.fixture
def sample_wif(tmp_path):
    path = tmp_path / "twill.wif"
    path.write_text(SAMPLE_WIF, encoding="utf-8")
    return path


@pytest.fixture(scope="session")
def qt_app():
    """One QApplication for every Qt test; widgets render offscreen."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    widgets = pytest.importorskip("PySide6.QtWidgets")
    return widgets.QApplication.instance() or widgets.QApplication([])
