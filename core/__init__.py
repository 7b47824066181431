"""Ядро спільних (SSOT) утиліт проєкту.

Цей пакет містить лише загальні, доменно-нейтральні будівельні блоки:
- обхід графа значень з детекцією циклів (`traversal`);
- bounded-серіалізацію у JSON-подібний текст (`serialization`);
- сегментацію тексту regex-правилами (`segmentation`);
- форматтери, текстові утиліти та аналітику записів для UI;
- контракти (TypedDict) результатів.

Рендеринг (Rich) має жити в `UI/`, CLI — у `tools/`.
"""

from __future__ import annotations

from . import formatters as formatters
from . import insights as insights
from . import segmentation as segmentation
from . import serialization as serialization
from . import text as text
from . import traversal as traversal

__all__ = [
    "formatters",
    "insights",
    "segmentation",
    "serialization",
    "text",
    "traversal",
]
