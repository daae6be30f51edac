"""
Narration catalogue: every user-facing status message and crisis label.

The dashboard shows these strings verbatim in its market log, so they are
kept in one place and referenced by the engine, the policy helpers and the
tests alike.
"""

from __future__ import annotations

# crisis labels
RESERVES_CRISIS = "外貨準備枯渇"
CONFIDENCE_CRISIS = "信認危機"

# session
WELCOME = "準備完了。自動再生を押して、流れを追いかけてみてください。"

# engine (one tick)
MARKET_CAUTIOUS = "市場は慎重に推移しています。"
CONTROLS_DAMPEN = "資本規制により流出がやや抑制されています。"
RESERVES_CRISIS_ENTRY = "外貨準備が尽きかけたため、変動相場へ移行しました。"
CONFIDENCE_CRISIS_ENTRY = "投資家の信認が急落し、通貨危機が迫っています。"
CRISIS_RECOVERY = "外貨準備と信認が回復し、危機モードを脱しました。"

# policy levers
RATE_RAISED = "政策金利を引き上げました。"
RATE_LOWERED = "政策金利を引き下げました。"
SHOCK_GLOBAL_RATE = "米国の利上げショック。安全資産への資金逃避が起きています。"
SHOCK_PANIC = "ニュースで投資家心理が急落しました。"
SHOCK_RESERVES = "輸入コスト上昇で外貨準備が削られました。"
REGIME_TO_FLOAT = "固定相場を終了し、変動相場へ移行しました。"
REGIME_TO_PEG = "再びドルペッグへ戻しました。"
CONTROLS_ON = "資本規制を導入し、フローを絞りました。"
CONTROLS_OFF = "資本規制を解除しました。"
RESERVES_ACCUMULATED = "外貨準備を積み増しました。"
DEBT_REFINANCED = "借換で外貨債務を圧縮しました。"
MARKET_WATCH = "市場は様子見しています。"


def format_number(value: float) -> str:
    """Thousands separator, at most one decimal digit, no trailing ``.0``."""
    text = f"{value:,.1f}"
    if text.endswith(".0"):
        text = text[:-2]
    if text == "-0":
        text = "0"
    return text


def reserves_adjusted(new: float, old: float) -> str:
    direction = "積み増しました" if new >= old else "取り崩しました"
    return f"外貨準備を{direction}（{format_number(new)} 億$）。"


def debt_adjusted(new: float, old: float) -> str:
    direction = "積み上がっています" if new >= old else "圧縮しました"
    return f"外貨建て債務が{direction}（{format_number(new)} 億$）。"
