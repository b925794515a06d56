from typing import Any, Dict, Optional

SCORE_START = 100
SCORE_FLOOR = 40
HINT_PENALTY = 5
HINT_PENALTY_CAP = 40
NO_FEATURES_PENALTY = 20
NO_UI_PENALTY = 10


def compute_health_score(hint_count: int, feature_count: int, ui_count: int) -> int:
    score = SCORE_START
    score -= min(hint_count * HINT_PENALTY, HINT_PENALTY_CAP)
    if feature_count == 0:
        score -= NO_FEATURES_PENALTY
    if ui_count == 0:
        score -= NO_UI_PENALTY
    return max(SCORE_FLOOR, score)


def ux_quality(meta: Optional[Dict[str, Any]]) -> str:
    if not meta:
        return "Clean structure."
    total = meta.get("totalScore", 0)
    if total <= 2:
        return "Very clean, minimal structural issues."
    if total <= 6:
        return "Clean, a few minor issues found."
    if total <= 12:
        return "Structure needs light cleanup."
    return "Several issues detected, consider reorganizing."


def smart_tip(meta: Optional[Dict[str, Any]]) -> str:
    if not meta:
        return "Tip: No structural issues detected."
    if meta.get("deepNesting", 0) > 0:
        return "Tip: Flatten deep folder nesting to improve maintainability."
    if meta.get("mixedExt"):
        return "Tip: Avoid mixing JS and TS files to keep consistency."
    if meta.get("emptyFolders", 0) > 0:
        return "Tip: Remove empty folders to reduce noise."
    return "Tip: Project structure is stable, no major adjustments needed."


MOTIVATION = "Keep going, your structure is evolving! 🚀"
