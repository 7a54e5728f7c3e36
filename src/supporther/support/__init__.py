"""Support helpers that read the cycle engine.

Modules:
    insights  — Mood and pain estimates, dashboard card choice
    readiness — Readiness checklist with monthly reset
    care_plan — Care-plan preferences and generated checklist
    quest     — Seven-day support quest progress
"""

from supporther.support.care_plan import CarePlan, CarePlanPreferences
from supporther.support.insights import DashboardCard, Mood, PainEstimate
from supporther.support.quest import QuestProgress
from supporther.support.readiness import ReadinessChecklist

__all__ = [
    "CarePlan",
    "CarePlanPreferences",
    "DashboardCard",
    "Mood",
    "PainEstimate",
    "QuestProgress",
    "ReadinessChecklist",
]
