"""Achievements, points and learner levels.

An achievement unlocks once a learner's activity reaches its requirement.
Unlocked achievements are stored, so a later drop in activity (a deleted
project, a broken streak) never takes one away.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Iterable

import structlog

from learnme.db.activity_repository import (
    count_exam_completions,
    list_unlocked_achievements,
    unlock_achievement,
)
from learnme.db.portfolio_repository import list_projects
from learnme.db.progress_repository import list_completion_dates, list_progress

logger = structlog.get_logger(__name__)

REQUIREMENT_TYPES = (
    "concepts_completed",
    "exercises_completed",
    "projects_completed",
    "time_spent",
    "streak_days",
)

# (minimum points, level), highest first
LEVEL_THRESHOLDS: tuple[tuple[int, str], ...] = (
    (1000, "diamond"),
    (500, "platinum"),
    (200, "gold"),
    (50, "silver"),
)


@dataclass(frozen=True)
class Achievement:
    id: str
    title: str
    description: str
    icon: str
    category: str
    requirement_type: str
    requirement_value: int
    points: int
    rarity: str


@dataclass
class LearnerActivity:
    """Counters the achievement requirements are checked against.

    time_spent is in minutes.
    """

    concepts_completed: int = 0
    exercises_completed: int = 0
    projects_completed: int = 0
    time_spent: int = 0
    streak_days: int = 0

    def value_for(self, requirement_type: str) -> int:
        if requirement_type not in REQUIREMENT_TYPES:
            raise ValueError(f"Unknown requirement type: {requirement_type}")
        return getattr(self, requirement_type)


@dataclass
class AchievementProgress:
    current: int
    required: int
    percentage: int


@dataclass
class AchievementSummary:
    """A learner's unlocked achievements and standing."""

    unlocked: dict[str, str]
    newly_unlocked: list[str]
    total_points: int
    level: str
    activity: LearnerActivity


ACHIEVEMENTS: tuple[Achievement, ...] = (
    # Learning
    Achievement(
        id="first-concept",
        title="First Steps",
        description="Complete your first programming concept",
        icon="🌱",
        category="learning",
        requirement_type="concepts_completed",
        requirement_value=1,
        points=10,
        rarity="common",
    ),
    Achievement(
        id="concept-master",
        title="Concept Master",
        description="Complete 10 programming concepts",
        icon="📚",
        category="learning",
        requirement_type="concepts_completed",
        requirement_value=10,
        points=50,
        rarity="rare",
    ),
    Achievement(
        id="exercise-champion",
        title="Exercise Champion",
        description="Complete 25 coding exercises",
        icon="💪",
        category="learning",
        requirement_type="exercises_completed",
        requirement_value=25,
        points=75,
        rarity="epic",
    ),
    Achievement(
        id="polyglot",
        title="Programming Polyglot",
        description="Learn concepts in 3 different programming languages",
        icon="🌍",
        category="learning",
        requirement_type="concepts_completed",
        requirement_value=15,
        points=100,
        rarity="legendary",
    ),
    # Projects
    Achievement(
        id="first-project",
        title="Project Pioneer",
        description="Complete your first project",
        icon="🚀",
        category="project",
        requirement_type="projects_completed",
        requirement_value=1,
        points=25,
        rarity="common",
    ),
    Achievement(
        id="project-master",
        title="Project Master",
        description="Complete 5 projects",
        icon="🏆",
        category="project",
        requirement_type="projects_completed",
        requirement_value=5,
        points=150,
        rarity="epic",
    ),
    Achievement(
        id="perfect-score",
        title="Perfect Score",
        description="Get a perfect score on any project",
        icon="⭐",
        category="project",
        requirement_type="projects_completed",
        requirement_value=1,
        points=50,
        rarity="rare",
    ),
    # Milestones
    Achievement(
        id="beginner-graduate",
        title="Beginner Graduate",
        description="Complete beginner level in any language",
        icon="🎓",
        category="milestone",
        requirement_type="projects_completed",
        requirement_value=1,
        points=100,
        rarity="rare",
    ),
    Achievement(
        id="intermediate-graduate",
        title="Intermediate Graduate",
        description="Complete intermediate level in any language",
        icon="🎓",
        category="milestone",
        requirement_type="projects_completed",
        requirement_value=1,
        points=200,
        rarity="epic",
    ),
    Achievement(
        id="advanced-graduate",
        title="Advanced Graduate",
        description="Complete advanced level in any language",
        icon="🎓",
        category="milestone",
        requirement_type="projects_completed",
        requirement_value=1,
        points=500,
        rarity="legendary",
    ),
    # Special
    Achievement(
        id="streak-master",
        title="Streak Master",
        description="Maintain a 7-day learning streak",
        icon="🔥",
        category="special",
        requirement_type="streak_days",
        requirement_value=7,
        points=75,
        rarity="rare",
    ),
    Achievement(
        id="dedicated-learner",
        title="Dedicated Learner",
        description="Spend 10 hours learning",
        icon="⏰",
        category="special",
        requirement_type="time_spent",
        requirement_value=600,
        points=100,
        rarity="epic",
    ),
)

_BY_ID = {achievement.id: achievement for achievement in ACHIEVEMENTS}


def get_achievement(achievement_id: str) -> Achievement | None:
    return _BY_ID.get(achievement_id)


def check_achievements(
    activity: LearnerActivity, unlocked_ids: Iterable[str] = ()
) -> list[Achievement]:
    """Achievements whose requirement is met and that aren't unlocked yet."""
    unlocked = set(unlocked_ids)
    return [
        achievement
        for achievement in ACHIEVEMENTS
        if achievement.id not in unlocked
        and activity.value_for(achievement.requirement_type) >= achievement.requirement_value
    ]


def calculate_user_level(total_points: int) -> str:
    """Map points to bronze, silver, gold, platinum or diamond."""
    for minimum, level in LEVEL_THRESHOLDS:
        if total_points >= minimum:
            return level
    return "bronze"


def get_achievement_progress(
    achievement: Achievement, activity: LearnerActivity
) -> AchievementProgress:
    current = activity.value_for(achievement.requirement_type)
    required = achievement.requirement_value
    percentage = min(current / required * 100, 100)
    return AchievementProgress(
        current=current,
        required=required,
        percentage=int(percentage + 0.5),
    )


def total_points(achievement_ids: Iterable[str]) -> int:
    return sum(_BY_ID[a].points for a in achievement_ids if a in _BY_ID)


def streak_days(days: Iterable[date], today: date | None = None) -> int:
    """Length of the run of consecutive active days ending today or yesterday.

    A streak that last saw activity yesterday is still alive: today isn't over.
    """
    if today is None:
        today = datetime.now(timezone.utc).date()

    active = set(days)
    cursor = today if today in active else today - timedelta(days=1)

    streak = 0
    while cursor in active:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def collect_activity(user_id: str) -> LearnerActivity:
    """Gather a learner's activity counters from the database.

    Time spent is not tracked server side and stays 0.
    """
    completed = [e for e in list_progress(user_id) if e.progress.completed]
    days = [date.fromisoformat(day) for day in list_completion_dates(user_id)]
    return LearnerActivity(
        concepts_completed=len(completed),
        exercises_completed=count_exam_completions(user_id),
        projects_completed=len(list_projects(user_id)),
        streak_days=streak_days(days),
    )


def refresh_achievements(user_id: str) -> AchievementSummary:
    """Unlock whatever the learner's current activity earns and summarize."""
    activity = collect_activity(user_id)
    unlocked = list_unlocked_achievements(user_id)

    newly_unlocked = []
    for achievement in check_achievements(activity, unlocked):
        unlocked[achievement.id] = unlock_achievement(user_id, achievement.id)
        newly_unlocked.append(achievement.id)

    if newly_unlocked:
        logger.info("achievements_unlocked", user_id=user_id, achievements=newly_unlocked)

    points = total_points(unlocked)
    return AchievementSummary(
        unlocked=unlocked,
        newly_unlocked=newly_unlocked,
        total_points=points,
        level=calculate_user_level(points),
        activity=activity,
    )
