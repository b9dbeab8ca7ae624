"""Learning-path recommender.

Maps free text (typically the Dev assistant's reply) to one of the
predefined learning paths by scanning an ordered keyword table.

Matching is plain case-insensitive substring containment and the first rule
with a hit wins, so rule order matters: "html" sends a reply to frontend
even if it also mentions "backend".
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PathRule:
    """A recommendable path and the keywords that select it."""

    slug: str
    title: str
    description: str
    languages: tuple[str, ...]
    keywords: tuple[str, ...]


@dataclass
class PathRecommendation:
    """Recommended path returned alongside a chat reply."""

    path_slug: str
    path_title: str
    path_description: str
    languages: list[str] = field(default_factory=list)
    matched_keyword: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "pathSlug": self.path_slug,
            "pathTitle": self.path_title,
            "pathDescription": self.path_description,
            "languages": list(self.languages),
        }


# Ordered: first match wins
PATH_RULES: tuple[PathRule, ...] = (
    PathRule(
        slug="frontend-development",
        title="Frontend Development",
        description="Master the art of creating beautiful, interactive user interfaces",
        languages=("html", "css", "javascript", "react"),
        keywords=("frontend", "website", "html", "css"),
    ),
    PathRule(
        slug="web-development",
        title="Web Development",
        description="Master modern web development from frontend to backend",
        languages=("html", "css", "javascript", "react", "nodejs", "sql"),
        keywords=("full stack", "web app", "backend"),
    ),
    PathRule(
        slug="mobile-development",
        title="Mobile Development",
        description="Build native and cross-platform mobile applications",
        languages=("react-native", "flutter", "swift", "kotlin"),
        keywords=("mobile", "app", "ios", "android"),
    ),
    PathRule(
        slug="data-science-analytics",
        title="Data Science & Analytics",
        description="Machine learning, data analysis, and artificial intelligence",
        languages=("python", "sql", "tensorflow", "pandas"),
        keywords=("data", "analytics", "machine learning"),
    ),
    PathRule(
        slug="ai-machine-learning",
        title="AI & Machine Learning",
        description="Create intelligent systems and predictive models",
        languages=("python", "tensorflow", "pytorch", "scikit-learn"),
        keywords=("ai", "artificial intelligence", "neural network"),
    ),
    PathRule(
        slug="game-development",
        title="Game Development",
        description="Create 2D and 3D games for multiple platforms",
        languages=("csharp", "cpp", "javascript", "unity"),
        keywords=("game", "unity", "unreal"),
    ),
    PathRule(
        slug="backend-development",
        title="Backend Development",
        description="Server-side programming and database management",
        languages=("python", "java", "nodejs", "sql"),
        keywords=("backend", "server", "api"),
    ),
    PathRule(
        slug="devops-cloud",
        title="DevOps & Cloud",
        description="Infrastructure, deployment, and cloud computing",
        languages=("bash", "docker", "kubernetes", "terraform"),
        keywords=("devops", "cloud", "deploy"),
    ),
    PathRule(
        slug="scripting-automation",
        title="Scripting & Automation",
        description="Automate tasks and build powerful tools",
        languages=("python", "bash", "powershell"),
        keywords=("automate", "script", "tools"),
    ),
    PathRule(
        slug="systems-programming",
        title="Systems Programming",
        description="Low-level programming and operating system development",
        languages=("c", "cpp", "rust", "assembly"),
        keywords=("system", "low level", "performance"),
    ),
    PathRule(
        slug="testing",
        title="Testing",
        description="Master software testing from fundamentals to automation",
        languages=("testing-fundamentals", "selenium", "postman"),
        keywords=("test", "quality", "qa"),
    ),
)

# Used when nothing matches; note the shorter language list
DEFAULT_RECOMMENDATION = PathRecommendation(
    path_slug="frontend-development",
    path_title="Frontend Development",
    path_description="Master the art of creating beautiful, interactive user interfaces",
    languages=["html", "css", "javascript"],
)


def recommend_path(text: str) -> PathRecommendation:
    """Pick the learning path that best fits a piece of text.

    Args:
        text: Free text, usually an AI reply

    Returns:
        PathRecommendation for the first matching rule, or the default
    """
    lowered = text.lower()

    for rule in PATH_RULES:
        for keyword in rule.keywords:
            if keyword in lowered:
                logger.debug("path_recommended", slug=rule.slug, keyword=keyword)
                return PathRecommendation(
                    path_slug=rule.slug,
                    path_title=rule.title,
                    path_description=rule.description,
                    languages=list(rule.languages),
                    matched_keyword=keyword,
                )

    return PathRecommendation(
        path_slug=DEFAULT_RECOMMENDATION.path_slug,
        path_title=DEFAULT_RECOMMENDATION.path_title,
        path_description=DEFAULT_RECOMMENDATION.path_description,
        languages=list(DEFAULT_RECOMMENDATION.languages),
    )


def list_recommendable_paths() -> list[PathRule]:
    return list(PATH_RULES)
