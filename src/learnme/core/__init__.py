"""Core business logic.

Modules:
- path_recommender: Keyword matcher from chat replies to learning paths
- smart_hints: Rule-based code hints
- code_runner: Simulated code execution
- code_verifier: Lesson test-case checks
- certificates: Eligibility, issuing and verification
- resume: Resume data and HTML
- challenges: Exams, freestyle projects and trophies
- dev_chat: Dev assistant conversations
- teaching: Tutoring intent analysis and prompts
- achievements: Achievements, points and levels
- error_analysis: Error explanations for learners
"""

__all__ = [
    "path_recommender",
    "smart_hints",
    "code_runner",
    "code_verifier",
    "certificates",
    "resume",
    "challenges",
    "dev_chat",
    "teaching",
    "achievements",
    "error_analysis",
]
