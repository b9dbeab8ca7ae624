"""Repository functions for the certifications table."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from learnme.db.database import get_db

logger = structlog.get_logger(__name__)


@dataclass
class CertificationRecord:
    """Certification record from database."""

    certificate_id: str
    user_id: str
    title: str
    description: str
    language: str
    score: int
    issued_at: str
    expires_at: str | None
    certificate_url: str
    is_verified: bool


def insert_certification(
    certificate_id: str,
    user_id: str,
    title: str,
    description: str,
    language: str,
    score: int,
    certificate_url: str,
    is_verified: bool = True,
) -> CertificationRecord:
    """Insert a certification.

    Raises:
        sqlite3.IntegrityError: If the user already holds one for the language
    """
    with get_db() as conn:
        conn.execute(
            """
            INSERT INTO certifications (
                certificate_id, user_id, title, description, language,
                score, certificate_url, is_verified
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """,
            (
                certificate_id,
                user_id,
                title,
                description,
                language,
                score,
                certificate_url,
                int(is_verified),
            ),
        )
        row = conn.execute(
            "SELECT * FROM certifications WHERE certificate_id = ?", (certificate_id,)
        ).fetchone()

    logger.debug("certifications.inserted", certificate_id=certificate_id, user_id=user_id)
    return _row_to_record(row)


def get_certification(certificate_id: str) -> CertificationRecord | None:
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM certifications WHERE certificate_id = ?", (certificate_id,)
        ).fetchone()

    return _row_to_record(row) if row else None


def get_user_certification(user_id: str, language: str) -> CertificationRecord | None:
    with get_db() as conn:
        row = conn.execute(
            "SELECT * FROM certifications WHERE user_id = ? AND language = ?",
            (user_id, language),
        ).fetchone()

    return _row_to_record(row) if row else None


def list_certifications(user_id: str) -> list[CertificationRecord]:
    """Get a user's certifications, newest first."""
    with get_db() as conn:
        rows = conn.execute(
            "SELECT * FROM certifications WHERE user_id = ? ORDER BY issued_at DESC, rowid DESC",
            (user_id,),
        ).fetchall()

    return [_row_to_record(row) for row in rows]


def _row_to_record(row) -> CertificationRecord:
    return CertificationRecord(
        certificate_id=row["certificate_id"],
        user_id=row["user_id"],
        title=row["title"],
        description=row["description"],
        language=row["language"],
        score=row["score"],
        issued_at=row["issued_at"],
        expires_at=row["expires_at"],
        certificate_url=row["certificate_url"],
        is_verified=bool(row["is_verified"]),
    )
