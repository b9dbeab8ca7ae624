"""Course completion certificates.

A learner may claim one certificate per language once they have completed
at least the configured share (80% by default) of that language's lessons.
Certificates are stored as verified and can be checked publicly by id.
"""

from __future__ import annotations

import random
import string
import time
from dataclasses import asdict, dataclass
from datetime import date

import structlog

from learnme.config import load_app_config
from learnme.core.rendering import render_template
from learnme.db.catalog_repository import count_lessons, get_language_by_slug
from learnme.db.certifications_repository import (
    CertificationRecord,
    get_certification,
    get_user_certification,
    insert_certification,
)
from learnme.db.progress_repository import completion_for_language
from learnme.db.users_repository import UserRecord
from learnme.utils.text_utils import iso_date

logger = structlog.get_logger(__name__)

BASE36 = string.digits + string.ascii_lowercase


class CertificateError(Exception):
    """Base error for certificate operations."""

    pass


class CertificateExistsError(CertificateError):
    """The user already holds a certificate for this language."""

    def __init__(self, certificate: CertificationRecord):
        self.certificate = certificate
        super().__init__("Certificate already exists for this language")


class InsufficientCompletionError(CertificateError):
    """Completion is below the required threshold."""

    def __init__(self, required: int, current: int):
        self.required = required
        self.current = current
        super().__init__("Insufficient completion rate")


class CertificateNotFoundError(CertificateError):
    pass


class CertificateNotVerifiedError(CertificateError):
    pass


@dataclass
class Eligibility:
    eligible: bool
    completion_percentage: int
    required: int
    completed_lessons: int
    total_lessons: int

    def to_dict(self) -> dict[str, object]:
        return {
            "eligible": self.eligible,
            "completionPercentage": self.completion_percentage,
            "required": self.required,
            "completedLessons": self.completed_lessons,
            "totalLessons": self.total_lessons,
        }


@dataclass
class CertificateData:
    """Everything printed on a certificate."""

    certificate_id: str
    user_name: str
    course_name: str
    language: str
    completion_date: str
    score: int
    total_lessons: int
    completed_lessons: int
    verification_url: str
    issued_by: str

    def to_dict(self) -> dict[str, object]:
        return {
            "certificateId": self.certificate_id,
            "userName": self.user_name,
            "courseName": self.course_name,
            "language": self.language,
            "completionDate": self.completion_date,
            "score": self.score,
            "totalLessons": self.total_lessons,
            "completedLessons": self.completed_lessons,
            "verificationUrl": self.verification_url,
            "issuedBy": self.issued_by,
        }


@dataclass
class IssuedCertificate:
    record: CertificationRecord
    data: CertificateData
    html: str


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def generate_certificate_id(language_slug: str, now_ms: int | None = None) -> str:
    """Build a certificate id: CERT-<SLUG>-<epoch millis>-<9 base36 chars>."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(random.choice(BASE36) for _ in range(9))
    return f"CERT-{language_slug.upper()}-{now_ms}-{suffix}"


def verification_url(certificate_id: str) -> str:
    base_url = load_app_config().certificates.base_url.rstrip("/")
    return f"{base_url}/verify/{certificate_id}"


def _completion(user_id: str, language_slug: str) -> tuple[int, int, int, float]:
    """Returns (completed, total, total_score, percentage) for a language."""
    language = get_language_by_slug(language_slug)
    if language is None:
        return 0, 0, 0, 0.0

    total = count_lessons(language.language_id)
    completed, total_score = completion_for_language(user_id, language.language_id)
    # A language without lessons can never be completed
    percentage = (completed / total) * 100 if total else 0.0
    return completed, total, total_score, percentage


def check_eligibility(user_id: str, language_slug: str) -> Eligibility:
    """Check whether a user may claim a certificate for a language.

    Raises:
        CertificateExistsError: If a certificate was already issued
    """
    existing = get_user_certification(user_id, language_slug)
    if existing is not None:
        raise CertificateExistsError(existing)

    required = load_app_config().certificates.completion_threshold
    completed, total, _, percentage = _completion(user_id, language_slug)

    return Eligibility(
        eligible=completed > 0 and percentage >= required,
        completion_percentage=_round_half_up(percentage),
        required=required,
        completed_lessons=completed,
        total_lessons=total,
    )


def issue_certificate(
    user: UserRecord, language_slug: str, course_name: str | None = None
) -> IssuedCertificate:
    """Issue a certificate for a language.

    Args:
        user: Certificate holder
        language_slug: Language slug (e.g. "python")
        course_name: Printed course name, defaults to "<SLUG> Programming Course"

    Returns:
        IssuedCertificate with the stored record, printable data and HTML

    Raises:
        InsufficientCompletionError: Below the completion threshold
        CertificateExistsError: If a certificate was already issued
    """
    cert_config = load_app_config().certificates
    required = cert_config.completion_threshold

    completed, total, total_score, percentage = _completion(user.user_id, language_slug)
    # At least one completed lesson, whatever the threshold
    if completed == 0 or percentage < required:
        raise InsufficientCompletionError(required, _round_half_up(percentage))

    existing = get_user_certification(user.user_id, language_slug)
    if existing is not None:
        raise CertificateExistsError(existing)

    average_score = _round_half_up(total_score / completed)
    certificate_id = generate_certificate_id(language_slug)
    url = verification_url(certificate_id)

    data = CertificateData(
        certificate_id=certificate_id,
        user_name=user.display_name,
        course_name=course_name or f"{language_slug.upper()} Programming Course",
        language=language_slug,
        completion_date=date.today().isoformat(),
        score=average_score,
        total_lessons=total,
        completed_lessons=completed,
        verification_url=url,
        issued_by=cert_config.issuer,
    )

    record = insert_certification(
        certificate_id=certificate_id,
        user_id=user.user_id,
        title=data.course_name,
        description=(
            f"Successfully completed {data.course_name} with {average_score}% average score"
        ),
        language=language_slug,
        score=average_score,
        certificate_url=url,
        is_verified=True,
    )

    logger.info(
        "certificate_issued",
        certificate_id=certificate_id,
        user_id=user.user_id,
        language=language_slug,
        score=average_score,
    )

    return IssuedCertificate(record=record, data=data, html=render_certificate_html(data))


def verify_certificate(certificate_id: str) -> CertificationRecord:
    """Look up a certificate for public verification.

    Raises:
        CertificateNotFoundError: Unknown id
        CertificateNotVerifiedError: Certificate exists but is not verified
    """
    record = get_certification(certificate_id)
    if record is None:
        raise CertificateNotFoundError("Certificate not found")
    if not record.is_verified:
        raise CertificateNotVerifiedError("Certificate is not verified")
    return record


def certificate_data_for(record: CertificationRecord, user: UserRecord) -> CertificateData:
    """Rebuild printable data from a stored certificate."""
    return CertificateData(
        certificate_id=record.certificate_id,
        user_name=user.display_name,
        course_name=record.title,
        language=record.language,
        completion_date=iso_date(record.issued_at),
        score=record.score,
        total_lessons=0,
        completed_lessons=0,
        verification_url=verification_url(record.certificate_id),
        issued_by=load_app_config().certificates.issuer,
    )


def render_certificate_html(data: CertificateData) -> str:
    """Render the printable certificate page."""
    return render_template("certificate.html", data=asdict(data))
