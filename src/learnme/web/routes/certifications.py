"""Certificate endpoints: eligibility, issuing, verification and viewing."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import HTMLResponse, JSONResponse

from learnme.core.certificates import (
    CertificateExistsError,
    CertificateNotFoundError,
    CertificateNotVerifiedError,
    InsufficientCompletionError,
    certificate_data_for,
    check_eligibility,
    issue_certificate,
    render_certificate_html,
    verify_certificate,
)
from learnme.db.certifications_repository import (
    CertificationRecord,
    get_certification,
    list_certifications,
)
from learnme.db.users_repository import UserRecord, get_user
from learnme.web.deps import optional_user_id, require_user
from learnme.web.schemas import (
    CertificateData,
    CertificationListResponse,
    CertificationResponse,
    EligibilityRequest,
    EligibilityResponse,
    GenerateCertificateRequest,
    GenerateCertificateResponse,
    VerificationResponse,
    VerifiedCertificate,
)

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["certifications"])


def _to_response(record: CertificationRecord) -> CertificationResponse:
    return CertificationResponse(
        id=record.certificate_id,
        title=record.title,
        description=record.description,
        language=record.language,
        score=record.score,
        issued_at=record.issued_at,
        expires_at=record.expires_at,
        certificate_url=record.certificate_url,
        is_verified=record.is_verified,
    )


def _exists_response(record: CertificationRecord, code: int) -> JSONResponse:
    return JSONResponse(
        status_code=code,
        content={
            "detail": "Certificate already exists for this language",
            "existing": True,
            "certificate": _to_response(record).model_dump(by_alias=True),
        },
    )


@router.get("/api/certifications", response_model=CertificationListResponse)
async def get_certifications(user: UserRecord = Depends(require_user)) -> CertificationListResponse:
    """List the caller's certificates, newest first."""
    return CertificationListResponse(
        certificates=[_to_response(c) for c in list_certifications(user.user_id)]
    )


@router.post("/api/certifications", response_model=EligibilityResponse)
async def post_eligibility(
    body: EligibilityRequest,
    user: UserRecord = Depends(require_user),
):
    """Check whether the caller may claim a certificate for a language."""
    try:
        eligibility = check_eligibility(user.user_id, body.language_slug)
    except CertificateExistsError as e:
        return _exists_response(e.certificate, status.HTTP_400_BAD_REQUEST)

    return EligibilityResponse(
        eligible=eligibility.eligible,
        completion_percentage=eligibility.completion_percentage,
        required=eligibility.required,
        completed_lessons=eligibility.completed_lessons,
        total_lessons=eligibility.total_lessons,
    )


@router.post("/api/certifications/generate", response_model=GenerateCertificateResponse)
async def generate_certificate(
    body: GenerateCertificateRequest,
    user: UserRecord = Depends(require_user),
):
    """Issue a certificate to the caller."""
    try:
        issued = issue_certificate(user, body.language_slug, body.course_name)
    except InsufficientCompletionError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "detail": "Insufficient completion rate",
                "required": e.required,
                "current": e.current,
            },
        )
    except CertificateExistsError as e:
        return _exists_response(e.certificate, status.HTTP_409_CONFLICT)

    data = issued.data
    return GenerateCertificateResponse(
        certificate=_to_response(issued.record),
        certificate_data=CertificateData(
            certificate_id=data.certificate_id,
            user_name=data.user_name,
            course_name=data.course_name,
            language=data.language,
            completion_date=data.completion_date,
            score=data.score,
            total_lessons=data.total_lessons,
            completed_lessons=data.completed_lessons,
            verification_url=data.verification_url,
            issued_by=data.issued_by,
        ),
        html=issued.html,
    )


@router.get("/api/certifications/verify/{certificate_id}", response_model=VerificationResponse)
async def verify(certificate_id: str):
    """Public verification of a certificate."""
    try:
        record = verify_certificate(certificate_id)
    except CertificateNotFoundError as e:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(e), "valid": False},
        )
    except CertificateNotVerifiedError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(e), "valid": False},
        )

    holder = get_user(record.user_id)
    return VerificationResponse(
        valid=True,
        certificate=VerifiedCertificate(
            id=record.certificate_id,
            title=record.title,
            description=record.description,
            language=record.language,
            issued_at=record.issued_at,
            expires_at=record.expires_at,
            user_name=holder.display_name if holder else "Student",
            is_verified=record.is_verified,
        ),
    )


@router.get("/api/certificates/{certificate_id}", response_class=HTMLResponse)
async def view_certificate(
    certificate_id: str,
    user_id: str | None = Depends(optional_user_id),
) -> HTMLResponse:
    """Printable certificate page.

    Anyone may view it unless they identify as a different user.
    """
    record = get_certification(certificate_id)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Certificate not found",
        )

    if user_id is not None and user_id != record.user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )

    holder = get_user(record.user_id)
    if holder is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Certificate holder not found",
        )

    html = render_certificate_html(certificate_data_for(record, holder))
    return HTMLResponse(content=html, headers={"Content-Disposition": "inline"})
