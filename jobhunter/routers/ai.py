import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from jobhunter.core.exceptions import LLMCallError, LLMNotConfigured, LLMParseError
from jobhunter.dependencies import AuthenticatedUser, get_current_user
from jobhunter.schemas.ai import (
    AnalyzeResumeRequest,
    AtsResult,
    AtsScoreRequest,
    GenerateDocumentRequest,
    GeneratedContent,
    ImproveDocumentRequest,
    ImproveDocumentResult,
    ParseResumeRequest,
    ResearchCompanyRequest,
)
from jobhunter.schemas.resume import ResumeData
from jobhunter.services.ats_service import improve_document, resume_data_to_text, score_document
from jobhunter.services.company_research_service import research_company
from jobhunter.services.document_service import generate_document
from jobhunter.services.llm_client import is_groq_configured, is_perplexity_configured
from jobhunter.services.resume_analysis_service import analyze_resume
from jobhunter.services.resume_parser_service import ResumeTextTooShort, parse_resume_text

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/ai", tags=["ai"])

_GENERATION_ERRORS = (LLMNotConfigured, LLMCallError, LLMParseError, ValueError)


@router.post("/ats-score", response_model=AtsResult)
def ats_score(
    body: AtsScoreRequest,
    user: AuthenticatedUser = Depends(get_current_user),
):
    text = body.raw_text if body.raw_text else resume_data_to_text(body.resume_data)
    try:
        result = score_document(text, body.job_description)
    except _GENERATION_ERRORS as e:
        logger.warning("ATS scoring failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    logger.info("ATS score user=%s score=%.1f", user.id, result.ats_score)
    return result


@router.post("/generate-document", response_model=GeneratedContent)
def generate(
    body: GenerateDocumentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
):
    try:
        content = generate_document(
            body.resume_data,
            body.job_description,
            body.document_type,
            focus_keywords=body.focus_keywords,
            job_title=body.job_title,
        )
    except _GENERATION_ERRORS as e:
        logger.warning("Document generation failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return GeneratedContent(content=content)


@router.post("/improve-document", response_model=ImproveDocumentResult)
def improve(
    body: ImproveDocumentRequest,
    user: AuthenticatedUser = Depends(get_current_user),
):
    try:
        result = improve_document(
            body.resume_data,
            body.job_description,
            body.document_type,
            missing_keywords=body.missing_keywords,
            previous_score=body.previous_score,
            job_title=body.job_title,
        )
    except _GENERATION_ERRORS as e:
        logger.warning("Document improvement failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return result


@router.post("/parse-resume", response_model=ResumeData)
def parse_resume(
    body: ParseResumeRequest,
    user: AuthenticatedUser = Depends(get_current_user),
):
    if not is_groq_configured():
        return JSONResponse(status_code=200, content={"error": "GROQ_API_KEY not configured"})
    try:
        return parse_resume_text(body.resume_text)
    except ResumeTextTooShort as e:
        return JSONResponse(status_code=200, content={"error": str(e)})
    except LLMParseError as e:
        logger.warning("Resume parse returned invalid JSON for user=%s", user.id)
        return JSONResponse(
            status_code=200,
            content={"error": "AI returned invalid JSON format. Please try again.", "debug": e.raw[:100]},
        )
    except LLMCallError as e:
        return JSONResponse(status_code=200, content={"error": str(e)})


@router.post("/research-company")
def research(
    body: ResearchCompanyRequest,
    user: AuthenticatedUser = Depends(get_current_user),
):
    if not is_perplexity_configured():
        return JSONResponse(status_code=200, content={"error": "Perplexity API key not configured", "content": ""})
    if not body.company_name.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Company name is required")
    try:
        content = research_company(body.company_name.strip(), body.context)
    except LLMCallError as e:
        logger.warning("Company research failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)) from e
    return {"content": content}


@router.post("/analyze-resume")
def analyze(
    body: AnalyzeResumeRequest,
    user: AuthenticatedUser = Depends(get_current_user),
):
    if not is_groq_configured() or not is_perplexity_configured():
        return JSONResponse(
            status_code=200,
            content={"error": "API keys not configured. Ensure GROQ_API_KEY and PERPLEXITY_API_KEY are set."},
        )
    if not body.resume_text:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Resume text is required")
    try:
        result = analyze_resume(body.resume_text, body.current_role)
    except (LLMCallError, LLMNotConfigured) as e:
        logger.warning("Resume analysis failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e)) from e
    logger.info("Resume analysis done for user=%s", user.id)
    return result
