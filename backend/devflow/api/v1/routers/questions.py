from uuid import UUID
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from devflow.api.v1.deps import get_question_service
from devflow.config import settings
from devflow.core.errors import NotFoundError
from devflow.schemas.question import (
    CreateQuestionParams,
    DeleteQuestionParams,
    EditQuestionParams,
    GetQuestionByIdParams,
    GetQuestionsParams,
    QuestionVoteParams,
    RecommendedParams,
    ViewQuestionParams,
)
from devflow.services.question_service import QuestionService

router = APIRouter(prefix="/questions", tags=["questions"])

# ===== Schemas =====
class VoteIn(BaseModel):
    userId: UUID
    hasAlreadyUpvoted: bool = False
    hasAlreadyDownvoted: bool = False
    path: str

class EditQuestionIn(BaseModel):
    title: str
    content: str
    path: str

class ViewIn(BaseModel):
    userId: UUID | None = None

# ===== Routes =====
@router.get("", response_model=dict)
async def list_questions(
    searchQuery: str | None = None,
    filter: str | None = None,
    page: int = Query(1, ge=1),
    pageSize: int = Query(settings.default_page_size, ge=1, le=100),
    service: QuestionService = Depends(get_question_service),
):
    """
    Get one page of questions.

    Args:
        searchQuery: Case-insensitive text matched against title and content
        filter: "newest", "frequent" or "unanswered" (other values are ignored)
        page: 1-based page number
        pageSize: Items per page (1-100)

    Returns:
        dict: {"success": True, "data": {"questions": [...], "isNext": bool}}
    """
    result = await service.get_questions(
        GetQuestionsParams(searchQuery=searchQuery, filter=filter, page=page, pageSize=pageSize)
    )
    return {"success": True, "data": result.model_dump()}

@router.post("", response_model=dict)
async def create_question(body: CreateQuestionParams, service: QuestionService = Depends(get_question_service)):
    """
    Ask a new question.

    Raises:
        400 VALIDATION_ERROR: Blank title/content or tag name
        404 NOT_FOUND: Author does not exist
    """
    question = await service.create_question(body)
    return {"success": True, "data": question.model_dump()}

@router.get("/hot", response_model=dict)
async def hot_questions(service: QuestionService = Depends(get_question_service)):
    """Top questions by views, then upvotes."""
    questions = await service.get_hot_questions()
    return {"success": True, "data": [q.model_dump() for q in questions]}

@router.get("/recommended", response_model=dict)
async def recommended_questions(
    userId: str,
    page: int = Query(1, ge=1),
    pageSize: int = Query(settings.default_page_size, ge=1, le=100),
    searchQuery: str | None = None,
    service: QuestionService = Depends(get_question_service),
):
    """
    Questions matching the tags of what the user asked or viewed.

    Args:
        userId: External identity key of the user

    Raises:
        404 NOT_FOUND: No user with this external id
    """
    result = await service.get_recommended_questions(
        RecommendedParams(userId=userId, page=page, pageSize=pageSize, searchQuery=searchQuery)
    )
    return {"success": True, "data": result.model_dump()}

@router.get("/{question_id}", response_model=dict)
async def get_question(question_id: int, service: QuestionService = Depends(get_question_service)):
    question = await service.get_question_by_id(GetQuestionByIdParams(questionId=question_id))
    if question is None:
        raise NotFoundError("Question", question_id)
    return {"success": True, "data": question.model_dump()}

@router.post("/{question_id}/upvote", response_model=dict)
async def upvote_question(question_id: int, body: VoteIn, service: QuestionService = Depends(get_question_service)):
    question = await service.upvote_question(QuestionVoteParams(questionId=question_id, **body.model_dump()))
    return {"success": True, "data": question.model_dump()}

@router.post("/{question_id}/downvote", response_model=dict)
async def downvote_question(question_id: int, body: VoteIn, service: QuestionService = Depends(get_question_service)):
    question = await service.downvote_question(QuestionVoteParams(questionId=question_id, **body.model_dump()))
    return {"success": True, "data": question.model_dump()}

@router.post("/{question_id}/view", response_model=dict)
async def view_question(question_id: int, body: ViewIn, service: QuestionService = Depends(get_question_service)):
    question = await service.view_question(ViewQuestionParams(questionId=question_id, userId=body.userId))
    return {"success": True, "data": {"id": question.id, "views": question.views}}

@router.patch("/{question_id}", response_model=dict)
async def edit_question(question_id: int, body: EditQuestionIn, service: QuestionService = Depends(get_question_service)):
    question = await service.edit_question(EditQuestionParams(questionId=question_id, **body.model_dump()))
    return {"success": True, "data": question.model_dump()}

@router.delete("/{question_id}", response_model=dict)
async def delete_question(
    question_id: int,
    path: str = Query(...),
    service: QuestionService = Depends(get_question_service),
):
    """
    Delete a question with its answers, interactions and tag links.

    Args:
        path: Path to revalidate once the question is gone
    """
    await service.delete_question(DeleteQuestionParams(questionId=question_id, path=path))
    return {"success": True, "data": {"id": question_id, "deleted": True}}
