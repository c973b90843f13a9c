"""
Pydantic schemas for question operations.
Defines the parameter models each service operation accepts and the
response models it returns.
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from uuid import UUID

from devflow.config import settings

# ===== Operation parameters =====

class GetQuestionsParams(BaseModel):
    """
    Parameters for the paginated question list.
    Unknown filter values are accepted and simply don't narrow or sort.
    """
    searchQuery: Optional[str] = None  # Case-insensitive substring of title or content
    filter: Optional[str] = None  # "newest" | "frequent" | "unanswered"
    page: int = 1  # 1-based page number
    pageSize: int = Field(default_factory=lambda: settings.default_page_size)  # Items per page

class CreateQuestionParams(BaseModel):
    title: str
    content: str
    tags: List[str] = Field(default_factory=list)  # Tag names, in the order the author typed them
    author: UUID  # Internal id of the asking user
    path: str  # Path to revalidate once the question exists

class GetQuestionByIdParams(BaseModel):
    questionId: int

class QuestionVoteParams(BaseModel):
    """
    Parameters for upvote / downvote.
    The flags describe the vote state the caller last saw; the stored vote
    sets decide the transition.
    """
    questionId: int
    userId: UUID  # Voter (internal id)
    hasAlreadyUpvoted: bool = False
    hasAlreadyDownvoted: bool = False
    path: str

class EditQuestionParams(BaseModel):
    questionId: int
    title: str
    content: str
    path: str

class DeleteQuestionParams(BaseModel):
    questionId: int
    path: str

class RecommendedParams(BaseModel):
    userId: str  # External identity key of the requesting user
    page: int = 1
    pageSize: int = Field(default_factory=lambda: settings.default_page_size)
    searchQuery: Optional[str] = None

class ViewQuestionParams(BaseModel):
    questionId: int
    userId: Optional[UUID] = None  # Viewer (internal id), None for anonymous views

# ===== Responses =====

class TagOut(BaseModel):
    """Minimal tag projection."""
    id: int
    name: str

class AuthorOut(BaseModel):
    """Minimal author projection."""
    id: str
    externalId: str
    name: str
    picture: Optional[str] = None

class QuestionOut(BaseModel):
    """
    Question with tags and author resolved.
    Vote sets are returned as lists of voter ids.
    """
    id: int
    title: str
    content: str
    author: AuthorOut
    tags: List[TagOut]
    upvotes: List[str]
    downvotes: List[str]
    views: int
    createdAt: str  # ISO format

class QuestionListOut(BaseModel):
    """One page of questions plus whether another page exists."""
    questions: List[QuestionOut]
    isNext: bool
