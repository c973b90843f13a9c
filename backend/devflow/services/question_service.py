"""
Question Service

Data operations behind the question pages: listing, asking, reading, voting,
editing, deleting, viewing and recommending questions.

Every operation:
- connects the store handle (no-op once connected)
- performs its reads/writes (multi-step writes inside one transaction)
- signals revalidation of the caller's path after a successful write
- returns its result or raises a DevflowError subclass, after logging it
"""
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from tortoise.exceptions import BaseORMException, ConfigurationError, DBConnectionError
from tortoise.expressions import F, Q
from tortoise.functions import Count
from tortoise.transactions import in_transaction

from devflow.config import settings
from devflow.core.db import Database
from devflow.core.errors import (
    DevflowError,
    NotFoundError,
    PartialFailureError,
    StoreUnavailableError,
    ValidationError,
)
from devflow.core.revalidation import RevalidationChannel
from devflow.models import Answer, Interaction, Question, Tag, User
from devflow.models.interaction import ASK_QUESTION, VIEW_QUESTION
from devflow.schemas.question import (
    AuthorOut,
    CreateQuestionParams,
    DeleteQuestionParams,
    EditQuestionParams,
    GetQuestionByIdParams,
    GetQuestionsParams,
    QuestionListOut,
    QuestionOut,
    QuestionVoteParams,
    RecommendedParams,
    TagOut,
    ViewQuestionParams,
)
from devflow.services.reputation import ASK_QUESTION_REPUTATION, adjust_reputation
from devflow.services.voting import VoteDirection, VoteState, plan_vote, state_from_flags

logger = logging.getLogger("uvicorn.error")

# Relations resolved for every question handed back to callers
QUESTION_RELATIONS = ("author", "tags", "upvotes", "downvotes")

# List filters -> ordering; "unanswered" narrows instead of sorting
FILTER_NEWEST = "newest"
FILTER_FREQUENT = "frequent"
FILTER_UNANSWERED = "unanswered"
NATURAL_ORDER = ("id",)
FILTER_ORDERING = {
    FILTER_NEWEST: ("-created_at", "-id"),
    FILTER_FREQUENT: ("-views", "id"),
}

TAG_NAME_MAX_LENGTH = 64
TITLE_MAX_LENGTH = 255


# ===== Serialization =====

def serialize_author(user: User) -> AuthorOut:
    return AuthorOut(id=str(user.id), externalId=user.external_id, name=user.name, picture=user.picture)

def serialize_question(question: Question) -> QuestionOut:
    """Build the response model; relations in QUESTION_RELATIONS must be fetched."""
    return QuestionOut(
        id=question.id,
        title=question.title,
        content=question.content,
        author=serialize_author(question.author),
        tags=[TagOut(id=t.id, name=t.name) for t in question.tags],
        upvotes=[str(u.id) for u in question.upvotes],
        downvotes=[str(u.id) for u in question.downvotes],
        views=question.views,
        createdAt=question.created_at.isoformat(),
    )


# ===== Input checks =====

def page_offset(page: int, page_size: int) -> int:
    """Number of rows to skip for a 1-based page."""
    if page < 1:
        raise ValidationError("page must be >= 1", field="page")
    if page_size < 1:
        raise ValidationError("pageSize must be >= 1", field="pageSize")
    return (page - 1) * page_size

def require_text(value: str, field: str, max_length: int | None = None) -> str:
    text = (value or "").strip()
    if not text:
        raise ValidationError(f"{field} must not be blank", field=field)
    if max_length is not None and len(text) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters", field=field)
    return text

def clean_tag_names(names: List[str]) -> List[str]:
    """Strip tag names and drop case-insensitive repeats, keeping the first spelling."""
    cleaned: dict[str, str] = {}
    for raw in names:
        name = require_text(raw, "tags", TAG_NAME_MAX_LENGTH)
        cleaned.setdefault(Tag.key_for(name), name)
    return list(cleaned.values())

def search_criteria(search_query: str) -> Q:
    return Q(title__icontains=search_query) | Q(content__icontains=search_query)


class _Progress:
    """Last step a multi-step operation started, for error reporting."""
    def __init__(self):
        self.step: Optional[str] = None


class QuestionService:
    """
    Question operations over an injected store handle and revalidation channel.

    Usage:
        service = QuestionService(database, revalidation)
        page = await service.get_questions(GetQuestionsParams(filter="newest"))
    """

    def __init__(
        self,
        database: Database,
        revalidation: RevalidationChannel,
        hot_limit: int = settings.hot_questions_limit,
    ):
        self.database = database
        self.revalidation = revalidation
        self.hot_limit = hot_limit

    @asynccontextmanager
    async def _operation(self, name: str, atomic: bool = False):
        """
        Run one operation: connect, optionally open a transaction, and map
        failures to the error kinds callers handle.
        """
        progress = _Progress()
        try:
            await self.database.connect()
            if atomic:
                async with in_transaction():
                    yield progress
            else:
                yield progress
        except DevflowError as exc:
            logger.warning("[questions] %s failed: %s", name, exc.message)
            raise
        except (DBConnectionError, ConfigurationError) as exc:
            logger.error("[questions] %s: store unavailable: %s", name, exc)
            raise StoreUnavailableError(name, str(exc)) from exc
        except BaseORMException as exc:
            if atomic and progress.step:
                logger.exception("[questions] %s failed at step '%s', changes rolled back", name, progress.step)
                raise PartialFailureError(name, progress.step, str(exc)) from exc
            logger.exception("[questions] %s: store error", name)
            raise StoreUnavailableError(name, str(exc)) from exc

    # ---------- reads ----------

    async def get_questions(self, params: GetQuestionsParams) -> QuestionListOut:
        """
        One page of questions, optionally searched and filtered.

        Filters:
        - "newest": most recent first
        - "frequent": most viewed first
        - "unanswered": only questions without answers
        - anything else: no narrowing, insertion order
        """
        async with self._operation("get_questions"):
            skip = page_offset(params.page, params.pageSize)
            query = Question.all()
            if params.searchQuery:
                query = query.filter(search_criteria(params.searchQuery))
            if params.filter == FILTER_UNANSWERED:
                answered = await Answer.all().distinct().values_list("question_id", flat=True)
                if answered:
                    query = query.exclude(id__in=list(answered))
            ordering = FILTER_ORDERING.get(params.filter, NATURAL_ORDER)

            total = await query.count()
            rows = await (
                query.order_by(*ordering)
                .offset(skip)
                .limit(params.pageSize)
                .prefetch_related(*QUESTION_RELATIONS)
            )
        return QuestionListOut(
            questions=[serialize_question(q) for q in rows],
            isNext=total > skip + len(rows),
        )

    async def get_question_by_id(self, params: GetQuestionByIdParams) -> Optional[QuestionOut]:
        """The question with tags and author resolved, or None when it doesn't exist."""
        async with self._operation("get_question_by_id"):
            question = await Question.get_or_none(id=params.questionId).prefetch_related(*QUESTION_RELATIONS)
        if question is None:
            return None
        return serialize_question(question)

    async def get_hot_questions(self) -> List[QuestionOut]:
        """Most viewed questions, ties broken by upvote count."""
        async with self._operation("get_hot_questions"):
            rows = await (
                Question.annotate(upvote_count=Count("upvotes"))
                .order_by("-views", "-upvote_count", "id")
                .limit(self.hot_limit)
                .prefetch_related(*QUESTION_RELATIONS)
            )
        return [serialize_question(q) for q in rows]

    async def get_recommended_questions(self, params: RecommendedParams) -> QuestionListOut:
        """
        Questions sharing a tag with anything the user asked or viewed,
        excluding the user's own questions.
        """
        async with self._operation("get_recommended_questions"):
            skip = page_offset(params.page, params.pageSize)
            user = await User.get_or_none(external_id=params.userId)
            if user is None:
                raise NotFoundError("User", params.userId)

            interactions = await Interaction.filter(user_id=user.id).prefetch_related("tags")
            tag_ids = list(dict.fromkeys(tag.id for interaction in interactions for tag in interaction.tags))
            if not tag_ids:
                return QuestionListOut(questions=[], isNext=False)

            query = Question.filter(tags__id__in=tag_ids).exclude(author_id=user.id)
            if params.searchQuery:
                query = query.filter(search_criteria(params.searchQuery))
            # Joining through tags repeats a question once per shared tag
            matching = await query.distinct().order_by("id").values_list("id", flat=True)
            question_ids = list(dict.fromkeys(matching))

            page_ids = question_ids[skip:skip + params.pageSize]
            rows = []
            if page_ids:
                rows = await Question.filter(id__in=page_ids).order_by("id").prefetch_related(*QUESTION_RELATIONS)
        return QuestionListOut(
            questions=[serialize_question(q) for q in rows],
            isNext=len(question_ids) > skip + len(rows),
        )

    # ---------- writes ----------

    async def _resolve_tags(self, names: List[str]) -> List[Tag]:
        """Find each tag by its case-insensitive key or create it."""
        tags: dict[int, Tag] = {}
        for name in names:
            # Unique name_key + get_or_create's integrity fallback keep concurrent askers on one row
            tag, created = await Tag.get_or_create(name_key=Tag.key_for(name), defaults={"name": name})
            if created:
                logger.info("[questions] created tag id=%s name=%s", tag.id, tag.name)
            tags.setdefault(tag.id, tag)
        return list(tags.values())

    async def create_question(self, params: CreateQuestionParams) -> QuestionOut:
        """
        Ask a question.

        Creates the question, links its tags (creating missing ones), records
        an "ask_question" interaction and rewards the author.
        """
        async with self._operation("create_question", atomic=True) as progress:
            title = require_text(params.title, "title", TITLE_MAX_LENGTH)
            content = require_text(params.content, "content")
            tag_names = clean_tag_names(params.tags)
            author = await User.get_or_none(id=params.author)
            if author is None:
                raise NotFoundError("User", params.author)

            progress.step = "create question"
            question = await Question.create(title=title, content=content, author=author)

            progress.step = "link tags"
            tags = await self._resolve_tags(tag_names)
            if tags:
                await question.tags.add(*tags)

            progress.step = "record interaction"
            interaction = await Interaction.create(user=author, action=ASK_QUESTION, question=question)
            if tags:
                await interaction.tags.add(*tags)

            progress.step = "update author reputation"
            await adjust_reputation(author.id, ASK_QUESTION_REPUTATION)

            await question.fetch_related(*QUESTION_RELATIONS)

        logger.info("[questions] created question id=%s author=%s tags=%s",
                    question.id, author.id, [t.name for t in tags])
        await self.revalidation.revalidate(params.path)
        return serialize_question(question)

    async def _current_vote_state(self, question: Question, voter: User) -> VoteState:
        if await Question.filter(id=question.id, upvotes__id=voter.id).exists():
            return VoteState.UPVOTED
        if await Question.filter(id=question.id, downvotes__id=voter.id).exists():
            return VoteState.DOWNVOTED
        return VoteState.NONE

    async def _vote(self, direction: VoteDirection, params: QuestionVoteParams) -> QuestionOut:
        name = f"{direction.value}vote_question"
        async with self._operation(name, atomic=True) as progress:
            question = await Question.get_or_none(id=params.questionId)
            if question is None:
                raise NotFoundError("Question", params.questionId)
            voter = await User.get_or_none(id=params.userId)
            if voter is None:
                raise NotFoundError("User", params.userId)

            current = await self._current_vote_state(question, voter)
            reported = state_from_flags(params.hasAlreadyUpvoted, params.hasAlreadyDownvoted)
            if reported is not current:
                logger.warning("[questions] %s: caller reported %s but stored state is %s (question=%s user=%s)",
                               name, reported.value, current.value, question.id, voter.id)
            transition = plan_vote(direction, current)

            progress.step = "update vote sets"
            if transition.remove_from:
                await getattr(question, transition.remove_from).remove(voter)
            if transition.add_to:
                await getattr(question, transition.add_to).add(voter)

            progress.step = "update voter reputation"
            await adjust_reputation(voter.id, transition.voter_delta)
            progress.step = "update author reputation"
            await adjust_reputation(question.author_id, transition.author_delta)

            await question.fetch_related(*QUESTION_RELATIONS)

        logger.info("[questions] %s question=%s user=%s: %s -> %s",
                    name, question.id, voter.id, current.value, transition.new_state.value)
        await self.revalidation.revalidate(params.path)
        return serialize_question(question)

    async def upvote_question(self, params: QuestionVoteParams) -> QuestionOut:
        """Upvote, take back an upvote, or switch a downvote to an upvote."""
        return await self._vote(VoteDirection.UP, params)

    async def downvote_question(self, params: QuestionVoteParams) -> QuestionOut:
        """Downvote, take back a downvote, or switch an upvote to a downvote."""
        return await self._vote(VoteDirection.DOWN, params)

    async def edit_question(self, params: EditQuestionParams) -> QuestionOut:
        async with self._operation("edit_question"):
            title = require_text(params.title, "title", TITLE_MAX_LENGTH)
            content = require_text(params.content, "content")
            question = await Question.get_or_none(id=params.questionId)
            if question is None:
                raise NotFoundError("Question", params.questionId)
            question.title = title
            question.content = content
            await question.save(update_fields=["title", "content"])
            await question.fetch_related(*QUESTION_RELATIONS)

        logger.info("[questions] edited question id=%s", question.id)
        await self.revalidation.revalidate(params.path)
        return serialize_question(question)

    async def delete_question(self, params: DeleteQuestionParams) -> None:
        """
        Delete a question together with its answers, interactions, tag links
        and votes, and take back the author's asking reward.
        """
        async with self._operation("delete_question", atomic=True) as progress:
            question = await Question.get_or_none(id=params.questionId)
            if question is None:
                raise NotFoundError("Question", params.questionId)

            progress.step = "delete answers"
            await Answer.filter(question_id=question.id).delete()

            progress.step = "delete interactions"
            for interaction in await Interaction.filter(question_id=question.id):
                await interaction.tags.clear()
                await interaction.delete()

            progress.step = "detach tags"
            await question.tags.clear()
            progress.step = "clear votes"
            await question.upvotes.clear()
            await question.downvotes.clear()

            progress.step = "delete question"
            await question.delete()

            progress.step = "update author reputation"
            await adjust_reputation(question.author_id, -ASK_QUESTION_REPUTATION)

        logger.info("[questions] deleted question id=%s", params.questionId)
        await self.revalidation.revalidate(params.path)

    async def view_question(self, params: ViewQuestionParams) -> QuestionOut:
        """
        Count a view. The first view by a signed-in user is recorded as an
        interaction carrying the question's tags.
        """
        async with self._operation("view_question", atomic=True) as progress:
            question = await Question.get_or_none(id=params.questionId)
            if question is None:
                raise NotFoundError("Question", params.questionId)

            progress.step = "increment views"
            await Question.filter(id=question.id).update(views=F("views") + 1)

            if params.userId is not None:
                viewer = await User.get_or_none(id=params.userId)
                if viewer is None:
                    raise NotFoundError("User", params.userId)
                seen = await Interaction.filter(
                    user_id=viewer.id, question_id=question.id, action=VIEW_QUESTION
                ).exists()
                if not seen:
                    progress.step = "record interaction"
                    interaction = await Interaction.create(user=viewer, action=VIEW_QUESTION, question=question)
                    tags = await question.tags.all()
                    if tags:
                        await interaction.tags.add(*tags)

            question = await Question.get(id=question.id).prefetch_related(*QUESTION_RELATIONS)
        return serialize_question(question)
