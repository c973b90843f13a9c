# devflow/api/v1/deps.py
from fastapi import Request
from devflow.services.question_service import QuestionService

def get_question_service(request: Request) -> QuestionService:
    """
    FastAPI dependency building a QuestionService over the application's
    store handle and revalidation channel.

    Usage:
        @router.get("/questions")
        async def list_questions(service: QuestionService = Depends(get_question_service)):
            ...
    """
    return QuestionService(request.app.state.database, request.app.state.revalidation)
