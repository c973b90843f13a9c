# devflow/models/question.py
"""
Database model for questions.
A question is asked by one user, labelled with tags, and collects up/down
votes from other users.
"""
from tortoise import fields, models

class Question(models.Model):
    """
    Question database model.

    Relationships:
    - Belongs to a User (author, many-to-one)
    - Has many Tags (many-to-many, reverse Tag.questions)
    - Upvotes / downvotes (many-to-many with User, one row per voter)
    - Has many Answers and Interactions (one-to-many, declared on those models)

    A voter is in at most one of upvotes / downvotes; the service keeps this
    by moving the voter between the two sets.
    """
    id = fields.IntField(pk=True)  # Auto-increment, so id order is insertion order
    title = fields.CharField(max_length=255)
    content = fields.TextField()
    author = fields.ForeignKeyField(
        "models.User",
        related_name="questions",
        on_delete=fields.CASCADE
    )
    tags = fields.ManyToManyField(
        "models.Tag",
        related_name="questions",
        through="question_tags"
    )
    upvotes = fields.ManyToManyField(
        "models.User",
        related_name="upvoted_questions",
        through="question_upvotes"
    )
    downvotes = fields.ManyToManyField(
        "models.User",
        related_name="downvoted_questions",
        through="question_downvotes"
    )
    views = fields.IntField(default=0)  # Incremented on every view
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "questions"
