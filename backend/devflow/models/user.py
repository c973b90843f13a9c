# devflow/models/user.py
"""
Database model for users.
Represents a community member: the external identity the user signs in with,
profile information, and the reputation score earned by asking and voting.
"""
import uuid
from tortoise import fields, models

class User(models.Model):
    """
    User database model.

    Relationships:
    - Has many Questions (one-to-many, via related_name="questions")
    - Has many Answers (one-to-many, via related_name="answers")
    - Has many Interactions (one-to-many, via related_name="interactions")
    - Upvoted / downvoted Questions (many-to-many, declared on Question)

    Reputation is a derived counter; it is only ever changed with atomic
    increments, never recomputed from votes.
    """
    id = fields.UUIDField(pk=True, default=uuid.uuid4)  # Primary key: internal user identifier
    external_id = fields.CharField(
        max_length=128,
        unique=True,
        index=True
    )  # Identity key issued by the external sign-in provider
    name = fields.CharField(max_length=256)  # Display name
    username = fields.CharField(max_length=256, unique=True)  # Public handle
    email = fields.CharField(max_length=256, null=True)  # Email address (optional)
    picture = fields.CharField(max_length=1024, null=True)  # Avatar URL
    reputation = fields.IntField(default=0)  # Score adjusted by asking, voting and receiving votes
    joined_at = fields.DatetimeField(auto_now_add=True)  # Timestamp when account was created

    class Meta:
        """Tortoise ORM metadata configuration."""
        table = "users"  # Database table name
