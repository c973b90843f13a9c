# devflow/models/__init__.py
"""
Database models module initialization.
Exports all Tortoise ORM models for convenient imports.

Models exported:
- User: Community member with external identity and reputation
- Tag: Case-insensitively unique topic label
- Question: Question with tags and vote sets
- Answer: Answer to a question
- Interaction: User activity record used for recommendations
"""
from .user import User
from .tag import Tag
from .question import Question
from .answer import Answer
from .interaction import Interaction
