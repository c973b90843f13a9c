# devflow/models/tag.py
from tortoise import fields, models

class Tag(models.Model):
    """
    Topic label attached to questions.
    - name: Display form, the spelling used by whoever created the tag first
    - name_key: Lower-cased name, unique; makes "Rust" and "rust" the same tag
    - questions: Reverse side of Question.tags
    """
    id = fields.IntField(pk=True)
    name = fields.CharField(max_length=64)
    name_key = fields.CharField(max_length=64, unique=True, index=True)
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "tags"

    @staticmethod
    def key_for(name: str) -> str:
        return name.strip().lower()
