# devflow/models/interaction.py
from tortoise import fields, models

ASK_QUESTION = "ask_question"
VIEW_QUESTION = "view_question"

class Interaction(models.Model):
    """
    One user action on a question, kept for recommendations.
    - action: "ask_question" or "view_question"
    - tags: Snapshot of the question's tags at the time of the action
    """
    id = fields.IntField(pk=True)
    user = fields.ForeignKeyField("models.User", related_name="interactions", on_delete=fields.CASCADE)
    action = fields.CharField(max_length=32)
    question = fields.ForeignKeyField(
        "models.Question", related_name="interactions", null=True, on_delete=fields.CASCADE
    )
    tags = fields.ManyToManyField("models.Tag", related_name="interactions", through="interaction_tags")
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "interactions"
