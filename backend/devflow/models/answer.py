# devflow/models/answer.py
from tortoise import fields, models

class Answer(models.Model):
    id = fields.IntField(pk=True)
    question = fields.ForeignKeyField("models.Question", related_name="answers", on_delete=fields.CASCADE)
    author = fields.ForeignKeyField("models.User", related_name="answers", on_delete=fields.CASCADE)
    content = fields.TextField()
    created_at = fields.DatetimeField(auto_now_add=True)

    class Meta:
        table = "answers"
