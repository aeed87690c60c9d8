# gateway/models/generation_model.py
from tortoise import fields, models


class GenerationModel(models.Model):
    """
    A named upstream generation target and its price.
    - token_rate: credits charged per started block of 100 tokens
    Rows are seeded on startup from MODEL_RATES or managed directly in the DB.
    """
    id = fields.IntField(pk=True)
    name = fields.CharField(max_length=128, unique=True, index=True)
    token_rate = fields.IntField()

    class Meta:
        table = "generation_models"
