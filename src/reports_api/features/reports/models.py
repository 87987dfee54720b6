"""Persisted Report entity."""

from tortoise import fields, models


class Report(models.Model):
    id = fields.BigIntField(primary_key=True)
    name = fields.CharField(max_length=255, null=True)
    logo = fields.TextField(null=True, description="Base64-encoded logo image")
    logo_content_type = fields.CharField(max_length=255, null=True)
    created_time = fields.BigIntField(null=True, description="Epoch milliseconds")
    updated_time = fields.BigIntField(null=True, description="Epoch milliseconds")

    def __str__(self):
        return f"Report{{id={self.id}, name={self.name!r}}}"

    class Meta:
        table = "report"


# Range of the signed 64-bit BigIntField columns
BIGINT_MIN = -(2**63)
BIGINT_MAX = 2**63 - 1
