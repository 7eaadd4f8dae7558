"""Task-related Marshmallow schemas."""

from collections.abc import Iterable
from datetime import datetime, timezone

from marshmallow import EXCLUDE, Schema, ValidationError, fields, validate, validates

from taskapi.ids import format_task_id
from taskapi.models.task import as_utc


class TaskSchema(Schema):
    """Schema for task serialization."""

    id = fields.Function(lambda task: format_task_id(task.id), dump_only=True)
    title = fields.Str()
    description = fields.Str()
    due_date = fields.AwareDateTime(format="iso", default_timezone=timezone.utc)
    status = fields.Str()


class TaskPayloadSchema(Schema):
    """Schema for create and replace payload validation.

    Omitted optional fields load as empty text, so a replace overwrites
    them rather than keeping the stored value. Unknown keys, including
    a client supplied ``id``, are dropped.
    """

    class Meta:
        unknown = EXCLUDE

    title = fields.Str(required=True, validate=validate.Length(min=1, max=255))
    description = fields.Str(load_default="")
    due_date = fields.AwareDateTime(required=True, format="iso", default_timezone=timezone.utc)
    status = fields.Str(load_default="")

    def __init__(self, allowed_statuses: Iterable[str] | None = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.allowed_statuses = frozenset(allowed_statuses or ())

    @validates("due_date")
    def validate_due_date(self, value: datetime, **kwargs) -> None:
        """Reject timestamps that fall outside the datetime range once in UTC."""
        try:
            as_utc(value)
        except OverflowError as err:
            raise ValidationError("Date is out of range once converted to UTC.") from err

    @validates("status")
    def validate_status(self, value: str, **kwargs) -> None:
        """Enforce the configured status domain, if any."""
        if self.allowed_statuses and value not in self.allowed_statuses:
            choices = ", ".join(sorted(self.allowed_statuses))
            raise ValidationError(f"Must be one of: {choices}.")
