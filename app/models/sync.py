"""Request bodies of the spreadsheet sync endpoints.

Every field is optional at parse time; the routers answer 400 listing the
missing ones, after the session check.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _SyncBody(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def missing_fields(self) -> list[str]:
        """Return the camelCase names of empty or absent fields."""
        return [
            field.alias or to_camel(name)
            for name, field in type(self).model_fields.items()
            if not getattr(self, name)
        ]


class RegisterSyncRequest(_SyncBody):
    uid: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    school: str | None = None
    dob: str | None = None


class CheckinSyncRequest(_SyncBody):
    uid: str | None = None
    timestamp: str | None = None


class SyncResponse(BaseModel):
    success: bool = True
