"""
Shared schema base: camelCase on the wire, snake_case in Python
"""
from datetime import datetime
from typing import Annotated, Any, ClassVar, Dict, Tuple

from pydantic import AfterValidator, BaseModel

from avotrace.core.exceptions import ValidationError
from avotrace.utils.datetime_utils import as_utc


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


# Timestamps are stored as naive UTC; on the wire they always carry the offset
UtcDateTime = Annotated[datetime, AfterValidator(as_utc)]


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class PatchModel(CamelModel):
    """Partial update body. Fields listed in ``non_nullable`` may be omitted but not sent as null."""

    non_nullable: ClassVar[Tuple[str, ...]] = ()

    def to_patch(self) -> Dict[str, Any]:
        patch = self.dict(exclude_unset=True)
        for field in self.non_nullable:
            if field in patch and patch[field] is None:
                name = to_camel(field)
                raise ValidationError.for_field(name, f"{name} cannot be null")
        return patch
