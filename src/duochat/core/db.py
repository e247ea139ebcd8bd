from typing import Any, Self

from pydantic import BaseModel, ConfigDict
from pymongo.asynchronous.cursor import AsyncCursor


class MongoModel(BaseModel):
    """Base for documents stored in MongoDB. Unknown keys such as ``_id`` are ignored on load."""

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        json_schema_serialization_defaults_required=True,
    )

    def to_mongo(self) -> dict[str, Any]:
        """Convert the model to a dictionary for MongoDB storage."""
        return self.model_dump(mode="json")

    @classmethod
    async def list_cursor(cls, cursor: AsyncCursor[dict[str, Any]]) -> list[Self]:
        """Iterate over an AsyncCursor and return a list of model instances."""
        return [cls.model_validate(item) async for item in cursor]
