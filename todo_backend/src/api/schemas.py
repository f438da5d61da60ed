from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.

    Emptiness of text is checked by the service, not here, so that a blank
    text is reported as invalid input rather than a schema violation.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "text": "Buy milk",
            }
        }
    )

    text: str = Field(..., description="Text of the todo item; must not be blank")


# PUBLIC_INTERFACE
class TodoUpdate(BaseModel):
    """
    Schema for replacing the text of an existing Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "text": "Buy bread",
            }
        }
    )

    text: str = Field(..., description="New text of the todo item; must not be blank")


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "text": "Buy milk",
                "created_at": "2025-01-25T10:15:30.123456Z",
                "updated_at": "2025-01-26T09:00:00.000001Z",
            }
        }
    )

    id: int = Field(..., description="Unique identifier of the todo item")
    text: str = Field(..., description="Text of the todo item")
    created_at: datetime = Field(..., description="Creation timestamp (ISO8601, UTC)")
    updated_at: datetime = Field(..., description="Last update timestamp (ISO8601, UTC)")
