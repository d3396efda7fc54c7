from typing import Optional

from pydantic import BaseModel, Field


class UserRecord(BaseModel):
    """A row of the ``users`` table as returned by Supabase."""

    id: str
    clerkId: str = Field(..., description="Clerk user id (the session subject)")
    email: str
    name: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "id": "7f0c7a3e-2b1d-4c55-9a0e-3f1e2d4c5b6a",
                "clerkId": "user_2abcDEF",
                "email": "a@x.com",
                "name": "A",
                "created_at": "2024-01-15T10:00:00.000000+00:00",
                "updated_at": None,
            }
        }


class UserCreate(BaseModel):
    clerkId: str
    email: str
    name: Optional[str] = None


class UserUpdate(BaseModel):
    """Partial update; fields left unset are not sent to the database."""

    email: Optional[str] = None
    name: Optional[str] = None

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class UserProfileRequest(BaseModel):
    """Body of POST /api/users/me; the clerkId comes from the session."""

    email: str
    name: Optional[str] = None
