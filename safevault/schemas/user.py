"""
User schemas for view contexts.
Keeps password hashes and roles out of anything rendered to a page.
"""

from pydantic import BaseModel


class UserSummary(BaseModel):
    """Search result row: id, username and email only."""

    id: int
    username: str
    email: str

    model_config = {"from_attributes": True}
