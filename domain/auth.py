"""Domain Entities - Auth"""
from pydantic import BaseModel, ConfigDict
from typing import Optional

class User(BaseModel):
    """Authenticated caller, issued by the external identity provider"""
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    username: Optional[str] = None
    email: Optional[str] = None
    disabled: bool = False
