from typing import Optional
from pydantic import BaseModel, Field


class CallRequestIn(BaseModel):
    name: Optional[str] = Field(None, description="Nom du contact")
    email: Optional[str] = Field(None, description="Email du contact")
    goals: Optional[str] = Field(None, description="Objectifs exprimés dans le formulaire")
    company: Optional[str] = Field(None, description="Société (obligatoire si CALL_REQUEST_REQUIRE_COMPANY)")
