import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from peptitrace.models.vote import VoteType


class VoteRequest(BaseModel):
    vote_type: VoteType


class VoteOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: uuid.UUID
    experience_id: uuid.UUID
    vote_type: VoteType
    created_at: datetime
    updated_at: datetime
