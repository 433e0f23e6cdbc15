from pydantic import BaseModel


class UnreadCountResponseModel(BaseModel):
    count: int


class NotificationMessageResponseModel(BaseModel):
    message: str
