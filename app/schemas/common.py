from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain confirmation returned by delete endpoints"""
    message: str
