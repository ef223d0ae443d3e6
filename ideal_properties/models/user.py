from pydantic import BaseModel


class OwnerUser(BaseModel):
    """The signed-in site owner"""
    id: str = "owner"
    role: str = "owner"


class StoredObject(BaseModel):
    bucket: str
    path: str
    content_type: str
    url: str
