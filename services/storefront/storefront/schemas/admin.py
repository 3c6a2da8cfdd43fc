from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class LoginRequest(BaseModel):
    # Presence is checked after rate limiting, so missing fields still count as an attempt
    username: Optional[str] = None
    password: Optional[str] = None


class AdminUserInfo(BaseModel):
    id: str
    username: str
    name: str


class LoginResponse(BaseModel):
    success: bool = True
    user: AdminUserInfo


class LogoutResponse(BaseModel):
    success: bool = True
    message: str = "Successfully logged out"


class AdminInfo(BaseModel):
    name: Optional[str] = None
    username: Optional[str] = None


class StatusResponse(BaseModel):
    """Dashboard connectivity report (camelCase keys on the wire)"""
    model_config = ConfigDict(populate_by_name=True)

    server_connected: bool = Field(True, alias="serverConnected")
    database_connected: bool = Field(False, alias="databaseConnected")
    storage_connected: bool = Field(False, alias="storageConnected")
    admin_info: Optional[AdminInfo] = Field(None, alias="adminInfo")
    timestamp: datetime
