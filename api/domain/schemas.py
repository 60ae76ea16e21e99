"""Pydantic models describing request/response payloads."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str
    username: str


class BlogPost(BaseModel):
    id: str
    title: str
    content: str
    excerpt: str
    image: Optional[str] = None
    author: str = "Admin"
    createdAt: str
    updatedAt: str


class Project(BaseModel):
    id: str
    title: str
    description: str
    technologies: List[str] = Field(default_factory=list)
    githubLink: str = ""
    liveLink: str = ""
    image: Optional[str] = None
    createdAt: str
    updatedAt: str


class MessageResponse(BaseModel):
    message: str


class HealthStatus(BaseModel):
    status: str
    timestamp: str
    storage: str
    assets: str
