"""
Team module data models.
"""

from enum import Enum
from typing import Optional
from pydantic import AliasChoices, BaseModel, Field

from shared.models import Timestamped


class MemberStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Location(BaseModel):
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None


class SocialLinks(BaseModel):
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    email: Optional[str] = None
    github: Optional[str] = None


class TeamMemberFields(BaseModel):
    role_value: int = Field(0, validation_alias=AliasChoices("role_value", "roleValue"))
    profile_image: Optional[str] = Field(
        None, validation_alias=AliasChoices("profile_image", "profileImage")
    )
    bio: Optional[str] = None
    location: Location = Field(default_factory=Location)
    joined_date: Optional[str] = Field(None, validation_alias=AliasChoices("joined_date", "joinedDate"))
    skills: list[str] = Field(default_factory=list)
    social_links: SocialLinks = Field(
        default_factory=SocialLinks, validation_alias=AliasChoices("social_links", "socialLinks")
    )
    status: MemberStatus = MemberStatus.ACTIVE


class TeamMemberCreateRequest(TeamMemberFields):
    """New member. The slug defaults to the slugified name."""

    slug: Optional[str] = Field(None, validation_alias=AliasChoices("slug", "id"))
    name: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1, description="Job title")
    department: str = Field(..., min_length=1)


class TeamMemberUpdateRequest(BaseModel):
    slug: Optional[str] = None
    name: Optional[str] = Field(None, min_length=1)
    role: Optional[str] = Field(None, min_length=1)
    role_value: Optional[int] = Field(None, validation_alias=AliasChoices("role_value", "roleValue"))
    department: Optional[str] = Field(None, min_length=1)
    profile_image: Optional[str] = Field(
        None, validation_alias=AliasChoices("profile_image", "profileImage")
    )
    bio: Optional[str] = None
    location: Optional[Location] = None
    joined_date: Optional[str] = Field(None, validation_alias=AliasChoices("joined_date", "joinedDate"))
    skills: Optional[list[str]] = None
    social_links: Optional[SocialLinks] = Field(
        None, validation_alias=AliasChoices("social_links", "socialLinks")
    )
    status: Optional[MemberStatus] = None


class TeamMember(TeamMemberFields, Timestamped):
    id: str
    slug: str
    name: str
    role: str
    department: str
    created_by: Optional[str] = None


class TeamMemberListResponse(BaseModel):
    members: list[TeamMember]
    total: int
    page: int
    limit: int
    total_pages: int


class Department(Timestamped):
    id: str
    name: str
    description: Optional[str] = None
    created_by: Optional[str] = None


class DepartmentCreateRequest(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None


class DepartmentListResponse(BaseModel):
    departments: list[Department]
