"""Pydantic schemas for the content tree and its collaborators."""
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from console_api.tree.categories import Category

KEY_DELIMITER = "~;~"
DEFAULT_ORGANIZATION = "host-org"


class Identity(BaseModel):
    """A user identity scoped to an organization."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    organization: str = DEFAULT_ORGANIZATION

    @model_validator(mode="before")
    @classmethod
    def _parse_key(cls, data: object) -> object:
        # catalogs and headers may name an identity by its key alone
        if isinstance(data, str):
            name, sep, organization = data.partition(KEY_DELIMITER)
            return {
                "name": name,
                "organization": organization if sep else DEFAULT_ORGANIZATION,
            }
        return data

    @property
    def key(self) -> str:
        """Stable string key, ``name~;~organization``."""
        return f"{self.name}{KEY_DELIMITER}{self.organization}"

    @classmethod
    def from_key(cls, key: str) -> "Identity":
        """Parse an identity key.

        Args:
            key: Key produced by ``Identity.key`` or a bare user name.

        Returns:
            The identity, in the default organization when the key has
            no organization segment.
        """
        return cls.model_validate(key)


class RequestContext(BaseModel):
    """Caller identity and locale, passed explicitly through tree building."""

    identity: Identity
    locale: str = "en"
    request_id: str | None = None


class Node(BaseModel):
    """Immutable content tree node."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Identifier, unique among siblings")
    label: str = Field(description="Display name")
    category: Category
    owner: Identity | None = Field(
        default=None, description="Owner of a private-scope node"
    )
    children: list["Node"] | None = None
    full_path: str | None = Field(default=None, description="Display path")
    description: str = ""
    icon: str | None = None
    last_modified: int = Field(default=0, description="Epoch milliseconds")
    read_only: bool | None = None
    built_in: bool = False


class TreeResponse(BaseModel):
    """Content tree response."""

    nodes: list[Node]


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    detail: str | None = None


# === Collaborator records ===


class AssetRecord(BaseModel):
    """Viewsheet, worksheet or folder entry from the asset store."""

    path: str
    category: Category
    description: str = ""
    last_modified: int = 0
    materialized: bool = False
    worksheet_type: str | None = Field(
        default=None,
        description="condition, named-group, variable, table or date-range",
    )


class RecycleRecord(BaseModel):
    """Entry held by the recycle bin."""

    path: str = Field(description="Path inside the recycle bin folder")
    name: str
    category: Category
    original_path: str
    original_user: Identity | None = None


class QueryRecord(BaseModel):
    """Query defined on a data source."""

    name: str
    folder: str | None = None
    description: str = ""
    last_modified: int = 0


class ModelRecord(BaseModel):
    """Logical model or partition, with its extended variants."""

    name: str
    folder: str | None = None
    description: str = ""
    last_modified: int = 0
    extensions: list[str] = Field(default_factory=list)


class VpmRecord(BaseModel):
    """Virtual private model."""

    name: str
    description: str = ""
    last_modified: int = 0


class DataModelRecord(BaseModel):
    """Data model attached to a data source."""

    folders: list[str] = Field(default_factory=list)
    logical_models: list[ModelRecord] = Field(default_factory=list)
    partitions: list[ModelRecord] = Field(default_factory=list)
    vpms: list[VpmRecord] = Field(default_factory=list)


class DataSourceRecord(BaseModel):
    """Registered data source."""

    name: str
    folder: str | None = Field(default=None, description="Parent folder path")
    type: str = "jdbc"
    description: str = ""
    last_modified: int = 0
    query_folders: list[str] = Field(default_factory=list)
    queries: list[QueryRecord] = Field(default_factory=list)
    data_model: DataModelRecord | None = None
    cubes: list[str] = Field(default_factory=list)

    @property
    def full_name(self) -> str:
        """Name qualified by its folder path."""
        return f"{self.folder}/{self.name}" if self.folder else self.name


class LibraryRecord(BaseModel):
    """Script or table style in the library."""

    name: str
    folder: str | None = None
    description: str = ""
    last_modified: int = 0
    audit: bool = False


class TaskRecord(BaseModel):
    """Schedule task."""

    name: str
    owner: Identity | None = None
    folder: str = ""
    last_modified: int = 0
    internal: bool = False

    @property
    def task_id(self) -> str:
        """Owner-qualified task identifier."""
        return f"{self.owner.key}:{self.name}" if self.owner else self.name


class DashboardRecord(BaseModel):
    """Portal dashboard."""

    name: str
    description: str = ""
    last_modified: int = 0


class DraftKind(str, Enum):
    """Kind of sheet an auto-saved draft holds."""

    WORKSHEET = "WORKSHEET"
    VIEWSHEET = "VIEWSHEET"


class DraftFile(BaseModel):
    """Parsed auto-save file descriptor."""

    model_config = ConfigDict(frozen=True)

    file_name: str
    scope: str
    kind: DraftKind
    owner_key: str | None = Field(default=None, description="None for anonymous")
    name: str
    last_modified: datetime
