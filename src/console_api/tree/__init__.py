"""Content tree aggregation, redaction and search."""

from console_api.tree.catalog import Catalog, CatalogError, load_catalog
from console_api.tree.categories import Category, NodeKind
from console_api.tree.drafts import DirectoryDraftStore, parse_draft_name
from console_api.tree.gatherer import AggregationError, TreeSource, gather
from console_api.tree.merger import merge, sort_nodes
from console_api.tree.reaper import DRAFT_RETENTION, group_drafts, reap_drafts
from console_api.tree.redactor import redact
from console_api.tree.resources import (
    Resource,
    ResourceAction,
    ResourceType,
    map_resource,
)
from console_api.tree.schemas import (
    DEFAULT_ORGANIZATION,
    DraftFile,
    DraftKind,
    ErrorResponse,
    Identity,
    Node,
    RequestContext,
    TreeResponse,
)
from console_api.tree.search import search
from console_api.tree.service import ContentTreeService

__all__ = [
    "DEFAULT_ORGANIZATION",
    "DRAFT_RETENTION",
    "AggregationError",
    "Catalog",
    "CatalogError",
    "Category",
    "ContentTreeService",
    "DirectoryDraftStore",
    "DraftFile",
    "DraftKind",
    "ErrorResponse",
    "Identity",
    "Node",
    "NodeKind",
    "RequestContext",
    "Resource",
    "ResourceAction",
    "ResourceType",
    "TreeResponse",
    "TreeSource",
    "gather",
    "group_drafts",
    "load_catalog",
    "map_resource",
    "merge",
    "parse_draft_name",
    "reap_drafts",
    "redact",
    "search",
    "sort_nodes",
]
