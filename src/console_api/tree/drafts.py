"""Directory-backed store of auto-saved drafts."""
from datetime import datetime, timezone
from pathlib import Path

import structlog

from console_api.tree.schemas import DraftFile, DraftKind, Identity

logger = structlog.get_logger()

NULL_USER = "_NULL_"
ANONYMOUS_OWNERS: frozenset[str] = frozenset({NULL_USER, "anonymous"})


def parse_draft_name(file_name: str, last_modified: datetime) -> DraftFile | None:
    """Decode an auto-save file name.

    Names look like ``scope^TYPE^owner^name[^client]``, for example
    ``8^VIEWSHEET^_NULL_^Untitled-1^0_0_0_0_0_0_0_1~``.

    Args:
        file_name: Name of the draft file.
        last_modified: Modification time of the file.

    Returns:
        The parsed descriptor, or None if the name is not a draft name.
    """
    parts = file_name.split("^")

    if len(parts) < 4:
        return None

    scope, kind, owner, name = parts[:4]

    try:
        draft_kind = DraftKind(kind)
    except ValueError:
        return None

    owner_key: str | None = owner
    if not owner or Identity.from_key(owner).name in ANONYMOUS_OWNERS:
        owner_key = None

    return DraftFile(
        file_name=file_name,
        scope=scope,
        kind=draft_kind,
        owner_key=owner_key,
        name=name,
        last_modified=last_modified,
    )


class DirectoryDraftStore:
    """Draft store over a flat directory of auto-save files.

    Attributes:
        root: Directory holding the draft files.
    """

    def __init__(self, root: Path) -> None:
        """Initialize the store.

        Args:
            root: Directory holding the draft files.
        """
        self.root = root

    def list_drafts(self) -> list[DraftFile]:
        """List decodable drafts with their modification times.

        Returns:
            Drafts sorted by file name. Files that vanish while listing
            and names that are not draft names are skipped.
        """
        try:
            entries = sorted(self.root.iterdir())
        except FileNotFoundError:
            logger.warning("drafts_directory_not_found", path=str(self.root))
            return []

        drafts: list[DraftFile] = []

        for entry in entries:
            try:
                stat = entry.stat()
            except FileNotFoundError:
                continue

            if not entry.is_file():
                continue

            modified = datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc)
            draft = parse_draft_name(entry.name, modified)

            if draft is None:
                logger.debug("draft_name_unrecognized", file=entry.name)
                continue

            drafts.append(draft)

        return drafts

    def delete(self, draft: DraftFile) -> bool:
        """Delete a draft file.

        Args:
            draft: Draft to delete.

        Returns:
            True if the file was removed, False if it was already gone.

        Raises:
            OSError: If the file exists but cannot be removed.
        """
        try:
            (self.root / draft.file_name).unlink()
        except FileNotFoundError:
            return False
        return True
