"""Comment records and selection of a player's command for the tick window."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class CommentAuthor(BaseModel):
    id: str
    login: str = ""
    type: str = "User"

    @property
    def is_bot(self) -> bool:
        return self.type.lower() == "bot"


class CommentRecord(BaseModel):
    """An already-fetched comment from the player's thread."""

    body: str
    user: CommentAuthor
    created_at: datetime


def latest_command(
    comments: Iterable[CommentRecord],
    owner_id: str,
    since: datetime | None = None,
) -> CommentRecord | None:
    """The newest owner-authored, non-bot comment created at or after *since*."""
    best: CommentRecord | None = None
    for comment in comments:
        if comment.user.is_bot:
            logger.debug("Ignoring bot comment from %s", comment.user.login)
            continue
        if comment.user.id != owner_id:
            logger.debug("Ignoring comment from non-owner %s", comment.user.login)
            continue
        if since is not None and comment.created_at < since:
            continue
        if best is None or comment.created_at >= best.created_at:
            best = comment
    return best
