"""Intent ingestion: free-text commands, character sheets and comment windows."""

from clanquest.ingest.comments import CommentAuthor, CommentRecord, latest_command
from clanquest.ingest.parser import CharacterSheet, parse_action, parse_character_sheet

__all__ = [
    "CharacterSheet",
    "CommentAuthor",
    "CommentRecord",
    "latest_command",
    "parse_action",
    "parse_character_sheet",
]
