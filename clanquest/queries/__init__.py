"""Read-only queries over a world snapshot."""

from clanquest.queries.look import look

__all__ = ["look"]
