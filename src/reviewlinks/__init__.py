"""Linkify commit messages and review comments."""

from .engine import LinkifyEngine, linkify
from .models import CommentLinkPattern, Html, Link, Text

__all__ = ["CommentLinkPattern", "Html", "Link", "LinkifyEngine", "Text", "linkify"]
