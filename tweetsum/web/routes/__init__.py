"""API routes for tweetsum web interface."""

from . import keys, posts, summary

__all__ = ["keys", "posts", "summary"]
