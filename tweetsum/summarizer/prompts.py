"""Prompt templates for post summaries."""

from ..models.post import Post

SUMMARY_PROMPT = """Here is a tweet: {post_context} 👉 Your tasks:
1. Summarize in **bullet points**  
2. Explain in simple terms  
3. Highlight main topic (crypto, tech, finance, etc)  
4. Add extra insights if relevant  
5. Format with **bold headings** + bullet points"""

MEDIA_SEPARATOR = ", "


def build_post_context(post: Post, *, include_media: bool = True) -> str:
    lines = [f"author: {post.author_name},"]
    if include_media:
        lines.append(f"media: {MEDIA_SEPARATOR.join(post.media)},")
    lines.append(f"content: {post.content},")
    lines.append(f"twitterHandle: {post.handle},")
    lines.append(f"timeStamps: {post.timestamp}")
    return "\n".join(lines)


def build_summary_prompt(post: Post, *, include_media: bool = True) -> str:
    """Build the single user message sent for a summary."""
    return SUMMARY_PROMPT.format(post_context=build_post_context(post, include_media=include_media))
