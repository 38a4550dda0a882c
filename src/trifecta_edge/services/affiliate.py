# ABOUTME: Injects the per-site affiliate tag into served HTML.
# ABOUTME: Defines window.AMAZON_TAG ahead of the page's first inline script.

import json

INLINE_SCRIPT = "<script>"


def tag_script(tag: str) -> str:
    """Inline script defining the affiliate tag global."""
    literal = json.dumps(tag).replace("</", "<\\/")
    return f"<script>window.AMAZON_TAG={literal};</script>"


def inject_affiliate_tag(html: str, tag: str) -> str:
    """Insert the tag script immediately before the first inline <script> tag.

    Documents without an attribute-less <script> tag are returned unchanged.
    """
    return html.replace(INLINE_SCRIPT, tag_script(tag) + INLINE_SCRIPT, 1)
