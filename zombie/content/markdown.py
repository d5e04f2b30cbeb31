#!/usr/bin/env python3
"""
HTML to Markdown conversion module.

This module converts parsed pages and elements into Markdown text, which is
a convenient readable projection of a document for logging and the CLI.
"""

import html2text


def html_to_markdown(html_content, url=""):
    """
    Convert HTML content to markdown format.

    Args:
        html_content: HTML content to convert
        url: URL of the page (for reference)

    Returns:
        str: Markdown formatted content
    """
    h = html2text.HTML2Text(baseurl=url or "")
    h.ignore_links = False
    h.ignore_images = False
    h.ignore_tables = False
    h.ignore_emphasis = False
    h.body_width = 0  # Don't wrap lines

    markdown_content = h.handle(html_content)

    if url:
        markdown_content = f"# Page from: {url}\n\n{markdown_content}"

    return markdown_content


def element_to_markdown(element):
    """Convert a single element's outer HTML to markdown."""
    return html_to_markdown(element.inner_content).strip()
