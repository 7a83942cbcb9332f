"""Render an assembled document as an HTML fragment for email."""

from html import escape

from assemble_document.models import ArticleEntry, Document, Heading

HEADING_STYLE = "color: #202124; border-bottom: 1px solid #e0e0e0; padding-bottom: 5px; margin-top: 20px;"
TITLE_STYLE = "padding: 0; font-weight: bold; margin: 10px 0 0 0; color: #1a73e8; font-size: 12pt;"
LINK_STYLE = "text-decoration: none; color: #1a73e8;"


def render_html(document: Document) -> str:
    """Render headings and linked titles only.

    Summary paragraphs and error markers are left out: the email carries
    the titles and links, the full document carries the summaries.
    """
    parts = []
    for block in document.blocks:
        if isinstance(block, Heading):
            if block.text.strip():
                parts.append(f'<h2 style="{HEADING_STYLE}">{escape(block.text)}</h2>')
        elif isinstance(block, ArticleEntry):
            if block.url:
                link = f'<a href="{escape(block.url, quote=True)}" style="{LINK_STYLE}">{escape(block.title)}</a>'
            else:
                link = escape(block.title)
            parts.append(f'<p style="{TITLE_STYLE}">{link}</p>')
    return "".join(parts)


def render_full_html(document: Document) -> str:
    """Render the whole document, summaries and error markers included."""
    parts = [f"<h1>{escape(document.title)}</h1>"]
    for block in document.blocks:
        if isinstance(block, Heading):
            parts.append(f"<h2>{escape(block.text)}</h2>")
        elif isinstance(block, ArticleEntry):
            parts.append(
                f'<p><b><a href="{escape(block.url, quote=True)}">{escape(block.title)}</a></b></p>'
            )
            if block.summary:
                parts.append(f"<p>{escape(block.summary)}</p>")
        else:
            parts.append(f'<p class="error">{escape(block.text)}</p>')
    return "<html><body>" + "\n".join(parts) + "</body></html>"
