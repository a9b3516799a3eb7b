"""
Markdown link conversion for report strings.
"""
import markdown
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor
from markupsafe import Markup, escape

_ALLOWED_SCHEMES = ("http://", "https://")


class _ReportLinkTreeprocessor(Treeprocessor):
    """Opens http(s) links in a new tab; other links lose their anchor."""

    def run(self, root):
        for element in root.iter("a"):
            href = element.attrib.pop("href", "")
            element.attrib.pop("title", None)
            if href.startswith(_ALLOWED_SCHEMES):
                element.set("rel", "noopener")
                element.set("target", "_blank")
                element.set("href", href)
            else:
                element.tag = "span"


class _ReportLinkExtension(Extension):
    def extendMarkdown(self, md):
        # after inline patterns (20) have built the <a> elements
        md.treeprocessors.register(_ReportLinkTreeprocessor(md), "report_links", 5)


def convert_markdown_link_snippets(text: str) -> Markup:
    """Escape ``text`` and turn its http(s) markdown links into anchors.

    Raw HTML in ``text`` is escaped before conversion. Links with any other
    scheme are kept as their plain text.
    """
    html = markdown.markdown(str(escape(text)), extensions=[_ReportLinkExtension()])
    if html.startswith("<p>") and html.endswith("</p>") and html.count("<p>") == 1:
        html = html[len("<p>"):-len("</p>")]
    return Markup(html)
