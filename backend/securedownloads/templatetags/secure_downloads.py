"""Template tags rendering signed download links.

Usage::

    {% load secure_downloads %}

    {% secure_download_url document feuser=request.user.pk as url %}

    {% secure_download_link document feuser="public" class="btn" target="_blank" %}
        Download PDF
    {% endsecure_download_link %}

The filename at the end of the generated URL is cosmetic. The file that is
delivered is taken from the signed token only.
"""
from __future__ import annotations

import re
from typing import Any, Mapping

from django import template
from django.template.base import FilterExpression, NodeList, Parser, Token
from django.utils.html import format_html
from django.utils.safestring import SafeString, mark_safe

from securedownloads.services import build_secure_download_url

register = template.Library()

LINK_ARGUMENTS = ("file", "feuser", "timeout", "site_identifier")

_kwarg_re = re.compile(r"^(?P<name>[\w-]+)=(?P<value>.+)$")


@register.simple_tag
def secure_download_url(
    file: object = None,
    feuser: Any = None,
    timeout: Any = None,
    site_identifier: str | None = None,
) -> str:
    """Return the signed URL for ``file`` or an empty string."""

    return build_secure_download_url(file, feuser, timeout, site_identifier)


def render_attributes(attrs: Mapping[str, Any]) -> SafeString:
    """Render attributes in the given order.

    ``True`` renders a bare attribute, ``False`` and ``None`` drop it. ``href``
    is reserved for the signed link.
    """

    rendered: list[str] = []
    for name, value in attrs.items():
        if name == "href" or value is None or value is False:
            continue
        if value is True:
            rendered.append(format_html(" {}", name))
        else:
            rendered.append(format_html(' {}="{}"', name, value))
    return mark_safe("".join(rendered))


def render_anchor(url: str, attrs: Mapping[str, Any], content: str = "") -> SafeString:
    """Return ``<a href="url" ...>content</a>``, always with a closing tag."""

    return format_html('<a href="{}"{}>{}</a>', url, render_attributes(attrs), content)


class SecureDownloadLinkNode(template.Node):
    def __init__(
        self,
        nodelist: NodeList,
        file: FilterExpression | None,
        options: dict[str, FilterExpression],
        attrs: dict[str, FilterExpression],
    ) -> None:
        self.nodelist = nodelist
        self.file = file
        self.options = options
        self.attrs = attrs

    def render(self, context: template.Context) -> str:
        file = self.file.resolve(context) if self.file is not None else None
        options = {name: value.resolve(context) for name, value in self.options.items()}
        url = build_secure_download_url(file, **options)
        if not url:
            return ""

        attrs = {name: value.resolve(context) for name, value in self.attrs.items()}
        # Children are rendered with the surrounding autoescape settings.
        content = mark_safe(self.nodelist.render(context))
        return render_anchor(url, attrs, content)


@register.tag("secure_download_link")
def do_secure_download_link(parser: Parser, token: Token) -> SecureDownloadLinkNode:
    """Parse ``{% secure_download_link file attr=value ... %}...{% endsecure_download_link %}``."""

    bits = token.split_contents()
    tag_name = bits.pop(0)

    file: FilterExpression | None = None
    options: dict[str, FilterExpression] = {}
    attrs: dict[str, FilterExpression] = {}
    for bit in bits:
        match = _kwarg_re.match(bit)
        if match is None:
            if file is not None:
                raise template.TemplateSyntaxError(
                    f"'{tag_name}' accepts a single positional argument (the file)."
                )
            file = parser.compile_filter(bit)
            continue

        name, value = match.group("name"), parser.compile_filter(match.group("value"))
        target = options if name in LINK_ARGUMENTS else attrs
        if name in target:
            raise template.TemplateSyntaxError(
                f"'{tag_name}' received multiple values for '{name}'."
            )
        target[name] = value

    if "file" in options:
        if file is not None:
            raise template.TemplateSyntaxError(
                f"'{tag_name}' received the file both positionally and as a keyword."
            )
        file = options.pop("file")

    nodelist = parser.parse((f"end{tag_name}",))
    parser.delete_first_token()
    return SecureDownloadLinkNode(nodelist, file, options, attrs)


__all__ = ["render_anchor", "render_attributes", "secure_download_url", "do_secure_download_link"]
