"""
# Vendorise: idioms.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Common idioms.

All regex built here is meant to be compiled with `re.VERBOSE`.
Matching is tag-scoped: a tag is delimited by `<` and the first following `>`,
so that no pattern can run past the end of the tag it started in.
"""

import re
from typing import Optional


ABSOLUTE_URL_PREFIX_REGEX = r'https?:// [^"]*'
VOID_TAG_NAMES = [
    'area',
    'base',
    'br',
    'col',
    'embed',
    'hr',
    'img',
    'input',
    'link',
    'meta',
    'source',
    'track',
    'wbr',
]


def is_void_tag_name(tag_name: str) -> bool:
    return tag_name.lower() in VOID_TAG_NAMES


def build_indentation_regex() -> str:
    return r'(?P<indentation> [^\S\r\n]* )'


def build_line_break_regex() -> str:
    """
    Build regex for trailing horizontal whitespace and (at most) one line break.
    """
    return r'[^\S\r\n]* (?P<line_break> (?: \r?\n )? )'


def build_tag_start_regex(tag_name: Optional[str]) -> str:
    """
    Build regex for the part of an opening tag before a given attribute.

    If `tag_name` is None, the empty string is returned,
    so that the attribute is matched wherever it occurs.
    """
    if tag_name is None:
        return ''

    return fr'< {re.escape(tag_name)} [\s] [^>]*?'


def build_attribute_assignment_regex(attribute_name: str) -> str:
    """
    Build regex for `«attribute_name»="`, excluding longer names such as `data-«attribute_name»`.
    """
    return fr'(?<! [\w-] ) {re.escape(attribute_name)} [\s]* = [\s]* "'


def build_element_regex(tag_name: str, attribute_name: str, value_pattern: str,
                        content_pattern: Optional[str] = None) -> str:
    """
    Build regex for an element whose attribute value matches a pattern.

    For a void tag name (e.g. `link`), only the opening tag is matched.
    Otherwise the opening tag must be followed by `content_pattern` and then the closing tag.
    If `content_pattern` is None, only whitespace may come between the two tags,
    so that an element left unclosed never reaches into the markup after it.
    """
    opening_tag_regex = ''.join([
        build_tag_start_regex(tag_name),
        build_attribute_assignment_regex(attribute_name),
        fr'(?: {value_pattern} )',
        r'" [^>]* >',
    ])

    if is_void_tag_name(tag_name):
        return opening_tag_regex

    if content_pattern is None:
        content_pattern = r'[\s]*'

    return opening_tag_regex + fr'(?: {content_pattern} ) </ {re.escape(tag_name)} [\s]* >'


def build_attribute_redirect_regex(tag_name: Optional[str], attribute_name: str, url_suffix: str) -> str:
    """
    Build regex for an absolute-URL attribute value ending in `url_suffix`.

    Everything before the URL is captured as `opening`, the closing quote as `closing`.
    """
    return ''.join([
        '(?P<opening> ',
        build_tag_start_regex(tag_name),
        build_attribute_assignment_regex(attribute_name),
        ' )',
        ABSOLUTE_URL_PREFIX_REGEX,
        re.escape(url_suffix),
        '(?P<closing> " )',
    ])


def build_line_absorbing_regex(content_regex: str) -> str:
    """
    Build regex for content together with its indentation and trailing line break.

    Deleting a match of the resulting regex leaves no blank line behind.
    """
    return ''.join([
        build_indentation_regex(),
        content_regex,
        build_line_break_regex(),
    ])
