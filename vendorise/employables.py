"""
# Vendorise: employables.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Classes for rewrite rules that are actually exposed to the user via rewrite rule syntax.
"""

import re
from typing import Callable, Optional

from vendorise.bases import (
    Rewrite,
    RewriteWithAttributeName,
    RewriteWithContentPattern,
    RewriteWithSubstitutions,
    RewriteWithTagName,
    RewriteWithValuePattern,
)
from vendorise.exceptions import CommittedMutateException, MissingAttributeException
from vendorise.idioms import build_attribute_redirect_regex, build_element_regex, build_line_absorbing_regex


class ElementDeletionRewrite(
    RewriteWithTagName,
    RewriteWithAttributeName,
    RewriteWithValuePattern,
    RewriteWithContentPattern,
    Rewrite,
):
    """
    A rewrite rule for deleting elements whose attribute value matches a pattern.

    The element is deleted along with its indentation and trailing line break.
    For a non-void tag name, the closing tag goes too,
    and the content between the tags must match `content_pattern`
    (whitespace only if NONE).
    `content_pattern` is ignored for a void tag name.

    Rewrite rule syntax:
    ````
    ElementDeletionRewrite: #«id»
    - tag_name: «name» (mandatory)
    - attribute_name: «name» (mandatory)
    - value_pattern: «regex» (mandatory)
    - content_pattern: (def) NONE | «regex»
    ````
    """
    _regex_pattern_compiled: Optional[re.Pattern]

    def __init__(self, id_: str, verbose_mode_enabled: bool):
        super().__init__(id_, verbose_mode_enabled)
        self._regex_pattern_compiled = None

    @property
    def attribute_names(self) -> tuple[str, ...]:
        return (
            'tag_name',
            'attribute_name',
            'value_pattern',
            'content_pattern',
        )

    def _validate_mandatory_attributes(self):
        if self._tag_name is None:
            raise MissingAttributeException('tag_name')

        if self._attribute_name is None:
            raise MissingAttributeException('attribute_name')

        if self._value_pattern is None:
            raise MissingAttributeException('value_pattern')

    def _set_apply_method_variables(self):
        self._regex_pattern_compiled = re.compile(
            pattern=ElementDeletionRewrite.build_regex_pattern(self._tag_name, self._attribute_name,
                                                               self._value_pattern, self._content_pattern),
            flags=re.ASCII | re.IGNORECASE | re.VERBOSE,
        )

    def _apply(self, string: str) -> str:
        return re.sub(
            pattern=self._regex_pattern_compiled,
            repl='',
            string=string,
        )

    @staticmethod
    def build_regex_pattern(tag_name: str, attribute_name: str, value_pattern: str,
                            content_pattern: Optional[str] = None) -> str:
        return build_line_absorbing_regex(
            build_element_regex(tag_name, attribute_name, value_pattern, content_pattern)
        )


class LiteralDeletionRewrite(Rewrite):
    """
    A rewrite rule for deleting every occurrence of a literal string.

    Each occurrence is deleted along with its indentation and trailing line break.
    Matching is case-sensitive.

    Rewrite rule syntax:
    ````
    LiteralDeletionRewrite: #«id»
    - literal: «string» (mandatory)
    ````
    """
    _literal: Optional[str]
    _regex_pattern_compiled: Optional[re.Pattern]

    def __init__(self, id_: str, verbose_mode_enabled: bool):
        super().__init__(id_, verbose_mode_enabled)
        self._literal = None
        self._regex_pattern_compiled = None

    @property
    def attribute_names(self) -> tuple[str, ...]:
        return (
            'literal',
        )

    @property
    def literal(self) -> Optional[str]:
        return self._literal

    @literal.setter
    def literal(self, value: str):
        if self._is_committed:
            raise CommittedMutateException('error: cannot set `literal` after `commit()`')

        self._literal = value

    def _validate_mandatory_attributes(self):
        if self._literal is None:
            raise MissingAttributeException('literal')

    def _set_apply_method_variables(self):
        self._regex_pattern_compiled = re.compile(
            pattern=LiteralDeletionRewrite.build_regex_pattern(self._literal),
            flags=re.VERBOSE,
        )

    def _apply(self, string: str) -> str:
        return re.sub(
            pattern=self._regex_pattern_compiled,
            repl='',
            string=string,
        )

    @staticmethod
    def build_regex_pattern(literal: str) -> str:
        return build_line_absorbing_regex(re.escape(literal))


class AttributeRedirectRewrite(
    RewriteWithSubstitutions,
    RewriteWithTagName,
    RewriteWithAttributeName,
    Rewrite,
):
    """
    A rewrite rule for redirecting absolute URLs to local paths.

    For each substitution `«url_suffix» --> «local_path»`,
    every double-quoted attribute value that is an absolute `http(s)` URL ending in «url_suffix»
    is replaced by «local_path».
    Only the value changes; the rest of the tag is left untouched.
    If `tag_name` is set, only attributes inside an opening tag of that name are redirected;
    otherwise the attribute is matched wherever it occurs.
    Substitutions are applied in order.

    Rewrite rule syntax:
    ````
    AttributeRedirectRewrite: #«id»
    - tag_name: (def) NONE | «name»
    - attribute_name: «name» (mandatory)
    * «url_suffix» --> «local_path»
    [...]
    ````
    """
    _substitute_function_from_regex: dict[re.Pattern, Callable[[re.Match], str]]

    def __init__(self, id_: str, verbose_mode_enabled: bool):
        super().__init__(id_, verbose_mode_enabled)
        self._substitute_function_from_regex = {}

    @property
    def attribute_names(self) -> tuple[str, ...]:
        return (
            'tag_name',
            'attribute_name',
        )

    def _validate_mandatory_attributes(self):
        if self._attribute_name is None:
            raise MissingAttributeException('attribute_name')

        if len(self._substitute_from_pattern) == 0:
            raise MissingAttributeException('substitutions')

    def _set_apply_method_variables(self):
        for url_suffix, local_path in self._substitute_from_pattern.items():
            regex_pattern_compiled = re.compile(
                pattern=AttributeRedirectRewrite.build_regex_pattern(self._tag_name, self._attribute_name,
                                                                     url_suffix),
                flags=re.ASCII | re.IGNORECASE | re.VERBOSE,
            )
            substitute_function = AttributeRedirectRewrite.build_substitute_function(local_path)
            self._substitute_function_from_regex[regex_pattern_compiled] = substitute_function

    def _apply(self, string: str) -> str:
        for regex_pattern_compiled, substitute_function in self._substitute_function_from_regex.items():
            string = re.sub(
                pattern=regex_pattern_compiled,
                repl=substitute_function,
                string=string,
            )

        return string

    @staticmethod
    def build_regex_pattern(tag_name: Optional[str], attribute_name: str, url_suffix: str) -> str:
        return build_attribute_redirect_regex(tag_name, attribute_name, url_suffix)

    @staticmethod
    def build_substitute_function(local_path: str) -> Callable[[re.Match], str]:
        def substitute_function(match: re.Match) -> str:
            opening = match.group('opening')
            closing = match.group('closing')

            return f'{opening}{local_path}{closing}'

        return substitute_function


class ElementSubstitutionRewrite(
    RewriteWithTagName,
    RewriteWithAttributeName,
    RewriteWithValuePattern,
    RewriteWithContentPattern,
    Rewrite,
):
    """
    A rewrite rule for replacing whole elements with a fixed substitute.

    Elements are matched as for ElementDeletionRewrite,
    but their indentation and trailing line break are kept around «substitute»,
    which therefore takes the place of the element in the document.
    The attributes of the original element are discarded.

    Rewrite rule syntax:
    ````
    ElementSubstitutionRewrite: #«id»
    - tag_name: «name» (mandatory)
    - attribute_name: «name» (mandatory)
    - value_pattern: «regex» (mandatory)
    - content_pattern: (def) NONE | «regex»
    - substitute: «string» (mandatory)
    ````
    """
    _substitute: Optional[str]
    _regex_pattern_compiled: Optional[re.Pattern]
    _substitute_function: Optional[Callable[[re.Match], str]]

    def __init__(self, id_: str, verbose_mode_enabled: bool):
        super().__init__(id_, verbose_mode_enabled)
        self._substitute = None
        self._regex_pattern_compiled = None
        self._substitute_function = None

    @property
    def attribute_names(self) -> tuple[str, ...]:
        return (
            'tag_name',
            'attribute_name',
            'value_pattern',
            'content_pattern',
            'substitute',
        )

    @property
    def substitute(self) -> Optional[str]:
        return self._substitute

    @substitute.setter
    def substitute(self, value: str):
        if self._is_committed:
            raise CommittedMutateException('error: cannot set `substitute` after `commit()`')

        self._substitute = value

    def _validate_mandatory_attributes(self):
        if self._tag_name is None:
            raise MissingAttributeException('tag_name')

        if self._attribute_name is None:
            raise MissingAttributeException('attribute_name')

        if self._value_pattern is None:
            raise MissingAttributeException('value_pattern')

        if self._substitute is None:
            raise MissingAttributeException('substitute')

    def _set_apply_method_variables(self):
        self._regex_pattern_compiled = re.compile(
            pattern=ElementSubstitutionRewrite.build_regex_pattern(self._tag_name, self._attribute_name,
                                                                   self._value_pattern, self._content_pattern),
            flags=re.ASCII | re.IGNORECASE | re.VERBOSE,
        )
        self._substitute_function = ElementSubstitutionRewrite.build_substitute_function(self._substitute)

    def _apply(self, string: str) -> str:
        return re.sub(
            pattern=self._regex_pattern_compiled,
            repl=self._substitute_function,
            string=string,
        )

    @staticmethod
    def build_regex_pattern(tag_name: str, attribute_name: str, value_pattern: str,
                            content_pattern: Optional[str] = None) -> str:
        return build_line_absorbing_regex(
            build_element_regex(tag_name, attribute_name, value_pattern, content_pattern)
        )

    @staticmethod
    def build_substitute_function(substitute: str) -> Callable[[re.Match], str]:
        def substitute_function(match: re.Match) -> str:
            indentation = match.group('indentation')
            line_break = match.group('line_break')

            return f'{indentation}{substitute}{line_break}'

        return substitute_function
