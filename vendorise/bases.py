"""
# Vendorise: bases.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Base classes for rewrite rules.
"""

import abc
from typing import Optional

from vendorise.constants import VERBOSE_MODE_DIVIDER_SYMBOL_COUNT
from vendorise.exceptions import CommittedMutateException, UncommittedApplyException


class Rewrite(abc.ABC):
    """
    Base class for a rewrite rule.

    Not to be used when authoring rules.
    (Hypothetical) rewrite rule syntax:
    ````
    Rewrite: #«id»
    ````

    A rewrite is configured through its attribute setters,
    then frozen by `commit()`, after which it may be applied any number of times.
    """
    _is_committed: bool
    _id: str
    _verbose_mode_enabled: bool

    def __init__(self, id_: str, verbose_mode_enabled: bool):
        self._is_committed = False
        self._id = id_
        self._verbose_mode_enabled = verbose_mode_enabled

    @property
    @abc.abstractmethod
    def attribute_names(self) -> tuple[str, ...]:
        raise NotImplementedError

    @property
    def id_(self) -> str:
        return self._id

    @property
    def is_committed(self) -> bool:
        return self._is_committed

    def commit(self):
        self._validate_mandatory_attributes()
        self._set_apply_method_variables()
        self._is_committed = True

    def apply(self, string: str) -> str:
        if not self._is_committed:
            raise UncommittedApplyException('error: cannot call `apply(string)` before `commit()`')

        string_before = string
        string = self._apply(string)
        string_after = string

        if self._verbose_mode_enabled:
            if string_before == string_after:
                no_change_indicator = ' (no change)'
            else:
                no_change_indicator = ''

            print('<' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT + f' BEFORE #{self._id}')
            print(string_before)
            print('=' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT + no_change_indicator)
            print(string_after)
            print('>' * VERBOSE_MODE_DIVIDER_SYMBOL_COUNT + f' AFTER #{self._id}')
            print('\n\n\n\n')

        return string_after

    @abc.abstractmethod
    def _validate_mandatory_attributes(self):
        """
        Ensure all mandatory attributes have been set.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def _set_apply_method_variables(self):
        """
        Set variables used in `self._apply(string)`.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def _apply(self, string: str) -> str:
        """
        Apply the defined rewrite to a string.
        """
        raise NotImplementedError


class RewriteWithSubstitutions(Rewrite, abc.ABC):
    """
    Base class for a rewrite rule with substitutions.

    Not to be used when authoring rules.
    (Hypothetical) rewrite rule syntax:
    ````
    RewriteWithSubstitutions: #«id»
    * «pattern» --> «substitute»
    [...]
    ````
    Substitutions are kept in declaration order.
    """
    _substitute_from_pattern: dict[str, str]

    def __init__(self, id_: str, verbose_mode_enabled: bool):
        super().__init__(id_, verbose_mode_enabled)
        self._substitute_from_pattern = {}

    @property
    def substitute_from_pattern(self) -> dict[str, str]:
        return dict(self._substitute_from_pattern)

    def add_substitution(self, pattern: str, substitute: str):
        if self._is_committed:
            raise CommittedMutateException('error: cannot call `add_substitution(...)` after `commit()`')

        self._substitute_from_pattern[pattern] = substitute


class RewriteWithTagName(Rewrite, abc.ABC):
    """
    Base class for a rewrite rule with `tag_name`.

    Not to be used when authoring rules.
    (Hypothetical) rewrite rule syntax:
    ````
    RewriteWithTagName: #«id»
    - tag_name: (def) NONE | «name»
    ````
    """
    _tag_name: Optional[str]

    def __init__(self, id_: str, verbose_mode_enabled: bool):
        super().__init__(id_, verbose_mode_enabled)
        self._tag_name = None

    @property
    def tag_name(self) -> Optional[str]:
        return self._tag_name

    @tag_name.setter
    def tag_name(self, value: str):
        if self._is_committed:
            raise CommittedMutateException('error: cannot set `tag_name` after `commit()`')

        self._tag_name = value


class RewriteWithAttributeName(Rewrite, abc.ABC):
    """
    Base class for a rewrite rule with `attribute_name`.

    Not to be used when authoring rules.
    (Hypothetical) rewrite rule syntax:
    ````
    RewriteWithAttributeName: #«id»
    - attribute_name: «name» (mandatory)
    ````
    """
    _attribute_name: Optional[str]

    def __init__(self, id_: str, verbose_mode_enabled: bool):
        super().__init__(id_, verbose_mode_enabled)
        self._attribute_name = None

    @property
    def attribute_name(self) -> Optional[str]:
        return self._attribute_name

    @attribute_name.setter
    def attribute_name(self, value: str):
        if self._is_committed:
            raise CommittedMutateException('error: cannot set `attribute_name` after `commit()`')

        self._attribute_name = value


class RewriteWithValuePattern(Rewrite, abc.ABC):
    """
    Base class for a rewrite rule with `value_pattern`.

    Not to be used when authoring rules.
    (Hypothetical) rewrite rule syntax:
    ````
    RewriteWithValuePattern: #«id»
    - value_pattern: «regex» (mandatory)
    ````
    The pattern is matched against the whole of a double-quoted attribute value.
    """
    _value_pattern: Optional[str]

    def __init__(self, id_: str, verbose_mode_enabled: bool):
        super().__init__(id_, verbose_mode_enabled)
        self._value_pattern = None

    @property
    def value_pattern(self) -> Optional[str]:
        return self._value_pattern

    @value_pattern.setter
    def value_pattern(self, value: str):
        if self._is_committed:
            raise CommittedMutateException('error: cannot set `value_pattern` after `commit()`')

        self._value_pattern = value


class RewriteWithContentPattern(Rewrite, abc.ABC):
    """
    Base class for a rewrite rule with `content_pattern`.

    Not to be used when authoring rules.
    (Hypothetical) rewrite rule syntax:
    ````
    RewriteWithContentPattern: #«id»
    - content_pattern: (def) NONE | «regex»
    ````
    The pattern is matched against everything between an opening tag and its closing tag.
    If NONE, only whitespace is allowed there.
    """
    _content_pattern: Optional[str]

    def __init__(self, id_: str, verbose_mode_enabled: bool):
        super().__init__(id_, verbose_mode_enabled)
        self._content_pattern = None

    @property
    def content_pattern(self) -> Optional[str]:
        return self._content_pattern

    @content_pattern.setter
    def content_pattern(self, value: str):
        if self._is_committed:
            raise CommittedMutateException('error: cannot set `content_pattern` after `commit()`')

        self._content_pattern = value
