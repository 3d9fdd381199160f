"""
# Vendorise: authorities.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

The higher power that governs the rewrite logic.
"""

import re
import sys
import traceback
from typing import NamedTuple, Optional

from vendorise.bases import Rewrite, RewriteWithSubstitutions
from vendorise.constants import GENERIC_ERROR_EXIT_CODE, REWRITE_RULE_SYNTAX_HELP
from vendorise.employables import (
    AttributeRedirectRewrite,
    ElementDeletionRewrite,
    ElementSubstitutionRewrite,
    LiteralDeletionRewrite,
)
from vendorise.exceptions import MissingAttributeException


class RewriteAuthority:
    """
    Object governing the parsing and application of rewrite rules.

    ## `legislate`

    Parses rewrite rule syntax.
    See the constant `REWRITE_RULE_SYNTAX_HELP` in `constants.py`.
    Rewrites are queued in the order they are declared,
    across successive calls.

    ## `execute`

    Applies the legislated rewrites, in queue order.
    """
    _rewrite_from_id: dict[str, 'Rewrite']
    _rewrite_queue: list['Rewrite']
    _verbose_mode_enabled: bool

    def __init__(self, verbose_mode_enabled: bool):
        self._rewrite_from_id = {}
        self._rewrite_queue = []
        self._verbose_mode_enabled = verbose_mode_enabled

    @property
    def rewrite_queue(self) -> list['Rewrite']:
        return list(self._rewrite_queue)

    @staticmethod
    def print_error(message: str, rules_file_name: str, line_number: int):
        print(f'error: `{rules_file_name}`, line {line_number}: {message}', file=sys.stderr)

    @staticmethod
    def print_traceback(exception: Exception):
        traceback.print_exception(type(exception), exception, exception.__traceback__)

    @staticmethod
    def is_whitespace_only(line: str) -> bool:
        return bool(re.fullmatch(pattern=r'[\s]*', string=line, flags=re.ASCII))

    @staticmethod
    def is_comment(line: str) -> bool:
        return line.startswith('#')

    @staticmethod
    def compute_class_declaration_match(line: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=r'''
                (?P<class_name> [A-Za-z]+ ) [:]
                [\s]+
                [#] (?P<id_> [a-z0-9-.]+ )
                [\s]*
            ''',
            string=line,
            flags=re.ASCII | re.VERBOSE,
        )

    def process_class_declaration_line(self, class_declaration_match: re.Match,
                                       rules_file_name: str, line_number: int) -> 'PostClassDeclarationState':
        class_name = class_declaration_match.group('class_name')
        id_ = class_declaration_match.group('id_')

        if class_name == 'ElementDeletionRewrite':
            rewrite = ElementDeletionRewrite(id_, self._verbose_mode_enabled)
        elif class_name == 'LiteralDeletionRewrite':
            rewrite = LiteralDeletionRewrite(id_, self._verbose_mode_enabled)
        elif class_name == 'AttributeRedirectRewrite':
            rewrite = AttributeRedirectRewrite(id_, self._verbose_mode_enabled)
        elif class_name == 'ElementSubstitutionRewrite':
            rewrite = ElementSubstitutionRewrite(id_, self._verbose_mode_enabled)
        else:
            RewriteAuthority.print_error(f'unrecognised rewrite class `{class_name}`', rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        if id_ in self._rewrite_from_id:
            RewriteAuthority.print_error(f'rewrite already declared with id `{id_}`', rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        return PostClassDeclarationState(class_name, rewrite)

    @staticmethod
    def compute_attribute_declaration_match(line: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=r'''
                [-][ ] (?P<attribute_name> [a-z_]+ ) [:]
                (?P<attribute_value> [\s\S]* )
            ''',
            string=line,
            flags=re.ASCII | re.VERBOSE,
        )

    @staticmethod
    def process_attribute_declaration_line(attribute_declaration_match: re.Match,
                                           class_name: Optional[str], rewrite: Optional['Rewrite'],
                                           rules_file_name: str, line_number: int):
        if rewrite is None:
            RewriteAuthority.print_error('attribute declaration without an active class declaration',
                                         rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        attribute_name = attribute_declaration_match.group('attribute_name')
        if attribute_name not in rewrite.attribute_names:
            RewriteAuthority.print_error(f'unrecognised attribute `{attribute_name}` for `{class_name}`',
                                         rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        attribute_value = attribute_declaration_match.group('attribute_value')

        if attribute_name == 'attribute_name':
            RewriteAuthority.stage_attribute_name(rewrite, attribute_value, rules_file_name, line_number)
        elif attribute_name == 'content_pattern':
            RewriteAuthority.stage_content_pattern(rewrite, attribute_value, rules_file_name, line_number)
        elif attribute_name == 'literal':
            RewriteAuthority.stage_literal(rewrite, attribute_value, rules_file_name, line_number)
        elif attribute_name == 'substitute':
            RewriteAuthority.stage_substitute(rewrite, attribute_value, rules_file_name, line_number)
        elif attribute_name == 'tag_name':
            RewriteAuthority.stage_tag_name(rewrite, attribute_value, rules_file_name, line_number)
        elif attribute_name == 'value_pattern':
            RewriteAuthority.stage_value_pattern(rewrite, attribute_value, rules_file_name, line_number)

    @staticmethod
    def compute_name_match(attribute_value: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=r'''
                [\s]*
                (?:
                    (?P<none_keyword> NONE )
                        |
                    (?P<name> [a-z] [a-z0-9-]* )
                        |
                    (?P<invalid_value> [\s\S]*? )
                )
                [\s]*
            ''',
            string=attribute_value,
            flags=re.ASCII | re.VERBOSE,
        )

    @staticmethod
    def stage_tag_name(rewrite: 'Rewrite', attribute_value: str, rules_file_name: str, line_number: int):
        tag_name_match = RewriteAuthority.compute_name_match(attribute_value)

        invalid_value = tag_name_match.group('invalid_value')
        if invalid_value is not None:
            RewriteAuthority.print_error(f'invalid value `{invalid_value}` for attribute `tag_name`',
                                         rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        if tag_name_match.group('none_keyword') is not None:
            return

        rewrite.tag_name = tag_name_match.group('name')

    @staticmethod
    def stage_attribute_name(rewrite: 'Rewrite', attribute_value: str, rules_file_name: str, line_number: int):
        attribute_name_match = RewriteAuthority.compute_name_match(attribute_value)

        invalid_value = attribute_name_match.group('invalid_value')
        if attribute_name_match.group('none_keyword') is not None:
            invalid_value = 'NONE'

        if invalid_value is not None:
            RewriteAuthority.print_error(f'invalid value `{invalid_value}` for attribute `attribute_name`',
                                         rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        rewrite.attribute_name = attribute_name_match.group('name')

    @staticmethod
    def compute_string_match(attribute_value: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=r'''
                [\s]*
                (?:
                    (?P<string> [\S][\s\S]*? )
                        |
                    (?P<invalid_value> [\s\S]*? )
                )
                [\s]*
            ''',
            string=attribute_value,
            flags=re.ASCII | re.VERBOSE,
        )

    @staticmethod
    def stage_value_pattern(rewrite: 'Rewrite', attribute_value: str, rules_file_name: str, line_number: int):
        value_pattern_match = RewriteAuthority.compute_string_match(attribute_value)

        invalid_value = value_pattern_match.group('invalid_value')
        if invalid_value is not None:
            RewriteAuthority.print_error(f'invalid value `{invalid_value}` for attribute `value_pattern`',
                                         rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        value_pattern = value_pattern_match.group('string')
        RewriteAuthority.validate_pattern(value_pattern, 'value_pattern', rules_file_name, line_number)

        rewrite.value_pattern = value_pattern

    @staticmethod
    def stage_content_pattern(rewrite: 'Rewrite', attribute_value: str, rules_file_name: str, line_number: int):
        content_pattern_match = RewriteAuthority.compute_string_match(attribute_value)

        invalid_value = content_pattern_match.group('invalid_value')
        if invalid_value is not None:
            RewriteAuthority.print_error(f'invalid value `{invalid_value}` for attribute `content_pattern`',
                                         rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        content_pattern = content_pattern_match.group('string')
        if content_pattern == 'NONE':
            return

        RewriteAuthority.validate_pattern(content_pattern, 'content_pattern', rules_file_name, line_number)

        rewrite.content_pattern = content_pattern

    @staticmethod
    def validate_pattern(pattern: str, attribute_name: str, rules_file_name: str, line_number: int):
        try:
            pattern_compiled = re.compile(pattern=pattern, flags=re.ASCII | re.VERBOSE)
        except re.error as pattern_exception:
            RewriteAuthority.print_error(f'bad regex pattern `{pattern}`', rules_file_name, line_number)
            RewriteAuthority.print_traceback(pattern_exception)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        if len(pattern_compiled.groupindex) > 0:
            RewriteAuthority.print_error(f'named capture groups not allowed in `{attribute_name}`',
                                         rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

    @staticmethod
    def stage_literal(rewrite: 'Rewrite', attribute_value: str, rules_file_name: str, line_number: int):
        literal_match = RewriteAuthority.compute_string_match(attribute_value)

        invalid_value = literal_match.group('invalid_value')
        if invalid_value is not None:
            RewriteAuthority.print_error(f'invalid value `{invalid_value}` for attribute `literal`',
                                         rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        rewrite.literal = literal_match.group('string')

    @staticmethod
    def stage_substitute(rewrite: 'Rewrite', attribute_value: str, rules_file_name: str, line_number: int):
        substitute_match = RewriteAuthority.compute_string_match(attribute_value)

        invalid_value = substitute_match.group('invalid_value')
        if invalid_value is not None:
            RewriteAuthority.print_error(f'invalid value `{invalid_value}` for attribute `substitute`',
                                         rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        rewrite.substitute = substitute_match.group('string')

    @staticmethod
    def compute_substitution_declaration_match(line: str) -> Optional[re.Match]:
        return re.fullmatch(
            pattern=r'[*][ ] (?P<substitution> [\s\S]* )',
            string=line,
            flags=re.ASCII | re.VERBOSE,
        )

    @staticmethod
    def compute_substitution_match(substitution: str) -> Optional[re.Match]:
        substitution_delimiters: list[str] = re.findall(pattern='[-]{2,}[>]', string=substitution)
        if len(substitution_delimiters) == 0:
            return None

        longest_substitution_delimiter = max(substitution_delimiters, key=len)
        return re.fullmatch(
            pattern=fr'''
                [\s]*
                    (?:
                        "(?P<double_quoted_pattern> [\s\S]*? )"
                            |
                        '(?P<single_quoted_pattern> [\s\S]*? )'
                            |
                        (?P<bare_pattern> [\s\S]*? )
                    )
                [\s]*
                    {re.escape(longest_substitution_delimiter)}
                [\s]*
                    (?:
                        "(?P<double_quoted_substitute> [\s\S]*? )"
                            |
                        '(?P<single_quoted_substitute> [\s\S]*? )'
                            |
                        (?P<bare_substitute> [\s\S]*? )
                    )
                [\s]*
            ''',
            string=substitution,
            flags=re.ASCII | re.VERBOSE,
        )

    @staticmethod
    def process_substitution_declaration_line(substitution_declaration_match: re.Match,
                                              class_name: Optional[str], rewrite: Optional['Rewrite'],
                                              rules_file_name: str, line_number: int):
        if rewrite is None:
            RewriteAuthority.print_error('substitution declaration without an active class declaration',
                                         rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        if not isinstance(rewrite, RewriteWithSubstitutions):
            RewriteAuthority.print_error(f'substitutions not allowed for `{class_name}`',
                                         rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        substitution = substitution_declaration_match.group('substitution')
        substitution_match = RewriteAuthority.compute_substitution_match(substitution)
        if substitution_match is None:
            RewriteAuthority.print_error(f'missing delimiter `-->` in substitution `{substitution}`',
                                         rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        pattern = substitution_match.group('double_quoted_pattern')
        if pattern is None:
            pattern = substitution_match.group('single_quoted_pattern')
        if pattern is None:
            pattern = substitution_match.group('bare_pattern')

        substitute = substitution_match.group('double_quoted_substitute')
        if substitute is None:
            substitute = substitution_match.group('single_quoted_substitute')
        if substitute is None:
            substitute = substitution_match.group('bare_substitute')

        if pattern == '':
            RewriteAuthority.print_error(f'empty pattern in substitution `{substitution}`',
                                         rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        rewrite.add_substitution(pattern, substitute)

    def commit(self, class_name: str, rewrite: 'Rewrite', rules_file_name: str, line_number: int):
        try:
            rewrite.commit()
        except MissingAttributeException as exception:
            missing_attribute = exception.missing_attribute
            RewriteAuthority.print_error(f'missing attribute `{missing_attribute}` for {class_name}',
                                         rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        self._rewrite_from_id[rewrite.id_] = rewrite
        self._rewrite_queue.append(rewrite)

    def legislate(self, rewrite_rules: Optional[str], rules_file_name: str):
        if rewrite_rules is None:
            return

        class_name: Optional[str] = None
        rewrite: Optional['Rewrite'] = None
        line_number: int = 0

        for line_number, line in enumerate(rewrite_rules.splitlines(), start=1):
            if RewriteAuthority.is_whitespace_only(line):
                if rewrite is not None:
                    self.commit(class_name, rewrite, rules_file_name, line_number)
                    class_name, rewrite = None, None
                continue

            if RewriteAuthority.is_comment(line):
                continue

            class_declaration_match = RewriteAuthority.compute_class_declaration_match(line)
            if class_declaration_match is not None:
                if rewrite is not None:
                    self.commit(class_name, rewrite, rules_file_name, line_number)
                class_name, rewrite = (
                    self.process_class_declaration_line(class_declaration_match, rules_file_name, line_number)
                )
                continue

            attribute_declaration_match = RewriteAuthority.compute_attribute_declaration_match(line)
            if attribute_declaration_match is not None:
                RewriteAuthority.process_attribute_declaration_line(attribute_declaration_match, class_name, rewrite,
                                                                    rules_file_name, line_number)
                continue

            substitution_declaration_match = RewriteAuthority.compute_substitution_declaration_match(line)
            if substitution_declaration_match is not None:
                RewriteAuthority.process_substitution_declaration_line(substitution_declaration_match,
                                                                       class_name, rewrite,
                                                                       rules_file_name, line_number)
                continue

            RewriteAuthority.print_error('invalid syntax\n\n' + REWRITE_RULE_SYNTAX_HELP,
                                         rules_file_name, line_number)
            sys.exit(GENERIC_ERROR_EXIT_CODE)

        # At end of file
        if rewrite is not None:
            self.commit(class_name, rewrite, rules_file_name, line_number + 1)

    def execute(self, string: str) -> str:
        if self._verbose_mode_enabled:
            rewrite_queue_ids = [
                f'#{rewrite.id_}'
                for rewrite in self._rewrite_queue
            ]
            print(f'Rewrite queue: {rewrite_queue_ids}\n\n\n\n')

        for rewrite in self._rewrite_queue:
            string = rewrite.apply(string)

        return string  # HTML


class PostClassDeclarationState(NamedTuple):
    class_name: str
    rewrite: 'Rewrite'
