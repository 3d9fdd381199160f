"""
# Vendorise: core.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Core rewrite logic.

An HTML entry document authored against CDN-hosted scripts and stylesheets
is rewritten so that its resource references point to locally bundled assets
(under `./vendor/css/` and `./vendor/js/`), but only for desktop-shell builds.
For any other build the document is returned untouched.
"""

from typing import Mapping, Optional

from vendorise.authorities import RewriteAuthority
from vendorise.constants import DESKTOP_SHELL_ENVIRONMENT_VARIABLE, STANDARD_RULES


def is_desktop_shell_build(environment: Mapping[str, str]) -> bool:
    """
    Determine whether a build targets the desktop shell.

    The desktop shell sets its platform variable for every build it drives,
    so presence alone decides (an empty value still counts).
    """
    return DESKTOP_SHELL_ENVIRONMENT_VARIABLE in environment


def rewrite_html(html: str, desktop_shell_enabled: bool, verbose_mode_enabled: bool = False,
                 extra_rules: Optional[str] = None, extra_rules_file_name: str = 'extra_rules') -> str:
    """
    Rewrite CDN references in HTML to local vendor paths.

    If `desktop_shell_enabled` is false, `html` is returned as is.
    Otherwise `STANDARD_RULES` are applied in order, followed by `extra_rules` (if any).
    """
    if not desktop_shell_enabled:
        return html

    rewrite_authority = RewriteAuthority(verbose_mode_enabled)
    rewrite_authority.legislate(STANDARD_RULES, rules_file_name='STANDARD_RULES')
    rewrite_authority.legislate(extra_rules, rules_file_name=extra_rules_file_name)
    html = rewrite_authority.execute(html)

    return html
