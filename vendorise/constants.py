"""
# Vendorise: constants.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Constants.
"""

GENERIC_ERROR_EXIT_CODE = 1
COMMAND_LINE_ERROR_EXIT_CODE = 2
VERBOSE_MODE_DIVIDER_SYMBOL_COUNT = 48

DESKTOP_SHELL_ENVIRONMENT_VARIABLE = 'TAURI_PLATFORM'

REWRITE_RULE_SYNTAX_HELP = '''\
In rewrite rule syntax, a line must be one of the following:
(1) whitespace-only;
(2) a comment (beginning with `#`);
(3) a class declaration (`«ClassName»: #«id»`);
(4) an attribute declaration (`- «name»: «value»`);
(5) a substitution declaration (`* «pattern» --> «substitute»`).
- Note for (5): the number of hyphens in the delimiter `-->`
  may be arbitrarily increased should «pattern» contain
  a run of hyphens followed by a closing angle-bracket.
'''

STANDARD_RULES = \
r'''# STANDARD_RULES

# Tailwind runtime compiler (styles are compiled ahead of time instead)
ElementDeletionRewrite: #tailwind-runtime
- tag_name: script
- attribute_name: src
- value_pattern: https?://cdn\.tailwindcss\.com[^"]*

# Theme stylesheets (`id` and `disabled` are toggled at runtime)
AttributeRedirectRewrite: #theme-stylesheets
- attribute_name: href
* github-markdown-dark.min.css --> ./vendor/css/github-markdown-dark.min.css
* github-markdown.min.css --> ./vendor/css/github-markdown.min.css
* a11y-dark.min.css --> ./vendor/css/a11y-dark.min.css
* a11y-light.min.css --> ./vendor/css/a11y-light.min.css

# Font-dependent stylesheets (already imported by the bundled style entry point)
ElementDeletionRewrite: #font-awesome
- tag_name: link
- attribute_name: href
- value_pattern: https?://[^"]*font-awesome[^"]*

ElementDeletionRewrite: #katex
- tag_name: link
- attribute_name: href
- value_pattern: https?://[^"]*katex[^"]*

ElementDeletionRewrite: #react-pdf-styles
- tag_name: link
- attribute_name: href
- value_pattern: https?://esm\.sh/react-pdf[^"]*\.css

# Graphviz
AttributeRedirectRewrite: #graphviz-scripts
- tag_name: script
- attribute_name: src
* /viz.js --> ./vendor/js/viz.js
* /full.render.js --> ./vendor/js/full.render.js

ElementSubstitutionRewrite: #html2pdf
- tag_name: script
- attribute_name: src
- value_pattern: https?://[^"]*html2pdf[^"]*
- substitute: <script src="./vendor/js/html2pdf.bundle.min.js"></script>

# Import map (every module is bundled ahead of time)
ElementDeletionRewrite: #import-map
- tag_name: script
- attribute_name: type
- value_pattern: importmap
- content_pattern: [\s\S]*?

# Orphaned marker comments
LiteralDeletionRewrite: #react-pdf-styles-comment
- literal: <!-- React PDF Styles -->

LiteralDeletionRewrite: #graphviz-scripts-comment
- literal: <!-- Graphviz scripts -->

LiteralDeletionRewrite: #html2pdf-comment
- literal: <!-- HTML2PDF -->
'''
