"""
# Vendorise: test_core.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Perform unit testing for `core.py`.
"""

import contextlib
import io
import unittest

from vendorise.constants import GENERIC_ERROR_EXIT_CODE
from vendorise.core import is_desktop_shell_build, rewrite_html

CDN_HTML = '''\
<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <title>All Model Chat</title>
    <script src="https://cdn.tailwindcss.com"></script>
    <link rel="stylesheet" href="https://cdnjs.cloudflare.com/ajax/libs/github-markdown-css/5.5.1/github-markdown-dark.min.css" id="markdown-dark">
    <link rel="stylesheet" href="https://cdnjs.cloudflare.com/ajax/libs/github-markdown-css/5.5.1/github-markdown.min.css" id="markdown-light" disabled>
    <link rel="stylesheet" href="https://cdnjs.cloudflare.com/ajax/libs/highlight.js/11.9.0/styles/a11y-dark.min.css" id="hljs-dark">
    <link rel="stylesheet" href="https://cdnjs.cloudflare.com/ajax/libs/highlight.js/11.9.0/styles/a11y-light.min.css" id="hljs-light" disabled>
    <link rel="stylesheet" href="https://cdnjs.cloudflare.com/ajax/libs/font-awesome/6.5.1/css/all.min.css">
    <link
      rel="stylesheet"
      href="https://cdn.jsdelivr.net/npm/katex@0.16.9/dist/katex.min.css"
      crossorigin="anonymous"
    >
    <!-- React PDF Styles -->
    <link rel="stylesheet" href="https://esm.sh/react-pdf@9.1.1/dist/Page/AnnotationLayer.css">
    <link rel="stylesheet" href="https://esm.sh/react-pdf@9.1.1/dist/Page/TextLayer.css">
    <!-- Graphviz scripts -->
    <script src="https://cdnjs.cloudflare.com/ajax/libs/viz.js/2.1.2/viz.js"></script>
    <script src="https://cdnjs.cloudflare.com/ajax/libs/viz.js/2.1.2/full.render.js"></script>
    <!-- HTML2PDF -->
    <script src="https://cdnjs.cloudflare.com/ajax/libs/html2pdf.js/0.10.1/html2pdf.bundle.min.js" integrity="sha512-GsLlZN/3F2ErC5ifS5QtgpiJtWd43JWSuIgh7mbzZ8zBps+dvLusV+eNQATqgA/HdeKFVgA5v3S/cIrLF7QnIg==" crossorigin="anonymous" referrerpolicy="no-referrer"></script>
    <script type="importmap">
    {
      "imports": {
        "react": "https://esm.sh/react@^19.1.0",
        "react-dom/": "https://esm.sh/react-dom@^19.1.0/"
      }
    }
    </script>
  </head>
  <body>
    <div id="root"></div>
    <script type="module" src="/index.tsx"></script>
  </body>
</html>
'''

LOCAL_HTML = '''\
<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <title>All Model Chat</title>
    <link rel="stylesheet" href="./vendor/css/github-markdown-dark.min.css" id="markdown-dark">
    <link rel="stylesheet" href="./vendor/css/github-markdown.min.css" id="markdown-light" disabled>
    <link rel="stylesheet" href="./vendor/css/a11y-dark.min.css" id="hljs-dark">
    <link rel="stylesheet" href="./vendor/css/a11y-light.min.css" id="hljs-light" disabled>
    <script src="./vendor/js/viz.js"></script>
    <script src="./vendor/js/full.render.js"></script>
    <script src="./vendor/js/html2pdf.bundle.min.js"></script>
  </head>
  <body>
    <div id="root"></div>
    <script type="module" src="/index.tsx"></script>
  </body>
</html>
'''


class TestCore(unittest.TestCase):
    def test_is_desktop_shell_build(self):
        self.assertTrue(is_desktop_shell_build({'TAURI_PLATFORM': 'windows'}))
        self.assertTrue(is_desktop_shell_build({'TAURI_PLATFORM': ''}))
        self.assertFalse(is_desktop_shell_build({}))
        self.assertFalse(is_desktop_shell_build({'TAURI_ARCH': 'x86_64', 'PLATFORM': 'linux'}))

    def test_rewrite_html(self):
        self.assertEqual(rewrite_html(CDN_HTML, desktop_shell_enabled=True), LOCAL_HTML)

    def test_rewrite_html_web_build(self):
        self.assertEqual(rewrite_html(CDN_HTML, desktop_shell_enabled=False), CDN_HTML)
        self.assertEqual(rewrite_html('', desktop_shell_enabled=False), '')
        self.assertEqual(rewrite_html('<p>\r\n\t</p>', desktop_shell_enabled=False), '<p>\r\n\t</p>')

    def test_rewrite_html_idempotence(self):
        self.assertEqual(rewrite_html(LOCAL_HTML, desktop_shell_enabled=True), LOCAL_HTML)

        once = rewrite_html(CDN_HTML, desktop_shell_enabled=True)
        twice = rewrite_html(once, desktop_shell_enabled=True)
        self.assertEqual(twice, once)

    def test_rewrite_html_without_markers(self):
        html = '''\
<!DOCTYPE html>
<html>
  <head>
    <link rel="stylesheet" href="https://fonts.googleapis.com/css2?family=Inter">
    <script src="https://unpkg.com/some-library/dist/index.js"></script>
    <script type="module" src="/index.tsx"></script>
  </head>
</html>
'''
        self.assertEqual(rewrite_html(html, desktop_shell_enabled=True), html)
        self.assertEqual(rewrite_html('', desktop_shell_enabled=True), '')

    def test_rewrite_html_tailwind_runtime(self):
        html = rewrite_html(
            '<head>\n'
            '  <meta charset="UTF-8">\n'
            '  <script src="https://cdn.tailwindcss.com/3.4.1?plugins=forms"></script>\n'
            '  <title>Title</title>\n'
            '</head>\n',
            desktop_shell_enabled=True,
        )

        self.assertEqual(
            html,
            '<head>\n'
            '  <meta charset="UTF-8">\n'
            '  <title>Title</title>\n'
            '</head>\n'
        )
        self.assertNotIn('tailwindcss', html)
        self.assertNotIn('\n\n', html)

    def test_rewrite_html_unclosed_script_elements(self):
        html = (
            '<head>\n'
            '  <script src="https://cdn.tailwindcss.com" />\n'
            '  <script>window.appConfig = {theme: "dark"};</script>\n'
            '  <title>T</title>\n'
            '</head>\n'
        )
        self.assertEqual(rewrite_html(html, desktop_shell_enabled=True), html)

        self.assertEqual(
            rewrite_html(
                '  <script src="https://cdn.example/html2pdf.bundle.min.js"/>\n'
                '  <script src="https://cdnjs.cloudflare.com/ajax/libs/viz.js/2.1.2/viz.js"></script>\n',
                desktop_shell_enabled=True,
            ),
            '  <script src="https://cdn.example/html2pdf.bundle.min.js"/>\n'
            '  <script src="./vendor/js/viz.js"></script>\n',
        )

    def test_rewrite_html_theme_stylesheet_attributes(self):
        self.assertEqual(
            rewrite_html(
                '<link rel="stylesheet" href="https://some.cdn/path/a11y-dark.min.css" id="hljs-dark" disabled>',
                desktop_shell_enabled=True,
            ),
            '<link rel="stylesheet" href="./vendor/css/a11y-dark.min.css" id="hljs-dark" disabled>',
        )

    def test_rewrite_html_import_map(self):
        html = rewrite_html(
            '<script type="importmap">\n'
            '{\n'
            '  "imports": {"react": "https://esm.sh/react@^19.1.0", "</scrip": "t>"}\n'
            '}\n'
            '</script>\n'
            '<script type="module" src="/index.tsx"></script>\n',
            desktop_shell_enabled=True,
        )

        self.assertEqual(html.count('importmap'), 0)
        self.assertEqual(html, '<script type="module" src="/index.tsx"></script>\n')

    def test_rewrite_html_html2pdf(self):
        html = rewrite_html(
            '<body>\n'
            '  <script defer data-origin="cdn" src="http://cdn.example/html2pdf/html2pdf.js" nonce="abc"></script>\n'
            '  <div id="root"></div>\n'
            '</body>\n',
            desktop_shell_enabled=True,
        )

        self.assertEqual(html.count('<script src="./vendor/js/html2pdf.bundle.min.js"></script>'), 1)
        self.assertEqual(
            html,
            '<body>\n'
            '  <script src="./vendor/js/html2pdf.bundle.min.js"></script>\n'
            '  <div id="root"></div>\n'
            '</body>\n'
        )

    def test_rewrite_html_extra_rules(self):
        self.assertEqual(
            rewrite_html(
                '<!-- HTML2PDF -->\n<!-- Analytics -->\n<p></p>\n',
                desktop_shell_enabled=True,
                extra_rules='LiteralDeletionRewrite: #analytics\n- literal: <!-- Analytics -->\n',
                extra_rules_file_name='extra.rules',
            ),
            '<p></p>\n',
        )

    def test_rewrite_html_extra_rules_error(self):
        stderr = io.StringIO()

        with contextlib.redirect_stderr(stderr):
            with self.assertRaises(SystemExit) as context_manager:
                rewrite_html('<p></p>', desktop_shell_enabled=True, extra_rules='UnknownRewrite: #x\n')

        self.assertEqual(context_manager.exception.code, GENERIC_ERROR_EXIT_CODE)
        self.assertIn('error: `extra_rules`, line 1: unrecognised rewrite class `UnknownRewrite`', stderr.getvalue())


if __name__ == '__main__':
    unittest.main()
