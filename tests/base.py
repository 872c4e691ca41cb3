"""Base test class for theme build tests."""

import json
import os
import shutil
import tempfile
import unittest
from pathlib import Path

from invoke import MockContext, Result

PLACEHOLDER = "<?php printf(get_template_directory_uri()); ?>"

HEADER_PHP = f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <!-- build:css css/main.min.css -->
  <link rel="stylesheet" href="{PLACEHOLDER}/css/main.css">
  <link rel="stylesheet" href="css/extra.css">
  <!-- endbuild -->
  <?php wp_head(); ?>
</head>
<body>
"""

FOOTER_PHP = f"""  <!-- build:js {PLACEHOLDER}/js/app.min.js -->
  <script src="{PLACEHOLDER}/js/a.js"></script>
  <script src="js/b.js"></script>
  <!-- endbuild -->
  <?php wp_footer(); ?>
</body>
</html>
"""

STYLE_CSS = """/*
Theme Name: Demo Theme
Version: 0.0.1
*/
"""

THEME_FILES = {
    'style.css': STYLE_CSS,
    'index.php': '<?php get_header(); ?>\n<main></main>\n<?php get_footer(); ?>\n',
    'header.php': HEADER_PHP,
    'footer.php': FOOTER_PHP,
    'scss/main.scss': '$brand: #336699;\nbody { color: $brand; }\n',
    'css/main.css': 'body {\n  color: #336699;\n}\n',
    'css/extra.css': '/* extra */\n.site-footer {\n  margin: 0 auto;\n}\n',
    'js/a.js': 'var a = 1;\n',
    'js/b.js': '// greet\nfunction hello() {\n  return a;\n}\n',
    'bower_components/jquery/jquery.js': 'window.jQuery = {};\n',
}


class RecordingContext(MockContext):
    """MockContext that succeeds for every command and records it."""

    def __init__(self, **kwargs):
        kwargs.setdefault('run', Result())
        kwargs.setdefault('repeat', True)
        super().__init__(**kwargs)
        self._set(commands=[])

    def run(self, command, *args, **kwargs):
        self.commands.append(command)
        return super().run(command, *args, **kwargs)


class BaseThemeTest(unittest.TestCase):
    """Creates a demo theme in a temporary directory and runs from there."""

    package = {'name': 'demo-theme', 'version': '1.2.0'}
    deployment = None

    def setUp(self):
        self.root = Path(tempfile.mkdtemp(prefix='themepack-test-')).resolve()
        self.write_theme()
        self._previous_cwd = os.getcwd()
        os.chdir(self.root)

    def tearDown(self):
        os.chdir(self._previous_cwd)
        shutil.rmtree(self.root, ignore_errors=True)

    def write_theme(self):
        for relative, content in THEME_FILES.items():
            self.write(relative, content)
        if self.package is not None:
            self.write('package.json', json.dumps(self.package))
        if self.deployment is not None:
            self.write('server.config.json', json.dumps(self.deployment))

    def write(self, relative: str, content: str) -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
        return path

    def read(self, relative: str) -> str:
        return (self.root / relative).read_text(encoding='utf-8')
