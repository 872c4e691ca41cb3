"""End-to-end tests for the develop task with the livereload server patched out."""

from unittest.mock import patch

from ..base import BaseThemeTest, RecordingContext

from themepack.build.tasks.develop import develop


class TestDevelopTask(BaseThemeTest):

    def _develop(self, ctx):
        with patch('themepack.build.tasks.develop.Server') as server_class:
            develop(ctx)
        return server_class.return_value

    def test_compiles_then_serves(self):
        ctx = RecordingContext()

        server = self._develop(ctx)

        self.assertIn('Version: 1.2.0', self.read('style.css'))
        self.assertEqual(len(ctx.commands), 1)
        self.assertIn('--debug-info --line-numbers', ctx.commands[0])
        server.serve.assert_called_once_with(
            host='localhost', port=8000, liveport=35729, root=str(self.root),
        )

    def test_watches_sass_and_templates(self):
        server = self._develop(RecordingContext())

        watched = {call.args[0]: call.args[1:] for call in server.watch.call_args_list}
        self.assertIn(str(self.root / 'scss' / '**' / '*.scss'), watched)
        self.assertEqual(len(watched[str(self.root / 'scss' / '**' / '*.scss')]), 1)
        self.assertEqual(watched[str(self.root / '*.php')], ())
        self.assertEqual(watched[str(self.root / 'css' / '*.css')], ())

    def test_sass_change_recompiles(self):
        ctx = RecordingContext()
        server = self._develop(ctx)
        recompile = server.watch.call_args_list[0].args[1]

        recompile()

        self.assertEqual(len(ctx.commands), 2)
        self.assertEqual(ctx.commands[0], ctx.commands[1])
