import hashlib
import shutil
import tempfile
import unittest
from pathlib import Path

from themepack.build.filerev import file_hash, revision, revved_name


class TestFileRev(unittest.TestCase):

    def setUp(self):
        self.root = Path(tempfile.mkdtemp(prefix='themepack-filerev-'))
        (self.root / 'js').mkdir()
        (self.root / 'css').mkdir()
        (self.root / 'js' / 'app.min.js').write_text('var a=1;')
        (self.root / 'js' / 'a.js').write_text('var a = 1;')
        (self.root / 'css' / 'main.min.css').write_text('body{color:red}')

    def tearDown(self):
        shutil.rmtree(self.root, ignore_errors=True)

    def test_hash_is_truncated_md5_of_content(self):
        expected = hashlib.md5(b'var a=1;').hexdigest()[:8]
        self.assertEqual(file_hash(self.root / 'js' / 'app.min.js'), expected)

    def test_revved_name_keeps_extension(self):
        self.assertEqual(revved_name(Path('js/app.min.js'), 'deadbeef'), 'app.min.deadbeef.js')

    def test_revision_renames_matched_files(self):
        js_hash = hashlib.md5(b'var a=1;').hexdigest()[:8]
        css_hash = hashlib.md5(b'body{color:red}').hexdigest()[:8]
        root = self.root.as_posix()

        summary = revision(['js/*.min.js', 'css/*.min.css'], self.root)

        self.assertEqual(summary, {
            f"{root}/css/main.min.css": f"{root}/css/main.min.{css_hash}.css",
            f"{root}/js/app.min.js": f"{root}/js/app.min.{js_hash}.js",
        })
        self.assertFalse((self.root / 'js' / 'app.min.js').exists())
        self.assertTrue((self.root / 'js' / f"app.min.{js_hash}.js").exists())
        self.assertTrue((self.root / 'js' / 'a.js').exists())

    def test_revision_hash_length_and_algorithm(self):
        summary = revision(['js/app.min.js'], self.root, algorithm='sha1', length=4)
        expected = hashlib.sha1(b'var a=1;').hexdigest()[:4]
        self.assertTrue(list(summary.values())[0].endswith(f"app.min.{expected}.js"))
