import io
import os
import shutil
import tempfile
import unittest
from contextlib import redirect_stdout

import svgterminal.main
from svgterminal.config import starter_config

CONFIG = """
window:
  title: test
blocks:
  - block: custom
    config:
      command: echo hello
      lines:
        - hello
"""


class TestMain(unittest.TestCase):
    test_cases = [
        ([], 'generate'),
        (['-c', 'my.yml'], 'generate'),
        (['-o', 'out.svg', '--static'], 'generate'),
        (['-v'], 'generate'),
        (['generate'], 'generate'),
        (['generate', '--config', 'my.yml', '-o', 'out.svg', '-s', '-v'], 'generate'),
        (['init'], 'init'),
        (['init', 'my.yml'], 'init'),
        (['themes'], 'themes'),
        (['blocks'], 'blocks'),
    ]

    def setUp(self):
        self.directory = tempfile.mkdtemp(prefix='svgterminal_')

    def tearDown(self):
        shutil.rmtree(self.directory)

    def test_parse(self):
        for args, expected in self.test_cases:
            with self.subTest(case=args):
                command, _ = svgterminal.main.parse(args)
                self.assertEqual(command, expected)

    def test_parse_defaults(self):
        _, args = svgterminal.main.parse([])
        self.assertEqual(args.config, 'terminal.yml')
        self.assertEqual(args.output, 'terminal.svg')
        self.assertFalse(args.static)
        self.assertFalse(args.verbose)

        _, args = svgterminal.main.parse(['init'])
        self.assertEqual(args.output_path, 'terminal.yml')

    def test_init(self):
        path = os.path.join(self.directory, 'terminal.yml')
        svgterminal.main.main(['svgterminal', 'init', path])
        with open(path, 'rb') as config_file:
            self.assertEqual(config_file.read(), starter_config())

        # Existing files are never overwritten
        with self.assertRaises(SystemExit) as context:
            svgterminal.main.main(['svgterminal', 'init', path])
        self.assertEqual(context.exception.code, 1)

    def test_generate(self):
        config_path = os.path.join(self.directory, 'terminal.yml')
        with open(config_path, 'w', encoding='utf-8') as config_file:
            config_file.write(CONFIG)

        for args in ([], ['--static']):
            with self.subTest(case=args):
                output_path = os.path.join(self.directory, 'terminal.svg')
                svgterminal.main.main(['svgterminal', 'generate', '-c', config_path,
                                       '-o', output_path] + args)
                with open(output_path, encoding='utf-8') as svg_file:
                    svg = svg_file.read()
                self.assertTrue(svg.startswith('<svg'))
                self.assertIn('echo hello', svg)

    def test_generate_errors(self):
        invalid_path = os.path.join(self.directory, 'invalid.yml')
        with open(invalid_path, 'w', encoding='utf-8') as config_file:
            config_file.write('blocks:\n  - block: no-such-block\n')

        test_cases = [
            os.path.join(self.directory, 'missing.yml'),
            invalid_path,
        ]
        for config_path in test_cases:
            with self.subTest(case=config_path):
                with self.assertRaises(SystemExit) as context:
                    svgterminal.main.main(['svgterminal', '-c', config_path, '-o',
                                           os.path.join(self.directory, 'out.svg')])
                self.assertEqual(context.exception.code, 1)

    def test_themes(self):
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            svgterminal.main.main(['svgterminal', 'themes'])
        self.assertEqual(stdout.getvalue().split(), ['dracula', 'monokai', 'nord'])

    def test_blocks(self):
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            svgterminal.main.main(['svgterminal', 'blocks'])
        names = [line.split()[0] for line in stdout.getvalue().splitlines()]
        self.assertEqual(len(names), 16)
        self.assertEqual(names, sorted(names))
        self.assertIn('github-stats', names)
