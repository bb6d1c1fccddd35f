import unittest

from svgterminal import markup
from svgterminal.markup import StyledSpan
from svgterminal.themes import DRACULA

COLOR_MAP = markup.build_color_map(DRACULA.colors)
FALLBACK = '#e4e4e4'
RED = DRACULA.colors.red
GREEN = DRACULA.colors.green


class TestParseMarkup(unittest.TestCase):
    def parse(self, text):
        return markup.parse_markup(text, COLOR_MAP, FALLBACK)

    def test_single_tag(self):
        self.assertEqual(self.parse('[[fg:red]]hello[[/fg]]'),
                         [StyledSpan('hello', fg=RED)])

    def test_empty_input(self):
        for text in ('', None, '[[bold]][[/bold]]'):
            with self.subTest(case=text):
                self.assertEqual(self.parse(text), [StyledSpan('')])

    def test_unclosed_tag_is_literal(self):
        self.assertEqual(self.parse('text [[fg:red'),
                         [StyledSpan('text [[fg:red')])

    def test_nested_tags(self):
        spans = self.parse('[[bold]]a[[fg:green]]b[[/fg]]c[[/bold]]d')
        self.assertEqual(spans, [
            StyledSpan('a', bold=True),
            StyledSpan('b', fg=GREEN, bold=True),
            StyledSpan('c', bold=True),
            StyledSpan('d'),
        ])

    def test_mismatched_close_pops(self):
        spans = self.parse('[[fg:red]][[bold]]x[[/fg]]y[[/bold]]z')
        self.assertEqual(spans, [
            StyledSpan('x', fg=RED, bold=True),
            StyledSpan('y', fg=RED),
            StyledSpan('z'),
        ])

    def test_extra_close_is_ignored(self):
        self.assertEqual(self.parse('a[[/fg]]b'), [StyledSpan('ab')])

    def test_colors(self):
        test_cases = {
            '[[fg:#abc]]x': '#abc',
            '[[fg:#A0B1C2]]x': '#A0B1C2',
            '[[fg:#12]]x': FALLBACK,
            '[[fg:#gggggg]]x': FALLBACK,
            '[[fg:RED]]x': RED,
            '[[fg:no-such-color]]x': FALLBACK,
            '[[fg:comment]]x': DRACULA.colors.comment,
            '[[fg:neon_green]]x': DRACULA.colors.prompt,
        }
        for text, expected in test_cases.items():
            with self.subTest(case=text):
                self.assertEqual(self.parse(text)[0].fg, expected)

    def test_background_and_dim(self):
        spans = self.parse('[[bg:blue]][[dim]]x[[/dim]][[/bg]]')
        self.assertEqual(spans, [StyledSpan('x', bg=DRACULA.colors.blue, dim=True)])

    def test_unknown_tag_opens_scope(self):
        spans = self.parse('[[fg:red]]a[[blink]]b[[/blink]]c[[/fg]]')
        self.assertEqual(spans, [StyledSpan('abc', fg=RED)])

    def test_adjacent_spans_merged(self):
        spans = self.parse('[[fg:red]]a[[/fg]][[fg:red]]b[[/fg]]')
        self.assertEqual(spans, [StyledSpan('ab', fg=RED)])

    def test_text_preserved(self):
        test_cases = [
            'plain text',
            '[[fg:red]]a[[/fg]] b [[bold]]c',
            'x [[fg:red',
            '[[bg:#123]]one[[/bg]][[dim]]two[[/dim]]three',
            '[[]]empty tag',
        ]
        for text in test_cases:
            with self.subTest(case=text):
                joined = ''.join(span.text for span in self.parse(text))
                self.assertEqual(markup.strip_markup(joined),
                                 markup.strip_markup(text))


class TestHelpers(unittest.TestCase):
    def test_strip_markup(self):
        test_cases = {
            '[[fg:red]]hello[[/fg]] world': 'hello world',
            'no markup': 'no markup',
            'open [[fg:red': 'open [[fg:red',
            '': '',
            None: '',
        }
        for text, expected in test_cases.items():
            with self.subTest(case=text):
                self.assertEqual(markup.strip_markup(text), expected)

    def test_has_markup(self):
        self.assertTrue(markup.has_markup('a [[b'))
        self.assertFalse(markup.has_markup('a [b]'))
        self.assertFalse(markup.has_markup(None))
        self.assertFalse(markup.has_markup(42))

    def test_merge_spans_drops_empty(self):
        spans = [StyledSpan(''), StyledSpan('a'), StyledSpan('', fg=RED)]
        self.assertEqual(markup.merge_spans(spans), [StyledSpan('a')])

    def test_style(self):
        span = StyledSpan('x', fg=RED, bold=True)
        self.assertEqual(span.style, (RED, None, True, False))
