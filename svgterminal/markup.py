"""Inline markup for styled terminal text

Output lines produced by blocks may embed the following tags, which nest
freely:

    [[fg:<color>]]...[[/fg]]   foreground color (theme color name or #hex)
    [[bg:<color>]]...[[/bg]]   background color
    [[bold]]...[[/bold]]       bold weight
    [[dim]]...[[/dim]]         dimmed opacity

Parsing is permissive: any closing tag pops the last opened style whatever
its name, and an opening '[[' that is never closed is kept as literal text.
"""

import re
from collections import namedtuple
from itertools import groupby

# Shared by parse_markup and strip_markup so that both agree on what a tag is
TAG_RE = re.compile(r'\[\[(.*?)\]\]', re.DOTALL)

HEX_COLOR_RE = re.compile(r'^#(?:[0-9a-f]{3}|[0-9a-f]{6})$', re.IGNORECASE)

_StyledSpan = namedtuple('_StyledSpan', ['text', 'fg', 'bg', 'bold', 'dim'])
_StyledSpan.__new__.__defaults__ = (None, None, False, False)
_StyledSpan.__doc__ = 'Run of text sharing the same style'
_StyledSpan.fg.__doc__ = 'Resolved foreground color or None for the default'
_StyledSpan.bg.__doc__ = 'Resolved background color or None for no background'


class StyledSpan(_StyledSpan):
    @property
    def style(self):
        return self.fg, self.bg, self.bold, self.dim


# Style applied to text outside of any tag
_PLAIN = StyledSpan('')


def build_color_map(colors):
    """Return mapping between markup color names and the colors of a theme

    :param colors: ThemeColors of the theme in use
    """
    return {
        'black': colors.background,
        'red': colors.red,
        'green': colors.green,
        'yellow': colors.yellow,
        'blue': colors.blue,
        'magenta': colors.magenta,
        'cyan': colors.cyan,
        'white': colors.white,
        'bright_black': colors.bright_black,
        'bright_red': colors.bright_red,
        'bright_green': colors.bright_green,
        'bright_yellow': colors.bright_yellow,
        'bright_blue': colors.bright_blue,
        'bright_magenta': colors.bright_magenta,
        'bright_cyan': colors.bright_cyan,
        'bright_white': colors.bright_white,
        'purple': colors.purple,
        'pink': colors.pink,
        'orange': colors.orange,
        'comment': colors.comment,
        'neon_green': colors.prompt,
        'matrix_green': colors.cursor,
    }


def resolve_color(name, color_map, fallback):
    if name.startswith('#'):
        return name if HEX_COLOR_RE.match(name) else fallback
    return color_map.get(name.lower(), fallback)


def _apply_tag(style, tag, color_map, fallback):
    if tag == 'bold':
        return style._replace(bold=True)
    if tag == 'dim':
        return style._replace(dim=True)
    if tag.startswith('fg:'):
        return style._replace(fg=resolve_color(tag[3:], color_map, fallback))
    if tag.startswith('bg:'):
        return style._replace(bg=resolve_color(tag[3:], color_map, fallback))
    # Unknown tags still open a scope so that their closing tag pops it
    return style


def _tokenize(text):
    """Yield ('text', str) and ('tag', str) tokens"""
    position = 0
    for match in TAG_RE.finditer(text):
        if match.start() > position:
            yield 'text', text[position:match.start()]
        yield 'tag', match.group(1)
        position = match.end()
    if position < len(text):
        yield 'text', text[position:]


def parse_markup(text, color_map, fallback_color):
    """Parse markup into a list of StyledSpan

    The list is never empty: empty input (or input made only of tags) yields a
    single empty span so that callers can always index the first element.

    :param text: Text with optional markup tags
    :param color_map: Mapping between color names and colors
    :param fallback_color: Color used for invalid or unknown color names
    """
    if not text:
        return [_PLAIN]

    spans = []
    style = _PLAIN
    stack = []
    for kind, value in _tokenize(text):
        if kind == 'text':
            spans.append(style._replace(text=value))
        elif value.startswith('/'):
            if stack:
                style = stack.pop()
        else:
            stack.append(style)
            style = _apply_tag(style, value, color_map, fallback_color)

    return merge_spans(spans) or [_PLAIN]


def merge_spans(spans):
    """Merge adjacent spans with the same style and drop empty ones"""
    merged = []
    for _, group in groupby(spans, key=lambda span: span.style):
        group = list(group)
        text = ''.join(span.text for span in group)
        if text:
            merged.append(group[0]._replace(text=text))
    return merged


def strip_markup(text):
    """Return text without any markup tag"""
    if not text:
        return ''
    return TAG_RE.sub('', text)


def has_markup(text):
    return isinstance(text, str) and '[[' in text
