"""Fixed-width text boxes drawn with box-drawing characters"""

import re
from collections import namedtuple

from svgterminal.markup import TAG_RE

BoxChars = namedtuple('BoxChars', ['top_left', 'top_right', 'bottom_left',
                                   'bottom_right', 'horizontal', 'vertical',
                                   'separator_left', 'separator_right'])

BOX_STYLES = {
    'double': BoxChars('╔', '╗', '╚', '╝',
                       '═', '║', '╠', '╣'),
    'rounded': BoxChars('╭', '╮', '╰', '╯',
                        '─', '│', '├', '┤'),
    'single': BoxChars('┌', '┐', '└', '┘',
                       '─', '│', '├', '┤'),
    'heavy': BoxChars('┏', '┓', '┗', '┛',
                      '━', '┃', '┣', '┫'),
    'dashed': BoxChars('┌', '┐', '└', '┘',
                       '┄', '┆', '├', '┤'),
}

# Code point ranges rendered two columns wide (emoji and pictographs)
WIDE_RANGES = [
    (0x1F300, 0x1F9FF),
    (0x2600, 0x26FF),
    (0x2700, 0x27BF),
    (0x1F600, 0x1F64F),
    (0x1F680, 0x1F6FF),
]

ANSI_RE = re.compile(r'\x1b\[[0-9;]*m')

# Markup tags and ANSI codes, both of which take no room on screen
_ZERO_WIDTH_RE = re.compile(r'{}|{}'.format(TAG_RE.pattern, ANSI_RE.pattern),
                            re.DOTALL)

ELLIPSIS = '...'


def char_width(char):
    code = ord(char)
    for low, high in WIDE_RANGES:
        if low <= code <= high:
            return 2
    return 1


def display_width(text):
    """Number of columns needed to display text, ignoring markup and ANSI
    codes"""
    if not text:
        return 0
    visible = TAG_RE.sub('', ANSI_RE.sub('', text))
    return sum(char_width(char) for char in visible)


def _tokens(text):
    """Split text into zero width tokens (tags, ANSI codes) and single
    characters. Return a list of (token, width) tuples"""
    tokens = []
    position = 0
    for match in _ZERO_WIDTH_RE.finditer(text):
        tokens.extend((char, char_width(char))
                      for char in text[position:match.start()])
        tokens.append((match.group(0), 0))
        position = match.end()
    tokens.extend((char, char_width(char)) for char in text[position:])
    return tokens


def pad_to_width(text, width, pad_char=' '):
    padding = max(0, width - display_width(text))
    return text + pad_char * padding


def truncate_to_width(text, max_width):
    """Shorten text so that it fits in max_width columns, ellipsis included.

    Markup tags are kept even when the text they enclose is cut, so that
    styles opened before the cut are still closed.
    """
    if display_width(text) <= max_width:
        return text
    if max_width < len(ELLIPSIS):
        return ELLIPSIS[:max(0, max_width)]

    budget = max_width - len(ELLIPSIS)
    kept = []
    trailing_tags = []
    width = 0
    cut = False
    for token, token_width in _tokens(text):
        if cut:
            if token_width == 0:
                trailing_tags.append(token)
            continue
        if width + token_width > budget:
            cut = True
            continue
        kept.append(token)
        width += token_width

    return ''.join(kept) + ELLIPSIS + ''.join(trailing_tags)


def wrap_text(text, max_width, indent=''):
    """Wrap text at word boundaries so that no line is wider than max_width

    Continuation lines start with indent, whose width counts against the
    width available on the line. Words wider than a line are split at the
    character level.

    :param text: Text to wrap, possibly containing markup
    :param max_width: Maximum display width of a line
    :param indent: Prefix of every line but the first, narrower than max_width
    :return: List of lines
    :raise ValueError: if indent leaves no room on continuation lines
    """
    if not text or display_width(text) <= max_width:
        return [text or '']

    indent_width = display_width(indent)
    if indent_width and indent_width >= max_width:
        raise ValueError('Indent of width {} leaves no room in {} columns'
                         .format(indent_width, max_width))
    lines = []
    current = ''
    current_width = 0

    def available():
        if not lines:
            return max_width
        return max(1, max_width - indent_width)

    for word in text.split():
        word_width = display_width(word)
        if current and current_width + 1 + word_width <= available():
            current += ' ' + word
            current_width += 1 + word_width
            continue

        if current:
            lines.append(current)
            current, current_width = '', 0

        if word_width <= available():
            current, current_width = word, word_width
            continue

        for token, token_width in _tokens(word):
            if current_width + token_width > available() and current_width:
                lines.append(current)
                current, current_width = '', 0
            current += token
            current_width += token_width

    if current or not lines:
        lines.append(current)

    return lines[:1] + [indent + line for line in lines[1:]]


def _border(chars, width, left, right):
    return left + chars.horizontal * (width - 2) + right


def create_box(lines, style='double', width=56, separator_after=(),
               truncate=True, wrap=False):
    """Draw a box around lines and return it as a newline separated string

    :param lines: Content of the box, one string per line
    :param style: One of the keys of BOX_STYLES
    :param width: Total width of the box including borders
    :param separator_after: Indices of the lines followed by a separator
    :param truncate: Truncate lines wider than the box
    :param wrap: Wrap lines wider than the box (takes precedence over
    truncate)
    """
    try:
        chars = BOX_STYLES[style]
    except KeyError:
        raise ValueError('Unknown box style "{}". Available: {}'
                         .format(style, ', '.join(BOX_STYLES))) from None

    inner_width = width - 4
    separators = set(separator_after or ())
    result = [_border(chars, width, chars.top_left, chars.top_right)]
    for index, line in enumerate(lines):
        line_width = display_width(line)
        if wrap and line_width > inner_width:
            rows = wrap_text(line, inner_width)
        elif truncate and line_width > inner_width:
            rows = [truncate_to_width(line, inner_width)]
        else:
            rows = [line]

        for row in rows:
            result.append('{v} {content} {v}'.format(
                v=chars.vertical, content=pad_to_width(row, inner_width)))

        if index in separators:
            result.append(_border(chars, width, chars.separator_left,
                                  chars.separator_right))

    result.append(_border(chars, width, chars.bottom_left, chars.bottom_right))
    return '\n'.join(result)


def create_auto_box(lines, style='double', min_width=10, max_width=80,
                    separator_after=()):
    """Draw a box just wide enough for its content, wrapping lines if that
    width would exceed max_width"""
    content_width = max((display_width(line) for line in lines), default=0)
    width = max(content_width + 4, min_width)
    if width > max_width:
        return create_box(lines, style=style, width=max_width,
                          separator_after=separator_after, wrap=True)
    return create_box(lines, style=style, width=width,
                      separator_after=separator_after)


def create_double_box(lines, width=56, separator_after=()):
    return create_box(lines, style='double', width=width,
                      separator_after=separator_after)


def create_rounded_box(lines, width=48, separator_after=()):
    return create_box(lines, style='rounded', width=width,
                      separator_after=separator_after)


def create_titled_box(title, content=(), subtitle=None, width=56,
                      style='double'):
    """Draw a box whose title (and optional subtitle) is separated from the
    content"""
    lines = ['', title]
    if subtitle:
        lines.append(subtitle)
    separator_index = len(lines) - 1
    lines.extend(content)
    return create_box(lines, style=style, width=width,
                      separator_after=[separator_index])
