"""Rendering of terminal lines as SVG groups

Each line of the terminal is rendered independently from the animation frame
that adds it: command lines get a typewriter effect and a blinking cursor,
output lines fade in at once.
"""

from svgterminal.box import display_width
from svgterminal.markup import has_markup, parse_markup
from svgterminal.xmlutil import (CHAR_WIDTH_RATIO, format_number,
                                 preserve_space, round_coord, svg_element,
                                 svg_subelement, text_width, xml_safe)

# Vertical offset of the cursor from the baseline as a fraction of font size
CURSOR_Y_OFFSET_RATIO = -0.85

TEXT_GLOW_FILTER = 'url(#textGlow)'


def ms(value):
    return '{}ms'.format(format_number(value))


def _fade_in(parent, begin, duration):
    return svg_subelement(parent, 'animate', {
        'attributeName': 'opacity',
        'from': 0,
        'to': 1,
        'begin': ms(begin),
        'dur': ms(duration),
        'fill': 'freeze',
    })


def _text_attributes(text_config, fill=None, text_glow=False):
    return {
        'font-family': text_config.font_family,
        'font-size': text_config.font_size,
        'fill': fill,
        'filter': TEXT_GLOW_FILTER if text_glow else None,
    }


def _line_group(line_index, line_height, **extra):
    y = round_coord(line_index * line_height)
    attributes = {
        'id': 'line-{}'.format(line_index),
        'transform': 'translate(0, {})'.format(format_number(y)),
    }
    attributes.update(extra)
    return svg_element('g', attributes)


def _add_cursor(group, prompt_width, command, start, typing_duration, config):
    text_config = config.text
    animation = config.animation
    char_width = round_coord(text_config.font_size * CHAR_WIDTH_RATIO)
    char_duration = typing_duration / len(command) if command else 0
    typing_end = start + typing_duration

    cursor = svg_subelement(group, 'rect', {
        'x': prompt_width,
        'y': round_coord(text_config.font_size * CURSOR_Y_OFFSET_RATIO),
        'width': char_width,
        'height': text_config.font_size,
        'fill': config.theme.colors.cursor,
        'opacity': 0,
    })
    _fade_in(cursor, start, animation.char_appear_duration)
    svg_subelement(cursor, 'animate', {
        'attributeName': 'opacity',
        'values': '1;1;0;0',
        'dur': ms(animation.cursor_blink_cycle),
        'begin': ms(start),
        'end': ms(typing_end),
        'repeatCount': 'indefinite',
    })
    svg_subelement(cursor, 'animate', {
        'attributeName': 'opacity',
        'to': 0,
        'begin': ms(typing_end),
        'dur': ms(animation.char_appear_duration),
        'fill': 'freeze',
    })
    for index in range(len(command)):
        svg_subelement(cursor, 'animate', {
            'attributeName': 'x',
            'from': prompt_width + index * char_width,
            'to': prompt_width + (index + 1) * char_width,
            'begin': ms(start + index * char_duration),
            'dur': '1ms',
            'fill': 'freeze',
        })
    return cursor


def render_command_line(frame, config, line_height, text_glow):
    """Return a group element for a command typed after the prompt

    :param frame: AnimationFrame of type 'add-command'
    :param config: TerminalConfig
    :param line_height: Height of a line in pixels
    :param text_glow: Apply the glow filter to the text
    """
    text_config = config.text
    colors = config.theme.colors
    animation = config.animation
    prompt = xml_safe(text_config.prompt if frame.prompt is None else frame.prompt)
    command = xml_safe(frame.command or '')
    typing_duration = frame.typing_duration
    if typing_duration is None:
        typing_duration = animation.default_typing_duration
    start = frame.time
    prompt_width = text_width(prompt, text_config.font_size)
    char_duration = typing_duration / len(command) if command else 0

    group = _line_group(frame.line_index, line_height)

    prompt_tag = svg_subelement(group, 'text', _text_attributes(
        text_config, colors.prompt, text_glow))
    prompt_tag.set('opacity', '0')
    preserve_space(prompt_tag)
    prompt_tag.text = prompt
    _fade_in(prompt_tag, start, animation.char_appear_duration)

    attributes = _text_attributes(text_config, colors.prompt, text_glow)
    attributes['x'] = prompt_width
    command_tag = svg_subelement(group, 'text', attributes)
    preserve_space(command_tag)
    for index, char in enumerate(command):
        tspan = svg_subelement(command_tag, 'tspan', {'opacity': 0})
        tspan.text = char
        _fade_in(tspan, start + index * char_duration,
                 animation.char_appear_duration)

    _add_cursor(group, prompt_width, command, start, typing_duration, config)
    return group


def _add_styled_text(text_tag, content, color, config, color_map):
    """Append one tspan per styled span of content to text_tag, and a
    background rect before text_tag for each span with a background color"""
    font_size = config.text.font_size
    column = 0
    for span in parse_markup(content, color_map, color):
        text = xml_safe(span.text)
        width = display_width(text)
        if span.bg is not None and width:
            rect = svg_element('rect', {
                'x': round_coord(column * font_size * CHAR_WIDTH_RATIO),
                'y': round_coord(font_size * CURSOR_Y_OFFSET_RATIO),
                'width': round_coord(width * font_size * CHAR_WIDTH_RATIO),
                'height': font_size,
                'fill': span.bg,
            })
            # Backgrounds go right before the text element to stay behind it
            text_tag.addprevious(rect)
        tspan = svg_subelement(text_tag, 'tspan', {
            'fill': span.fg or color,
            'font-weight': 'bold' if span.bold else None,
            'opacity': config.chrome.dim_opacity if span.dim else None,
        })
        tspan.text = text
        column += width


def _render_text(parent, content, color, config, color_map, text_glow,
                 y=None):
    if has_markup(content):
        attributes = _text_attributes(config.text, None, text_glow)
        attributes['y'] = y
        text_tag = svg_subelement(parent, 'text', attributes)
        _add_styled_text(text_tag, content, color, config, color_map)
    else:
        attributes = _text_attributes(config.text, color, text_glow)
        attributes['y'] = y
        text_tag = svg_subelement(parent, 'text', attributes)
        text_tag.text = xml_safe(content)
    preserve_space(text_tag)
    return text_tag


def render_output_line(frame, config, line_height, color_map, text_glow):
    """Return a group element for a line of output fading in at frame.time

    :param frame: AnimationFrame of type 'add-output'
    :param config: TerminalConfig
    :param line_height: Height of a line in pixels
    :param color_map: Mapping between markup color names and colors
    :param text_glow: Apply the glow filter to the text
    """
    color = frame.color or config.theme.colors.text
    group = _line_group(frame.line_index, line_height, opacity=0)
    _fade_in(group, frame.time, config.animation.char_appear_duration)
    _render_text(group, frame.content or '', color, config, color_map, text_glow)
    return group


def render_static_line(parent, index, content, config, line_height, color_map):
    """Append to parent a text element for a line that is displayed from the
    start, without any animation"""
    return _render_text(parent, content, config.theme.colors.text, config,
                        color_map, config.effects.text_glow,
                        y=round_coord(index * line_height))
