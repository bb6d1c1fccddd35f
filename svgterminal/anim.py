"""Timeline scheduling and SVG assembly of the terminal animation

Sequences of commands and outputs are scheduled into a list of timed
animation frames by folding schedule_sequence over them. Frames are then
rendered into SVG elements and wrapped into the window chrome.
"""

import logging
import math
from collections import namedtuple
from functools import reduce

from lxml import etree

from svgterminal.config import FRAMELESS_STYLES
from svgterminal.effects import generate_defs, generate_filters
from svgterminal.lines import (ms, render_command_line, render_output_line,
                               render_static_line)
from svgterminal.markup import build_color_map
from svgterminal.xmlutil import (NSMAP, format_number, round_coord,
                                 svg_element, svg_subelement, tostring,
                                 xml_safe)

logger = logging.getLogger(__name__)

# Number of commands listed in the accessibility label
LABEL_COMMANDS = 5

REDUCED_MOTION_CSS = """
    @media (prefers-reduced-motion: reduce) {
      *, *::before, *::after {
        animation-duration: 0.01ms !important;
        animation-iteration-count: 1 !important;
        transition-duration: 0.01ms !important;
      }
    }
"""

_Sequence = namedtuple('_Sequence', ['type', 'content', 'prompt', 'color',
                                     'typing_duration', 'pause', 'delay'])
_Sequence.__new__.__defaults__ = (None, None, None, None, None)
_Sequence.__doc__ = 'Unit of the timeline: a command typed or some output'
_Sequence.type.__doc__ = "Either 'command' or 'output'"
_Sequence.content.__doc__ = 'Command text, or output lines separated by newlines'
_Sequence.pause.__doc__ = 'Pause after the sequence in milliseconds'
_Sequence.delay.__doc__ = 'Delay before the sequence in milliseconds'


class Sequence(_Sequence):
    @classmethod
    def command(cls, content, **kwargs):
        return cls('command', content, **kwargs)

    @classmethod
    def output(cls, content, **kwargs):
        return cls('output', content, **kwargs)


_FRAME_ATTRIBUTES = ['time', 'type', 'line_index', 'prompt', 'command',
                     'content', 'color', 'typing_duration', 'scroll_lines',
                     'buffer_start']
AnimationFrame = namedtuple('AnimationFrame', _FRAME_ATTRIBUTES)
AnimationFrame.__new__.__defaults__ = (None,) * 8
AnimationFrame.__doc__ = ("Timed event of the animation: 'scroll', "
                          "'add-command', 'add-output' or 'final'")

BufferLine = namedtuple('BufferLine', ['type'])

TimelineState = namedtuple('TimelineState', ['time', 'buffer', 'buffer_start',
                                             'frames'])
TimelineState.__new__.__defaults__ = (0, (), 0, ())
TimelineState.__doc__ = 'Accumulator of the timeline scheduling'

TimelineSettings = namedtuple('TimelineSettings', ['max_visible_lines',
                                                   'scroll_duration',
                                                   'animation', 'prompt'])


def _add_line(state, time, line_type, frame, settings):
    """Push a line to the buffer and return the new state along with the
    delay induced by scrolling. The time of state is left unchanged."""
    buffer = state.buffer + (BufferLine(line_type),)
    buffer_start = state.buffer_start
    frames = state.frames
    delay = 0
    if len(buffer) - buffer_start > settings.max_visible_lines:
        buffer_start += 1
        frames += (AnimationFrame(time=time, type='scroll', scroll_lines=1,
                                  buffer_start=buffer_start),)
        delay = settings.scroll_duration + settings.animation.scroll_delay

    frames += (frame._replace(time=time + delay, line_index=len(buffer) - 1),)
    return state._replace(buffer=buffer, buffer_start=buffer_start,
                          frames=frames), delay


def schedule_sequence(state, sequence, settings):
    """Return the timeline state after sequence

    :param state: TimelineState before sequence
    :param sequence: Sequence to schedule
    :param settings: TimelineSettings
    """
    animation = settings.animation
    time = state.time + (sequence.delay or 0)

    if sequence.type == 'command':
        typing_duration = sequence.typing_duration
        if typing_duration is None:
            typing_duration = animation.default_typing_duration
        prompt = settings.prompt if sequence.prompt is None else sequence.prompt
        frame = AnimationFrame(time=time, type='add-command', prompt=prompt,
                               command=sequence.content,
                               typing_duration=typing_duration)
        state, delay = _add_line(state, time, 'command', frame, settings)
        time += delay + typing_duration
    elif sequence.content:
        lines = sequence.content.split('\n')
        for offset, line in enumerate(lines):
            line_time = time + offset * animation.output_line_stagger
            frame = AnimationFrame(time=line_time, type='add-output',
                                   content=line, color=sequence.color)
            state, _ = _add_line(state, line_time, 'output', frame, settings)
        time += len(lines) * animation.output_line_stagger + animation.output_end_pause
    # Empty outputs add no line, only their pause

    pause = sequence.pause
    if pause is None:
        pause = animation.default_sequence_pause
    return state._replace(time=time + pause)


def create_animation_frames(sequences, settings):
    """Return the list of frames of the animation and its total duration in
    milliseconds. The last frame is always of type 'final'."""
    state = reduce(lambda acc, sequence: schedule_sequence(acc, sequence, settings),
                   sequences, TimelineState())
    frames = list(state.frames)
    frames.append(AnimationFrame(time=state.time, type='final'))
    return frames, state.time


def title_bar_height(window):
    """Height of the title bar actually drawn for the style of the window"""
    if window.style in FRAMELESS_STYLES:
        return 0
    return window.title_bar_height


def line_height(text_config):
    return text_config.font_size * text_config.line_height


def max_visible_lines(window, text_config):
    viewport_height = (window.height - title_bar_height(window)
                       - text_config.padding_top - text_config.padding)
    return max(1, math.floor(viewport_height / line_height(text_config)))


def count_lines(sequences):
    """Number of terminal lines produced by sequences"""
    total = 0
    for sequence in sequences:
        if sequence.type == 'command':
            total += 1
        elif sequence.content:
            total += len(sequence.content.split('\n'))
    return total


def auto_height(line_count, window, text_config):
    """Window height fitting line_count lines, clamped to the height limits
    of the window"""
    chrome_height = (title_bar_height(window) + text_config.padding_top
                     + 2 * text_config.padding)
    height = math.ceil(line_count * line_height(text_config) + chrome_height)
    return max(window.min_height, min(window.max_height, height))


def build_accessibility_label(sequences):
    commands = [sequence.content for sequence in sequences
                if sequence.type == 'command'][:LABEL_COMMANDS]
    if not commands:
        return 'Animated terminal'
    return 'Animated terminal showing: {}'.format(', '.join(commands))


def _prepare_config(config, line_count):
    """Apply auto height and style dependent effects to config"""
    window = config.window
    if window.auto_height:
        window = window._replace(height=auto_height(line_count, window,
                                                    config.text))
    effects = config.effects
    if window.style == 'none':
        effects = effects._replace(shadow=False)
    return config._replace(window=window, effects=effects)


def _content_y(config):
    return title_bar_height(config.window) + config.text.padding_top + config.text.font_size


def _render_root(config, label, animated):
    window = config.window
    root = svg_element('svg', {
        'width': window.width,
        'height': window.height,
        'role': 'img',
        'aria-label': xml_safe(label),
    }, nsmap=NSMAP)

    if animated:
        style = svg_subelement(root, 'style')
        style.text = etree.CDATA(REDUCED_MOTION_CSS)

    defs = svg_subelement(root, 'defs')
    for definition in generate_defs(config.effects) + generate_filters(config.effects):
        defs.append(definition)

    return root


def _render_window(root, config):
    """Add the window frame to root and return the group holding it"""
    window = config.window
    colors = config.theme.colors
    filter_url = 'url(#shadow)' if config.effects.shadow else None
    window_group = svg_subelement(root, 'g', {'filter': filter_url})

    radius = 0 if window.style == 'none' else window.border_radius
    svg_subelement(window_group, 'rect', {
        'x': 0, 'y': 0, 'width': window.width, 'height': window.height,
        'rx': radius, 'ry': radius, 'fill': colors.background,
    })

    if window.style not in FRAMELESS_STYLES:
        _render_title_bar(window_group, config)

    return window_group


def _render_title_bar(parent, config):
    window = config.window
    chrome = config.chrome
    theme = config.theme
    bar_height = window.title_bar_height
    svg_subelement(parent, 'rect', {
        'x': 0, 'y': 0, 'width': window.width, 'height': bar_height,
        'rx': window.border_radius, 'ry': window.border_radius,
        'fill': theme.colors.title_bar_background,
    })
    # Square off the bottom corners of the title bar
    svg_subelement(parent, 'rect', {
        'x': 0, 'y': bar_height / 2, 'width': window.width,
        'height': bar_height / 2, 'fill': theme.colors.title_bar_background,
    })

    controls = svg_subelement(parent, 'g', {'id': 'window-controls'})
    for index, color in enumerate(theme.buttons):
        svg_subelement(controls, 'circle', {
            'cx': config.text.padding + 2 + chrome.button_spacing * index,
            'cy': chrome.button_y,
            'r': chrome.button_radius,
            'fill': color,
        })

    title = svg_subelement(parent, 'text', {
        'x': window.width / 2,
        'y': chrome.button_y + 5,
        'font-family': config.text.font_family,
        'font-size': chrome.title_font_size,
        'fill': theme.colors.title_bar_text,
        'text-anchor': 'middle',
    })
    title.text = xml_safe(window.title)


def _render_viewport(parent, config, content_id=None):
    """Add the clipped content area to parent and return the group in which
    lines must be placed"""
    window = config.window
    top = title_bar_height(window)
    viewport = {'x': 0, 'y': top, 'width': window.width,
                'height': window.height - top}

    defs = svg_subelement(parent, 'defs')
    clip_path = svg_subelement(defs, 'clipPath', {'id': 'terminalViewport'})
    svg_subelement(clip_path, 'rect', viewport)

    background = dict(viewport, fill=config.theme.colors.background)
    svg_subelement(parent, 'rect', background)

    clipped = svg_subelement(parent, 'g', {'clip-path': 'url(#terminalViewport)'})
    content = svg_subelement(clipped, 'g', {
        'id': content_id,
        'transform': 'translate({}, {})'.format(format_number(config.text.padding),
                                                format_number(_content_y(config))),
    })

    if config.effects.scanlines:
        overlay = dict(viewport, fill='url(#scanlines)')
        svg_subelement(parent, 'rect', overlay)

    return content


def _render_scroll_animations(parent, frames, config):
    padding = format_number(config.text.padding)
    content_y = _content_y(config)
    height = round_coord(line_height(config.text))
    for frame in frames:
        if frame.type != 'scroll':
            continue
        from_y = content_y - (frame.buffer_start - frame.scroll_lines) * height
        to_y = content_y - frame.buffer_start * height
        svg_subelement(parent, 'animateTransform', {
            'attributeName': 'transform',
            'type': 'translate',
            'from': '{} {}'.format(padding, format_number(from_y)),
            'to': '{} {}'.format(padding, format_number(to_y)),
            'begin': ms(frame.time),
            'dur': ms(config.scroll_duration),
            'fill': 'freeze',
        })


def _render_lines(parent, frames, config):
    height = line_height(config.text)
    color_map = build_color_map(config.theme.colors)
    text_glow = config.effects.text_glow
    lines = {}
    for frame in frames:
        if frame.type == 'add-command':
            lines[frame.line_index] = render_command_line(frame, config, height,
                                                          text_glow)
        elif frame.type == 'add-output':
            lines[frame.line_index] = render_output_line(frame, config, height,
                                                         color_map, text_glow)

    for line_index in sorted(lines):
        parent.append(lines[line_index])


def generate_svg(sequences, config, accessibility_label=None):
    """Render sequences as an animated SVG terminal and return it as a string

    :param sequences: List of Sequence
    :param config: TerminalConfig
    :param accessibility_label: Label overriding the one built from the
    commands of sequences
    """
    config = _prepare_config(config, count_lines(sequences))
    settings = TimelineSettings(
        max_visible_lines=max_visible_lines(config.window, config.text),
        scroll_duration=config.scroll_duration,
        animation=config.animation,
        prompt=config.text.prompt,
    )
    frames, total_duration = create_animation_frames(sequences, settings)
    logger.debug('Scheduled {} frames, animation lasts {}ms'
                 .format(len(frames), total_duration))
    if total_duration > config.max_duration * 1000:
        logger.warning('Animation duration ({:.1f}s) exceeds maxDuration ({}s)'
                       .format(total_duration / 1000, config.max_duration))

    label = accessibility_label or build_accessibility_label(sequences)
    root = _render_root(config, label, animated=True)
    window_group = _render_window(root, config)
    content = _render_viewport(window_group, config, content_id='scrollContainer')
    _render_scroll_animations(content, frames, config)
    _render_lines(content, frames, config)
    return tostring(root)


def generate_static_svg(lines, config, accessibility_label=None):
    """Render lines of text (possibly with markup) as a still SVG terminal

    :param lines: List of lines, each displayed on its own row
    :param config: TerminalConfig
    :param accessibility_label: Label overriding the default one
    """
    config = _prepare_config(config, len(lines))
    label = (accessibility_label
             or 'Static terminal showing {} lines'.format(len(lines)))
    root = _render_root(config, label, animated=False)
    window_group = _render_window(root, config)
    content = _render_viewport(window_group, config)
    height = line_height(config.text)
    color_map = build_color_map(config.theme.colors)
    for index, line in enumerate(lines):
        render_static_line(content, index, line, config, height, color_map)
    return tostring(root)
