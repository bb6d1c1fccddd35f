"""Color themes of the terminal window"""

from collections import namedtuple

from svgterminal.errors import ConfigError

COLOR_NAMES = [
    'text', 'comment', 'background', 'title_bar_background', 'title_bar_text',
    'prompt', 'cursor', 'red', 'green', 'yellow', 'blue', 'magenta', 'cyan',
    'white', 'orange', 'purple', 'pink', 'bright_red', 'bright_green',
    'bright_yellow', 'bright_blue', 'bright_magenta', 'bright_cyan',
    'bright_white', 'bright_black',
]

ThemeColors = namedtuple('ThemeColors', COLOR_NAMES)
Buttons = namedtuple('Buttons', ['close', 'minimize', 'maximize'])
Theme = namedtuple('Theme', ['name', 'colors', 'buttons'])

DRACULA = Theme(
    name='dracula',
    colors=ThemeColors(
        text='#e4e4e4',
        comment='#6272a4',
        background='#0a0e27',
        title_bar_background='#151b2e',
        title_bar_text='#e0e6ed',
        prompt='#00ff9f',
        cursor='#00ff41',
        red='#ff5555',
        green='#50fa7b',
        yellow='#f1fa8c',
        blue='#729fcf',
        magenta='#ff79c6',
        cyan='#8be9fd',
        white='#ffffff',
        orange='#ffb86c',
        purple='#bd93f9',
        pink='#ff79c6',
        bright_red='#ff6e6e',
        bright_green='#69ff94',
        bright_yellow='#ffffa5',
        bright_blue='#d6acff',
        bright_magenta='#ff92df',
        bright_cyan='#a4ffff',
        bright_white='#ffffff',
        bright_black='#6272a4',
    ),
    buttons=Buttons(close='#ff5f57', minimize='#ffbd2e', maximize='#28ca42'),
)

NORD = Theme(
    name='nord',
    colors=ThemeColors(
        text='#d8dee9',
        comment='#4c566a',
        background='#2e3440',
        title_bar_background='#3b4252',
        title_bar_text='#d8dee9',
        prompt='#a3be8c',
        cursor='#88c0d0',
        red='#bf616a',
        green='#a3be8c',
        yellow='#ebcb8b',
        blue='#5e81ac',
        magenta='#b48ead',
        cyan='#88c0d0',
        white='#eceff4',
        orange='#d08770',
        purple='#b48ead',
        pink='#b48ead',
        bright_red='#bf616a',
        bright_green='#a3be8c',
        bright_yellow='#ebcb8b',
        bright_blue='#81a1c1',
        bright_magenta='#b48ead',
        bright_cyan='#8fbcbb',
        bright_white='#eceff4',
        bright_black='#4c566a',
    ),
    buttons=Buttons(close='#bf616a', minimize='#ebcb8b', maximize='#a3be8c'),
)

MONOKAI = Theme(
    name='monokai',
    colors=ThemeColors(
        text='#f8f8f2',
        comment='#75715e',
        background='#272822',
        title_bar_background='#1e1f1c',
        title_bar_text='#f8f8f2',
        prompt='#a6e22e',
        cursor='#f8f8f2',
        red='#f92672',
        green='#a6e22e',
        yellow='#e6db74',
        blue='#66d9ef',
        magenta='#ae81ff',
        cyan='#66d9ef',
        white='#f8f8f2',
        orange='#fd971f',
        purple='#ae81ff',
        pink='#f92672',
        bright_red='#f92672',
        bright_green='#a6e22e',
        bright_yellow='#e6db74',
        bright_blue='#66d9ef',
        bright_magenta='#ae81ff',
        bright_cyan='#66d9ef',
        bright_white='#f8f8f0',
        bright_black='#75715e',
    ),
    buttons=Buttons(close='#f92672', minimize='#e6db74', maximize='#a6e22e'),
)

THEMES = {theme.name: theme for theme in (DRACULA, NORD, MONOKAI)}

DEFAULT_THEME = 'dracula'


def custom_theme(name='custom', colors=None, buttons=None, base=DRACULA):
    """Build a theme from partial mappings of colors and buttons, taking
    missing values from base

    :param name: Name of the theme
    :param colors: Mapping between color names (see COLOR_NAMES) and colors
    :param buttons: Mapping with optional keys close, minimize and maximize
    :param base: Theme providing the values missing from colors and buttons
    """
    colors = dict(colors or {})
    buttons = dict(buttons or {})
    unknown = sorted(set(colors) - set(ThemeColors._fields))
    if unknown:
        raise ConfigError('Unknown theme color(s): {}'.format(', '.join(unknown)))
    unknown = sorted(set(buttons) - set(Buttons._fields))
    if unknown:
        raise ConfigError('Unknown theme button(s): {}'.format(', '.join(unknown)))

    for key, value in list(colors.items()) + list(buttons.items()):
        if not isinstance(value, str):
            raise ConfigError('Theme color "{}" must be a string'.format(key))

    return Theme(name=name,
                 colors=base.colors._replace(**colors),
                 buttons=base.buttons._replace(**buttons))


def resolve_theme(theme):
    """Return the Theme designated by theme, which is either a Theme or the
    name of a built-in theme"""
    if isinstance(theme, Theme):
        return theme
    try:
        return THEMES[theme]
    except (KeyError, TypeError):
        raise ConfigError('Unknown theme "{}". Available: {}'
                          .format(theme, ', '.join(THEMES))) from None
