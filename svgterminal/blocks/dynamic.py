"""Blocks fetching live data over HTTP

A failed request never fails the generation: each block falls back to static
content or to an inline message.
"""

import logging
from datetime import datetime
from urllib.parse import quote, urlencode

from svgterminal import http
from svgterminal.blocks.base import Block, BlockResult, make_options_type
from svgterminal.box import create_double_box, wrap_text

logger = logging.getLogger(__name__)

WTTR_URL = 'https://wttr.in/{}?format=j1'
QUOTE_URL = 'https://dummyjson.com/quotes/random'
FACT_URL = 'https://uselessfacts.jsph.pl/api/v2/facts/random?{}'
GITHUB_USER_URL = 'https://api.github.com/users/{}'


def _first_value(items, default=None):
    """Return items[0]['value'] as found in wttr.in responses"""
    try:
        return items[0]['value']
    except (IndexError, KeyError, TypeError):
        return default


def _current_condition(data):
    if not isinstance(data, dict):
        return None
    conditions = data.get('current_condition')
    if not conditions or not isinstance(conditions[0], dict):
        return None
    return conditions[0]


def _by_units(units, imperial, metric, separator=' / '):
    if units == 'imperial':
        return imperial
    if units == 'metric':
        return metric
    return '{}{}{}'.format(imperial, separator, metric)


def _has_text(data, key):
    """True if data is a mapping holding a non empty string under key"""
    return isinstance(data, dict) and isinstance(data.get(key), str) \
        and bool(data[key].strip())


def format_weather(data, units, compact):
    """Return display lines for a wttr.in response

    :param data: Decoded JSON response of wttr.in
    :param units: 'imperial', 'metric' or 'both'
    :param compact: Return two lines instead of a full report
    """
    current = _current_condition(data)
    if current is None:
        return ['Weather data unavailable']

    areas = data.get('nearest_area') or [{}]
    area = areas[0] if isinstance(areas[0], dict) else {}
    description = _first_value(current.get('weatherDesc'), 'Unknown')
    location = _first_value(area.get('areaName'), 'Unknown')
    region = _first_value(area.get('region'))
    if region:
        location = '{}, {}'.format(location, region)

    temperature = _by_units(units, '{}°F'.format(current.get('temp_F')),
                            '{}°C'.format(current.get('temp_C')))
    feels_like = _by_units(units, '{}°F'.format(current.get('FeelsLikeF')),
                           '{}°C'.format(current.get('FeelsLikeC')))
    if units == 'metric':
        wind = '{} km/h {}'.format(current.get('windspeedKmph'),
                                   current.get('winddir16Point'))
    else:
        wind = '{} mph {}'.format(current.get('windspeedMiles'),
                                  current.get('winddir16Point'))

    if compact:
        return [
            '[[fg:cyan]]{}[[/fg]]'.format(location),
            '{}  {}  Humidity: {}%'.format(description, temperature,
                                           current.get('humidity')),
        ]

    return [
        '',
        '[[fg:cyan]]WEATHER: {}[[/fg]]'.format(location),
        '{}  [[bold]]{}[[/bold]]'.format(description, temperature),
        'Humidity: {}%   Wind: {}'.format(current.get('humidity'), wind),
        'Feels Like: {}   UV: {}'.format(feels_like, current.get('uvIndex')),
        '',
    ]


def _wttr_url(location):
    # wttr.in expects underscores instead of encoded spaces
    return WTTR_URL.format(quote(location).replace('%20', '_'))


async def fetch_weather_summary(location, units, timeout):
    """Return a one line weather summary for location, or None if it is
    unavailable"""
    if not location:
        return None
    data = await http.fetch_json(_wttr_url(location), timeout)
    current = _current_condition(data)
    if current is None:
        return None

    description = _first_value(current.get('weatherDesc'), '')
    temperature = _by_units(units, '{}°F'.format(current.get('temp_F')),
                            '{}°C'.format(current.get('temp_C')), separator='/')
    return '{} {} | Humidity: {}%'.format(description, temperature,
                                          current.get('humidity'))


class WeatherBlock(Block):
    name = 'weather'
    description = 'Display current weather conditions from wttr.in'
    Options = make_options_type('WeatherOptions', {
        'location': '',
        'units': 'both',
        'compact': False,
        'width': 58,
        'command': None,
    })

    async def render(self, context, options):
        location = options.location
        if not location:
            return BlockResult(
                command=options.command or 'curl wttr.in',
                lines=['[[fg:yellow]]Weather: no location configured[[/fg]]'],
                typing='fast', pause='short')

        data = await http.fetch_json(_wttr_url(location), context.config.fetch_timeout)
        if _current_condition(data) is not None:
            lines = format_weather(data, options.units, options.compact)
        else:
            logger.debug('Using weather fallback for "{}"'.format(location))
            lines = [
                '',
                '[[fg:yellow]]Weather data unavailable[[/fg]]',
                'Location: {}'.format(location),
                '',
            ]

        if not options.compact:
            lines = create_double_box(lines, width=int(options.width)).split('\n')
        return BlockResult(command=options.command or 'curl wttr.in/{}'.format(location),
                           lines=lines, typing='fast', pause='medium')


class MotdBlock(Block):
    """Welcome banner, optionally showing the current weather.

    The weather line is left out when the weather is unavailable.
    """
    name = 'motd'
    description = 'Display a welcome banner / message of the day'
    Options = make_options_type('MotdOptions', {
        'title': 'DEV TERMINAL',
        'subtitle': 'Powered by coffee & late-night debugging',
        'width': 58,
        'weather': {},
        'lines': None,
        'command': 'cat /etc/motd',
    })

    async def render(self, context, options):
        version = 'v{}.{:02}'.format(context.now.year, context.now.month)
        lines = ['', '{} {}'.format(options.title, version), options.subtitle]

        if options.weather:
            weather = options.weather
            summary = await fetch_weather_summary(str(weather.get('location') or ''),
                                                  weather.get('units', 'both'),
                                                  context.config.fetch_timeout)
            if summary:
                lines.append('[[fg:cyan]]{}[[/fg]]'.format(summary))

        lines.append('')
        if options.lines:
            lines.extend(options.lines)
            lines.append('')

        box = create_double_box(lines, width=int(options.width))
        return BlockResult(command=options.command, lines=box.split('\n'),
                           typing='fast', pause='medium')


class QuoteBlock(Block):
    name = 'quote'
    description = 'Display a random inspirational quote'
    Options = make_options_type('QuoteOptions', {
        'width': 58,
        'fallback': 'The only way to do great work is to love what you do.',
        'fallback_author': 'Steve Jobs',
        'command': 'fortune',
    })

    async def render(self, context, options):
        data = await http.fetch_json(QUOTE_URL, context.config.fetch_timeout)
        if _has_text(data, 'quote'):
            quote_text = data['quote']
            author = data.get('author')
            if not isinstance(author, str) or not author:
                author = options.fallback_author
        else:
            quote_text, author = options.fallback, options.fallback_author

        width = int(options.width)
        quote_lines = wrap_text(quote_text, width - 6)
        lines = ['']
        for index, line in enumerate(quote_lines):
            prefix = '"' if index == 0 else ' '
            suffix = '"[[/fg]]' if index == len(quote_lines) - 1 else '[[/fg]]'
            lines.append('[[fg:green]]{}{}{}'.format(prefix, line, suffix))
        lines.append('[[fg:comment]]  - {}[[/fg]]'.format(author))
        lines.append('')

        box = create_double_box(lines, width=width)
        return BlockResult(command=options.command, lines=box.split('\n'),
                           typing='fast', pause='long')


class FunFactBlock(Block):
    name = 'fun-fact'
    description = 'Display a random fun fact'
    Options = make_options_type('FunFactOptions', {
        'width': 58,
        'language': 'en',
        'fallback': ('Honey never spoils. Archaeologists have found '
                     '3000-year-old honey that was still edible.'),
        'command': 'curl -s uselessfacts.jsph.pl/api/v2/facts/random | jq .text',
    })

    async def render(self, context, options):
        url = FACT_URL.format(urlencode({'language': options.language}))
        data = await http.fetch_json(url, context.config.fetch_timeout)
        if _has_text(data, 'text'):
            fact = data['text']
        else:
            fact = options.fallback

        width = int(options.width)
        lines = ['', '[[fg:yellow]]DID YOU KNOW?[[/fg]]', '']
        lines.extend(wrap_text(fact, width - 6))
        lines.append('')

        box = create_double_box(lines, width=width)
        return BlockResult(command=options.command, lines=box.split('\n'),
                           typing='fast', pause='medium')


def format_count(count):
    """Format a count with a k or M suffix: 1234 -> '1.2k'"""
    if count >= 1000000:
        return '{:.1f}M'.format(count / 1000000)
    if count >= 1000:
        return '{:.1f}k'.format(count / 1000)
    return str(count)


GITHUB_COUNTS = ('public_repos', 'followers', 'following', 'public_gists')


def _has_counts(data):
    if not isinstance(data, dict):
        return False
    for key in GITHUB_COUNTS:
        count = data.get(key, 0)
        if isinstance(count, bool) or not isinstance(count, (int, float)):
            return False
    return True


def _member_since(created_at):
    try:
        return datetime.strptime(created_at[:10], '%Y-%m-%d').strftime('%b %Y')
    except (TypeError, ValueError):
        return 'unknown'


class GithubStatsBlock(Block):
    name = 'github-stats'
    description = 'Display live GitHub user statistics'
    Options = make_options_type('GithubStatsOptions', {
        'username': '',
        'width': 58,
        'command': None,
    })

    async def render(self, context, options):
        username = options.username
        if not username:
            return BlockResult(
                command='gh api users/???',
                lines=['[[fg:yellow]]github-stats: no username configured[[/fg]]'],
                typing='fast', pause='short')

        url = GITHUB_USER_URL.format(quote(username))
        data = await http.fetch_json(url, context.config.fetch_timeout)
        if _has_counts(data):
            lines = [
                '',
                '[[fg:cyan]]GITHUB: @{}[[/fg]]'.format(username),
                'Repos: [[bold]]{}[[/bold]]    Followers: [[bold]]{}[[/bold]]'
                .format(format_count(data.get('public_repos', 0)),
                        format_count(data.get('followers', 0))),
                'Following: {}    Gists: {}'
                .format(format_count(data.get('following', 0)),
                        format_count(data.get('public_gists', 0))),
                'Member since: {}'.format(_member_since(data.get('created_at'))),
                '',
            ]
        else:
            logger.debug('Using GitHub stats fallback for "{}"'.format(username))
            lines = [
                '',
                '[[fg:yellow]]GitHub stats unavailable for @{}[[/fg]]'.format(username),
                '',
            ]

        box = create_double_box(lines, width=int(options.width))
        command = (options.command
                   or "gh api users/{} --jq '.public_repos,.followers'".format(username))
        return BlockResult(command=command, lines=box.split('\n'),
                           typing='fast', pause='medium')


DYNAMIC_BLOCKS = [
    WeatherBlock,
    MotdBlock,
    QuoteBlock,
    FunFactBlock,
    GithubStatsBlock,
]
