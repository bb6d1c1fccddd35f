"""Blocks rendering content from their options only"""

from string import Template

from svgterminal.blocks.base import Block, BlockResult, make_options_type
from svgterminal.box import (create_double_box, create_rounded_box, display_width,
                             truncate_to_width)


def day_of_year(now):
    return now.timetuple().tm_yday


class CustomBlock(Block):
    """Display user provided lines.

    Lines and command may refer to user variables as $name or ${name}.
    """
    name = 'custom'
    description = 'Display custom text with optional [[fg:color]] markup'
    Options = make_options_type('CustomOptions', {
        'command': 'echo "Hello, World!"',
        'lines': ('Hello, World!',),
        'color': None,
    })

    async def render(self, context, options):
        variables = {str(key): value for key, value in context.variables.items()}

        def substitute(text):
            return Template(str(text)).safe_substitute(variables)

        return BlockResult(command=substitute(options.command),
                           lines=[substitute(line) for line in options.lines],
                           color=options.color)


class NeofetchBlock(Block):
    name = 'neofetch'
    description = 'Display system-info style output like neofetch'
    Options = make_options_type('NeofetchOptions', {
        'username': 'user',
        'hostname': 'terminal',
        'title': None,
        'os': 'TerminalOS v1.0',
        'shell': 'bash 5.2',
        'uptime': 'a long time',
        'role': 'Developer',
        'location': 'localhost',
        'languages': 'TypeScript, Python, Go',
        'editor': 'neovim',
        'command': None,
    })

    FIELDS = [
        ('OS', 'os'),
        ('Shell', 'shell'),
        ('Uptime', 'uptime'),
        ('Role', 'role'),
        ('Location', 'location'),
        ('Languages', 'languages'),
        ('Editor', 'editor'),
    ]

    PALETTE = ['red', 'green', 'yellow', 'blue', 'magenta', 'cyan', 'white',
               'orange']

    async def render(self, context, options):
        title = str(options.title or '{}@{}'.format(options.username, options.hostname))
        lines = [
            '[[fg:cyan]]{}[[/fg]]'.format(title),
            '[[fg:cyan]]{}[[/fg]]'.format('─' * display_width(title)),
        ]
        for label, field in self.FIELDS:
            # Values start at column 11, after 'Languages: '
            lines.append('[[fg:cyan]]{}[[/fg]]:{}{}'.format(
                label, ' ' * (10 - len(label)), getattr(options, field)))
        lines.append('')
        lines.append(' '.join('[[fg:{}]]●[[/fg]]'.format(color)
                              for color in self.PALETTE))

        command = options.command or 'neofetch --ascii_distro {}'.format(options.hostname)
        return BlockResult(command=command, lines=lines)


class FortuneBlock(Block):
    name = 'fortune'
    description = 'Display a random fortune or quote in an ASCII box'
    Options = make_options_type('FortuneOptions', {
        'fortunes': (
            'The best code is no code at all.',
            'Talk is cheap. Show me the code. - Linus Torvalds',
            'First, solve the problem. Then, write the code.',
        ),
        'command': 'fortune',
        'width': 48,
        'color': None,
    })

    async def render(self, context, options):
        fortunes = list(options.fortunes) or ['']
        # Rotate every hour
        index = int(context.now.timestamp() // 3600) % len(fortunes)
        box = create_rounded_box(['', ' {}'.format(fortunes[index]), ''],
                                 width=int(options.width))
        return BlockResult(command=options.command, lines=box.split('\n'),
                           color=options.color)


class DadJokeBlock(Block):
    name = 'dad-joke'
    description = 'Display a dad joke in a fancy ASCII box'
    Options = make_options_type('DadJokeOptions', {
        'jokes': ({'q': 'Why do programmers prefer dark mode?',
                   'a': 'Because light attracts bugs!',
                   'category': 'classic'},),
        'width': 56,
        'command': './dad-joke --random --format=fancy',
    })

    async def render(self, context, options):
        if not options.jokes:
            return BlockResult(command=options.command,
                               lines=['No jokes configured!'])

        # Rotate every day
        joke = options.jokes[day_of_year(context.now) % len(options.jokes)]
        date = '{} {}'.format(context.now.strftime('%b'), context.now.day)
        lines = [
            '',
            'DAD JOKE OF THE DAY - {}'.format(date),
            'Category: {}'.format(str(joke.get('category', 'classic')).upper()),
            '',
            'Q: {}'.format(joke.get('q', '')),
            '',
            'A: {}'.format(joke.get('a', '')),
            '',
        ]
        box = create_double_box(lines, width=int(options.width))
        return BlockResult(command=options.command, lines=box.split('\n'),
                           typing='slow', pause='long')


class GoodbyeBlock(Block):
    name = 'goodbye'
    description = 'Display a farewell message'
    Options = make_options_type('GoodbyeOptions', {
        'lines': (
            '',
            'Thanks for visiting!',
            '',
            'May your:',
            '  - Code compile without warnings',
            '  - Tests pass on first try',
            '  - Bugs be easily reproducible',
            '  - Coffee stay hot',
            '  - Git conflicts be minimal',
            '',
            'See you in the commits!',
            '',
        ),
        'width': 56,
        'command': 'cat /etc/goodbye.txt',
    })

    async def render(self, context, options):
        box = create_double_box(list(options.lines), width=int(options.width))
        return BlockResult(command=options.command, lines=box.split('\n'),
                           typing='medium', pause='long')


def _percent_bar(percent, color, length=20):
    filled = max(0, min(length, int(percent / 5 + 0.5)))
    return '[[fg:{}]]{}{}[[/fg]]'.format(color, '█' * filled,
                                         '░' * (length - filled))


class HtopBlock(Block):
    name = 'htop'
    description = 'Display an htop-style process and resource monitor'
    Options = make_options_type('HtopOptions', {
        'cpu': 80.5,
        'mem': 50.0,
        'processes': (
            {'pid': '1337', 'user': 'dev', 'cpu': '99.9', 'mem': '5.0',
             'command': 'coding --premium', 'state': 'R'},
            {'pid': '2048', 'user': 'dev', 'cpu': '42.0', 'mem': '3.7',
             'command': 'family --priority=max', 'state': 'S'},
            {'pid': '4096', 'user': 'dev', 'cpu': '15.2', 'mem': '2.1',
             'command': 'security-scanner', 'state': 'S'},
        ),
        'command': 'htop --sort-key=PERCENT_CPU',
    })

    async def render(self, context, options):
        processes = options.processes
        lines = [
            '  [[fg:cyan]]CPU[[/fg]][{}  [[fg:white]]{:.1f}%[[/fg]]]   '
            '[[fg:yellow]]Tasks:[[/fg]] {}, [[fg:green]]{} running[[/fg]]'
            .format(_percent_bar(options.cpu, 'green'), options.cpu,
                    len(processes) + 10, len(processes)),
            '  [[fg:cyan]]Mem[[/fg]][{}  [[fg:white]]{:.1f}%[[/fg]]]   '
            '[[fg:yellow]]Load:[[/fg]] 0.42 0.37 0.31'
            .format(_percent_bar(options.mem, 'blue'), options.mem),
            '',
            '  [[fg:cyan]]PID[[/fg]]  [[fg:cyan]]USER[[/fg]]     [[fg:cyan]]S[[/fg]] '
            '[[fg:cyan]]CPU%[[/fg]] [[fg:cyan]]MEM%[[/fg]]  [[fg:cyan]]Command[[/fg]]',
        ]
        for process in processes:
            state = process.get('state', 'S')
            lines.append(
                ' [[fg:white]]{:<6}[[/fg]] [[fg:green]]{:<8}[[/fg]] '
                '[[fg:{}]]{}[[/fg]] {:>5} {:>5}  [[fg:white]]{}[[/fg]]'
                .format(str(process.get('pid', '')), str(process.get('user', '')),
                        'green' if state == 'R' else 'yellow', state,
                        str(process.get('cpu', '')), str(process.get('mem', '')),
                        process.get('command', '')))

        return BlockResult(command=options.command, lines=lines,
                           typing='slow', pause='long')


class NationalDayBlock(Block):
    name = 'national-day'
    description = 'Display a fun national day celebration'
    Options = make_options_type('NationalDayOptions', {
        'days': (),
        'width': 56,
        'command': 'curl -s whatday.today/api | jq .today',
    })

    DEFAULT_DAY = {'name': 'National Coding Day', 'desc': 'Write some code!',
                   'emoji': '💻'}

    async def render(self, context, options):
        if options.days:
            day = options.days[day_of_year(context.now) % len(options.days)]
        else:
            day = self.DEFAULT_DAY

        name = truncate_to_width(str(day.get('name', '')), 32)
        description = truncate_to_width(str(day.get('desc', '')), 38)
        lines = [
            '',
            '{} Today is {}'.format(day.get('emoji', ''), name),
            '  "{}"'.format(description),
            '',
        ]
        box = create_rounded_box(lines, width=int(options.width))
        return BlockResult(command=options.command, lines=box.split('\n'),
                           typing='medium', pause='medium')


class NpmInstallBlock(Block):
    name = 'npm-install'
    description = 'Display a humorous npm install dependency tree'
    Options = make_options_type('NpmInstallOptions', {
        'package': 'left-pad',
        'command': None,
    })

    async def render(self, context, options):
        lines = [
            'added 847 packages in 42.0s',
            '',
            'Dependencies resolved:',
            '├── {}@1.0.0'.format(options.package),
            '│   ├── is-string@1.0.0',
            '│   │   ├── is-object@1.0.0',
            '│   │   │   ├── is-thing@1.0.0',
            '│   │   │   │   └── is-anything@1.0.0',
            '│   │   │   │       └── universe@∞',
            '│   └── string-utils@1.0.0',
            '│       └── ... 842 more packages',
            '│',
            '[[fg:yellow]]⚠ 3 vulnerabilities (1 moderate, 2 high)[[/fg]]',
            '  Run `npm audit fix` to fix them',
            '',
            'Package size: 2.3 MB for a function that pads strings',
            'Worth it? [[fg:red]]Absolutely not.[[/fg]] '
            'Did we do it anyway? [[fg:green]]Yes.[[/fg]]',
        ]
        command = options.command or 'npm install {}'.format(options.package)
        return BlockResult(command=command, lines=lines,
                           typing='medium', pause='long')


class ProfileBlock(Block):
    name = 'profile'
    description = 'Display a developer profile info card'
    Options = make_options_type('ProfileOptions', {
        'name': 'Developer',
        'github': None,
        'web': None,
        'focus': None,
        'motto': None,
        'width': 56,
        'command': 'cat /etc/profile',
    })

    async def render(self, context, options):
        lines = ['', '👤 {}'.format(options.name.upper()), '']
        if options.github:
            lines.append('GitHub:  {}'.format(options.github))
        if options.web:
            lines.append('Web:     {}'.format(options.web))
        if options.focus:
            lines.append('Focus:   {}'.format(options.focus))
        if options.motto:
            lines.append('Motto:   "{}"'.format(options.motto))
        lines.append('')

        box = create_rounded_box(lines, width=int(options.width))
        return BlockResult(command=options.command, lines=box.split('\n'),
                           typing='medium', pause='medium')


class SystemctlBlock(Block):
    name = 'systemctl'
    description = 'Display a systemd-style service status'
    Options = make_options_type('SystemctlOptions', {
        'service': 'dev-mode.service',
        'description': 'Development Mode Service',
        'pid': None,
        'memory': '42.0M',
        'logs': ('Service started successfully',
                 'Maximum productivity achieved'),
        'command': None,
    })

    async def render(self, context, options):
        service = options.service
        pid = str(options.pid if options.pid is not None else 1337)
        timestamp = context.now.strftime('%Y-%m-%d %H:%M:%S')
        if service.endswith('.service'):
            unit = service[:-len('.service')]
        else:
            unit = service
        lines = [
            '● [[fg:cyan]]{}[[/fg]] - {}'.format(service, options.description),
            '     [[fg:purple]]Loaded:[[/fg]] loaded (/etc/systemd/{}; '
            '[[fg:green]]enabled[[/fg]])'.format(service),
            '     [[fg:purple]]Active:[[/fg]] [[fg:green]]active (running)[[/fg]] since boot',
            '   [[fg:purple]]Main PID:[[/fg]] {} ({})'.format(pid, unit),
            '      [[fg:purple]]Tasks:[[/fg]] ∞',
            '     [[fg:purple]]Memory:[[/fg]] {}'.format(options.memory),
        ]
        for log in options.logs:
            lines.append('{} {}[{}]: [[fg:green]]✓[[/fg]] {}'
                         .format(timestamp, service, pid, log))

        command = options.command or 'systemctl status {}'.format(service)
        return BlockResult(command=command, lines=lines,
                           typing='slow', pause='long')


class BlogPostBlock(Block):
    name = 'blog-post'
    description = 'Display a blog post title in a box'
    Options = make_options_type('BlogPostOptions', {
        'title': 'My Latest Post',
        'url': '',
        'width': 56,
        'command': 'curl -s blog/feed.xml | grep -m1 title',
    })

    async def render(self, context, options):
        lines = ['', '📝 LATEST FROM THE BLOG', '', options.title]
        if options.url:
            lines.extend(['', '🔗 {}'.format(options.url)])
        lines.append('')
        box = create_rounded_box(lines, width=int(options.width))
        return BlockResult(command=options.command, lines=box.split('\n'),
                           typing='slow', pause='medium')


STATIC_BLOCKS = [
    CustomBlock,
    NeofetchBlock,
    FortuneBlock,
    DadJokeBlock,
    GoodbyeBlock,
    HtopBlock,
    NationalDayBlock,
    NpmInstallBlock,
    ProfileBlock,
    SystemctlBlock,
    BlogPostBlock,
]
