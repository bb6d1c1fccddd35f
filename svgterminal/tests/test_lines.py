import unittest

from svgterminal import lines
from svgterminal.anim import AnimationFrame
from svgterminal.config import DEFAULT_CONFIG
from svgterminal.markup import build_color_map
from svgterminal.xmlutil import SVG_NS, svg_element

COLOR_MAP = build_color_map(DEFAULT_CONFIG.theme.colors)
LINE_HEIGHT = 25.2


def tag(name):
    return '{{{}}}{}'.format(SVG_NS, name)


class TestCommandLine(unittest.TestCase):
    def setUp(self):
        frame = AnimationFrame(time=100, type='add-command', line_index=2,
                               prompt='$ ', command='ls', typing_duration=200)
        self.group = lines.render_command_line(frame, DEFAULT_CONFIG,
                                               LINE_HEIGHT, text_glow=True)

    def test_group(self):
        self.assertEqual(self.group.get('id'), 'line-2')
        self.assertEqual(self.group.get('transform'), 'translate(0, 50.4)')

    def test_prompt(self):
        prompt = self.group.find(tag('text'))
        self.assertEqual(prompt.text, '$ ')
        self.assertEqual(prompt.get('fill'), DEFAULT_CONFIG.theme.colors.prompt)
        self.assertEqual(prompt.get('filter'), 'url(#textGlow)')
        self.assertEqual(prompt.find(tag('animate')).get('begin'), '100ms')

    def test_typing(self):
        command = self.group.findall(tag('text'))[1]
        self.assertEqual(command.get('x'), '16.8')
        tspans = command.findall(tag('tspan'))
        self.assertEqual([tspan.text for tspan in tspans], ['l', 's'])
        begins = [tspan.find(tag('animate')).get('begin') for tspan in tspans]
        self.assertEqual(begins, ['100ms', '200ms'])

    def test_cursor(self):
        cursor = self.group.find(tag('rect'))
        self.assertEqual(cursor.get('x'), '16.8')
        self.assertEqual(cursor.get('fill'), DEFAULT_CONFIG.theme.colors.cursor)
        animations = cursor.findall(tag('animate'))
        blink = animations[1]
        self.assertEqual(blink.get('values'), '1;1;0;0')
        self.assertEqual(blink.get('end'), '300ms')
        self.assertEqual(animations[2].get('begin'), '300ms')
        moves = [a for a in animations if a.get('attributeName') == 'x']
        self.assertEqual([(m.get('from'), m.get('to')) for m in moves],
                         [('16.8', '25.2'), ('25.2', '33.6')])

    def test_empty_command(self):
        frame = AnimationFrame(time=0, type='add-command', line_index=0,
                               prompt='$ ', command='', typing_duration=200)
        group = lines.render_command_line(frame, DEFAULT_CONFIG, LINE_HEIGHT,
                                          text_glow=False)
        self.assertEqual(group.findall(tag('text'))[1].findall(tag('tspan')), [])
        self.assertIsNone(group.find(tag('text')).get('filter'))


class TestOutputLine(unittest.TestCase):
    def render(self, content, color=None):
        frame = AnimationFrame(time=500, type='add-output', line_index=1,
                               content=content, color=color)
        return lines.render_output_line(frame, DEFAULT_CONFIG, LINE_HEIGHT,
                                        COLOR_MAP, text_glow=False)

    def test_plain(self):
        group = self.render('hello', color='#123456')
        self.assertEqual(group.get('opacity'), '0')
        self.assertEqual(group.find(tag('animate')).get('begin'), '500ms')
        text = group.find(tag('text'))
        self.assertEqual(text.text, 'hello')
        self.assertEqual(text.get('fill'), '#123456')

    def test_default_color(self):
        text = self.render('hello').find(tag('text'))
        self.assertEqual(text.get('fill'), DEFAULT_CONFIG.theme.colors.text)

    def test_markup(self):
        text = self.render('ok [[fg:red]]err[[/fg]] [[bold]]b[[/bold]]').find(tag('text'))
        tspans = text.findall(tag('tspan'))
        self.assertEqual([t.text for t in tspans], ['ok ', 'err', ' ', 'b'])
        self.assertEqual(tspans[1].get('fill'), DEFAULT_CONFIG.theme.colors.red)
        self.assertEqual(tspans[3].get('font-weight'), 'bold')
        self.assertIsNone(tspans[0].get('font-weight'))

    def test_dim(self):
        tspan = self.render('[[dim]]faint[[/dim]]').find(tag('text')).find(tag('tspan'))
        self.assertEqual(tspan.get('opacity'), '0.6')

    def test_background(self):
        group = self.render('ab[[bg:blue]]cd[[/bg]]')
        rect = group.find(tag('rect'))
        self.assertEqual(rect.get('fill'), DEFAULT_CONFIG.theme.colors.blue)
        self.assertEqual(rect.get('x'), '16.8')
        self.assertEqual(rect.get('width'), '16.8')
        # Backgrounds are drawn before the text
        children = [child.tag for child in group if child.tag != tag('animate')]
        self.assertEqual(children, [tag('rect'), tag('text')])


class TestStaticLine(unittest.TestCase):
    def test_static_line(self):
        parent = svg_element('g')
        text = lines.render_static_line(parent, 3, 'hello', DEFAULT_CONFIG,
                                        LINE_HEIGHT, COLOR_MAP)
        self.assertIs(text.getparent(), parent)
        self.assertEqual(text.get('y'), '75.6')
        self.assertEqual(text.text, 'hello')
        self.assertIsNone(text.find(tag('animate')))

    def test_ms(self):
        self.assertEqual(lines.ms(12.0), '12ms')
        self.assertEqual(lines.ms(33.333), '33.3ms')
