import unittest

from lxml import etree

from svgterminal import xmlutil


class TestXmlUtil(unittest.TestCase):
    def test_round_coord(self):
        test_cases = [
            (0.25, 0.3),
            (1.04, 1.0),
            (12, 12),
            (-0.26, -0.3),
            (50.400000000000006, 50.4),
        ]
        for value, expected in test_cases:
            with self.subTest(case=value):
                self.assertEqual(xmlutil.round_coord(value), expected)

    def test_format_number(self):
        test_cases = {
            12.0: '12',
            12.34: '12.3',
            7: '7',
            0.25: '0.3',
            1e-9: '0',
        }
        for value, expected in test_cases.items():
            with self.subTest(case=value):
                self.assertEqual(xmlutil.format_number(value), expected)

    def test_text_width(self):
        self.assertEqual(xmlutil.text_width('abc', 10), 18)
        self.assertEqual(xmlutil.text_width('', 10), 0)

    def test_xml_safe(self):
        test_cases = {
            '\x1b[31mred\x1b[0m': 'red',
            'bell\x07': 'bell',
            'tab\tand\nnewline': 'tab\tand\nnewline',
            'a < b & c': 'a < b & c',
            'Stay curious \ud83c': 'Stay curious ',
            'surrogate pair \ud83c\udf89': 'surrogate pair ',
            '': '',
            None: '',
        }
        for text, expected in test_cases.items():
            with self.subTest(case=text):
                self.assertEqual(xmlutil.xml_safe(text), expected)

    def test_svg_element(self):
        element = xmlutil.svg_element('rect', {
            'x': 1.25,
            'y': None,
            'width': 10.0,
            'visible': True,
            'fill': '#000000',
        }, nsmap=xmlutil.NSMAP)
        self.assertEqual(element.tag, '{http://www.w3.org/2000/svg}rect')
        self.assertEqual(element.get('x'), '1.3')
        self.assertIsNone(element.get('y'))
        self.assertEqual(element.get('width'), '10')
        self.assertEqual(element.get('visible'), 'true')
        self.assertEqual(element.get('fill'), '#000000')

    def test_tostring_escapes_text(self):
        root = xmlutil.svg_element('svg', nsmap=xmlutil.NSMAP)
        text = xmlutil.svg_subelement(root, 'text')
        xmlutil.preserve_space(text)
        text.text = '<b> & "quotes"'
        svg = xmlutil.tostring(root)
        self.assertTrue(svg.startswith('<svg xmlns="http://www.w3.org/2000/svg"'))
        self.assertIn('&lt;b&gt; &amp;', svg)
        self.assertIn('xml:space="preserve"', svg)

        parsed = etree.fromstring(svg.encode('utf-8'))
        self.assertEqual(parsed[0].text, '<b> & "quotes"')
