"""Reusable SVG patterns and filters giving the terminal its CRT look"""

from svgterminal.xmlutil import svg_element, svg_subelement

# Standard deviations of the glow layers: core, medium, outer
GLOW_BLUR_VALUES = (0.2, 1.5, 3.5)

SHADOW_PARAMS = {'dy': 15, 'blur': 15, 'opacity': 0.8}

SCANLINE_PARAMS = {'height': 2, 'opacity': 0.02}

# Keeps the green channel of the medium blur only
_GREEN_GLOW_MATRIX = ('0 0 0 0 0 '
                      '0 1 0 0 0.3 '
                      '0 0 0 0 0 '
                      '0 0 0 1 0')


def generate_defs(effects):
    """Return the list of pattern elements enabled by effects"""
    defs = []
    if effects.scanlines:
        pattern = svg_element('pattern', {
            'id': 'scanlines',
            'patternUnits': 'userSpaceOnUse',
            'width': 1,
            'height': SCANLINE_PARAMS['height'],
        })
        svg_subelement(pattern, 'rect', {
            'width': 1,
            'height': 1,
            'fill': 'transparent',
        })
        svg_subelement(pattern, 'rect', {
            'y': 1,
            'width': 1,
            'height': 1,
            'fill': 'rgba(255,255,255,{})'.format(SCANLINE_PARAMS['opacity']),
        })
        defs.append(pattern)
    return defs


def _text_glow_filter():
    core, medium, outer = GLOW_BLUR_VALUES
    text_glow = svg_element('filter', {
        'id': 'textGlow', 'x': '-50%', 'y': '-50%',
        'width': '200%', 'height': '200%',
    })
    svg_subelement(text_glow, 'feGaussianBlur', {
        'in': 'SourceAlpha', 'stdDeviation': core, 'result': 'coreBlur'})
    svg_subelement(text_glow, 'feGaussianBlur', {
        'in': 'SourceAlpha', 'stdDeviation': medium, 'result': 'mediumBlur'})
    svg_subelement(text_glow, 'feColorMatrix', {
        'in': 'mediumBlur', 'type': 'matrix', 'result': 'greenGlow',
        'values': _GREEN_GLOW_MATRIX})
    svg_subelement(text_glow, 'feGaussianBlur', {
        'in': 'SourceAlpha', 'stdDeviation': outer, 'result': 'outerBlur'})
    svg_subelement(text_glow, 'feBlend', {
        'in': 'coreBlur', 'in2': 'greenGlow', 'mode': 'screen',
        'result': 'layer12'})
    svg_subelement(text_glow, 'feBlend', {
        'in': 'layer12', 'in2': 'outerBlur', 'mode': 'screen',
        'result': 'allLayers'})
    merge = svg_subelement(text_glow, 'feMerge')
    svg_subelement(merge, 'feMergeNode', {'in': 'allLayers'})
    svg_subelement(merge, 'feMergeNode', {'in': 'SourceGraphic'})
    return text_glow


def _shadow_filter():
    shadow = svg_element('filter', {
        'id': 'shadow', 'x': '-50%', 'y': '-50%',
        'width': '200%', 'height': '200%',
    })
    svg_subelement(shadow, 'feGaussianBlur', {
        'in': 'SourceAlpha', 'stdDeviation': SHADOW_PARAMS['blur']})
    svg_subelement(shadow, 'feOffset', {
        'dx': 0, 'dy': SHADOW_PARAMS['dy'], 'result': 'offsetblur'})
    svg_subelement(shadow, 'feFlood', {
        'flood-color': '#000000', 'flood-opacity': SHADOW_PARAMS['opacity']})
    svg_subelement(shadow, 'feComposite', {
        'in2': 'offsetblur', 'operator': 'in'})
    merge = svg_subelement(shadow, 'feMerge')
    svg_subelement(merge, 'feMergeNode')
    svg_subelement(merge, 'feMergeNode', {'in': 'SourceGraphic'})
    return shadow


def generate_filters(effects):
    """Return the list of filter elements enabled by effects"""
    filters = []
    if effects.text_glow:
        filters.append(_text_glow_filter())
    if effects.shadow:
        filters.append(_shadow_filter())
    return filters
